"""Shared base for domain entities"""

import uuid
from sqlmodel import SQLModel


class BaseModel(SQLModel):
    """Base class for all persisted domain entities"""
    pass


def generate_uuid() -> str:
    return str(uuid.uuid4())
