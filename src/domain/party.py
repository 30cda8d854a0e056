"""Party Domain Entity

Client record owned by the surrounding platform. The document engine
only reads it, by id, through the PartyDirectory port.
"""

from typing import Optional
from sqlmodel import Field, Column
from sqlalchemy import String
from src.domain.base import BaseModel


class Party(BaseModel, table=True):
    """Client a document is addressed to"""

    __tablename__ = "clients"

    id: str = Field(
        primary_key=True,
        description="Client identifier"
    )

    name: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Client display name"
    )

    email: Optional[str] = Field(
        default=None,
        sa_column=Column(String(255), nullable=True),
        description="Client contact email"
    )

    company: Optional[str] = Field(
        default=None,
        sa_column=Column(String(255), nullable=True),
        description="Client company name"
    )
