"""Document Sequence Domain Entity

Per-kind, per-year counter backing document number allocation.
The counter is only ever advanced by a single atomic statement.
"""

from sqlmodel import Field, Column
from sqlalchemy import BigInteger, Integer, String
from src.domain.base import BaseModel


class DocumentSequence(BaseModel, table=True):
    """Last allocated counter for a (kind, year) pair"""

    __tablename__ = "document_sequences"

    kind: str = Field(
        sa_column=Column(String(20), primary_key=True),
        description="Document kind"
    )

    year: int = Field(
        sa_column=Column(Integer, primary_key=True, autoincrement=False),
        description="Allocation year (UTC)"
    )

    counter: int = Field(
        sa_column=Column(BigInteger, nullable=False, default=0),
        description="Last allocated counter value"
    )
