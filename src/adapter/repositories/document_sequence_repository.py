"""SQLAlchemy Document Sequence Repository Implementation

Counters advance with a single upsert that returns the new value:

    INSERT INTO document_sequences (kind, year, counter) VALUES (:kind, :year, 1)
    ON CONFLICT (kind, year) DO UPDATE SET counter = document_sequences.counter + 1
    RETURNING counter

Works on PostgreSQL and on SQLite 3.35+.
"""

from sqlalchemy.dialects import postgresql, sqlite
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.document_sequence_repository import DocumentSequenceRepository
from src.domain.sequence import DocumentSequence

UPSERT_DIALECTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class SqlAlchemyDocumentSequenceRepository(DocumentSequenceRepository):
    """SQLAlchemy implementation of DocumentSequenceRepository"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def allocate_next(self, kind: str, year: int) -> int:
        """
        Atomically advance the (kind, year) counter

        Args:
            kind: Document kind
            year: Allocation year

        Returns:
            Newly allocated counter value

        Raises:
            NotImplementedError: the database has no supported upsert
        """
        dialect = self.session.bind.dialect.name
        insert = UPSERT_DIALECTS.get(dialect)
        if insert is None:
            raise NotImplementedError(f"Atomic sequence allocation is not supported on {dialect}")

        table = DocumentSequence.__table__
        statement = (
            insert(table)
            .values(kind=kind, year=year, counter=1)
            .on_conflict_do_update(
                index_elements=[table.c.kind, table.c.year],
                set_={"counter": table.c.counter + 1},
            )
            .returning(table.c.counter)
        )
        result = await self.session.execute(statement)
        return int(result.scalar_one())

    async def current(self, kind: str, year: int) -> int:
        statement = (
            select(DocumentSequence.counter)
            .where(DocumentSequence.kind == kind)
            .where(DocumentSequence.year == year)
        )
        result = await self.session.execute(statement)
        counter = result.scalar_one_or_none()
        return int(counter) if counter is not None else 0
