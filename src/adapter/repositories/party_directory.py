"""SQLAlchemy Party Directory Implementation

Reads client records from the platform's ``clients`` table.
"""

from typing import Optional
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.services.party_directory import PartyDirectory
from src.domain.party import Party


class SqlAlchemyPartyDirectory(PartyDirectory):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, party_id: str) -> Optional[Party]:
        statement = select(Party).where(Party.id == party_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()
