"""Party Directory Interface

Read-only lookup of the client records documents are addressed to.
"""

from abc import ABC, abstractmethod
from typing import Optional
from src.domain.party import Party


class PartyDirectory(ABC):
    """Directory of clients owned by the surrounding platform"""

    @abstractmethod
    async def get_by_id(self, party_id: str) -> Optional[Party]:
        """
        Retrieve a client by ID

        Args:
            party_id: Client identifier

        Returns:
            Party if found, None otherwise
        """
        pass
