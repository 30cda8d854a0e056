"""Document Sequence Repository Interface

Storage port for document number allocation.
"""

from abc import ABC, abstractmethod


class DocumentSequenceRepository(ABC):
    """
    Repository interface for per-kind, per-year counters

    Implementations must advance the counter with one atomic
    increment-and-read at the storage layer, never read-then-write.
    """

    @abstractmethod
    async def allocate_next(self, kind: str, year: int) -> int:
        """
        Atomically advance the (kind, year) counter and return the new value

        The first allocation of a year returns 1.

        Args:
            kind: Document kind
            year: Allocation year

        Returns:
            Newly allocated counter value
        """
        pass

    @abstractmethod
    async def current(self, kind: str, year: int) -> int:
        """
        Read the last allocated counter without advancing it

        Args:
            kind: Document kind
            year: Allocation year

        Returns:
            Last allocated value, 0 if nothing was allocated yet
        """
        pass
