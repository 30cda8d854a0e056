"""Document Identity Issuer

Issues human-readable document numbers: ``{prefix}-{year}-{counter:06d}``
(e.g. INV-2026-000042). Counters are per kind and per UTC year and are
advanced only through the sequence store's atomic allocation.
"""

import logging
from datetime import datetime
from typing import Callable, Mapping, Optional
from src.app.repositories.document_sequence_repository import DocumentSequenceRepository
from src.domain.document import DocumentKind
from src.domain.errors import IdentityAllocationError

logger = logging.getLogger(__name__)


class DocumentIdentityIssuer:
    """
    Allocates unique document numbers

    Business Rules:
    1. One number per document, issued at first successful creation
    2. Numbers never repeat within a kind
    3. Allocation failures fail closed: no guessed or retried numbers
    """

    def __init__(
        self,
        sequence_repo: DocumentSequenceRepository,
        prefixes: Mapping[str, str],
        clock: Optional[Callable[[], datetime]] = None,
    ):
        missing = [kind.value for kind in DocumentKind if kind.value not in prefixes]
        if missing:
            raise ValueError(f"Missing document number prefix for: {', '.join(missing)}")

        self.sequence_repo = sequence_repo
        self.prefixes = dict(prefixes)
        self.clock = clock or datetime.utcnow

    def format_number(self, kind: DocumentKind, year: int, counter: int) -> str:
        prefix = self.prefixes[DocumentKind(kind).value]
        return f"{prefix}-{year}-{counter:06d}"

    async def issue_number(self, kind: DocumentKind) -> str:
        """
        Allocate the next number for a kind

        Args:
            kind: Document kind

        Returns:
            Newly allocated document number

        Raises:
            IdentityAllocationError: the atomic allocation failed
        """
        kind = DocumentKind(kind)
        year = self.clock().year

        try:
            counter = await self.sequence_repo.allocate_next(kind.value, year)
        except Exception as e:
            logger.error(f"Number allocation failed for {kind.value}/{year}: {e}")
            raise IdentityAllocationError(kind.value, str(e)) from e

        if not isinstance(counter, int) or counter < 1:
            raise IdentityAllocationError(kind.value, f"sequence store returned {counter!r}")

        return self.format_number(kind, year, counter)

    async def preview_number(self, kind: DocumentKind) -> str:
        """
        Number the next allocation would produce, without reserving it

        Args:
            kind: Document kind

        Returns:
            Document number preview
        """
        kind = DocumentKind(kind)
        year = self.clock().year
        current = await self.sequence_repo.current(kind.value, year)
        return self.format_number(kind, year, current + 1)
