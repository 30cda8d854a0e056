from .document_repository import DocumentRepository
from .document_line_item_repository import DocumentLineItemRepository
from .document_transition_repository import DocumentTransitionRepository
from .document_sequence_repository import DocumentSequenceRepository

__all__ = [
    "DocumentRepository",
    "DocumentLineItemRepository",
    "DocumentTransitionRepository",
    "DocumentSequenceRepository",
]
