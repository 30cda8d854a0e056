from .document_repository import SqlAlchemyDocumentRepository
from .document_line_item_repository import SqlAlchemyDocumentLineItemRepository
from .document_transition_repository import SqlAlchemyDocumentTransitionRepository
from .document_sequence_repository import SqlAlchemyDocumentSequenceRepository
from .party_directory import SqlAlchemyPartyDirectory

__all__ = [
    "SqlAlchemyDocumentRepository",
    "SqlAlchemyDocumentLineItemRepository",
    "SqlAlchemyDocumentTransitionRepository",
    "SqlAlchemyDocumentSequenceRepository",
    "SqlAlchemyPartyDirectory",
]
