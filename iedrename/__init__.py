"""iedrename - Batch rename IEDs in SCL files."""

from iedrename.debounce import DEFAULT_DEBOUNCE_SECONDS, Debouncer
from iedrename.models.ied import IEDRecord
from iedrename.models.rename import ItemView, RenameOp, ValidationReason, ValidationResult
from iedrename.processors.live_search import LiveSearch
from iedrename.processors.scl_document import SCLDocument
from iedrename.processors.validation import ListValidationEngine
from iedrename.search import MATCH_ALL, SearchQuery, compile_query


__all__ = [
    "DEFAULT_DEBOUNCE_SECONDS",
    "Debouncer",
    "IEDRecord",
    "ItemView",
    "LiveSearch",
    "ListValidationEngine",
    "MATCH_ALL",
    "RenameOp",
    "SCLDocument",
    "SearchQuery",
    "ValidationReason",
    "ValidationResult",
    "compile_query",
]
