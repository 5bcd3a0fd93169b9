"""Security header scoring for HTTP responses."""

from headergrade.analyzer import HeaderAnalyzer
from headergrade.config import DEFAULT_CATALOG, HeaderCatalog, load_catalog
from headergrade.exceptions import CatalogError, DegenerateCatalogError, FetchError, HeaderGradeError
from headergrade.models import AnalysisResult, Evaluation, HeaderEntry, Level, Note, Status

__version__ = "1.0.0"

__all__ = [
    "AnalysisResult",
    "CatalogError",
    "DEFAULT_CATALOG",
    "DegenerateCatalogError",
    "Evaluation",
    "FetchError",
    "HeaderAnalyzer",
    "HeaderCatalog",
    "HeaderEntry",
    "HeaderGradeError",
    "Level",
    "Note",
    "Status",
    "load_catalog",
]
