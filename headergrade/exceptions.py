class HeaderGradeError(Exception):
    """Base class for all headergrade errors"""


class CatalogError(HeaderGradeError):
    """Raised when a header weight catalog is malformed"""


class DegenerateCatalogError(CatalogError):
    """Raised when a catalog's minimum and maximum achievable scores coincide"""


class FetchError(HeaderGradeError):
    """Raised when response headers could not be retrieved"""
