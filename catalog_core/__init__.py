"""Client-side access layer for the location-aware offer catalog."""
from .auth import StaticTokenProvider, UserTokenProvider
from .client import CatalogClient
from .config import CatalogSettings
from .errors import CatalogError, RedemptionCodeDeniedError, TokenUnavailableError, TransportError
from .history import SearchHistoryStore
from .models import (
    CompanyHistoryEntry,
    Coupon,
    FilterOptions,
    Location,
    LocationHistoryEntry,
    NameHistoryEntry,
    PaginationInfo,
    SearchResult,
    TagHistoryEntry,
)
from .params import compose
from .search import SearchService
from .transport import AiohttpRequestIssuer, RequestIssuer

__all__ = [
    "AiohttpRequestIssuer",
    "CatalogClient",
    "CatalogError",
    "CatalogSettings",
    "CompanyHistoryEntry",
    "Coupon",
    "FilterOptions",
    "Location",
    "LocationHistoryEntry",
    "NameHistoryEntry",
    "PaginationInfo",
    "RedemptionCodeDeniedError",
    "RequestIssuer",
    "SearchHistoryStore",
    "SearchResult",
    "SearchService",
    "StaticTokenProvider",
    "TagHistoryEntry",
    "TokenUnavailableError",
    "TransportError",
    "UserTokenProvider",
    "compose",
]
