"""Typed asynchronous client for the TMDB API."""

from .clients.tmdb import TmdbClient, tmdb_client
from .errors import TmdbClientClosedError, TmdbError, TmdbErrorKind
from .models import (
    MovieDetails,
    MovieSummary,
    PaginatedResponse,
    TvShowDetails,
    TvShowSummary,
)

__version__ = "0.1.0"

__all__ = [
    "MovieDetails",
    "MovieSummary",
    "PaginatedResponse",
    "TmdbClient",
    "TmdbClientClosedError",
    "TmdbError",
    "TmdbErrorKind",
    "TvShowDetails",
    "TvShowSummary",
    "__version__",
    "tmdb_client",
]
