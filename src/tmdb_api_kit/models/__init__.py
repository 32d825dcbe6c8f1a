from .common import Genre, ProductionCompany, ProductionCountry, SpokenLanguage, TmdbModel
from .movie import Collection, MovieBase, MovieDetails, MovieSummary
from .pagination import PaginatedResponse
from .tv import Creator, Episode, Network, Season, TvShowBase, TvShowDetails, TvShowSummary

__all__ = [
    "Collection",
    "Creator",
    "Episode",
    "Genre",
    "MovieBase",
    "MovieDetails",
    "MovieSummary",
    "Network",
    "PaginatedResponse",
    "ProductionCompany",
    "ProductionCountry",
    "Season",
    "SpokenLanguage",
    "TmdbModel",
    "TvShowBase",
    "TvShowDetails",
    "TvShowSummary",
]
