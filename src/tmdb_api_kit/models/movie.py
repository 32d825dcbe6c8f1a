from __future__ import annotations

from pydantic import Field

from .common import (
    Genre,
    OptionalDate,
    ProductionCompany,
    ProductionCountry,
    SpokenLanguage,
    TmdbModel,
)


class Collection(TmdbModel):
    """Franchise a movie belongs to."""

    id: int
    name: str | None = None
    poster_path: str | None = None
    backdrop_path: str | None = None


class MovieBase(TmdbModel):
    """Fields shared by movie summaries and movie details."""

    id: int
    title: str
    original_title: str | None = None
    original_language: str | None = None
    overview: str | None = None
    release_date: OptionalDate = None
    adult: bool = False
    video: bool = False
    poster_path: str | None = None
    backdrop_path: str | None = None
    popularity: float | None = None
    vote_average: float | None = None
    vote_count: int | None = None

    @property
    def year(self) -> int | None:
        return self.release_date.year if self.release_date else None


class MovieSummary(MovieBase):
    """Movie entry as returned by list and search endpoints."""

    genre_ids: list[int] = Field(default_factory=list)


class MovieDetails(MovieBase):
    """Full movie record from ``/3/movie/{id}``."""

    belongs_to_collection: Collection | None = None
    budget: int | None = None
    revenue: int | None = None
    runtime: int | None = None
    homepage: str | None = None
    imdb_id: str | None = None
    status: str | None = None
    tagline: str | None = None
    origin_country: list[str] = Field(default_factory=list)
    genres: list[Genre] = Field(default_factory=list)
    production_companies: list[ProductionCompany] = Field(default_factory=list)
    production_countries: list[ProductionCountry] = Field(default_factory=list)
    spoken_languages: list[SpokenLanguage] = Field(default_factory=list)


__all__ = ["Collection", "MovieBase", "MovieDetails", "MovieSummary"]
