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


class Creator(TmdbModel):
    id: int
    name: str | None = None
    original_name: str | None = None
    credit_id: str | None = None
    gender: int | None = None
    profile_path: str | None = None


class Network(TmdbModel):
    id: int
    name: str | None = None
    logo_path: str | None = None
    origin_country: str | None = None


class Episode(TmdbModel):
    """Episode reference embedded in a show record (last/next to air)."""

    id: int
    name: str | None = None
    overview: str | None = None
    air_date: OptionalDate = None
    episode_number: int | None = None
    season_number: int | None = None
    episode_type: str | None = None
    production_code: str | None = None
    runtime: int | None = None
    show_id: int | None = None
    still_path: str | None = None
    vote_average: float | None = None
    vote_count: int | None = None


class Season(TmdbModel):
    id: int
    name: str | None = None
    overview: str | None = None
    air_date: OptionalDate = None
    episode_count: int | None = None
    season_number: int | None = None
    poster_path: str | None = None
    vote_average: float | None = None


class TvShowBase(TmdbModel):
    """Fields shared by TV show summaries and TV show details."""

    id: int
    name: str
    original_name: str | None = None
    original_language: str | None = None
    overview: str | None = None
    first_air_date: OptionalDate = None
    adult: bool = False
    origin_country: list[str] = Field(default_factory=list)
    poster_path: str | None = None
    backdrop_path: str | None = None
    popularity: float | None = None
    vote_average: float | None = None
    vote_count: int | None = None

    @property
    def year(self) -> int | None:
        return self.first_air_date.year if self.first_air_date else None


class TvShowSummary(TvShowBase):
    """TV show entry as returned by list and search endpoints."""

    genre_ids: list[int] = Field(default_factory=list)


class TvShowDetails(TvShowBase):
    """Full TV show record from ``/3/tv/{id}``."""

    created_by: list[Creator] = Field(default_factory=list)
    episode_run_time: list[int] = Field(default_factory=list)
    genres: list[Genre] = Field(default_factory=list)
    homepage: str | None = None
    in_production: bool | None = None
    languages: list[str] = Field(default_factory=list)
    last_air_date: OptionalDate = None
    last_episode_to_air: Episode | None = None
    next_episode_to_air: Episode | None = None
    networks: list[Network] = Field(default_factory=list)
    number_of_episodes: int | None = None
    number_of_seasons: int | None = None
    production_companies: list[ProductionCompany] = Field(default_factory=list)
    production_countries: list[ProductionCountry] = Field(default_factory=list)
    seasons: list[Season] = Field(default_factory=list)
    spoken_languages: list[SpokenLanguage] = Field(default_factory=list)
    status: str | None = None
    tagline: str | None = None
    type: str | None = None


__all__ = [
    "Creator",
    "Episode",
    "Network",
    "Season",
    "TvShowBase",
    "TvShowDetails",
    "TvShowSummary",
]
