from __future__ import annotations

from datetime import date
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator


def _blank_to_none(value: Any) -> Any:
    # TMDB sends "" for unknown dates
    if isinstance(value, str) and not value.strip():
        return None
    return value


OptionalDate = Annotated[date | None, BeforeValidator(_blank_to_none)]


class TmdbModel(BaseModel):
    """Base for every record decoded from a TMDB payload."""

    model_config = {
        "populate_by_name": True,
        "extra": "ignore",
        "frozen": True,
    }

    def to_json(self) -> dict[str, Any]:
        """Return a JSON-compatible dict using the API's field names."""
        return self.model_dump(mode="json", by_alias=True)


class Genre(TmdbModel):
    id: int
    name: str | None = None


class ProductionCompany(TmdbModel):
    id: int
    name: str | None = None
    logo_path: str | None = None
    origin_country: str | None = None


class ProductionCountry(TmdbModel):
    iso_3166_1: str
    name: str | None = None


class SpokenLanguage(TmdbModel):
    iso_639_1: str
    name: str | None = None
    english_name: str | None = None


__all__ = [
    "Genre",
    "OptionalDate",
    "ProductionCompany",
    "ProductionCountry",
    "SpokenLanguage",
    "TmdbModel",
]
