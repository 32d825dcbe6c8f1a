from __future__ import annotations

from typing import Any, Generic, TypeVar

from pydantic import BaseModel

from .common import TmdbModel

ItemT = TypeVar("ItemT", bound=TmdbModel)


class PaginatedResponse(BaseModel, Generic[ItemT]):
    """One page of a TMDB list endpoint.

    Pages are 1-based and ``results`` keeps the order the server returned.
    Parametrize before validating, e.g.
    ``PaginatedResponse[MovieSummary].model_validate(payload)``.
    """

    page: int | None = None
    results: list[ItemT]
    total_pages: int | None = None
    total_results: int | None = None

    model_config = {
        "extra": "ignore",
    }

    def to_json(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)

    @property
    def has_next_page(self) -> bool:
        if self.page is None or self.total_pages is None:
            return False
        return self.page < self.total_pages


__all__ = ["PaginatedResponse"]
