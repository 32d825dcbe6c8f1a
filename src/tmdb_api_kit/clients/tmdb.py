from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from contextlib import asynccontextmanager
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from tmdb_api_kit.errors import TmdbClientClosedError, TmdbError, TmdbErrorKind
from tmdb_api_kit.models import (
    MovieDetails,
    MovieSummary,
    PaginatedResponse,
    TvShowDetails,
    TvShowSummary,
)

logger = logging.getLogger(__name__)

BASE_URL = "https://api.themoviedb.org"
DEFAULT_TIMEOUT = 15.0
USER_AGENT = "tmdb-api-kit/0.1.0"

QueryValue = str | int | bool | None
ModelT = TypeVar("ModelT", bound=BaseModel)


def merge_query_params(
    query: Mapping[str, QueryValue],
    *,
    default_language: str | None = None,
    default_region: str | None = None,
) -> dict[str, str]:
    """Merge configured defaults with caller-supplied query parameters.

    Defaults are only injected when the caller passed ``None`` (or nothing) for
    that key. ``None`` and empty-string values are dropped, so an explicit
    ``language=""`` suppresses the default without sending an empty value.
    """

    merged: dict[str, str] = {}
    if default_language and query.get("language") is None:
        merged["language"] = default_language
    if default_region and query.get("region") is None:
        merged["region"] = default_region

    for key, value in query.items():
        if value is None:
            continue
        if isinstance(value, bool):
            merged[key] = "true" if value else "false"
        elif isinstance(value, int):
            merged[key] = str(value)
        elif value:
            merged[key] = value
    return merged


class TmdbClient:
    """Thin asynchronous wrapper around the TMDB v3 API.

    The client owns an ``httpx.AsyncClient`` connection pool. Call ``close()``
    once all in-flight requests are done; any request issued afterwards raises
    ``TmdbClientClosedError``.
    """

    def __init__(
        self,
        bearer_token: str,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        default_language: str | None = None,
        default_region: str | None = None,
        base_url: str = BASE_URL,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not bearer_token:
            raise ValueError("bearer_token must be a non-empty string")

        self._default_language = default_language
        self._default_region = default_region
        self._timeout = timeout
        self._closed = False

        headers = {
            "Authorization": f"Bearer {bearer_token}",
            "User-Agent": USER_AGENT,
            "Accept": "application/json",
        }
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    @property
    def default_language(self) -> str | None:
        return self._default_language

    @property
    def default_region(self) -> str | None:
        return self._default_region

    @property
    def closed(self) -> bool:
        return self._closed

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        await self._client.aclose()

    def build_url(self, endpoint: str, query: Mapping[str, QueryValue] | None = None) -> httpx.URL:
        """Return the fully-qualified URL a request to ``endpoint`` would use."""
        params = merge_query_params(
            query or {},
            default_language=self._default_language,
            default_region=self._default_region,
        )
        return self._client.build_request("GET", endpoint, params=params).url

    async def get_popular_movies(
        self,
        *,
        page: int = 1,
        language: str | None = None,
    ) -> PaginatedResponse[MovieSummary]:
        return await self._get_page(
            "/3/movie/popular",
            MovieSummary,
            {"page": page, "language": language},
        )

    async def get_top_rated_movies(
        self,
        *,
        page: int = 1,
        language: str | None = None,
    ) -> PaginatedResponse[MovieSummary]:
        return await self._get_page(
            "/3/movie/top_rated",
            MovieSummary,
            {"page": page, "language": language},
        )

    async def search_movies(
        self,
        query: str,
        *,
        page: int = 1,
        language: str | None = None,
        include_adult: bool = False,
        region: str | None = None,
        year: int | None = None,
        primary_release_year: int | None = None,
    ) -> PaginatedResponse[MovieSummary]:
        """Search movies by text query.

        Mirrors https://developer.themoviedb.org/reference/search-movie
        """
        return await self._get_page(
            "/3/search/movie",
            MovieSummary,
            {
                "page": page,
                "language": language,
                "query": query,
                "include_adult": include_adult,
                "region": region,
                "year": year,
                "primary_release_year": primary_release_year,
            },
        )

    async def get_movie_details(
        self,
        movie_id: int,
        *,
        language: str | None = None,
    ) -> MovieDetails:
        return await self._get_model(f"/3/movie/{movie_id}", MovieDetails, {"language": language})

    async def get_popular_tv_shows(
        self,
        *,
        page: int = 1,
        language: str | None = None,
    ) -> PaginatedResponse[TvShowSummary]:
        return await self._get_page(
            "/3/tv/popular",
            TvShowSummary,
            {"page": page, "language": language},
        )

    async def get_top_rated_tv_shows(
        self,
        *,
        page: int = 1,
        language: str | None = None,
    ) -> PaginatedResponse[TvShowSummary]:
        return await self._get_page(
            "/3/tv/top_rated",
            TvShowSummary,
            {"page": page, "language": language},
        )

    async def search_tv_shows(
        self,
        query: str,
        *,
        page: int = 1,
        language: str | None = None,
        include_adult: bool = False,
        first_air_date_year: int | None = None,
    ) -> PaginatedResponse[TvShowSummary]:
        """Search TV series by text query.

        Mirrors https://developer.themoviedb.org/reference/search-tv
        """
        return await self._get_page(
            "/3/search/tv",
            TvShowSummary,
            {
                "page": page,
                "language": language,
                "query": query,
                "include_adult": include_adult,
                "first_air_date_year": first_air_date_year,
            },
        )

    async def get_tv_show_details(
        self,
        tv_id: int,
        *,
        language: str | None = None,
    ) -> TvShowDetails:
        return await self._get_model(f"/3/tv/{tv_id}", TvShowDetails, {"language": language})

    async def _get_page(
        self,
        endpoint: str,
        item_model: type[ModelT],
        query: Mapping[str, QueryValue],
    ) -> PaginatedResponse[ModelT]:
        return await self._get_model(endpoint, PaginatedResponse[item_model], query)  # type: ignore[valid-type]

    async def _get_model(
        self,
        endpoint: str,
        model: type[ModelT],
        query: Mapping[str, QueryValue],
    ) -> ModelT:
        response = await self._get(endpoint, query)
        if response.status_code != 200:
            raise _error_for(response)
        return _decode(response, model)

    async def _get(self, endpoint: str, query: Mapping[str, QueryValue]) -> httpx.Response:
        if self._closed:
            raise TmdbClientClosedError("TmdbClient has been closed")

        url = self.build_url(endpoint, query)
        logger.debug(f"GET {url.path}")
        try:
            async with asyncio.timeout(self._timeout):
                response = await self._client.get(url)
        except (httpx.TimeoutException, TimeoutError) as exc:
            raise TmdbError(
                f"Request timed out: {url.path}",
                kind=TmdbErrorKind.TIMEOUT,
            ) from exc
        except httpx.RequestError as exc:
            raise TmdbError(
                f"Request failed: {url.path} ({exc})",
                kind=TmdbErrorKind.TRANSPORT,
            ) from exc

        logger.debug(f"GET {url.path} -> {response.status_code}")
        return response

    async def __aenter__(self) -> TmdbClient:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:  # type: ignore[override]
        await self.close()


@asynccontextmanager
async def tmdb_client(
    bearer_token: str,
    *,
    timeout: float = DEFAULT_TIMEOUT,
    default_language: str | None = None,
    default_region: str | None = None,
    base_url: str = BASE_URL,
    transport: httpx.AsyncBaseTransport | None = None,
):
    client = TmdbClient(
        bearer_token,
        timeout=timeout,
        default_language=default_language,
        default_region=default_region,
        base_url=base_url,
        transport=transport,
    )
    try:
        yield client
    finally:
        await client.close()


def _error_for(response: httpx.Response) -> TmdbError:
    message = f"HTTP {response.status_code}"
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict):
        status_message = payload.get("status_message")
        if status_message is not None and str(status_message):
            message = str(status_message)

    logger.warning(f"TMDB request to {response.request.url.path} failed: {message}")
    return TmdbError(
        message,
        kind=TmdbErrorKind.HTTP_STATUS,
        status_code=response.status_code,
        body=response.text,
    )


def _decode(response: httpx.Response, model: type[ModelT]) -> ModelT:
    path = response.request.url.path
    try:
        payload: Any = response.json()
    except ValueError as exc:
        raise TmdbError(
            f"Failed to decode response from {path}: invalid JSON ({exc})",
            kind=TmdbErrorKind.DECODE,
        ) from exc

    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise TmdbError(
            f"Failed to decode response from {path}: {exc.error_count()} validation error(s)",
            kind=TmdbErrorKind.DECODE,
        ) from exc


__all__ = ["BASE_URL", "DEFAULT_TIMEOUT", "TmdbClient", "merge_query_params", "tmdb_client"]
