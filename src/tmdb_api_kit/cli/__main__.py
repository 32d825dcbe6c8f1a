from __future__ import annotations

import asyncio
import json
import logging
from enum import Enum
from typing import Any

import typer

from tmdb_api_kit import __version__
from tmdb_api_kit.clients.tmdb import TmdbClient
from tmdb_api_kit.config import Settings, SettingsError, SettingsLoadResult, load_settings
from tmdb_api_kit.errors import TmdbError
from tmdb_api_kit.models import (
    MovieBase,
    PaginatedResponse,
    TmdbModel,
    TvShowBase,
)

app = typer.Typer(
    add_completion=False,
    help="Look up movie and TV metadata from TMDB.",
)

EXIT_CONFIG_ERROR = 1
EXIT_API_ERROR = 2


class MediaType(str, Enum):
    """Kind of title a command operates on."""

    MOVIE = "movie"
    TV = "tv"


@app.callback()
def _cli_entry(ctx: typer.Context) -> None:
    """Entrypoint for the tmdb-api-kit CLI."""
    ctx.obj = {} if ctx.obj is None else ctx.obj


@app.command()
def version() -> None:
    """Print the installed version."""
    typer.echo(__version__)


@app.command()
def popular(
    media: MediaType = typer.Option(MediaType.MOVIE, help="movie or tv."),
    page: int = typer.Option(1, min=1, help="Result page (1-based)."),
    language: str | None = typer.Option(None, help="Override the configured language."),
    json_output: bool = typer.Option(False, "--json/--no-json", help="Output raw JSON."),
    debug: bool = typer.Option(False, help="Enable debug logging."),
) -> None:
    """List popular movies or TV shows."""
    if debug:
        _setup_logging(logging.DEBUG)

    async def _call(client: TmdbClient) -> PaginatedResponse[Any]:
        if media is MediaType.TV:
            return await client.get_popular_tv_shows(page=page, language=language)
        return await client.get_popular_movies(page=page, language=language)

    result = _run(_call)
    _render_page(result, json_output=json_output)


@app.command("top-rated")
def top_rated(
    media: MediaType = typer.Option(MediaType.MOVIE, help="movie or tv."),
    page: int = typer.Option(1, min=1, help="Result page (1-based)."),
    language: str | None = typer.Option(None, help="Override the configured language."),
    json_output: bool = typer.Option(False, "--json/--no-json", help="Output raw JSON."),
    debug: bool = typer.Option(False, help="Enable debug logging."),
) -> None:
    """List top-rated movies or TV shows."""
    if debug:
        _setup_logging(logging.DEBUG)

    async def _call(client: TmdbClient) -> PaginatedResponse[Any]:
        if media is MediaType.TV:
            return await client.get_top_rated_tv_shows(page=page, language=language)
        return await client.get_top_rated_movies(page=page, language=language)

    result = _run(_call)
    _render_page(result, json_output=json_output)


@app.command()
def search(
    query: str = typer.Argument(..., help="Text to search for."),
    media: MediaType = typer.Option(MediaType.MOVIE, help="movie or tv."),
    page: int = typer.Option(1, min=1, help="Result page (1-based)."),
    language: str | None = typer.Option(None, help="Override the configured language."),
    include_adult: bool = typer.Option(False, help="Include adult titles."),
    year: int | None = typer.Option(
        None, help="Release year (movies) or first air date year (tv)."
    ),
    json_output: bool = typer.Option(False, "--json/--no-json", help="Output raw JSON."),
    debug: bool = typer.Option(False, help="Enable debug logging."),
) -> None:
    """Search movies or TV shows by title."""
    if debug:
        _setup_logging(logging.DEBUG)

    async def _call(client: TmdbClient) -> PaginatedResponse[Any]:
        if media is MediaType.TV:
            return await client.search_tv_shows(
                query,
                page=page,
                language=language,
                include_adult=include_adult,
                first_air_date_year=year,
            )
        return await client.search_movies(
            query,
            page=page,
            language=language,
            include_adult=include_adult,
            year=year,
        )

    result = _run(_call)
    _render_page(result, json_output=json_output)


@app.command()
def details(
    tmdb_id: int = typer.Argument(..., help="TMDB ID of the movie or show."),
    media: MediaType = typer.Option(MediaType.MOVIE, help="movie or tv."),
    language: str | None = typer.Option(None, help="Override the configured language."),
    json_output: bool = typer.Option(False, "--json/--no-json", help="Output raw JSON."),
    debug: bool = typer.Option(False, help="Enable debug logging."),
) -> None:
    """Show the full record for one movie or TV show."""
    if debug:
        _setup_logging(logging.DEBUG)

    async def _call(client: TmdbClient) -> TmdbModel:
        if media is MediaType.TV:
            return await client.get_tv_show_details(tmdb_id, language=language)
        return await client.get_movie_details(tmdb_id, language=language)

    record = _run(_call)
    if json_output:
        typer.echo(json.dumps(record.to_json(), indent=2))
        return

    typer.secho(f"{_title_of(record)} ({_year_of(record)})", fg=typer.colors.CYAN)
    tagline = getattr(record, "tagline", None)
    if tagline:
        typer.echo(f"   {tagline}")
    genres = getattr(record, "genres", [])
    if genres:
        typer.echo(f"   genres: {', '.join(g.name or str(g.id) for g in genres)}")
    if record.overview:
        typer.echo(f"   {record.overview}")


@app.command()
def config(show_sources: bool = typer.Option(False, help="Display where settings came from.")) -> None:
    """Describe configuration expectations."""
    load_result = _safe_load_settings(load_even_if_missing=True)
    settings = load_result.settings
    values: dict[str, Any] = {
        "bearer_token": "<set>" if settings.bearer_token else "<unset>",
        "language": settings.language or "<unset>",
        "region": settings.region or "<unset>",
        "timeout": settings.timeout,
    }

    for key, value in values.items():
        typer.echo(f"{key}: {value}")

    if show_sources:
        source_hint = load_result.source_path or "<env/.env>"
        typer.echo(f"resolved_from: {source_hint}")
        typer.echo(
            "Configure ~/.config/tmdb-api-kit/config.toml ([tmdb] table) for persistent settings.",
        )


def main() -> None:
    """Expose Typer app for the console script."""
    app()


def _safe_load_settings(load_even_if_missing: bool = False) -> SettingsLoadResult | None:
    try:
        return load_settings()
    except SettingsError as exc:
        if load_even_if_missing:
            typer.secho(
                f"Warning: configuration incomplete – {exc}",
                fg=typer.colors.YELLOW,
            )
            return SettingsLoadResult(settings=Settings(), source_path=None)
        typer.secho(str(exc), fg=typer.colors.RED)
        return None


def _run(call):
    """Build a client from settings, await ``call(client)`` and close the client."""
    load_result = _safe_load_settings()
    if load_result is None:
        raise typer.Exit(code=EXIT_CONFIG_ERROR)

    try:
        client = load_result.settings.build_client()
    except SettingsError as exc:
        typer.secho(str(exc), fg=typer.colors.RED)
        raise typer.Exit(code=EXIT_CONFIG_ERROR) from exc

    async def _execute():
        async with client:
            return await call(client)

    try:
        return asyncio.run(_execute())
    except TmdbError as exc:
        typer.secho(str(exc), fg=typer.colors.RED)
        raise typer.Exit(code=EXIT_API_ERROR) from exc


def _setup_logging(level: int = logging.INFO) -> None:
    """Configure logging for debug mode."""
    logging.basicConfig(
        format="%(message)s",
        level=level,
        force=True,
    )


def _title_of(record: TmdbModel) -> str:
    if isinstance(record, MovieBase):
        return record.title
    if isinstance(record, TvShowBase):
        return record.name
    return str(getattr(record, "id", "?"))


def _year_of(record: TmdbModel) -> str:
    year = getattr(record, "year", None)
    return str(year) if year else "n/a"


def _render_page(result: PaginatedResponse[Any], *, json_output: bool) -> None:
    if json_output:
        typer.echo(json.dumps(result.to_json(), indent=2))
        return

    if not result.results:
        typer.secho("No results.", fg=typer.colors.YELLOW)
        return

    typer.secho(
        f"Page {result.page or 1} of {result.total_pages or 1}"
        f" ({result.total_results or len(result.results)} results)",
        fg=typer.colors.CYAN,
    )
    for idx, item in enumerate(result.results, start=1):
        typer.echo(f"{idx}. {_title_of(item)} ({_year_of(item)})")


if __name__ == "__main__":
    main()
