import json

import httpx
import respx
from typer.testing import CliRunner

from tmdb_api_kit import __version__
from tmdb_api_kit.cli.__main__ import app
from tests.fixtures.tmdb_responses import (
    MOVIE_DETAILS_RESPONSE,
    POPULAR_MOVIES_RESPONSE,
    POPULAR_TV_RESPONSE,
)

API = "https://api.themoviedb.org"

runner = CliRunner()


def _env(**extra: str) -> dict[str, str]:
    env = {
        "TMDB_BEARER_TOKEN": "cli-token",
        "TMDB_LANGUAGE": "",
        "TMDB_REGION": "",
        "TMDB_API_KIT_CONFIG": "/nonexistent/tmdb-api-kit.toml",
    }
    env.update(extra)
    return env


def test_version_command_outputs_version() -> None:
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert __version__ in result.stdout


@respx.mock
def test_popular_lists_titles() -> None:
    respx.get(f"{API}/3/movie/popular").mock(
        return_value=httpx.Response(200, json=POPULAR_MOVIES_RESPONSE)
    )

    result = runner.invoke(app, ["popular"], env=_env())

    assert result.exit_code == 0
    assert "1. Dune: Part Two (2024)" in result.stdout
    assert "2. Sans date (n/a)" in result.stdout


@respx.mock
def test_top_rated_tv_uses_configured_language() -> None:
    route = respx.get(f"{API}/3/tv/top_rated").mock(
        return_value=httpx.Response(200, json=POPULAR_TV_RESPONSE)
    )

    result = runner.invoke(
        app, ["top-rated", "--media", "tv", "--page", "2"], env=_env(TMDB_LANGUAGE="ja-JP")
    )

    assert result.exit_code == 0
    assert "Game of Thrones (2011)" in result.stdout
    params = route.calls.last.request.url.params
    assert params["language"] == "ja-JP"
    assert params["page"] == "2"


@respx.mock
def test_search_outputs_json() -> None:
    route = respx.get(f"{API}/3/search/movie").mock(
        return_value=httpx.Response(200, json=POPULAR_MOVIES_RESPONSE)
    )

    result = runner.invoke(app, ["search", "Dune", "--year", "2024", "--json"], env=_env())

    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["total_results"] == 100
    assert route.calls.last.request.url.params["year"] == "2024"


@respx.mock
def test_details_renders_record() -> None:
    respx.get(f"{API}/3/movie/603").mock(
        return_value=httpx.Response(200, json=MOVIE_DETAILS_RESPONSE)
    )

    result = runner.invoke(app, ["details", "603"], env=_env())

    assert result.exit_code == 0
    assert "The Matrix (1999)" in result.stdout
    assert "Welcome to the Real World." in result.stdout


@respx.mock
def test_api_error_exits_with_code_2() -> None:
    respx.get(f"{API}/3/movie/popular").mock(
        return_value=httpx.Response(401, json={"status_message": "Invalid API key"})
    )

    result = runner.invoke(app, ["popular"], env=_env())

    assert result.exit_code == 2
    assert "Invalid API key" in result.stdout


def test_missing_token_exits_with_code_1() -> None:
    result = runner.invoke(app, ["popular"], env=_env(TMDB_BEARER_TOKEN=""))

    assert result.exit_code == 1
    assert "TMDB_BEARER_TOKEN" in result.stdout


def test_config_masks_token() -> None:
    result = runner.invoke(app, ["config"], env=_env())

    assert result.exit_code == 0
    assert "bearer_token: <set>" in result.stdout
    assert "cli-token" not in result.stdout


def test_bad_toml_timeout_exits_with_code_1(tmp_path) -> None:
    config_file = tmp_path / "config.toml"
    config_file.write_text('[tmdb]\ntimeout = "soon"\n', encoding="utf-8")

    result = runner.invoke(app, ["popular"], env=_env(TMDB_API_KIT_CONFIG=str(config_file)))

    assert result.exit_code == 1
    assert "soon" in result.stdout
