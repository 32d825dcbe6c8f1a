from .tmdb import BASE_URL, DEFAULT_TIMEOUT, TmdbClient, merge_query_params, tmdb_client

__all__ = ["BASE_URL", "DEFAULT_TIMEOUT", "TmdbClient", "merge_query_params", "tmdb_client"]
