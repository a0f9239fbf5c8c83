from typing import Any, Dict, Optional

import requests

from common.exceptions import ApiError, ErrorKind
from common.utils.logging_service import logger
from common.utils.utils import time_it


class TmdbClient:
    """
    Read-only pass-through to the TMDB v3 API.

    One attempt per call, no caching. The JSON body is returned untouched;
    transport errors and non-success statuses are raised as UPSTREAM_FAILURE.
    """

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str = "https://api.themoviedb.org/3",
        language: str = "en-US",
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.language = language
        self.timeout = timeout
        self.session = session or requests.Session()

    @time_it
    def get_popular_movies(self) -> Dict[str, Any]:
        response = self.__get("/movie/popular", page=1)
        return self.__json(response)

    @time_it
    def search_movies(self, query: Optional[str]) -> Dict[str, Any]:
        if not query:
            raise ApiError(ErrorKind.VALIDATION, "Query parameter is required")

        # requests percent-encodes the query string
        response = self.__get("/search/movie", query=query, page=1)
        return self.__json(response)

    @time_it
    def get_movie_details(self, movie_id: str) -> Dict[str, Any]:
        response = self.__get(f"/movie/{movie_id}")

        if response.status_code == 404:
            raise ApiError(ErrorKind.NOT_FOUND, "Movie not found")

        data = self.__json(response)
        if isinstance(data, dict) and data.get("success") is False:
            raise ApiError(ErrorKind.NOT_FOUND, "Movie not found")

        return data

    def __get(self, path: str, **params) -> requests.Response:
        params = {"api_key": self.api_key, "language": self.language, **params}
        try:
            return self.session.get(
                f"{self.base_url}{path}", params=params, timeout=self.timeout
            )
        except requests.RequestException as e:
            raise ApiError(ErrorKind.UPSTREAM_FAILURE, f"TMDB request failed: {e}") from e

    @staticmethod
    def __json(response: requests.Response) -> Dict[str, Any]:
        if not response.ok:
            logger.warning(f"TMDB responded with status {response.status_code}")
            raise ApiError(
                ErrorKind.UPSTREAM_FAILURE, f"TMDB error: {response.status_code}"
            )
        try:
            return response.json()
        except ValueError as e:
            raise ApiError(ErrorKind.UPSTREAM_FAILURE, f"TMDB sent invalid JSON: {e}") from e
