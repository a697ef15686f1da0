"""TMDB API client for fetching show, season and episode metadata."""

import asyncio
import logging
from typing import Callable, Optional, Type, TypeVar

import httpx

from ..core.config import Settings
from ..core.exceptions import (
    TMDBApiError,
    TMDBError,
    TMDBInvalidApiKey,
    TMDBNetworkError,
    TMDBParseError,
    TMDBRateLimited,
    TMDBSeasonNotFound,
    TMDBShowNotFound,
)
from ..models.tmdb import (
    TMDBModel,
    TMDBSearchResponse,
    TMDBSeasonDetails,
    TMDBSeasonSummary,
    TMDBShowDetails,
)

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=TMDBModel)


class TMDBClient:
    """Client for the TMDB v3 API."""

    BASE_URL = "https://api.themoviedb.org/3"
    IMAGE_BASE_URL = "https://image.tmdb.org/t/p/"
    POSTER_SIZE = "w500"
    BACKDROP_SIZE = "w780"

    def __init__(
        self,
        api_key: str,
        base_url: str = BASE_URL,
        timeout: float = 30.0,
        max_attempts: int = 3,
        retry_backoff_seconds: float = 2.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize TMDB client.

        Args:
            api_key: TMDB v3 API key
            base_url: API root URL
            timeout: Request timeout in seconds
            max_attempts: Attempts per season when rate limited
            retry_backoff_seconds: Retry n waits n * backoff seconds
            transport: Optional httpx transport (used by tests)
        """
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.max_attempts = max(1, max_attempts)
        self.retry_backoff_seconds = retry_backoff_seconds
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)

    @classmethod
    def from_settings(cls, settings: Settings) -> "TMDBClient":
        """Build a client from settings (requires tmdb_api_key)."""
        if not settings.tmdb_api_key:
            raise ValueError("tmdb_api_key is not configured")
        return cls(
            api_key=settings.tmdb_api_key,
            base_url=settings.tmdb_base_url,
            timeout=settings.tmdb_timeout_seconds,
            max_attempts=settings.tmdb_max_attempts,
            retry_backoff_seconds=settings.tmdb_retry_backoff_seconds,
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def _request(
        self,
        endpoint: str,
        model: Type[M],
        params: Optional[dict] = None,
        not_found: Optional[Callable[[], TMDBError]] = None,
    ) -> M:
        """
        Make an authenticated GET request and validate the response.

        Args:
            endpoint: API endpoint (without base URL)
            model: Model the response JSON is validated into
            params: Extra query parameters
            not_found: Factory for the error raised on 404

        Returns:
            Validated response model

        Raises:
            TMDBError: If the request fails or the response cannot be parsed
        """
        query = {"api_key": self.api_key}
        if params:
            query.update(params)

        try:
            response = await self._client.get(f"{self.base_url}/{endpoint}", params=query)
        except httpx.TransportError as e:
            logger.error(f"TMDB request failed: GET {endpoint} -> {e}")
            raise TMDBNetworkError(e) from e

        if response.status_code != 200:
            logger.error(f"TMDB request failed: GET {endpoint} -> {response.status_code}")
            if response.status_code == 401:
                raise TMDBInvalidApiKey()
            if response.status_code == 404:
                raise not_found() if not_found else TMDBApiError(404, "Not found")
            if response.status_code == 429:
                raise TMDBRateLimited()
            raise TMDBApiError(response.status_code, response.text[:200])

        try:
            return model.model_validate(response.json())
        except ValueError as e:
            logger.error(f"Unable to parse TMDB response for {endpoint}: {e}")
            raise TMDBParseError(e) from e

    async def search(self, query: str, page: int = 1) -> TMDBSearchResponse:
        """Search for TV shows by name."""
        logger.info(f"Searching TMDB for: {query}")
        return await self._request(
            "search/tv", TMDBSearchResponse, params={"query": query, "page": page}
        )

    async def get_show_details(self, tmdb_id: int) -> TMDBShowDetails:
        """Get detailed show information."""
        return await self._request(
            f"tv/{tmdb_id}",
            TMDBShowDetails,
            not_found=lambda: TMDBShowNotFound(tmdb_id),
        )

    async def get_season_details(self, tmdb_id: int, season_number: int) -> TMDBSeasonDetails:
        """Get detailed season information including episodes."""
        return await self._request(
            f"tv/{tmdb_id}/season/{season_number}",
            TMDBSeasonDetails,
            not_found=lambda: TMDBSeasonNotFound(tmdb_id, season_number),
        )

    async def fetch_all_seasons(
        self, show_details: TMDBShowDetails
    ) -> tuple[list[TMDBSeasonDetails], list[TMDBSeasonSummary]]:
        """
        Fetch details for every regular season of a show.

        Specials (season 0) are skipped. Rate-limited requests are retried with
        linear backoff; a season that still fails is reported back rather than
        failing the whole show.

        Args:
            show_details: Show details listing the seasons

        Returns:
            Tuple of (fetched season details, summaries of seasons that failed)
        """
        fetched: list[TMDBSeasonDetails] = []
        failed: list[TMDBSeasonSummary] = []
        regular_seasons = show_details.regular_seasons

        for summary in regular_seasons:
            details = await self._fetch_season_with_retry(show_details.id, summary.season_number)
            if details is None:
                failed.append(summary)
            else:
                fetched.append(details)

        logger.info(
            f"Fetched {len(fetched)}/{len(regular_seasons)} seasons for show {show_details.id}"
        )
        return fetched, failed

    async def _fetch_season_with_retry(
        self, tmdb_id: int, season_number: int
    ) -> Optional[TMDBSeasonDetails]:
        for attempt in range(1, self.max_attempts + 1):
            try:
                return await self.get_season_details(tmdb_id, season_number)
            except TMDBRateLimited:
                if attempt == self.max_attempts:
                    break
                wait = attempt * self.retry_backoff_seconds
                logger.warning(f"Rate limited on S{season_number}, waiting {wait} seconds...")
                await asyncio.sleep(wait)
            except TMDBError as e:
                logger.error(f"Failed S{season_number} for show {tmdb_id}: {e}")
                return None

        logger.error(f"Failed S{season_number} for show {tmdb_id} after {self.max_attempts} attempts")
        return None

    def build_image_url(self, path: Optional[str], size: str = POSTER_SIZE) -> Optional[str]:
        """Build a full image URL from a TMDB image path."""
        if not path:
            return None
        return f"{self.IMAGE_BASE_URL}{size}{path}"
