"""Exceptions raised by the catalog client and the tracking workflow."""

from typing import Optional


class TMDBError(Exception):
    """Base class for TMDB API failures."""


class TMDBNetworkError(TMDBError):
    """TMDB servers could not be reached."""

    def __init__(self, cause: Optional[BaseException] = None):
        super().__init__("Network error: Unable to reach TMDB servers")
        self.__cause__ = cause


class TMDBApiError(TMDBError):
    """TMDB answered with an unexpected HTTP status."""

    def __init__(self, status_code: int, message: str):
        super().__init__(f"API error ({status_code}): {message}")
        self.status_code = status_code


class TMDBShowNotFound(TMDBError):
    """Show does not exist in TMDB."""

    def __init__(self, tmdb_id: int):
        super().__init__(f"Show not found: {tmdb_id}")
        self.tmdb_id = tmdb_id


class TMDBSeasonNotFound(TMDBError):
    """Season does not exist in TMDB."""

    def __init__(self, tmdb_id: int, season_number: int):
        super().__init__(f"Season not found: Show {tmdb_id}, Season {season_number}")
        self.tmdb_id = tmdb_id
        self.season_number = season_number


class TMDBRateLimited(TMDBError):
    """Too many requests to TMDB."""

    def __init__(self):
        super().__init__("Rate limited: Too many requests to TMDB API")


class TMDBInvalidApiKey(TMDBError):
    """TMDB rejected the configured API key."""

    def __init__(self):
        super().__init__("Invalid API key: Check your TMDB API key configuration")


class TMDBParseError(TMDBError):
    """TMDB response did not match the expected shape."""

    def __init__(self, cause: Optional[BaseException] = None):
        super().__init__("Parse error: Unable to parse TMDB response")
        self.__cause__ = cause


class ShowNotFoundError(Exception):
    """No followed show with the given local ID."""

    def __init__(self, show_id: int):
        super().__init__(f"Show with ID {show_id} not found in database")
        self.show_id = show_id


class SeasonNotFoundError(Exception):
    """No stored season with the given local ID."""

    def __init__(self, season_id: int):
        super().__init__(f"Season with ID {season_id} not found in database")
        self.season_id = season_id


class CatalogUnavailableError(Exception):
    """No catalog client is configured."""

    def __init__(self):
        super().__init__("TMDB API key not configured, catalog lookups are disabled")


class RefreshFailedError(Exception):
    """Fetching fresh catalog data for a show failed."""

    def __init__(self, tmdb_id: int, cause: BaseException):
        super().__init__(f"Failed to fetch show data for TMDB ID {tmdb_id}: {cause}")
        self.tmdb_id = tmdb_id
        self.__cause__ = cause
