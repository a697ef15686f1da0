"""Release pattern inference, lifecycle classification and catalog services."""

from .release_pattern import ReleasePatternResolver
from .season_state import SeasonLifecycleClassifier
from .show_processor import ShowProcessor, parse_date
from .tmdb_client import TMDBClient

__all__ = [
    "ReleasePatternResolver",
    "SeasonLifecycleClassifier",
    "ShowProcessor",
    "TMDBClient",
    "parse_date",
]
