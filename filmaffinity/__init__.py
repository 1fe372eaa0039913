from .errors import MissingRequiredField, NetworkError, ParseFailure, ScraperError, ValidationError
from .film_functions import film_id_from_url
from .models import FilmInfo, FilmType, SearchResult
from .scraper import FilmaffinityScraper
from .settings import Settings, load_settings

__all__ = [
    "FilmaffinityScraper",
    "FilmInfo",
    "FilmType",
    "SearchResult",
    "Settings",
    "load_settings",
    "film_id_from_url",
    "ScraperError",
    "ValidationError",
    "NetworkError",
    "ParseFailure",
    "MissingRequiredField",
]
