import os
from dataclasses import dataclass, field

from .errors import ValidationError

BASE_URL = os.environ.get("FILMAFFINITY_BASE_URL", "https://www.filmaffinity.com").rstrip("/")
LANGUAGE = os.environ.get("FILMAFFINITY_LANG", "es")
REQUEST_TIMEOUT = float(os.environ.get("FILMAFFINITY_TIMEOUT", 15))
MAX_WORKERS = int(os.environ.get("FILMAFFINITY_MAX_WORKERS", 8))
USER_AGENT_OVERRIDE = os.environ.get("FILMAFFINITY_USER_AGENT")

USER_AGENTS = [
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/124.0 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1.15 (KHTML, like Gecko) Version/15.1 Safari/605.1.15",
    "Mozilla/5.0 (X11; Linux x86_64) Gecko/20100101 Firefox/117.0",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36",
]

# dt labels of the "dl.movie-info" block, per site language
LABELS = {
    "es": {
        "original_title": "Título original",
        "duration": "Duración",
        "country": "País",
        "directors": "Dirección",
        "writers": "Guion",
        "cast": "Reparto",
    },
    "en": {
        "original_title": "Original title",
        "duration": "Running time",
        "country": "Country",
        "directors": "Director",
        "writers": "Screenwriter",
        "cast": "Cast",
    },
}

SEARCH_SIMPLE_PATH = "/{lang}/search.php?stype=title&stext={query}"
SEARCH_EXACT_PATH = "/{lang}/search.php?stype=title&stext={query}&em=1"
SEARCH_ADVANCED_PATH = (
    "/{lang}/advsearch.php?stext={query}&stype[]=title&country=&genre=&fromyear={year}&toyear={year}"
)


@dataclass(frozen=True)
class Settings:
    """Runtime configuration shared by the fetch layer and the search resolver."""

    base_url: str = BASE_URL
    language: str = LANGUAGE
    timeout: float = REQUEST_TIMEOUT
    max_workers: int = MAX_WORKERS
    user_agents: tuple = field(default_factory=lambda: tuple(USER_AGENTS))

    def __post_init__(self):
        if self.language not in LABELS:
            raise ValidationError(f"Unsupported site language: {self.language!r}")
        if self.timeout <= 0 or self.max_workers <= 0:
            raise ValidationError("Timeout and max_workers must be positive")
        if not self.user_agents:
            raise ValidationError("At least one user agent is required")

    @property
    def labels(self) -> dict:
        return LABELS[self.language]

    def search_url(self, template: str, query: str, year: int | None = None) -> str:
        """
        Build an absolute search URL for the configured site and language.

        Args:
            template: One of the ``SEARCH_*_PATH`` templates.
            query: Query already URL-encoded.
            year: Year used by the advanced search template.

        Returns:
            str: Absolute URL.
        """
        return self.base_url + template.format(lang=self.language, query=query, year=year)


def load_settings(**overrides) -> Settings:
    """
    Build a ``Settings`` object from the environment defaults and explicit overrides.

    Args:
        **overrides: Any ``Settings`` field to replace (``language="en"``, ``timeout=5``...).

    Returns:
        Settings: Validated configuration.

    Raises:
        ValidationError: When the language has no label set or a numeric value is not positive.
    """
    if USER_AGENT_OVERRIDE and "user_agents" not in overrides:
        overrides["user_agents"] = (USER_AGENT_OVERRIDE,)
    if "base_url" in overrides:
        overrides["base_url"] = overrides["base_url"].rstrip("/")

    return Settings(**overrides)
