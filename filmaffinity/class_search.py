import logging
from urllib.parse import quote_plus

from .errors import ParseFailure, ScraperError, ValidationError
from .film_functions import film_id_from_url
from .search_functions import parse_basic_film_info, parse_movie_cards
from .settings import SEARCH_ADVANCED_PATH, SEARCH_EXACT_PATH, SEARCH_SIMPLE_PATH, Settings

logger = logging.getLogger(__name__)


def validate_query(query):
    if query is None or not str(query).strip():
        raise ValidationError("Search query cannot be null or empty.")
    return str(query).strip()


def validate_year(year):
    """
    Normalize an optional year hint.

    Args:
        year: None, an int, or a string of digits.

    Returns:
        int: The year, or None when no hint was given.
    """
    if year is None or (isinstance(year, str) and not year.strip()):
        return None
    if isinstance(year, bool):
        raise ValidationError(f"Invalid year hint: {year!r}")
    if isinstance(year, int):
        return year
    if isinstance(year, str) and year.strip().isdigit():
        return int(year.strip())
    raise ValidationError(f"Invalid year hint: {year!r}")


class FilmSearch:
    """
    Resolves a free-text query to Filmaffinity search results.

    Three strategies are tried in confidence order and the first one that
    applies ends the search:

    1. the exact-match endpoint, which redirects straight to the film page
       when the title is unambiguous;
    2. the advanced search restricted to the given year (only with a year hint);
    3. the simple title search (only without a year hint).
    """

    def __init__(self, fetch, settings: Settings | None = None):
        """
        Args:
            fetch: Callable ``fetch(url, follow_redirects=True) -> FetchedPage``.
            settings: Site configuration; defaults to ``Settings()``.
        """
        self.fetch = fetch
        self.settings = settings or Settings()

    def search(self, query, year=None):
        """
        Search for films or series by title.

        Args:
            query: Title to look for.
            year: Optional release year to narrow the search.

        Returns:
            list: SearchResult objects, possibly empty.

        Raises:
            ValidationError: Blank query or malformed year.
            NetworkError: A search page could not be fetched.
            ParseFailure: Unexpected failure while reading the results.
        """
        query = validate_query(query)
        year = validate_year(year)
        encoded_query = quote_plus(query)

        url = self.settings.search_url(SEARCH_EXACT_PATH, encoded_query)
        try:
            exact = self.search_exact(url)
            if exact:
                return exact

            if year is not None:
                url = self.settings.search_url(SEARCH_ADVANCED_PATH, encoded_query, year)
            else:
                url = self.settings.search_url(SEARCH_SIMPLE_PATH, encoded_query)
            return self.search_listing(url)
        except ScraperError:
            raise
        except Exception as exc:
            raise ParseFailure(
                f"Unexpected error during search for: {query}", source_url=url, cause=exc
            ) from exc

    def search_exact(self, url: str):
        logger.debug("Exact-match search: %s", url)
        page = self.fetch(url, follow_redirects=True)
        if film_id_from_url(page.url) is None:
            return []
        result = parse_basic_film_info(page.soup, page.url)
        return [result] if result is not None else []

    def search_listing(self, url: str):
        """Parse the cards of a year-scoped or simple search listing."""
        logger.debug("Listing search: %s", url)
        page = self.fetch(url, follow_redirects=True)
        return parse_movie_cards(page.soup, page.url, self.settings.base_url)
