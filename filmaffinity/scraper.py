import logging
from concurrent.futures import Executor, ThreadPoolExecutor

from .class_film import parse_film_info
from .class_search import FilmSearch
from .errors import ScraperError, ValidationError
from .film_functions import film_id_from_url
from .http import build_session, fetch_page
from .settings import Settings, load_settings

logger = logging.getLogger(__name__)


class FilmaffinityScraper:
    """
    Fetches film information and search results from Filmaffinity.

    Every call is synchronous. To run calls in the background, pass your own
    executor to ``submit_fetch_film_info`` / ``submit_search``; the scraper
    never owns a long-lived pool, so shutting it down stays with the caller.
    """

    def __init__(self, settings: Settings | None = None, session=None):
        self.settings = settings or load_settings()
        self.session = session or build_session(self.settings.user_agents, self.settings.base_url)
        self.searcher = FilmSearch(self.fetch, self.settings)

    def fetch(self, url: str, follow_redirects: bool = True):
        return fetch_page(self.session, url, timeout=self.settings.timeout, follow_redirects=follow_redirects)

    def fetch_film_info(self, content_url: str):
        """
        Fetch and parse a film or series page.

        Args:
            content_url: Full URL of the page on Filmaffinity.

        Returns:
            FilmInfo: Parsed record.

        Raises:
            ValidationError: Blank URL.
            NetworkError: The page could not be fetched.
            MissingRequiredField: The page has no title.
            ParseFailure: Another field could not be parsed.
        """
        if content_url is None or not str(content_url).strip():
            raise ValidationError("Content URL cannot be null or empty.")
        content_url = str(content_url).strip()

        page = self.fetch(content_url)
        return parse_film_info(page.soup, content_url, self.settings)

    def search(self, query, year=None):
        """Search by title, see ``FilmSearch.search``."""
        return self.searcher.search(query, year)

    @staticmethod
    def film_id_from_url(url):
        return film_id_from_url(url)

    def submit_fetch_film_info(self, executor: Executor, content_url: str):
        """
        Schedule ``fetch_film_info`` on a caller-owned executor.

        Returns:
            Future: Resolves to a FilmInfo or raises one of the scraper errors.
        """
        return executor.submit(self.fetch_film_info, content_url)

    def submit_search(self, executor: Executor, query, year=None):
        return executor.submit(self.search, query, year)

    def fetch_many(self, urls, max_workers: int | None = None):
        """
        Fetch several film pages concurrently.

        A failing URL does not stop the batch; its error is returned in place
        of the record.

        Args:
            urls: Film page URLs.
            max_workers: Pool size, defaults to the configured value.

        Returns:
            list: ``(url, FilmInfo | None, ScraperError | None)`` tuples in input order.
        """
        urls = list(urls)
        if not urls:
            return []

        def scrape_film(url):
            try:
                return url, self.fetch_film_info(url), None
            except ScraperError as exc:
                logger.warning("Failed to scrape %s: %s", url, exc)
                return url, None, exc

        with ThreadPoolExecutor(max_workers=max_workers or self.settings.max_workers) as executor:
            return list(executor.map(scrape_film, urls))
