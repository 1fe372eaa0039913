import logging

from .errors import MissingRequiredField, ParseFailure
from .film_functions import (
    TITLE_SELECTOR,
    attr_of,
    credits_for_label,
    determine_type,
    get_genres,
    text_of,
    value_for_label,
)
from .models import EMPTY_STRING, FilmInfo
from .settings import Settings

logger = logging.getLogger(__name__)

YEAR_SELECTOR = "dd[itemprop=datePublished]"
SYNOPSIS_SELECTOR = "dd[itemprop=description]"
RATING_SELECTOR = "#movie-rat-avg"
POSTER_SOURCES = (
    ("#movie-main-image-container img", "src"),
    ('meta[property="og:image"]', "content"),
)


def get_poster_url(scope):
    """
    Retrieve the poster image URL, falling back to the ``og:image`` preview.

    Args:
        scope: Parsed detail page.

    Returns:
        str: Poster URL, or "" when neither source is present.
    """
    for selector, attribute in POSTER_SOURCES:
        value = attr_of(scope, selector, attribute)
        if value:
            return value
    return EMPTY_STRING


class FilmPage:
    """Extracts a ``FilmInfo`` from a parsed Filmaffinity film or series page."""

    def __init__(self, page_content, source_url: str, settings: Settings | None = None):
        """
        Args:
            page_content: BeautifulSoup tree of the detail page.
            source_url: URL the page was fetched from (used in errors and logs).
            settings: Site configuration, its language selects the definition-list labels.
        """
        self.page_content = page_content
        self.source_url = source_url
        self.labels = (settings or Settings()).labels

    def get_title(self):
        return text_of(self.page_content, TITLE_SELECTOR)

    def get_original_title(self):
        return value_for_label(self.page_content, self.labels["original_title"]) or EMPTY_STRING

    def get_year(self):
        return text_of(self.page_content, YEAR_SELECTOR) or EMPTY_STRING

    def get_duration(self):
        return value_for_label(self.page_content, self.labels["duration"]) or EMPTY_STRING

    def get_country(self):
        return value_for_label(self.page_content, self.labels["country"]) or EMPTY_STRING

    def get_synopsis(self):
        return text_of(self.page_content, SYNOPSIS_SELECTOR) or EMPTY_STRING

    def get_rating(self):
        """
        Retrieve the average user rating as displayed ("8,6").

        Returns:
            str: Rating text, or "" when the page has no rating yet.
        """
        rating = text_of(self.page_content, RATING_SELECTOR)
        if not rating:
            logger.warning("Could not extract rating for URL: %s", self.source_url)
            return EMPTY_STRING
        return rating

    def get_poster_url(self):
        return get_poster_url(self.page_content)

    def get_directors(self):
        return credits_for_label(self.page_content, self.labels["directors"])

    def get_writers(self):
        return credits_for_label(self.page_content, self.labels["writers"])

    def get_cast(self):
        return credits_for_label(self.page_content, self.labels["cast"])

    def get_genres(self):
        return get_genres(self.page_content)

    def get_type(self):
        return determine_type(self.page_content)

    def assemble(self):
        """
        Build the complete record for the page.

        Returns:
            FilmInfo: Record with every optional field defaulted to "" or ().

        Raises:
            MissingRequiredField: When the page has no title (not a detail page).
            ParseFailure: When any other field extraction fails unexpectedly.
        """
        if self.page_content is None:
            raise ParseFailure(f"Input document is None for URL: {self.source_url}", source_url=self.source_url)

        title = self.get_title()
        if not title:
            raise MissingRequiredField(f"Could not extract title from: {self.source_url}", source_url=self.source_url)

        try:
            return FilmInfo(
                title=title,
                original_title=self.get_original_title(),
                year=self.get_year(),
                duration=self.get_duration(),
                country=self.get_country(),
                directors=self.get_directors(),
                genres=self.get_genres(),
                synopsis=self.get_synopsis(),
                rating=self.get_rating(),
                poster_url=self.get_poster_url(),
                type=self.get_type(),
                writers=self.get_writers(),
                cast=self.get_cast(),
                url=self.source_url or EMPTY_STRING,
            )
        except Exception as exc:
            raise ParseFailure(
                f"Error parsing content from URL: {self.source_url}", source_url=self.source_url, cause=exc
            ) from exc


def parse_film_info(page_content, source_url: str, settings: Settings | None = None):
    """
    Parse film information from an already fetched page.

    Args:
        page_content: BeautifulSoup tree of the detail page.
        source_url: Original URL, reported in errors.
        settings: Site configuration (language of the page).

    Returns:
        FilmInfo: The assembled record.
    """
    return FilmPage(page_content, source_url, settings).assemble()
