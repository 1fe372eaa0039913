import logging
from urllib.parse import urljoin, urlsplit

from .class_film import RATING_SELECTOR, YEAR_SELECTOR, get_poster_url
from .film_functions import TITLE_SELECTOR, clean_text, film_id_from_url, text_of
from .models import EMPTY_STRING, UNKNOWN_RATING, SearchResult
from .settings import BASE_URL

logger = logging.getLogger(__name__)

CARD_SELECTOR = "ul.fa-list-group div.movie-card"
CARD_FALLBACK_SELECTOR = "div.d-flex"
CARD_ID_ATTRIBUTE = "data-movie-id"
CARD_TITLE_LINK = ".mc-title a"
CARD_YEAR = ".mc-year"
CARD_RATING = ".fa-avg-rat-box .avg"
CARD_POSTER = ".mc-poster img"
SRCSET_ATTRIBUTES = ("data-srcset", "srcset")

LARGE_TOKENS = ("large",)
MEDIUM_TOKENS = ("mmed", "medium")


def select_movie_cards(soup):
    """
    Select the result cards of a search listing.

    The simple and advanced search pages do not always share markup, so the
    broader ``div.d-flex`` pattern is used when the card list is missing.

    Args:
        soup: Parsed listing page.

    Returns:
        list: Candidate card tags (possibly empty).
    """
    if soup is None:
        return []
    cards = soup.select(CARD_SELECTOR)
    if not cards:
        cards = soup.select(CARD_FALLBACK_SELECTOR)
    return cards


def pick_srcset_image(srcset: str | None, candidate: str = EMPTY_STRING):
    """
    Choose the best image from a ``srcset`` style attribute.

    Args:
        srcset: Comma separated "url descriptor" entries.
        candidate: URL to keep when no large or medium entry exists.

    Returns:
        str: First "large" entry, else first medium entry, else ``candidate``.
    """
    if not srcset:
        return candidate
    large = medium = None
    for source in srcset.split(","):
        source = source.strip()
        if not source:
            continue
        url = source.split()[0]
        if large is None and any(token in source for token in LARGE_TOKENS):
            large = url
        elif medium is None and any(token in source for token in MEDIUM_TOKENS):
            medium = url
    return large or medium or candidate


def absolute_image_url(url: str | None, base_url: str = BASE_URL):
    """
    Normalize an image URL to an absolute one.

    Args:
        url: Image URL as found in the page.
        base_url: Site origin prepended to root-relative paths.

    Returns:
        str: Absolute URL, or "" for anything that is neither absolute nor root-relative.
        Protocol-relative URLs take the scheme of ``base_url``.
    """
    if not url:
        return EMPTY_STRING
    if url.startswith("http"):
        return url
    if url.startswith("//"):
        return (urlsplit(base_url).scheme or "https") + ":" + url
    if url.startswith("/"):
        return base_url.rstrip("/") + url
    return EMPTY_STRING


def get_card_image(card, base_url: str = BASE_URL):
    img = card.select_one(CARD_POSTER)
    if img is None:
        return EMPTY_STRING
    image_url = img.get("src", EMPTY_STRING).strip()
    for attribute in SRCSET_ATTRIBUTES:
        srcset = img.get(attribute)
        if srcset:
            image_url = pick_srcset_image(srcset, image_url)
            break
    return absolute_image_url(image_url, base_url)


def parse_movie_card(card, page_url: str = BASE_URL + "/es/", base_url: str = BASE_URL):
    """
    Parse one search listing card into a ``SearchResult``.

    Args:
        card: The ``div.movie-card`` tag.
        page_url: URL of the listing page, used to resolve relative links.
        base_url: Site origin, used to resolve root-relative images.

    Returns:
        SearchResult: Parsed hit, or None when the card has no id or is malformed.
    """
    if card is None:
        return None
    try:
        film_id = (card.get(CARD_ID_ATTRIBUTE) or EMPTY_STRING).strip()
        if not film_id:
            return None

        title_link = card.select_one(CARD_TITLE_LINK)
        title = clean_text(title_link.get_text()) if title_link is not None else EMPTY_STRING
        href = title_link.get("href") if title_link is not None else None
        url = urljoin(page_url, href) if href else EMPTY_STRING

        year = text_of(card, CARD_YEAR) or EMPTY_STRING
        rating = text_of(card, CARD_RATING) or UNKNOWN_RATING

        return SearchResult(
            id=film_id,
            title=title,
            url=url,
            rating=rating,
            year=year,
            image_url=get_card_image(card, base_url),
        )
    except Exception as exc:
        logger.warning("Error parsing movie card element: %s", exc)
        return None


def parse_movie_cards(soup, page_url: str, base_url: str = BASE_URL):
    """
    Parse every card of a listing page, skipping the ones that fail.

    Args:
        soup: Parsed listing page.
        page_url: URL of the listing page.
        base_url: Site origin.

    Returns:
        list: SearchResult objects in page order.
    """
    results = []
    for card in select_movie_cards(soup):
        result = parse_movie_card(card, page_url, base_url)
        if result is not None:
            results.append(result)
    return results


def parse_basic_film_info(soup, film_url: str):
    """
    Build a ``SearchResult`` from a film page reached through an exact-match redirect.

    Args:
        soup: Parsed film page.
        film_url: Final URL of the page.

    Returns:
        SearchResult: Hit for the page, or None when the id or title is missing.
    """
    if soup is None:
        return None
    try:
        film_id = film_id_from_url(film_url)
        if film_id is None:
            return None

        title = text_of(soup, TITLE_SELECTOR)
        if not title:
            return None

        return SearchResult(
            id=film_id,
            title=title,
            url=film_url,
            rating=text_of(soup, RATING_SELECTOR) or UNKNOWN_RATING,
            year=text_of(soup, YEAR_SELECTOR) or EMPTY_STRING,
            image_url=get_poster_url(soup),
        )
    except Exception as exc:
        logger.warning("Error parsing basic info from film page %s: %s", film_url, exc)
        return None
