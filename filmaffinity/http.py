import logging
import random
from dataclasses import dataclass

import requests
from bs4 import BeautifulSoup

from .errors import NetworkError
from .settings import USER_AGENTS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FetchedPage:
    """A parsed page together with the URL it was finally served from."""

    url: str
    soup: BeautifulSoup
    status_code: int = 200


def get_headers(user_agents=USER_AGENTS, referer: str = "https://www.filmaffinity.com/"):
    """
    Build the HTTP headers used for Filmaffinity requests.

    Returns:
        dict: Header values mimicking a standard browser.
    """
    return {
        "User-Agent": random.choice(list(user_agents)),
        "Accept-Language": "es-ES,es;q=0.9,en;q=0.8",
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        "Connection": "keep-alive",
        "DNT": "1",
        "Upgrade-Insecure-Requests": "1",
        "Referer": referer,
    }


def build_session(user_agents=USER_AGENTS, base_url: str = "https://www.filmaffinity.com"):
    session = requests.Session()
    session.headers.update(get_headers(user_agents, referer=base_url.rstrip("/") + "/"))
    return session


def fetch_page(session, url: str, timeout: float = 15, follow_redirects: bool = True):
    """
    Fetch a page once and parse it with BeautifulSoup.

    Args:
        session: ``requests.Session`` (or anything exposing a compatible ``get``).
        url: Absolute URL to fetch.
        timeout: Seconds before the request is abandoned.
        follow_redirects: Whether redirects are followed; the final URL is reported either way.

    Returns:
        FetchedPage: Final URL and parsed tree.

    Raises:
        NetworkError: On connection errors, timeouts and non-2xx responses.
    """
    logger.debug("Fetching %s", url)
    try:
        response = session.get(url, timeout=timeout, allow_redirects=follow_redirects)
        response.raise_for_status()
    except requests.RequestException as exc:
        logger.warning("Network error fetching URL %s: %s", url, exc)
        raise NetworkError(f"Network error fetching URL: {url}") from exc

    return FetchedPage(url=response.url or url, soup=BeautifulSoup(response.text, "html.parser"), status_code=response.status_code)
