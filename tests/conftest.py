from pathlib import Path

import pytest
from bs4 import BeautifulSoup

from filmaffinity.http import FetchedPage

FIXTURES_PATH = Path(__file__).parent / "fixtures"


def load_fixture(filename: str) -> str:
    return (FIXTURES_PATH / filename).read_text(encoding="utf-8")


def make_soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


class FakeFetcher:
    """
    Stand-in for the network layer.

    Routes are ``(url_fragment, final_url, html)`` tuples checked in order; the
    first fragment contained in the requested URL answers it. ``final_url``
    of None means "no redirect".
    """

    def __init__(self, routes):
        self.routes = list(routes)
        self.calls = []

    def __call__(self, url, follow_redirects=True):
        self.calls.append(url)
        for fragment, final_url, html in self.routes:
            if fragment in url:
                return FetchedPage(url=final_url or url, soup=make_soup(html))
        raise AssertionError(f"Unexpected fetch: {url}")


@pytest.fixture
def pulp_fiction_soup():
    return make_soup(load_fixture("pulp_fiction.html"))


@pytest.fixture
def breaking_bad_soup():
    return make_soup(load_fixture("breaking_bad.html"))
