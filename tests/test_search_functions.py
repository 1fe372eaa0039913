"""
Tests for search listing card parsing and image selection.
"""
from unittest.mock import patch

from conftest import load_fixture, make_soup
from filmaffinity.search_functions import (
    absolute_image_url,
    get_card_image,
    parse_basic_film_info,
    parse_movie_card,
    parse_movie_cards,
    pick_srcset_image,
    select_movie_cards,
)

LISTING_URL = "https://www.filmaffinity.com/es/search.php?stype=title&stext=pulp"


class TestParseMovieCard:
    """Tests for parse_movie_card."""

    def test_valid_card(self):
        card_html = (
            "<div class='movie-card' data-movie-id='12345'>"
            "<div class='mc-poster'><a href='film12345.html'><img data-srcset='http://example.com/small.jpg 150w, "
            "http://example.com/large.jpg 400w' src='http://example.com/placeholder.jpg'/></a></div>"
            "<div class='mc-info-container'>"
            "  <div class='mc-title'><a href='film12345.html'>Card Title</a></div>"
            "  <div><span class='mc-year ms-1'>2022</span></div>"
            "  <div class='fa-avg-rat-box'><div class='avg mx-0'>7,8</div></div>"
            "</div></div>"
        )
        card = make_soup(card_html).select_one("div.movie-card")

        result = parse_movie_card(card, "https://www.filmaffinity.com/es/")

        assert result.id == "12345"
        assert result.title == "Card Title"
        assert result.url == "https://www.filmaffinity.com/es/film12345.html"
        assert result.rating == "7,8"
        assert result.year == "2022"
        assert result.image_url == "http://example.com/large.jpg"

    def test_minimal_card(self):
        card_html = (
            "<div class='movie-card' data-movie-id='67890'>"
            "<div class='mc-info-container'><div class='mc-title'><a href='film67890.html'>Minimal Card</a></div>"
            "</div></div>"
        )
        card = make_soup(card_html).select_one("div.movie-card")

        result = parse_movie_card(card, "https://www.filmaffinity.com/es/")

        assert result.id == "67890"
        assert result.title == "Minimal Card"
        assert result.url == "https://www.filmaffinity.com/es/film67890.html"
        assert result.rating == "--"
        assert result.year == ""
        assert result.image_url == ""

    def test_card_without_title_link(self):
        card = make_soup("<div class='movie-card' data-movie-id='1'></div>").div
        result = parse_movie_card(card)
        assert result.title == ""
        assert result.url == ""

    def test_card_without_id_is_skipped(self):
        assert parse_movie_card(make_soup("<div class='movie-card'></div>").div) is None
        assert parse_movie_card(make_soup("<div class='movie-card' data-movie-id=' '></div>").div) is None
        assert parse_movie_card(None) is None

    def test_unexpected_error_returns_none(self):
        card = make_soup("<div class='movie-card' data-movie-id='1'></div>").div
        with patch("filmaffinity.search_functions.get_card_image", side_effect=ValueError("bad markup")):
            assert parse_movie_card(card) is None

    def test_relative_image_resolved_against_origin(self):
        card = make_soup(
            "<div class='movie-card' data-movie-id='5'><div class='mc-poster'><img src='/imgs/p.jpg'></div></div>"
        ).div
        assert parse_movie_card(card).image_url == "https://www.filmaffinity.com/imgs/p.jpg"


class TestImageSelection:
    """Tests for srcset preference and URL normalization."""

    def test_large_wins_regardless_of_order(self):
        srcset = "https://p/a-large.jpg 400w, https://p/a-mmed.jpg 200w"
        assert pick_srcset_image(srcset, "placeholder") == "https://p/a-large.jpg"
        srcset = "https://p/a-mmed.jpg 200w, https://p/a-large.jpg 400w"
        assert pick_srcset_image(srcset, "placeholder") == "https://p/a-large.jpg"

    def test_first_medium_when_no_large(self):
        srcset = "https://p/a-msmall.jpg 1x, https://p/a-mmed.jpg 2x, https://p/b-mmed.jpg 3x"
        assert pick_srcset_image(srcset, "placeholder") == "https://p/a-mmed.jpg"

    def test_candidate_kept_without_preferred_entry(self):
        assert pick_srcset_image("https://p/a-msmall.jpg 1x", "placeholder") == "placeholder"
        assert pick_srcset_image("", "placeholder") == "placeholder"
        assert pick_srcset_image(None) == ""

    def test_absolute_image_url(self):
        assert absolute_image_url("https://pics/x.jpg") == "https://pics/x.jpg"
        assert absolute_image_url("/x.jpg", "https://site.test/") == "https://site.test/x.jpg"
        assert absolute_image_url("x.jpg") == ""
        assert absolute_image_url(None) == ""

    def test_protocol_relative_image_takes_origin_scheme(self):
        assert absolute_image_url("//pics.filmaffinity.com/p.jpg") == "https://pics.filmaffinity.com/p.jpg"
        assert absolute_image_url("//pics.test/p.jpg", "http://site.test") == "http://pics.test/p.jpg"
        card = make_soup(
            "<div class='movie-card' data-movie-id='6'>"
            "<div class='mc-poster'><img src='//pics.filmaffinity.com/p.jpg'></div></div>"
        ).div
        assert parse_movie_card(card).image_url == "https://pics.filmaffinity.com/p.jpg"


class TestListingPages:
    """Tests for card selection on whole listing pages."""

    def test_primary_selector(self):
        soup = make_soup(load_fixture("search_listing.html"))
        results = parse_movie_cards(soup, LISTING_URL)

        assert [r.id for r in results] == ["160882", "583466"]
        first, second = results
        assert first.url == "https://www.filmaffinity.com/es/film160882.html"
        assert first.image_url == "https://pics.filmaffinity.com/pulp_fiction-210382116-large.jpg"
        assert first.rating == "8,6"
        assert second.rating == "--"
        assert second.image_url == "https://www.filmaffinity.com/imgs/movies/pulp_doc-mmed.jpg"

    def test_fallback_selector(self):
        soup = make_soup(load_fixture("search_fallback.html"))
        assert len(select_movie_cards(soup)) == 2

        results = parse_movie_cards(soup, LISTING_URL)
        assert [r.title for r in results] == ["Amélie", "Amélie (cortometraje)"]
        assert results[0].image_url == "https://pics.filmaffinity.com/amelie-mmed.jpg"
        assert results[0].url == "https://www.filmaffinity.com/es/film809297.html"

    def test_empty_page(self):
        assert parse_movie_cards(make_soup("<html></html>"), LISTING_URL) == []
        assert select_movie_cards(None) == []

    def test_failing_card_does_not_drop_its_neighbours(self):
        soup = make_soup(load_fixture("search_listing.html"))
        cards = select_movie_cards(soup)
        real_get_card_image = get_card_image

        def flaky_image(card, base_url):
            if card is cards[0]:
                raise ValueError("broken poster markup")
            return real_get_card_image(card, base_url)

        with patch("filmaffinity.search_functions.get_card_image", side_effect=flaky_image):
            results = parse_movie_cards(soup, LISTING_URL)

        assert [r.id for r in results] == ["583466"]


class TestParseBasicFilmInfo:
    """Tests for the exact-match detail page parser."""

    def test_detail_page(self, pulp_fiction_soup):
        url = "https://www.filmaffinity.com/es/film160882.html"
        result = parse_basic_film_info(pulp_fiction_soup, url)

        assert result.id == "160882"
        assert result.title == "Pulp Fiction"
        assert result.url == url
        assert result.year == "1994"
        assert result.rating == "8,6"
        assert result.image_url == "https://pics.filmaffinity.com/pulp_fiction-210382116-mmed.jpg"

    def test_rejects_missing_id_or_title(self, pulp_fiction_soup):
        assert parse_basic_film_info(pulp_fiction_soup, "https://www.filmaffinity.com/es/search.php") is None
        assert parse_basic_film_info(make_soup("<div></div>"), "https://x/es/film1.html") is None
        assert parse_basic_film_info(None, "https://x/es/film1.html") is None

    def test_missing_rating_uses_sentinel(self):
        soup = make_soup("<h1 id='main-title'><span itemprop='name'>Sin nota</span></h1>")
        assert parse_basic_film_info(soup, "https://x/es/film7.html").rating == "--"
