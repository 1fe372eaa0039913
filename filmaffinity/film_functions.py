import re

from bs4 import Comment, NavigableString, Tag

from .models import FilmType

TITLE_SELECTOR = "h1#main-title span[itemprop=name]"
TYPE_SELECTOR = "h1#main-title .movie-type .type"
OG_TYPE_SELECTOR = 'meta[property="og:type"]'
MOVIE_INFO_LABELS = "dl.movie-info dt"
GENRES_SELECTOR = "dd.card-genres"
CREDITS_SELECTOR = ".credits"

TV_SERIES_MARKER = "serie"
OG_TV_SHOW = "video.tv_show"
OG_MOVIE = "video.movie"

# labels whose value carries decorative children (flag icons)
OWN_TEXT_LABELS = {"país", "country"}

FILM_ID_PATTERN = re.compile(r".*/film(\d+)\.html.*")


def clean_text(text: str | None):
    """
    Collapse runs of whitespace and trim, the way a browser renders text.

    Args:
        text: Raw string pulled from the tree.

    Returns:
        str: Normalized text ("" for None).
    """
    if not text:
        return ""
    return " ".join(text.split())


def uniq(seq):
    """
    Remove duplicates and empty values from a sequence while preserving order.

    Args:
        seq: Sequence of strings (names, genres).

    Returns:
        list: Distinct trimmed values in first-seen order.
    """
    seen, unique = set(), []
    for x in seq:
        x = clean_text(x)
        if x and x not in seen:
            seen.add(x)
            unique.append(x)
    return unique


def text_of(scope, selector: str):
    """
    Return the text of the first node matching ``selector`` under ``scope``.

    Args:
        scope: BeautifulSoup document or tag, may be None.
        selector: CSS selector.

    Returns:
        str: Trimmed text, or None when scope is None or nothing matches.
    """
    if scope is None:
        return None
    node = scope.select_one(selector)
    return clean_text(node.get_text()) if node is not None else None


def attr_of(scope, selector: str, attribute: str):
    """
    Return an attribute of the first node matching ``selector`` under ``scope``.

    Args:
        scope: BeautifulSoup document or tag, may be None.
        selector: CSS selector.
        attribute: Attribute name such as ``src`` or ``content``.

    Returns:
        str: Attribute value ("" when the node lacks it), or None when no node matches.
    """
    if scope is None:
        return None
    node = scope.select_one(selector)
    if node is None:
        return None
    value = node.get(attribute, "")
    if isinstance(value, list):
        value = " ".join(value)
    return value.strip()


def own_text_of(node: Tag | None):
    """Text of the node's direct string children, ignoring nested tags."""
    if node is None:
        return ""
    return clean_text("".join(child for child in node.children
                           if isinstance(child, NavigableString) and not isinstance(child, Comment)))


def find_label_value(scope, label: str):
    """
    Find the ``dd`` node paired with the ``dt`` whose text matches ``label``.

    Args:
        scope: Parsed detail page.
        label: Label text, compared case-insensitively after trimming.

    Returns:
        Tag: The value node, or None when the label or its value is missing.
    """
    if scope is None or not label:
        return None
    wanted = label.strip().lower()
    for dt in scope.select(MOVIE_INFO_LABELS):
        if clean_text(dt.get_text()).lower() == wanted:
            return dt.find_next_sibling()
    return None


def value_for_label(scope, label: str):
    """
    Return the text paired with ``label`` in the film's definition list.

    The country value prefers its own text so that flag images or hidden
    spans nested in the value do not leak into the result.

    Args:
        scope: Parsed detail page.
        label: Label text such as "Duración" or "País".

    Returns:
        str: Trimmed value, or None when the label is absent.
    """
    dd = find_label_value(scope, label)
    if dd is None:
        return None
    if label.strip().lower() in OWN_TEXT_LABELS:
        own = own_text_of(dd)
        return own if own else clean_text(dd.get_text())
    return clean_text(dd.get_text())


def names_from_itemprop(container: Tag):
    return [node.get_text() for node in container.select("span[itemprop=name]")]


def names_from_anchors(container: Tag):
    return [node.get_text() for node in container.select("a")]


def names_from_comma_text(container: Tag):
    return [piece for piece in re.split(r"\s*,\s*", clean_text(container.get_text())) if piece.strip()]


CREDIT_TIERS = (names_from_itemprop, names_from_anchors, names_from_comma_text)


def credits_for_label(scope, label: str):
    """
    Extract the names credited under ``label`` (director, writer, cast...).

    Tiers are tried in order and the first one producing names wins:
    structured ``itemprop=name`` spans, then anchors, then a comma split of
    the raw credits text.

    Args:
        scope: Parsed detail page.
        label: Credit label, e.g. "Dirección".

    Returns:
        list: Distinct names in page order, empty when nothing is credited.
    """
    dd = find_label_value(scope, label)
    if dd is None:
        return []
    container = dd.select_one(CREDITS_SELECTOR)
    if container is None:
        return []
    for tier in CREDIT_TIERS:
        names = uniq(tier(container))
        if names:
            return names
    return []


def get_genres(scope):
    """
    Collect genre and topic labels from the ``dd.card-genres`` block.

    Args:
        scope: Parsed detail page.

    Returns:
        list: Distinct labels in display order.
    """
    if scope is None:
        return []
    block = scope.select_one(GENRES_SELECTOR)
    if block is None:
        return []
    return uniq(a.get_text() for a in block.select("a"))


def classify_type(type_label: str | None, og_type: str | None, default: FilmType = FilmType.MOVIE):
    """
    Decide whether a page describes a movie or a TV show.

    Args:
        type_label: Text of the type badge next to the title, if any.
        og_type: ``og:type`` meta value, if any.
        default: Returned when no signal is present.

    Returns:
        FilmType: Classified type.
    """
    if type_label is not None:
        if TV_SERIES_MARKER in type_label.lower():
            return FilmType.TV_SHOW
        return FilmType.MOVIE
    if og_type:
        og_type = og_type.strip().lower()
        if og_type == OG_TV_SHOW:
            return FilmType.TV_SHOW
        if og_type == OG_MOVIE:
            return FilmType.MOVIE
    return default


def determine_type(scope, default: FilmType = FilmType.MOVIE):
    return classify_type(text_of(scope, TYPE_SELECTOR), attr_of(scope, OG_TYPE_SELECTOR, "content"), default)


def film_id_from_url(url: str | None):
    """
    Extract the numeric film id from a Filmaffinity film URL.

    Args:
        url: URL such as ``https://www.filmaffinity.com/es/film123456.html``.

    Returns:
        str: The digits, or None for any other URL shape.
    """
    if not url:
        return None
    match = FILM_ID_PATTERN.fullmatch(url)
    return match.group(1) if match else None
