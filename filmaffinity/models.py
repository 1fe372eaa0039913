from dataclasses import asdict, dataclass, field
from enum import Enum

from .errors import MissingRequiredField

EMPTY_STRING = ""
UNKNOWN_RATING = "--"


class FilmType(Enum):
    MOVIE = "movie"
    TV_SHOW = "tv_show"
    UNKNOWN = "unknown"


@dataclass(frozen=True, eq=False)
class FilmInfo:
    """
    Information scraped from a Filmaffinity film or series page.

    Every text field defaults to an empty string and every list field to an
    empty tuple, so consumers never have to deal with ``None``. Two records
    are equal when type, title, original title and year match.
    """

    title: str
    original_title: str = EMPTY_STRING
    year: str = EMPTY_STRING
    duration: str = EMPTY_STRING
    country: str = EMPTY_STRING
    directors: tuple = field(default_factory=tuple)
    genres: tuple = field(default_factory=tuple)
    synopsis: str = EMPTY_STRING
    rating: str = EMPTY_STRING
    poster_url: str = EMPTY_STRING
    type: FilmType = FilmType.MOVIE
    writers: tuple = field(default_factory=tuple)
    cast: tuple = field(default_factory=tuple)
    url: str = EMPTY_STRING

    def __post_init__(self):
        if not self.title or not self.title.strip():
            raise MissingRequiredField("FilmInfo requires a non-empty title", source_url=self.url)
        for name in ("directors", "genres", "writers", "cast"):
            object.__setattr__(self, name, tuple(getattr(self, name)))

    def _identity(self) -> tuple:
        return (self.type, self.title, self.original_title, self.year)

    def __eq__(self, other):
        if not isinstance(other, FilmInfo):
            return NotImplemented
        return self._identity() == other._identity()

    def __hash__(self):
        return hash(self._identity())

    def __str__(self):
        synopsis = self.synopsis[:50] + "..." if self.synopsis else ""
        return (
            f"FilmInfo(type={self.type.name}, title={self.title!r}, original_title={self.original_title!r}, "
            f"year={self.year!r}, duration={self.duration!r}, country={self.country!r}, "
            f"directors={list(self.directors)}, genres={list(self.genres)}, synopsis={synopsis!r}, "
            f"rating={self.rating!r}, poster_url={self.poster_url!r})"
        )

    def to_dict(self) -> dict:
        """
        Build the JSON-ready attribute dictionary.

        Returns:
            dict: Field values with lists instead of tuples and the type as a string.
        """
        data = asdict(self)
        for name in ("directors", "genres", "writers", "cast"):
            data[name] = list(data[name])
        data["type"] = self.type.value
        return data


@dataclass(frozen=True)
class SearchResult:
    """A single hit from a Filmaffinity search listing or exact-match redirect."""

    id: str = EMPTY_STRING
    title: str = EMPTY_STRING
    url: str = EMPTY_STRING
    rating: str = UNKNOWN_RATING
    year: str = EMPTY_STRING
    image_url: str = EMPTY_STRING

    def to_dict(self) -> dict:
        return asdict(self)
