# movie_collection.py
# Core movie list engine: the Movie record and the linked MovieCollection

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator, List, Optional, Tuple
import logging
import math

from rapidfuzz import fuzz, process

logger = logging.getLogger(__name__)

MAX_FIELD_LENGTH = 34
DEFAULT_FUZZY_THRESHOLD = 70

# Sentinel index for an unset successor link
NIL = -1


class WatchlistError(Exception):
    """Base class for every error raised by the collection engine."""


class InvalidArgument(WatchlistError, ValueError):
    pass


class OutOfRange(WatchlistError, IndexError):
    pass


class NotFound(WatchlistError, LookupError):
    pass


class AllocationFailure(WatchlistError, MemoryError):
    pass


class Direction(Enum):
    UP = "up"
    DOWN = "down"


def _check_text(name: str, value: Any) -> str:
    if value is None:
        raise InvalidArgument(f"{name} must be set")
    if not isinstance(value, str):
        raise InvalidArgument(f"{name} must be a string, got {type(value).__name__}")
    value = value.strip()
    if len(value) > MAX_FIELD_LENGTH:
        raise OutOfRange(f"{name} is longer than {MAX_FIELD_LENGTH} characters: {value!r}")
    return value


@dataclass(frozen=True)
class Movie:
    title: str
    genre: str
    duration: float = 0.0  # hours
    # collection currently holding this movie (at most one); only set via _set_owner
    _owner: Optional["MovieCollection"] = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self):
        title = _check_text("title", self.title)
        if not title:
            raise InvalidArgument("title must not be blank")
        genre = _check_text("genre", self.genre)

        if isinstance(self.duration, bool) or not isinstance(self.duration, (int, float)):
            raise InvalidArgument(f"Invalid duration: {self.duration!r}")
        duration = float(self.duration)
        if not math.isfinite(duration):
            raise OutOfRange(f"Duration must be a finite number, got {duration!r}")
        if duration < 0:
            raise OutOfRange("Duration cannot be negative")

        object.__setattr__(self, "title", title)
        object.__setattr__(self, "genre", genre)
        object.__setattr__(self, "duration", duration)

    def copy(self) -> "Movie":
        """Return an independent Movie with the same data and no collection membership."""
        return Movie(self.title, self.genre, self.duration)

    def formatted(self) -> str:
        return f"{self.title} ({self.genre}, {self.duration:.2f} hours)"


def _set_owner(movie: Movie, owner: Optional["MovieCollection"]) -> None:
    object.__setattr__(movie, "_owner", owner)


@dataclass
class _Node:
    movie: Optional[Movie]
    next: int = NIL


class MovieCollection:
    """Ordered, singly-linked sequence of movies.

    Nodes live in an arena (``self._nodes``) and link to each other by index.
    Released slots go on a free list and are reused by later insertions.
    The collection owns its movies exclusively: a Movie can be a member of
    one collection at a time.
    """

    def __init__(self, movies: Optional[List[Movie]] = None):
        self._nodes: List[_Node] = []
        self._free: List[int] = []
        self._head: int = NIL
        self._size: int = 0
        for m in movies or ():
            self.append(m)

    # ---------- arena helpers ----------
    def _allocate(self, movie: Movie) -> int:
        try:
            if self._free:
                idx = self._free.pop()
                self._nodes[idx] = _Node(movie)
            else:
                self._nodes.append(_Node(movie))
                idx = len(self._nodes) - 1
        except MemoryError as exc:
            raise AllocationFailure(f"Could not allocate a node for {movie.title!r}") from exc
        return idx

    def _release(self, idx: int) -> Movie:
        node = self._nodes[idx]
        movie = node.movie
        node.movie = None
        node.next = NIL
        self._free.append(idx)
        _set_owner(movie, None)
        return movie

    def _walk(self) -> Iterator[Tuple[int, int]]:
        # yields (previous index, index) pairs from the head
        prev, idx = NIL, self._head
        while idx != NIL:
            yield prev, idx
            prev, idx = idx, self._nodes[idx].next

    def _find_title(self, title: Optional[str]) -> Tuple[int, int, int]:
        """Return (index before previous, previous, index) of the first title match."""
        if title is None:
            raise InvalidArgument("title must be set")
        before = NIL
        for prev, idx in self._walk():
            if self._nodes[idx].movie.title == title:
                return before, prev, idx
            before = prev
        return NIL, NIL, NIL

    def _unlink(self, movie: Optional[Movie]) -> int:
        if self._head == NIL:
            raise InvalidArgument("cannot remove from an empty collection")
        if movie is None:
            raise InvalidArgument("movie must be set")
        for prev, idx in self._walk():
            node = self._nodes[idx]
            if node.movie is movie:
                if prev == NIL:
                    self._head = node.next
                else:
                    self._nodes[prev].next = node.next
                node.next = NIL
                self._size -= 1
                return idx
        raise NotFound(f"{movie.title!r} is not an element of this collection")

    def _swap_with_next(self, before: int, idx: int) -> None:
        # before -> idx -> nxt -> rest   becomes   before -> nxt -> idx -> rest
        node = self._nodes[idx]
        nxt = node.next
        node.next = self._nodes[nxt].next
        self._nodes[nxt].next = idx
        if before == NIL:
            self._head = nxt
        else:
            self._nodes[before].next = nxt

    # ---------- public operations ----------
    def count(self) -> int:
        return self._size

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[Movie]:
        for _, idx in self._walk():
            yield self._nodes[idx].movie

    def __contains__(self, title: object) -> bool:
        return any(m.title == title for m in self)

    def __repr__(self) -> str:
        return f"MovieCollection({self.titles()!r})"

    def titles(self) -> List[str]:
        return [m.title for m in self]

    def insert_at(self, movie: Optional[Movie], position: int) -> None:
        """Insert ``movie`` so that it becomes the element at zero-based ``position``.

        Raises:
            InvalidArgument: movie is unset, already in a collection, or position is not an int.
            OutOfRange: position is outside 0..len(self).
        """
        if movie is None:
            raise InvalidArgument("movie must be set")
        if isinstance(position, bool) or not isinstance(position, int):
            raise InvalidArgument(f"position must be an integer, got {position!r}")
        if movie._owner is not None:
            raise InvalidArgument(f"{movie.title!r} already belongs to a collection")
        if position < 0 or position > self._size:
            raise OutOfRange(f"position {position} outside 0..{self._size}")

        idx = self._allocate(movie)
        if position == 0:
            self._nodes[idx].next = self._head
            self._head = idx
        else:
            prev = self._head
            for _ in range(position - 1):
                prev = self._nodes[prev].next
            self._nodes[idx].next = self._nodes[prev].next
            self._nodes[prev].next = idx
        _set_owner(movie, self)
        self._size += 1
        logger.debug("Inserted %r at position %d (count=%d)", movie.title, position, self._size)

    def append(self, movie: Optional[Movie]) -> None:
        if movie is None:
            raise InvalidArgument("movie must be set")
        self.insert_at(movie, self._size)

    def remove(self, movie: Optional[Movie]) -> Movie:
        """Unlink ``movie`` (matched by identity) and return it detached."""
        idx = self._unlink(movie)
        removed = self._release(idx)
        logger.debug("Removed %r (count=%d)", removed.title, self._size)
        return removed

    def delete(self, movie: Optional[Movie]) -> None:
        """Unlink ``movie`` (matched by identity) and discard it."""
        idx = self._unlink(movie)
        deleted = self._release(idx)
        logger.debug("Deleted %r (count=%d)", deleted.title, self._size)

    def clear(self) -> None:
        for _, idx in list(self._walk()):
            _set_owner(self._nodes[idx].movie, None)
        self._nodes.clear()
        self._free.clear()
        self._head = NIL
        self._size = 0

    def search_by_title(self, title: Optional[str]) -> Optional[Movie]:
        """Return the first movie (from the head) whose title equals ``title``, or None."""
        _, _, idx = self._find_title(title)
        if idx == NIL:
            return None
        return self._nodes[idx].movie

    def position_of(self, title: Optional[str]) -> int:
        if title is None:
            raise InvalidArgument("title must be set")
        for position, movie in enumerate(self):
            if movie.title == title:
                return position
        return -1

    def total_duration(self) -> float:
        return sum((m.duration for m in self), 0.0)

    def move_adjacent(self, title: Optional[str], direction: Direction) -> bool:
        """Swap the first movie titled ``title`` with its neighbour.

        ``Direction.UP`` swaps with the predecessor, ``Direction.DOWN`` with the
        successor. Returns False (and changes nothing) when the movie already
        sits at the head for UP or at the tail for DOWN.
        """
        if not isinstance(direction, Direction):
            raise InvalidArgument(f"Unknown direction: {direction!r}")
        before, prev, idx = self._find_title(title)
        if idx == NIL:
            raise NotFound(f"{title!r} not found")

        if direction is Direction.UP:
            if prev == NIL:
                return False
            self._swap_with_next(before, prev)
        else:
            if self._nodes[idx].next == NIL:
                return False
            self._swap_with_next(prev, idx)
        logger.debug("Moved %r %s", title, direction.value)
        return True

    def render(self) -> List[str]:
        return [m.formatted() for m in self]


def suggest_titles(collection: MovieCollection, title: str, limit: int = 3,
                   threshold: int = DEFAULT_FUZZY_THRESHOLD) -> List[str]:
    """Return up to ``limit`` titles in ``collection`` that look like ``title``.

    Scores come from RapidFuzz (``fuzz.ratio``, case-insensitive); only titles
    scoring at least ``threshold`` are returned, best first.
    """
    if not title or not len(collection):
        return []
    choices = collection.titles()
    results = process.extract(title, choices, scorer=fuzz.ratio,
                              processor=str.lower, limit=limit, score_cutoff=threshold)
    return [choice for choice, score, _ in results]
