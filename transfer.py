# transfer.py
# Moves movies between the library and the watchlist without ever losing or duplicating one

from enum import Enum
from typing import List, Optional
import logging

from movie_collection import InvalidArgument, Movie, MovieCollection, NotFound

logger = logging.getLogger(__name__)


class InsertionMode(Enum):
    PREPEND = "prepend"
    APPEND = "append"
    INSERT_AT = "insert_at"


def transfer(source: MovieCollection, destination: MovieCollection, title: str,
             mode: InsertionMode = InsertionMode.APPEND, position: Optional[int] = None) -> Movie:
    """
    Move the first movie titled ``title`` from ``source`` to ``destination``.

    A copy of the movie is inserted into the destination first; the original
    is deleted from the source only once that insertion succeeded, so a
    failed insertion leaves both collections untouched.

    Args:
        source: Collection currently holding the movie.
        destination: Collection receiving the movie.
        title: Exact title to look up in ``source``.
        mode: Where the copy goes in ``destination``.
        position: Zero-based position, required for ``InsertionMode.INSERT_AT``.

    Returns:
        The movie now held by ``destination``.
    """
    if source is None or destination is None:
        raise InvalidArgument("source and destination must be set")
    if source is destination:
        raise InvalidArgument("source and destination must be different collections")
    if not isinstance(mode, InsertionMode):
        raise InvalidArgument(f"Unknown insertion mode: {mode!r}")
    if mode is InsertionMode.INSERT_AT and position is None:
        raise InvalidArgument("position is required when inserting at a position")

    original = source.search_by_title(title)
    if original is None:
        raise NotFound(f"{title!r} not found")

    moved = original.copy()
    if mode is InsertionMode.PREPEND:
        destination.insert_at(moved, 0)
    elif mode is InsertionMode.APPEND:
        destination.append(moved)
    else:
        destination.insert_at(moved, position)

    source.delete(original)
    logger.info("Transferred %r (%s)", title, mode.value)
    return moved


class TransferCoordinator:
    """Holds the library and the watchlist and performs every move between them."""

    def __init__(self, library: Optional[MovieCollection] = None,
                 watchlist: Optional[MovieCollection] = None):
        self.library = library if library is not None else MovieCollection()
        self.watchlist = watchlist if watchlist is not None else MovieCollection()

    def add_to_watchlist(self, title: str, mode: InsertionMode = InsertionMode.APPEND,
                         position: Optional[int] = None) -> Movie:
        return transfer(self.library, self.watchlist, title, mode, position)

    def return_to_library(self, title: str) -> Movie:
        return transfer(self.watchlist, self.library, title, InsertionMode.APPEND)

    def replace_watchlist(self, loaded: MovieCollection) -> List[str]:
        """
        Adopt a freshly loaded watchlist.

        Movies on the current watchlist go back to the library first. Then,
        for each loaded movie, the first library movie with the same title is
        deleted so that no title sits in both collections.

        Returns:
            Titles that were taken out of the library.
        """
        if loaded is None:
            raise InvalidArgument("loaded watchlist must be set")
        if loaded is self.library or loaded is self.watchlist:
            raise InvalidArgument("loaded watchlist must be a new collection")

        for title in self.watchlist.titles():
            self.return_to_library(title)

        taken: List[str] = []
        for movie in loaded:
            match = self.library.search_by_title(movie.title)
            if match is not None:
                self.library.delete(match)
                taken.append(movie.title)

        self.watchlist = loaded
        logger.info("Watchlist replaced with %d movies (%d taken from library)", len(loaded), len(taken))
        return taken
