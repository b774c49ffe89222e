# watchlist_io.py
# Three-line record files: load a collection from disk and save one back

from pathlib import Path
from typing import Iterable, Iterator, List, Optional
import logging
import math
import os
import re

from movie_collection import InvalidArgument, Movie, MovieCollection

logger = logging.getLogger(__name__)

# Tracks the last save error message (if any) to help debugging failed saves
last_save_error: Optional[str] = None

# Leading decimal number, the way strtod reads it ("1.5 hours" -> 1.5)
_number_re = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def get_last_save_error() -> Optional[str]:
    """Return the last error message recorded when saving a collection (or None)."""
    return last_save_error


def parse_duration(text: Optional[str]) -> float:
    """Permissive text-to-number conversion; anything unparseable is 0.0."""
    if not text:
        return 0.0
    m = _number_re.match(text)
    if not m:
        return 0.0
    try:
        value = float(m.group(0))
    except ValueError:
        return 0.0
    # overflow such as "1e999" reads as inf
    if not math.isfinite(value):
        return 0.0
    return value


def format_record(movie: Movie) -> str:
    return f"{movie.title}\n{movie.genre}\n{movie.duration:.2f}"


def read_records(lines: Iterable[str]) -> Iterator[Movie]:
    """
    Decode movies from an iterable of text lines, three lines per movie.

    Trailing blank lines are ignored. A last record missing its duration line
    decodes with a duration of 0.0.

    Raises:
        InvalidArgument: a record is missing its genre line.
        OutOfRange: a title or genre is longer than the field limit.
    """
    stripped = [line.rstrip("\r\n") for line in lines]
    while stripped and not stripped[-1].strip():
        stripped.pop()

    for start in range(0, len(stripped), 3):
        record = stripped[start:start + 3]
        if len(record) < 2:
            raise InvalidArgument(f"Incomplete record starting at line {start + 1}: {record!r}")
        title, genre = record[0], record[1]
        duration = parse_duration(record[2]) if len(record) == 3 else 0.0
        yield Movie(title, genre, duration)


def load_collection(path: str) -> MovieCollection:
    """
    Load a collection from a record file.

    Args:
        path: Path to the record file.

    Returns:
        A fresh MovieCollection with the records appended in file order.

    Raises:
        OSError: the file cannot be opened or read.
        WatchlistError: a record is malformed or the file is not UTF-8 text.
    """
    p = Path(path)
    collection = MovieCollection()
    with p.open('r', encoding='utf-8') as f:
        try:
            for movie in read_records(f):
                collection.append(movie)
        except UnicodeDecodeError as e:
            raise InvalidArgument(f"{path} is not a UTF-8 text file: {e}") from e
    logger.info("Loaded %d movies from %s", len(collection), path)
    return collection


def save_collection(path: str, collection: MovieCollection) -> bool:
    """Save a collection to a record file atomically. Returns True on success."""
    global last_save_error
    p = Path(path)
    if p.suffix:
        tmp = p.with_suffix(p.suffix + ".tmp")
    else:
        tmp = p.with_name(p.name + ".tmp")
    try:
        p.parent.mkdir(parents=True, exist_ok=True)
        records: List[str] = [format_record(m) for m in collection]
        with tmp.open('w', encoding='utf-8') as f:
            f.write("\n".join(records))
        os.replace(str(tmp), str(p))
        logger.info("Saved %d movies to %s", len(records), path)
        last_save_error = None
        return True
    except Exception as e:
        # record error for external inspection
        last_save_error = str(e)
        logger.exception("Failed to save movies to %s: %s", path, e)
        try:
            tmp.unlink()
        except OSError:
            pass
        return False
