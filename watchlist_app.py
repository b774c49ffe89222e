# watchlist_app.py
# Console front end: menus and prompts around the library/watchlist engine

from dataclasses import dataclass
from enum import IntEnum
from typing import List, Optional
import argparse
import logging
import sys

from movie_collection import (
    DEFAULT_FUZZY_THRESHOLD, MAX_FIELD_LENGTH, Direction, MovieCollection,
    WatchlistError, suggest_titles,
)
from transfer import InsertionMode, TransferCoordinator
from watchlist_io import get_last_save_error, load_collection, save_collection

logger = logging.getLogger(__name__)

PAGE_BREAK = "*" * 92
MAX_FILENAME_LENGTH = 199


@dataclass
class Settings:
    library_path: str
    log_level: str = "WARNING"
    fuzzy_threshold: int = DEFAULT_FUZZY_THRESHOLD


class WatchlistMenuOption(IntEnum):
    PRINT_WATCHLIST = 1
    SHOW_DURATION = 2
    SEARCH_WATCHLIST = 3
    MOVE_UP = 4
    MOVE_DOWN = 5
    REMOVE_MOVIE = 6
    SAVE_WATCHLIST = 7
    LOAD_WATCHLIST = 8
    GO_TO_LIBRARY = 9
    QUIT = 10


class LibraryMenuOption(IntEnum):
    VIEW_ALL = 1
    SEARCH_LIBRARY = 2
    ADD_TO_WATCHLIST = 3
    BACK_TO_WATCHLIST = 4


class AddMovieOption(IntEnum):
    ADD_TO_BEGINNING = 1
    ADD_TO_END = 2
    INSERT_WITHIN = 3


def page_break():
    print(PAGE_BREAK)
    print()


def prompt_for(prompt: str, max_length: int = MAX_FIELD_LENGTH) -> str:
    """Read one line, trim surrounding whitespace and cap it at ``max_length`` characters."""
    value = input(prompt).strip()
    return value[:max_length]


def prompt_for_int(min_value: int, max_value: int, prompt: str) -> int:
    """Keep prompting until an integer between min_value and max_value (inclusive) is entered."""
    while True:
        raw = prompt_for(prompt, max_length=99).strip()
        try:
            value = int(raw)
        except ValueError:
            value = None
        if value is not None and min_value <= value <= max_value:
            return value
        print()
        print(f"An integer between {min_value} and {max_value} was expected.")
        print()


def print_collection(collection: MovieCollection, name: str):
    lines = collection.render()
    if not lines:
        print(f"The {name} is empty.")
    for line in lines:
        print(line)
    print()


def report_not_found(title: str, name: str, collection: MovieCollection, settings: Settings, hint: str = ""):
    print(f"{title} not found in the {name}.{hint}")
    similar = suggest_titles(collection, title, threshold=settings.fuzzy_threshold)
    if similar:
        print("Did you mean: " + ", ".join(similar) + "?")
    print()
    logger.warning("Lookup missed %r in the %s", title, name)


def search_collection(collection: MovieCollection, name: str, settings: Settings):
    title = prompt_for("Enter a title to search: ")
    print()
    if collection.search_by_title(title) is not None:
        print(f"{title} found in the {name}.")
        print()
    else:
        report_not_found(title, name, collection, settings)


# ---------- Add movie ----------
def print_add_movie_menu():
    print("*** Add Movie Menu ***")
    print(" 1) Add to beginning")
    print(" 2) Add to end")
    print(" 3) Insert at a position")
    print()


def get_add_movie_option() -> AddMovieOption:
    print_add_movie_menu()
    option = prompt_for_int(1, 3, "Enter how you'd like to add: ")
    print()
    return AddMovieOption(option)


def handle_add_movie(coordinator: TransferCoordinator, settings: Settings):
    title = prompt_for("Enter the title of the movie to add: ")
    print()
    if coordinator.library.search_by_title(title) is None:
        report_not_found(title, "library", coordinator.library, settings,
                         hint=" Please search for movies before attempting to add.")
        return

    option = get_add_movie_option()
    if option is AddMovieOption.ADD_TO_BEGINNING:
        coordinator.add_to_watchlist(title, InsertionMode.PREPEND)
    elif option is AddMovieOption.ADD_TO_END:
        coordinator.add_to_watchlist(title, InsertionMode.APPEND)
    else:
        last = len(coordinator.watchlist) + 1
        position = prompt_for_int(1, last, f"Enter a position from 1 to {last} to add the movie: ")
        print()
        coordinator.add_to_watchlist(title, InsertionMode.INSERT_AT, position - 1)

    print(f"{title} added to the watchlist.")
    print()


# ---------- Library ----------
def print_library_menu():
    print("*** Library Menu ***")
    print("1) View all movies")
    print("2) Search by title")
    print("3) Add a movie to watchlist")
    print("4) Back to watchlist")
    print()


def handle_library_option(option: LibraryMenuOption, coordinator: TransferCoordinator, settings: Settings):
    if option is LibraryMenuOption.VIEW_ALL:
        print_collection(coordinator.library, "library")
    elif option is LibraryMenuOption.SEARCH_LIBRARY:
        search_collection(coordinator.library, "library", settings)
    elif option is LibraryMenuOption.ADD_TO_WATCHLIST:
        page_break()
        handle_add_movie(coordinator, settings)


def library_menu(coordinator: TransferCoordinator, settings: Settings):
    while True:
        print_library_menu()
        option = LibraryMenuOption(prompt_for_int(1, 4, "Enter a menu choice: "))
        print()
        if option is LibraryMenuOption.BACK_TO_WATCHLIST:
            break
        try:
            handle_library_option(option, coordinator, settings)
        except WatchlistError as e:
            print(f"Error: {e}")
            print()
        page_break()


# ---------- Watchlist ----------
def print_watchlist_menu():
    print("*** Watchlist Menu ***")
    print(" 1) Print watchlist")
    print(" 2) Show duration")
    print(" 3) Search by title")
    print(" 4) Move a movie up")
    print(" 5) Move a movie down")
    print(" 6) Remove a movie")
    print(" 7) Save watchlist")
    print(" 8) Load watchlist")
    print(" 9) Go to movie library")
    print("10) Quit")
    print()


def move_movie(coordinator: TransferCoordinator, settings: Settings, direction: Direction):
    title = prompt_for(f"Enter the title of the movie to move {direction.value}: ")
    print()
    if coordinator.watchlist.search_by_title(title) is None:
        report_not_found(title, "watchlist", coordinator.watchlist, settings,
                         hint=" Please search for movies before attempting to move.")
        return
    if not coordinator.watchlist.move_adjacent(title, direction):
        edge = "top" if direction is Direction.UP else "bottom"
        print(f"{title} is already at the {edge} of the watchlist.")
        print()


def remove_movie(coordinator: TransferCoordinator, settings: Settings):
    title = prompt_for("Enter the title of the movie to remove: ")
    print()
    if coordinator.watchlist.search_by_title(title) is None:
        report_not_found(title, "watchlist", coordinator.watchlist, settings,
                         hint=" Please search for movies before attempting to remove.")
        return
    coordinator.return_to_library(title)
    print(f"{title} returned to the library.")
    print()


def save_watchlist(coordinator: TransferCoordinator):
    file_name = prompt_for("Enter the name of the file to save watchlist to: ", MAX_FILENAME_LENGTH)
    print()
    if save_collection(file_name, coordinator.watchlist):
        print(f"Watchlist saved to {file_name}.")
    else:
        print(f"Failed to save watchlist: {get_last_save_error() or 'unknown error'}")
    print()


def load_watchlist(coordinator: TransferCoordinator):
    file_name = prompt_for("Enter the name of the file to read the watchlist from: ", MAX_FILENAME_LENGTH)
    print()
    try:
        loaded = load_collection(file_name)
    except (OSError, WatchlistError) as e:
        logger.exception("Failed to load watchlist from %s", file_name)
        print(f"Failed to load watchlist: {e}")
        print()
        return
    coordinator.replace_watchlist(loaded)
    print(f"Loaded {len(loaded)} movies into the watchlist.")
    print()


def handle_watchlist_option(option: WatchlistMenuOption, coordinator: TransferCoordinator, settings: Settings):
    if option is WatchlistMenuOption.PRINT_WATCHLIST:
        print_collection(coordinator.watchlist, "watchlist")
    elif option is WatchlistMenuOption.SHOW_DURATION:
        print(f"Duration is {coordinator.watchlist.total_duration():.2f} hours.")
        print()
    elif option is WatchlistMenuOption.SEARCH_WATCHLIST:
        search_collection(coordinator.watchlist, "watchlist", settings)
    elif option is WatchlistMenuOption.MOVE_UP:
        move_movie(coordinator, settings, Direction.UP)
    elif option is WatchlistMenuOption.MOVE_DOWN:
        move_movie(coordinator, settings, Direction.DOWN)
    elif option is WatchlistMenuOption.REMOVE_MOVIE:
        remove_movie(coordinator, settings)
    elif option is WatchlistMenuOption.SAVE_WATCHLIST:
        save_watchlist(coordinator)
    elif option is WatchlistMenuOption.LOAD_WATCHLIST:
        load_watchlist(coordinator)
    elif option is WatchlistMenuOption.GO_TO_LIBRARY:
        page_break()
        library_menu(coordinator, settings)


def watchlist_menu(coordinator: TransferCoordinator, settings: Settings):
    """Run the interactive session until the user quits or input ends."""
    try:
        while True:
            print_watchlist_menu()
            option = WatchlistMenuOption(prompt_for_int(1, 10, "Enter a menu choice: "))
            print()
            if option is WatchlistMenuOption.QUIT:
                break
            try:
                handle_watchlist_option(option, coordinator, settings)
            except WatchlistError as e:
                print(f"Error: {e}")
                print()
            page_break()
    except (KeyboardInterrupt, EOFError):
        print()
    print('Goodbye!')


def _parse_args(argv=None):
    p = argparse.ArgumentParser(description="Movie Watchlist: move movies from a library file onto an ordered watchlist")
    p.add_argument('library', help='Text file with the movie library (title, genre and duration lines per movie)')
    p.add_argument('--log-level', choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'], default='WARNING',
                   help='Logging level (default: WARNING)')
    p.add_argument('--fuzzy-threshold', type=int, default=DEFAULT_FUZZY_THRESHOLD,
                   help='Minimum similarity (0-100) for "did you mean" title suggestions')
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None):
    args = _parse_args(argv)
    settings = Settings(library_path=args.library, log_level=args.log_level,
                        fuzzy_threshold=args.fuzzy_threshold)
    logging.basicConfig(level=getattr(logging, settings.log_level),
                        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    try:
        library = load_collection(settings.library_path)
    except (OSError, WatchlistError) as e:
        logger.error("Failed to load library from %s: %s", settings.library_path, e)
        print(f"Failed to load library from {settings.library_path}: {e}", file=sys.stderr)
        sys.exit(1)

    coordinator = TransferCoordinator(library=library)
    watchlist_menu(coordinator, settings)


if __name__ == '__main__':
    main()
