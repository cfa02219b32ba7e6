"""
Letterle CLI - Command-line interface for the game.

Usage:
    letterle play               Play today's window in the terminal
    letterle stats              Show statistics
    letterle share [-o FILE]    Print (or save) today's share text
    letterle reset              Forget the local record
    letterle serve              Run the REST API
"""

import argparse
import logging
import sys

from .config import Settings, normalize_guess

logger = logging.getLogger(__name__)

TILE_MARKS = {
    "unguessed": " {} ",
    "far": " · ",
    "close": "({})",
    "correct": "[{}]",
}

BOARD_COLUMNS = 5


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Letterle - find the hidden letter of the day",
        prog="letterle",
    )
    parser.add_argument("--data-dir", help="Directory holding the local record")
    parser.add_argument("--log-level", help="Logging level (DEBUG, INFO, WARNING, ...)")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    subparsers.add_parser("play", help="Play today's window")
    subparsers.add_parser("stats", help="Show statistics")

    share_parser = subparsers.add_parser("share", help="Print today's share text")
    share_parser.add_argument("--output", "-o", help="Write to a file instead of stdout")

    subparsers.add_parser("reset", help="Forget the local record")

    serve_parser = subparsers.add_parser("serve", help="Run the REST API")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Bind address")
    serve_parser.add_argument("--port", type=int, default=8000, help="Bind port")

    args = parser.parse_args(argv)

    settings = Settings.from_env()
    if args.data_dir:
        from pathlib import Path
        settings.data_dir = Path(args.data_dir).expanduser()
    if args.log_level:
        settings.log_level = args.log_level.upper()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "play":
        cmd_play(args, settings)
    elif args.command == "stats":
        cmd_stats(args, settings)
    elif args.command == "share":
        cmd_share(args, settings)
    elif args.command == "reset":
        cmd_reset(args, settings)
    elif args.command == "serve":
        cmd_serve(args, settings)
    else:
        parser.print_help()
        sys.exit(1)


def _open_store(settings):
    from .session import FileStorage, SessionStore

    store = SessionStore(FileStorage(settings.data_dir), prefers_dark=settings.prefers_dark)
    store.start()
    return store


def render_board(session) -> str:
    """Render the board as rows of letter tiles."""
    from .engine_core.stats import board

    cells = [
        TILE_MARKS[tile.feedback.value].format(tile.letter.upper())
        for tile in board(session)
    ]
    rows = [
        " ".join(cells[i:i + BOARD_COLUMNS])
        for i in range(0, len(cells), BOARD_COLUMNS)
    ]
    return "\n".join(rows)


def render_statistics(session) -> str:
    from .engine_core.share import MISSING_STAT
    from .engine_core.stats import summarize

    stats = summarize(session)

    def show(value):
        return MISSING_STAT if value is None else str(value)

    lines = [
        f"Played:  {stats.played}",
        f"Today:   {stats.today}",
        f"Average: {show(stats.average)}",
        f"Best:    {show(stats.best)}",
    ]
    if stats.distribution:
        lines.append("Distribution:")
        for attempts, count in sorted(stats.distribution.items()):
            lines.append(f"  {attempts:>2}: {'#' * count} {count}")
    return "\n".join(lines)


def _print_countdown(store):
    from .engine_core.clock import format_countdown, time_until

    remaining = time_until(store.state.expires_at, store.clock.now())
    if remaining.total_seconds() > 0:
        print(f"Next letter in {format_countdown(remaining)}")
    else:
        print("A new letter is ready. Run again to start over.")


def cmd_play(args, settings):
    """Play today's window interactively."""
    from .engine_core.action import ChangeTheme, Guess
    from .engine_core.state import SessionStatus

    store = _open_store(settings)

    if store.first_run:
        print("How to play: guess which letter is hiding.")
        print("Tiles: (A) close by, · nowhere near, [A] found.")
        print("Type :theme to switch theme, :quit to stop.\n")

    while store.state.status != SessionStatus.COMPLETE:
        print(render_board(store.state))
        try:
            raw = input("Guess a letter: ")
        except EOFError:
            print()
            return

        command = raw.strip().lower()
        if command in {":quit", ":q"}:
            return
        if command == ":theme":
            state = store.dispatch(ChangeTheme(store.state.theme.toggled()))
            print(f"Theme: {state.theme.value}")
            continue

        before = store.state.attempts
        store.dispatch(Guess(normalize_guess(raw)))
        if store.state.attempts == before:
            print("Not a new letter, try again.")

    print(render_board(store.state))
    print(f"\nYou found me in {store.state.attempts}!\n")
    print(render_statistics(store.state))
    _print_countdown(store)


def cmd_stats(args, settings):
    """Show statistics."""
    store = _open_store(settings)
    print(render_statistics(store.state))


def cmd_share(args, settings):
    """Print or save today's share text."""
    from .engine_core.share import share_text
    from .engine_core.state import SessionStatus

    store = _open_store(settings)
    state = store.state
    if state.status != SessionStatus.COMPLETE:
        print("Error: find today's letter before sharing", file=sys.stderr)
        sys.exit(1)

    text = share_text(state.options, state.answer, state.history, state.attempts, state.theme)

    if not args.output:
        print(text, end="")
        return

    try:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(text)
    except OSError as e:
        print(f"Uh-oh! Something went wrong: {e}", file=sys.stderr)
        sys.exit(1)
    print(f"Saved to {args.output}")


def cmd_reset(args, settings):
    """Forget the local record."""
    from .config import STORAGE_KEY
    from .session import FileStorage

    FileStorage(settings.data_dir).delete(STORAGE_KEY)
    print("Local record removed.")


def cmd_serve(args, settings):
    """Run the REST API."""
    import os
    import uvicorn

    # The app reads its settings from the environment in the server process
    os.environ["LETTERLE_DATA_DIR"] = str(settings.data_dir)
    logger.info("Serving on %s:%d", args.host, args.port)
    uvicorn.run("letterle.api.app:app", host=args.host, port=args.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
