"""CLI entry point for taskboard."""

import argparse
from pathlib import Path

from . import __version__
from .config import Settings
from .logging import setup_logging


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="taskboard",
        description="Kanban board TUI and task API server",
    )
    parser.add_argument(
        "--serve",
        action="store_true",
        help="Run the task API server instead of the board",
    )
    parser.add_argument(
        "--api-url",
        default=None,
        help="Base URL of the task API (default: http://localhost:8080/api)",
    )
    parser.add_argument(
        "--host",
        default=None,
        help="Server bind address (default: 0.0.0.0)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Server port (default: 8080)",
    )
    parser.add_argument(
        "--store",
        choices=["filesystem", "memory", "mongo"],
        default=None,
        help="Server storage backend (default: filesystem)",
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=None,
        help="Directory for task files when using the filesystem store",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase logging verbosity (-v for INFO, -vv for DEBUG)",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Path to write logs to file",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser.parse_args(argv)


def build_settings(args: argparse.Namespace) -> Settings:
    """Build settings from CLI args; unset flags fall back to env/.env."""
    settings_kwargs: dict = {}
    for name in ("api_url", "host", "port", "store", "data_dir", "log_file"):
        value = getattr(args, name)
        if value is not None:
            settings_kwargs[name] = value
    if args.verbose:
        settings_kwargs["verbose"] = args.verbose
    return Settings(**settings_kwargs)


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    args = parse_args(argv)
    settings = build_settings(args)

    # Setup logging based on verbosity
    setup_logging(settings.verbose, settings.log_file, component="server" if args.serve else "board")

    if args.serve:
        from .server import run_server

        run_server(settings)
        return

    # Import here to keep the server path free of textual
    from .app import run

    run(settings)


if __name__ == "__main__":
    main()
