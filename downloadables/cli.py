"""Command-line interface for downloadables."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

from . import __version__
from .settings import default_config_path


def _load_dotenv_files() -> None:
    """Load a .env file from the working directory tree without overriding the environment."""
    path = find_dotenv(usecwd=True)
    if path:
        load_dotenv(path, override=False)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="downloadables",
        description="Classify published release assets into a catalog of downloadable resources",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"downloadables {__version__}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log classification decisions",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    build_parser_ = subparsers.add_parser(
        "build",
        help="Classify every subject of a catalog",
    )
    build_parser_.add_argument(
        "catalog",
        nargs="?",
        help="Catalog search JSON file or URL (default: query the configured DCS)",
    )
    build_parser_.add_argument(
        "--language",
        action="append",
        help="Only build this language code (repeatable)",
    )
    build_parser_.add_argument(
        "--langnames",
        type=Path,
        help="langnames.json used for anglicized language names",
    )
    build_parser_.add_argument(
        "--cache-db",
        type=Path,
        help="Manifest cache DB path",
    )
    build_parser_.add_argument(
        "--offline",
        action="store_true",
        default=None,
        help="Never touch the network; uncached manifests are reported as warnings",
    )
    build_parser_.add_argument(
        "--config",
        type=Path,
        default=default_config_path(),
        help="Settings path (default: ~/.config/downloadables/settings.json)",
    )
    build_parser_.add_argument(
        "--json",
        action="store_true",
        help="Emit machine-readable JSON output",
    )

    inspect_parser = subparsers.add_parser(
        "inspect",
        help="Show how one asset name is parsed and classified",
    )
    inspect_parser.add_argument(
        "name",
        help="Asset filename or link title",
    )
    inspect_parser.add_argument(
        "--url",
        help="Download URL (decides the bucket of links)",
    )
    inspect_parser.add_argument(
        "--release-version",
        help="Release tag used for links",
    )
    inspect_parser.add_argument(
        "--json",
        action="store_true",
        help="Emit machine-readable JSON output",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    _load_dotenv_files()
    _configure_logging(args.verbose)

    try:
        # Import here to avoid slow startup
        if args.command == "build":
            from .app import DownloadablesApp
            from .commands.build import run_build
            from .settings import load_settings

            settings = load_settings(args.config)
            app = DownloadablesApp(settings, cache_path=args.cache_db, offline=args.offline)
            try:
                return run_build(args, app=app)
            finally:
                app.close()
        elif args.command == "inspect":
            from .commands.inspect import run_inspect
            return run_inspect(args)
        else:
            parser.print_help()
            return 1
    except Exception as exc:  # pragma: no cover - exercised in CLI tests
        from .errors import exit_code_for_exception

        print(str(exc), file=sys.stderr)
        return exit_code_for_exception(exc)


if __name__ == "__main__":
    sys.exit(main())
