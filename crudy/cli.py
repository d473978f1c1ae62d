"""Command line interface for crudy.

``crudy init [PATH]`` resolves the project from the working directory and the
optional argument, then materializes the skeleton:

* no argument: the current directory is used;
* ``./name`` or ``../name``: created relative to the current directory;
* an absolute path: created there;
* an import-style name (``github.com/acme/shop``): created under the Go
  source root (``$GOPATH/src``).

An existing directory is only used when it is empty.
"""

from __future__ import annotations

import argparse
import os
import sys
from collections.abc import Sequence
from pathlib import Path

from . import __version__
from .config import load_config
from .errors import CrudyError, InvalidArgumentError
from .licenses import list_licenses
from .project import resolve_project
from .scaffolder import ProjectGenerator
from .utils import print_error, print_success, print_summary_table, print_warning, setup_logging

INIT_ALIASES = ["initialise", "initiale", "create"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="crudy",
        description="crudy -- scaffold CRUD application skeletons",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  crudy init\n"
            "  crudy init ./shop --license mit --author 'Jane Doe'\n"
            "  crudy init github.com/acme/shop --atomic\n"
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log every directory and file as it is written",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    init_parser = subparsers.add_parser(
        "init",
        aliases=INIT_ALIASES,
        help="Initialize a CRUD application",
        description=__doc__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    init_parser.add_argument(
        "path",
        nargs="*",
        metavar="PATH",
        help="Project location or import-style name (default: current directory)",
    )
    init_parser.add_argument("--author", help="Author name for the copyright line")
    init_parser.add_argument("--license", help="License key (see `crudy licenses`)")
    init_parser.add_argument(
        "--no-license",
        action="store_true",
        help="Do not add a license header to generated files",
    )
    init_parser.add_argument(
        "--no-viper",
        action="store_true",
        help="Generate a plain environment-variable config loader",
    )
    init_parser.add_argument(
        "--atomic",
        action="store_true",
        help="Stage files and move them into place only if every file succeeds",
    )
    init_parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="JSON config file (default: ~/.crudy.json when present)",
    )

    subparsers.add_parser("licenses", help="List the licenses crudy knows about")

    return parser


def ready_message(path: Path) -> str:
    """Confirmation printed after a successful ``init``."""
    return (
        "Your CRUD application is ready at\n"
        f"{path}\n"
        "Give it a try by going there and running `go run main.go`.\n"
        "Add a resource to it by running `crudy generate user`."
    )


def _working_dir() -> Path:
    try:
        return Path(os.getcwd())
    except OSError as exc:
        raise InvalidArgumentError(f"Could not determine working directory: {exc}") from exc


def _handle_init(args: argparse.Namespace) -> int:
    if args.no_license and args.license:
        print_warning(f"--license {args.license} is ignored because --no-license is set")
    config = load_config(args.config).with_overrides(
        author=args.author,
        license=args.license,
        use_license=False if args.no_license else None,
        use_viper=False if args.no_viper else None,
        atomic=True if args.atomic else None,
    )
    project = resolve_project(_working_dir(), args.path, config)
    ProjectGenerator(config).generate(project)
    print_success(ready_message(project.absolute_path))
    return 0


def _handle_licenses(args: argparse.Namespace) -> int:
    print_summary_table(
        {lic.key: lic.name for lic in list_licenses()},
        title="Licenses",
    )
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entry point for ``crudy`` and ``python -m crudy``."""
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    handler = _handle_licenses if args.command == "licenses" else _handle_init
    try:
        return handler(args)
    except CrudyError as exc:
        print_error(str(exc))
        return 1


if __name__ == "__main__":
    sys.exit(main())
