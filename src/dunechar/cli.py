"""Command-line interface for dunechar.

Usage:
    dunechar check character.json
    dunechar check character.json --collect
    dunechar normalize character.json
    dunechar talent "Friend of [Skill]" Battle
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any

from dunechar import __version__, safe_json
from dunechar.config import get_settings
from dunechar.errors import DuneCharacterError
from dunechar.logging_config import configure_logging, get_logger
from dunechar.model.character import DuneCharacter
from dunechar.model.talent_template import TalentTemplate
from dunechar.report import issues_from_report

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_USAGE = 2


def _print_json(value: Any) -> None:
    print(safe_json.dumps(value, indent=get_settings().json_indent))


def _load_options(path: Path) -> dict[str, Any]:
    options = safe_json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(options, dict):
        raise ValueError(f"{path} does not hold a JSON object")
    return options


def _command_check(parsed: argparse.Namespace) -> int:
    options = _load_options(parsed.path)
    if not parsed.collect:
        try:
            DuneCharacter.from_dict(options, fail_on_first=True)
        except DuneCharacterError as error:
            print(f"{error.kind}: {error}", file=sys.stderr)
            return EXIT_INVALID
        print("ok")
        return EXIT_OK

    character = DuneCharacter.from_dict(options, fail_on_first=False)
    issues = issues_from_report(character.check(fail_on_first=False))
    _print_json([issue.model_dump(mode="json") for issue in issues])
    return EXIT_INVALID if issues else EXIT_OK


def _command_normalize(parsed: argparse.Namespace) -> int:
    options = _load_options(parsed.path)
    try:
        character = DuneCharacter.from_dict(options, normalize=True, fail_on_first=True)
    except DuneCharacterError as error:
        print(f"{error.kind}: {error}", file=sys.stderr)
        return EXIT_INVALID
    _print_json(character.to_dict())
    return EXIT_OK


def _decode_argument(argument: str) -> Any:
    """JSON objects are decoded, any other argument stays a string."""
    if argument.lstrip().startswith("{"):
        return safe_json.loads(argument)
    return argument


def _command_talent(parsed: argparse.Namespace) -> int:
    try:
        template = TalentTemplate(parsed.pattern, parsed.description)
        talent = template.create_instance([_decode_argument(arg) for arg in parsed.args])
    except DuneCharacterError as error:
        print(f"{error.kind}: {error}", file=sys.stderr)
        return EXIT_INVALID
    _print_json(talent)
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="dunechar",
        description="Validate and normalize Dune RPG characters",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    check = subparsers.add_parser("check", help="Check a character JSON file")
    check.add_argument("path", type=Path, help="Character JSON file")
    check.add_argument(
        "--collect",
        action="store_true",
        help="Report every problem instead of stopping at the first one",
    )
    check.set_defaults(handler=_command_check)

    normalize = subparsers.add_parser("normalize", help="Print a normalized character")
    normalize.add_argument("path", type=Path, help="Character JSON file")
    normalize.set_defaults(handler=_command_normalize)

    talent = subparsers.add_parser("talent", help="Create a talent from a template")
    talent.add_argument("pattern", help='Talent name pattern, e.g. "Friend of [Skill]"')
    talent.add_argument("args", nargs="*", help="One argument per placeholder")
    talent.add_argument("--description", default=None, help="Description template")
    talent.set_defaults(handler=_command_talent)

    return parser


def main(args: list[str] | None = None) -> int:
    """Run the dunechar command line.

    Args:
        args: Command-line arguments. If None, uses sys.argv[1:].

    Returns:
        Exit code (0 success, 1 invalid or malformed character or talent,
        2 unreadable input).
    """
    configure_logging()
    parsed = build_parser().parse_args(args)
    try:
        return parsed.handler(parsed)
    except DuneCharacterError as error:
        print(f"{error.kind}: {error}", file=sys.stderr)
        return EXIT_INVALID
    except (OSError, ValueError) as error:
        logger.error("Cannot read input: %s", error)
        print(f"error: {error}", file=sys.stderr)
        return EXIT_USAGE


if __name__ == "__main__":
    sys.exit(main())
