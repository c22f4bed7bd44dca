"""Command-line argument parsing for treegenius.

This module defines the command-line interface for treegenius,
handling argument parsing and validation.
"""

import argparse
from pathlib import Path
from typing import Any, List, Optional, Sequence, Type, Union

from treegenius import __version__
from treegenius.config import STYLE_NAMES
from treegenius.exclusion_rules.base_rules import BaseExclusionRules


def create_ignore_action(exclusion_rules: BaseExclusionRules) -> Type[argparse.Action]:
    """Create a custom action class for collecting ignored segment names.

    The action updates the provided exclusion rules object as arguments are
    processed: ``-i/--ignore`` adds a single name and ``-e/--exclude`` loads
    names from a file.

    Args:
        exclusion_rules: The exclusion rules object to update during parsing.

    Returns:
        A custom action class for use with argparse.
    """

    class IgnoreNamesAction(argparse.Action):
        """Action adding ignored names to the exclusion rules as they are parsed."""

        def __init__(self, option_strings: List[str], dest: str, **kwargs: Any) -> None:
            super().__init__(option_strings, dest, **kwargs)

        def __call__(
            self,
            parser: argparse.ArgumentParser,
            namespace: argparse.Namespace,
            values: Union[str, Sequence[Any], None],
            option_string: Optional[str] = None,
        ) -> None:
            if values is None:
                return
            if option_string in ("-e", "--exclude"):
                try:
                    exclusion_rules.load_rules(Path(str(values)))
                except FileNotFoundError as e:
                    parser.error(str(e))
            else:  # -i/--ignore
                exclusion_rules.add_rule(str(values))

            collected = getattr(namespace, self.dest, None) or []
            collected.append(values)
            setattr(namespace, self.dest, collected)

    return IgnoreNamesAction


def positive_int(value: str) -> int:
    """Argument type accepting integers greater than zero."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid positive integer: {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def create_parser(exclusion_rules: BaseExclusionRules) -> argparse.ArgumentParser:
    """Create and configure the command-line argument parser.

    Options that map to saved settings default to None so that only the flags
    given on the command line override the loaded settings.

    Args:
        exclusion_rules: The exclusion rules object to update during parsing.

    Returns:
        An ArgumentParser instance configured with treegenius's options.
    """
    description = """
    treegenius: Render a directory as a text tree.

    The directory is enumerated once, entries whose path contains an ignored name
    are dropped, and the remaining hierarchy is printed in the selected style.
    Options not given on the command line come from the saved settings.
    """

    epilog = """
    Examples:
      # Classic tree of a project, skipping the default ignore list
      treegenius /path/to/project

      # ASCII tree, three levels deep, with file sizes
      treegenius -s ascii -d 3 --sizes /path/to/project

      # Only directories, with trailing slashes
      treegenius --no-files --trailing-slash /path/to/project

      # Ignore extra names, directly or from a file (one name per line)
      treegenius -i target -i .venv -e names.txt /path/to/project

      # JSON structure written to a file, counts appended to it
      treegenius -s structured -o tree.json --summary file /path/to/project

      # Remember the current options as the new defaults
      treegenius -s emoji --sizes --save-settings /path/to/project
    """

    parser = argparse.ArgumentParser(
        prog="treegenius",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-V", "--version", action="version", version=f"treegenius {__version__}", help="Show the version and exit"
    )

    IgnoreAction = create_ignore_action(exclusion_rules)

    parser.add_argument("directory", type=Path, help="The directory to render.")
    parser.add_argument(
        "-s",
        "--style",
        choices=STYLE_NAMES,
        default=None,
        help="Output style (default: from settings, initially classic).",
    )
    parser.add_argument(
        "-d",
        "--max-depth",
        type=positive_int,
        metavar="N",
        default=None,
        help="Do not list the contents of directories N or more levels deep (default: from settings, initially 10).",
    )
    parser.add_argument(
        "-i",
        "--ignore",
        type=str,
        metavar="NAME",
        action=IgnoreAction,
        help="Drop every path containing a segment exactly equal to NAME (can be specified multiple times).",
    )
    parser.add_argument(
        "-e",
        "--exclude",
        type=Path,
        metavar="FILE",
        action=IgnoreAction,
        help="File listing names to ignore, one per line; '#' starts a comment (can be specified multiple times).",
    )
    parser.add_argument(
        "--no-default-ignores",
        action="store_true",
        help="Start from an empty ignore list instead of the saved one.",
    )
    parser.add_argument(
        "--files", dest="show_files", action=argparse.BooleanOptionalAction, default=None, help="Show file entries."
    )
    parser.add_argument(
        "--sizes", dest="show_sizes", action=argparse.BooleanOptionalAction, default=None, help="Show file sizes."
    )
    parser.add_argument(
        "--trailing-slash",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Append '/' to directory names.",
    )
    parser.add_argument(
        "--stats",
        dest="show_stats",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Print directory/file/size counts to stderr unless --summary chooses another destination.",
    )
    parser.add_argument(
        "-r",
        "--root-name",
        metavar="NAME",
        help="Label for the root line (default: the directory's name).",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        metavar="FILE",
        help="Output file path. If not specified, output is written to stdout.",
    )
    parser.add_argument(
        "--summary",
        metavar="DEST",
        choices=["stderr", "stdout", "file"],
        help="Print summary counts. Valid destinations: stderr, stdout, file (requires -o)",
    )
    parser.add_argument("--settings", type=Path, metavar="FILE", help="Settings file to use.")
    parser.add_argument(
        "--save-settings",
        action="store_true",
        help="Save the effective options as the new defaults.",
    )
    parser.add_argument(
        "--reset-settings",
        action="store_true",
        help="Delete saved settings and start from the built-in defaults.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Log progress to stderr (-v for info, -vv for debug).",
    )

    return parser


def validate_args(args: argparse.Namespace) -> None:
    """Validate command-line arguments.

    Performs additional validation beyond what argparse can handle.

    Args:
        args: Parsed command-line arguments.

    Raises:
        ValueError: If any arguments fail validation.
    """
    if args.summary == "file" and not args.output:
        raise ValueError("--summary=file requires -o/--output to be specified")
