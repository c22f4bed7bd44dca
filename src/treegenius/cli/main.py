"""Command-line interface for treegenius.

This module provides the command-line entry point: it loads the saved settings,
applies command-line overrides, enumerates the directory, runs one generation
pass and writes the rendered tree.

Exit Codes:
    0: Successful completion
    1: Runtime error or failed generation pass
    2: Command-line syntax error
    130: Interrupted by SIGINT (Ctrl+C) or cancelled pass
    141: Broken pipe on stdout

Example:
    # Basic usage
    $ treegenius /path/to/dir

    # ASCII style with sizes, two levels deep
    $ treegenius -s ascii --sizes -d 2 /path/to/dir
"""

import argparse
import asyncio
import logging
import os
import sys
from typing import List, Optional

from treegenius.cli.argparser import create_parser, validate_args
from treegenius.config import TreeConfig
from treegenius.controller import GenerationController, OutcomeStatus, PassOutcome
from treegenius.exclusion_rules.segment_rules import SegmentExclusionRules
from treegenius.path_source import collect_entries
from treegenius.path_tree.statistics import TreeStatistics
from treegenius.rendering.size_format import format_size
from treegenius.settings import SettingsStore
from treegenius.types import PathEntry

logger = logging.getLogger(__name__)

_OVERRIDABLE = ("style", "max_depth", "show_files", "show_sizes", "trailing_slash", "show_stats")


def format_counts(statistics: TreeStatistics) -> str:
    """Format the statistics into a human-readable string.

    Example:
        >>> print(format_counts(TreeStatistics(1, 2, 30)))
        Directories: 1
        Files: 2
        Total size: 30 B
    """
    result = [
        f"Directories: {statistics.directory_count}",
        f"Files: {statistics.file_count}",
        f"Total size: {format_size(statistics.total_bytes)}",
    ]
    return "\n".join(result)


def configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr)


def apply_overrides(
    config: TreeConfig, args: argparse.Namespace, exclusion_rules: SegmentExclusionRules
) -> TreeConfig:
    """Apply the options given on the command line to the loaded config."""
    changes = {name: getattr(args, name) for name in _OVERRIDABLE if getattr(args, name, None) is not None}
    ignores = set() if args.no_default_ignores else set(config.ignores)
    ignores |= exclusion_rules.rules
    return config.with_options(ignores=frozenset(ignores), **changes)


async def _generate(entries: List[PathEntry], root_name: str, config: TreeConfig) -> GenerationController:
    controller = GenerationController(settle_delay=0)
    controller.submit(entries, root_name, config)
    await controller.wait()
    return controller


def _write_stdout(text: str) -> None:
    try:
        sys.stdout.write(text)
        sys.stdout.flush()
    except BrokenPipeError:
        # Silence the flush error Python reports at interpreter shutdown
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
        sys.exit(141)


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the treegenius command-line interface.

    Args:
        argv: Arguments to parse instead of ``sys.argv[1:]``.
    """
    try:
        exclusion_rules = SegmentExclusionRules()
        parser = create_parser(exclusion_rules)
        args = parser.parse_args(argv)
        validate_args(args)
        configure_logging(args.verbose)

        store = SettingsStore(args.settings)
        config = store.reset() if args.reset_settings else store.load()
        config = apply_overrides(config, args, exclusion_rules)
        if args.save_settings:
            store.save(config)

        root_name, entries = collect_entries(args.directory)
        label = args.root_name or root_name

        controller = asyncio.run(_generate(entries, label, config))
        outcome: Optional[PassOutcome] = controller.last_outcome
        if outcome is None or outcome.status is OutcomeStatus.CANCELLED:
            print("Error: tree generation was cancelled", file=sys.stderr)
            sys.exit(130)
        if outcome.status is OutcomeStatus.FAILED or controller.result is None:
            print(f"Error: {controller.error}", file=sys.stderr)
            sys.exit(1)

        result = controller.result
        summary_dest = args.summary or ("stderr" if config.show_stats else None)
        summary = format_counts(result.statistics)

        if args.output:
            text = result.text
            if summary_dest == "file":
                text += "\n" + summary + "\n"
            args.output.write_text(text, encoding="utf-8")
            logger.info("Wrote tree to %s", args.output)
            if summary_dest == "stdout":
                _write_stdout(summary + "\n")
        else:
            text = result.text
            if summary_dest == "stdout":
                text += "\n" + summary + "\n"
            _write_stdout(text)

        if summary_dest == "stderr":
            print(summary, file=sys.stderr)

    except KeyboardInterrupt:
        print("Interrupted", file=sys.stderr)
        sys.exit(130)
    except Exception as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
