"""Command line entry point: find environments and print them with a summary."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from time import perf_counter

from .find import FindSummary, find_and_report_envs
from .locators import create_locators
from .reporters import CacheReporter, StdioReporter, Summary


def _format_duration(seconds: float) -> str:
    if seconds >= 1:
        return f"{seconds:.3f}s"
    return f"{seconds * 1000:.3f}ms"


def _print_summary(times: FindSummary, counts: Summary) -> None:
    print()
    print("Breakdown by each locator:")
    print("--------------------------")
    for name, elapsed in sorted(times.find_locators_times.items()):
        print(f"{name:<20} : {_format_duration(elapsed)}")
    print()

    print("Breakdown for finding Environments:")
    print("-----------------------------------")
    print(f"{'Using locators':<20} : {_format_duration(times.find_locators_time)}")
    print(f"{'PATH Variable':<20} : {_format_duration(times.find_path_time)}")
    print(f"{'Custom search paths':<20} : {_format_duration(times.find_search_paths_time)}")
    print()

    if counts.managers:
        print("Managers:")
        print("---------")
        managers = sorted((str(tool), count) for tool, count in counts.managers.items())
        for name, count in managers:
            print(f"{name:<20} : {count}")
        print()
    if counts.environments:
        total = sum(counts.environments.values())
        print(f"Environments ({total}):")
        print("------------------")
        environments = sorted(
            (kind.value if kind is not None else "Unknown", count)
            for kind, count in counts.environments.items()
        )
        for name, count in environments:
            print(f"{name:<20} : {count}")
        print()


def find_and_report_envs_stdio(print_list: bool, print_summary: bool, verbose: bool) -> Summary:
    """Search the machine and the current directory, printing what is found."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO)
    start = perf_counter()

    stdio_reporter = StdioReporter(print_list)
    reporter = CacheReporter(stdio_reporter)
    try:
        project_directories = [Path.cwd()]
    except OSError:
        project_directories = []

    times = find_and_report_envs(reporter, project_directories, create_locators())
    counts = stdio_reporter.get_summary()
    if print_summary:
        _print_summary(times, counts)

    print(f"Refresh completed in {int((perf_counter() - start) * 1000)}ms")
    return counts


def main(argv: list[str] | None = None) -> int:
    """Parse the command line and run the requested command."""
    parser = argparse.ArgumentParser(
        prog="pyenvscan", description="Find Python environments on this machine."
    )
    commands = parser.add_subparsers(dest="command")
    find = commands.add_parser(
        "find", help="Finds the environments and reports them to the standard output."
    )
    find.add_argument("-l", "--list", action="store_true", help="List each environment.")
    find.add_argument(
        "-v", "--verbose", action="store_true", help="Display verbose output."
    )
    args = parser.parse_args(argv)

    if args.command is None:
        find_and_report_envs_stdio(True, True, False)
    else:
        find_and_report_envs_stdio(args.list, True, args.verbose)
    return 0