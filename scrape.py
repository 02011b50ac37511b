#!/usr/bin/env python3
"""
scrape.py -- CLI entry point for race-results.

Usage:
    python scrape.py --url "https://example.com/results/cheltenham/1430"
    python scrape.py --html-file saved_page.html --json
    python scrape.py --racing-api v1/racecards --param day=today
    python scrape.py --lsports v1/fixtures --param sport=horse-racing
"""

import argparse
import json
import logging
import sys

from fetcher import RaceDataError, save_json, save_results
from racing_api import fetch_lsports_data, fetch_racing_data
from results import ResultSelectors, extract_results, load_selectors, scrape_race_results

logger = logging.getLogger("race-results.cli")

EXIT_OK = 0
EXIT_USAGE = 1
EXIT_FAILURE = 2


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="race-results: scrape race results pages and query racing data APIs",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            '  python scrape.py --url "https://example.com/results/cheltenham/1430"\n'
            "  python scrape.py --html-file page.html --json\n"
            "  python scrape.py --racing-api v1/racecards --param day=today\n"
        ),
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--url", type=str, help="Race-meeting results page URL")
    source.add_argument("--html-file", type=str, help="Extract from a saved HTML file instead of fetching")
    source.add_argument("--racing-api", type=str, metavar="ENDPOINT",
                        help="Call an endpoint of The Racing API (key from RACING_API_KEY)")
    source.add_argument("--lsports", type=str, metavar="ENDPOINT",
                        help="Call an endpoint of the LSports API (key from LSPORTS_API_KEY)")
    parser.add_argument("--selectors", type=str,
                        help="JSON file overriding the result selectors")
    parser.add_argument("--param", action="append", default=[], metavar="KEY=VALUE",
                        help="Query parameter for API calls (repeatable)")
    parser.add_argument("--json", action="store_true", help="Print JSON instead of a table")
    parser.add_argument("--output", type=str, help="Also write the JSON output to this path")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def _parse_params(pairs: list) -> dict:
    params = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise ValueError(f"Expected KEY=VALUE, got '{pair}'")
        params[key] = value
    return params


def _print_table(rows: list):
    print()
    print(f"  {'Pos':>4}  {'Horse':<25} {'Jockey':<20} {'Trainer':<20}")
    print(f"  {'-'*4}  {'-'*25} {'-'*20} {'-'*20}")
    for r in rows:
        pos = r.finishing_position or "-"
        print(f"  {pos:>4}  {r.horse_name:<25} {r.jockey_name:<20} {r.trainer_name:<20}")
    print()
    print(f"  {len(rows)} result row(s)")
    print()


def _run_scrape(args) -> int:
    selectors = load_selectors(args.selectors) if args.selectors else ResultSelectors()

    if args.html_file:
        logger.info(f"Extracting results from {args.html_file}")
        try:
            with open(args.html_file, "rb") as f:
                html = f.read()
        except OSError as exc:
            logger.error(f"Could not read {args.html_file}: {exc}")
            return EXIT_FAILURE
        rows = extract_results(html, selectors)
    else:
        logger.info(f"Scraping results from {args.url}")
        rows = scrape_race_results(args.url, selectors)

    if args.json:
        print(json.dumps([r.to_dict() for r in rows], indent=2))
    else:
        _print_table(rows)

    if args.output:
        save_results(rows, args.output)
    return EXIT_OK


def _run_api(args, params: dict) -> int:
    if args.racing_api:
        data = fetch_racing_data(args.racing_api, params)
    else:
        data = fetch_lsports_data(args.lsports, params)
    print(json.dumps(data, indent=2))

    if args.output:
        save_json(data, args.output)
    return EXIT_OK


def main(argv=None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    if not (args.url or args.html_file or args.racing_api or args.lsports):
        parser.print_help()
        print("\nError: Provide --url, --html-file, --racing-api or --lsports")
        return EXIT_USAGE

    api_mode = bool(args.racing_api or args.lsports)
    if api_mode and args.selectors:
        print("Error: --selectors only applies to --url or --html-file")
        return EXIT_USAGE
    if not api_mode and args.param:
        print("Error: --param only applies to --racing-api or --lsports")
        return EXIT_USAGE

    try:
        params = _parse_params(args.param)
    except ValueError as exc:
        print(f"Error: {exc}")
        return EXIT_USAGE

    try:
        if api_mode:
            return _run_api(args, params)
        return _run_scrape(args)
    except RaceDataError as exc:
        logger.error(f"Failed: {exc}")
        return EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
