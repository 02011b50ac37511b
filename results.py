"""
results.py -- Race results page extractor.

Turns a results page into a list of ResultRow records using CSS selectors.
Rows come out in document order. A field whose selector matches nothing in a
row becomes an empty string; only an unreachable or unparseable page fails.
"""

import json
import logging
from dataclasses import dataclass, fields, replace
from typing import Optional

from bs4 import BeautifulSoup, FeatureNotFound
import soupsieve
from soupsieve import SelectorSyntaxError

from config import DEFAULT_RESULT_SELECTORS, REQUEST_TIMEOUT
from fetcher import (
    ConfigurationError, FetchFailure, ParseFailure, ResultRow, fetch_html,
)

logger = logging.getLogger("race-results.results")


@dataclass(frozen=True)
class ResultSelectors:
    row: str = DEFAULT_RESULT_SELECTORS["row"]
    horse_name: str = DEFAULT_RESULT_SELECTORS["horse_name"]
    jockey_name: str = DEFAULT_RESULT_SELECTORS["jockey_name"]
    trainer_name: str = DEFAULT_RESULT_SELECTORS["trainer_name"]
    finishing_position: str = DEFAULT_RESULT_SELECTORS["finishing_position"]

    def __post_init__(self):
        # Bad configuration fails here, whether or not a page has rows
        self.compiled()

    def compiled(self) -> dict:
        """Compile every selector, keyed by field name."""
        patterns = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if not isinstance(value, str) or not value.strip():
                raise ConfigurationError(f"Selector '{f.name}' must be a non-empty string")
            try:
                patterns[f.name] = soupsieve.compile(value)
            except SelectorSyntaxError as exc:
                raise ConfigurationError(f"Invalid CSS selector for '{f.name}': {exc}") from exc
        return patterns

    def with_overrides(self, overrides: dict) -> "ResultSelectors":
        known = {f.name for f in fields(self)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise ConfigurationError(f"Unknown selector keys: {', '.join(unknown)}")
        return replace(self, **overrides)


# Field selectors applied inside each row, in ResultRow field order
ROW_FIELDS = ("horse_name", "jockey_name", "trainer_name", "finishing_position")


def load_selectors(path: str) -> ResultSelectors:
    """Read selector overrides from a JSON object file on top of the defaults."""
    try:
        with open(path) as f:
            data = json.load(f)
    except (OSError, ValueError) as exc:
        raise ConfigurationError(f"Could not read selectors file {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigurationError(f"Selectors file {path} must contain a JSON object")
    return ResultSelectors().with_overrides(data)


def _field_text(row, pattern) -> str:
    # Text of every match, joined, then trimmed; no match gives ""
    return "".join(el.get_text() for el in pattern.select(row)).strip()


def extract_results(html, selectors: Optional[ResultSelectors] = None) -> list:
    """
    Extract ResultRow records from results page HTML.
    Returns an empty list when no row matches.
    """
    selectors = selectors or ResultSelectors()
    patterns = selectors.compiled()
    if not isinstance(html, (str, bytes)):
        raise ParseFailure(f"Expected HTML text, got {type(html).__name__}")
    try:
        soup = BeautifulSoup(html, "lxml")
    except FeatureNotFound as exc:
        raise ParseFailure(f"HTML parser unavailable: {exc}") from exc

    results = [
        ResultRow(**{name: _field_text(row, patterns[name]) for name in ROW_FIELDS})
        for row in patterns["row"].select(soup)
    ]
    logger.debug(f"Extracted {len(results)} result rows via '{selectors.row}'")
    return results


def scrape_race_results(url: str, selectors: Optional[ResultSelectors] = None,
                        timeout: float = REQUEST_TIMEOUT, session=None) -> list:
    """Fetch a race-meeting results page and extract its result rows."""
    try:
        html = fetch_html(url, timeout=timeout, session=session)
        return extract_results(html, selectors)
    except (FetchFailure, ParseFailure) as exc:
        logger.error(f"Error scraping race results from {url}: {exc}")
        raise
