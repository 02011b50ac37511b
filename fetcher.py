"""
fetcher.py -- HTTP fetching layer, error types and the result data model.

Implements:
  - Single blocking GET per call (no retry, no pagination)
  - FetchFailure / ParseFailure / ConfigurationError error types
  - ResultRow record shared by the extractor and the CLI
"""

import json
import logging
import os
from dataclasses import dataclass
from typing import Optional

import requests

from config import REQUEST_TIMEOUT, USER_AGENT

logger = logging.getLogger("race-results.fetcher")


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class RaceDataError(Exception):
    """Base class for every failure raised by race-results."""


class FetchFailure(RaceDataError):
    """Transport error or non-2xx response. The cause is chained."""

    def __init__(self, url: str, reason: str, status_code: Optional[int] = None):
        super().__init__(f"{reason} ({url})")
        self.url = url
        self.reason = reason
        self.status_code = status_code


class ParseFailure(RaceDataError):
    """Response body could not be parsed."""


class ConfigurationError(RaceDataError):
    """Missing API key, bad selectors file, and similar setup problems."""


# ---------------------------------------------------------------------------
# HTTP helpers
# ---------------------------------------------------------------------------

def fetch_html(url: str, timeout: float = REQUEST_TIMEOUT,
               session: Optional[requests.Session] = None):
    """
    GET a page and return its markup. Raises FetchFailure on any HTTP problem.

    Without a charset in Content-Type, requests would decode as ISO-8859-1.
    In that case the body is decoded as UTF-8, or handed to BeautifulSoup as
    raw bytes so its own encoding detection runs.
    """
    resp = http_get(url, timeout=timeout, session=session)
    logger.info(f"Fetched {url} ({len(resp.content)} bytes)")
    if "charset=" in resp.headers.get("Content-Type", "").lower():
        return resp.text
    try:
        return resp.content.decode("utf-8-sig")
    except UnicodeDecodeError:
        logger.debug(f"{url} is not UTF-8, leaving encoding detection to the parser")
        return resp.content


def http_get(url: str, params: Optional[dict] = None, timeout: float = REQUEST_TIMEOUT,
             session: Optional[requests.Session] = None) -> requests.Response:
    """Issue one GET and return the response, raising FetchFailure unless it is 2xx."""
    client = session if session is not None else requests
    headers = {"User-Agent": USER_AGENT}
    logger.debug(f"GET {url} params={sorted((params or {}).keys())}")
    try:
        resp = client.get(url, params=params, headers=headers, timeout=timeout)
    except requests.RequestException as exc:
        raise FetchFailure(url, f"request failed: {exc}") from exc

    try:
        resp.raise_for_status()
    except requests.HTTPError as exc:
        raise FetchFailure(url, f"HTTP {resp.status_code}", status_code=resp.status_code) from exc
    # raise_for_status lets 1xx and 3xx through
    if not 200 <= resp.status_code < 300:
        raise FetchFailure(url, f"HTTP {resp.status_code}", status_code=resp.status_code)
    return resp


# ---------------------------------------------------------------------------
# Data model
# ---------------------------------------------------------------------------

@dataclass
class ResultRow:
    horse_name: str = ""
    jockey_name: str = ""
    trainer_name: str = ""
    finishing_position: str = ""

    def to_dict(self):
        return {
            "horseName": self.horse_name,
            "jockeyName": self.jockey_name,
            "trainerName": self.trainer_name,
            "finishingPosition": self.finishing_position,
        }


def save_json(data, path: str) -> str:
    outdir = os.path.dirname(path)
    if outdir:
        os.makedirs(outdir, exist_ok=True)
    with open(path, "w") as f:
        json.dump(data, f, indent=2)
    logger.info(f"Saved JSON: {path}")
    return path


def save_results(rows: list, path: str) -> str:
    """Write result rows to a JSON file."""
    logger.info(f"Saving {len(rows)} result rows")
    return save_json([r.to_dict() for r in rows], path)
