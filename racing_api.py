"""
racing_api.py -- Thin client for The Racing API and LSports.

Keys are taken from the caller or from the environment variable named by the
ApiSource; they are sent as the `api_key` query parameter.
"""

import logging
import os
from typing import Any, Optional

from config import LSPORTS, RACING_API, REQUEST_TIMEOUT, ApiSource
from fetcher import ConfigurationError, FetchFailure, ParseFailure, http_get

logger = logging.getLogger("race-results.api")


def resolve_api_key(source: ApiSource, api_key: Optional[str] = None) -> str:
    if api_key:
        return api_key
    key = os.environ.get(source.key_env, "").strip()
    if not key:
        raise ConfigurationError(f"No API key for {source.name}: set {source.key_env}")
    return key


def build_url(source: ApiSource, endpoint: str) -> str:
    return f"{source.base_url.rstrip('/')}/{endpoint.lstrip('/')}"


def fetch_api_data(source: ApiSource, endpoint: str, params: Optional[dict] = None,
                   api_key: Optional[str] = None, timeout: float = REQUEST_TIMEOUT,
                   session=None) -> Any:
    """
    GET an endpoint of `source` and return the decoded JSON body.
    Failures are logged with the source name and re-raised with the key masked.
    """
    key = resolve_api_key(source, api_key)
    url = build_url(source, endpoint)
    query = {**(params or {}), "api_key": key}
    try:
        resp = http_get(url, params=query, timeout=timeout, session=session)
    except FetchFailure as exc:
        # requests errors can echo the full query string, key included
        masked = FetchFailure(url, _mask(exc.reason, key), status_code=exc.status_code)
        logger.error(f"Error fetching data from {source.name}: {masked}")
        raise masked from exc

    try:
        return resp.json()
    except ValueError as exc:
        failure = ParseFailure(f"{source.name} returned a non-JSON body from {url}")
        logger.error(f"Error fetching data from {source.name}: {failure}")
        raise failure from exc


def _mask(text: str, key: str) -> str:
    return text.replace(key, "***")


def fetch_racing_data(endpoint: str, params: Optional[dict] = None, **kwargs) -> Any:
    return fetch_api_data(RACING_API, endpoint, params, **kwargs)


def fetch_lsports_data(endpoint: str, params: Optional[dict] = None, **kwargs) -> Any:
    return fetch_api_data(LSPORTS, endpoint, params, **kwargs)
