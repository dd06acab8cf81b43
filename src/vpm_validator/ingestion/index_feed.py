"""Fetch and decode VPM repository index documents."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import requests
from requests import Response
from tenacity import retry, stop_after_attempt, wait_fixed

from ..validators.index_document import IndexSchemaError, validate_index_document

DEFAULT_INDEX_URL = "https://vpmm.dev/index.json"

USER_AGENT = "vpm-validator"


class IndexFeedError(RuntimeError):
    """Base error for failures while loading an index."""


class IndexFetchError(IndexFeedError):
    """Raised when an index cannot be fetched or read."""


class IndexParseError(IndexFeedError):
    """Raised when an index payload is not a valid index document."""


def is_remote(source: str) -> bool:
    return source.startswith("http://") or source.startswith("https://")


@retry(reraise=True, stop=stop_after_attempt(3), wait=wait_fixed(2))
def _http_get(url: str, token: str | None = None) -> Response:
    headers = {"User-Agent": USER_AGENT, "Accept": "application/json"}
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return requests.get(url, headers=headers, timeout=30)


def fetch_index(url: str = DEFAULT_INDEX_URL, token: str | None = None) -> bytes:
    """Return the raw index payload served at ``url``."""
    try:
        response = _http_get(url, token)
    except requests.RequestException as exc:
        raise IndexFetchError(f"Failed to fetch index {url}: {exc}") from exc

    if response.status_code != 200:
        raise IndexFetchError(f"Unexpected status code {response.status_code} fetching index {url}")

    return response.content


def read_index(source: str, token: str | None = None) -> bytes:
    """Return the raw payload for a URL or filesystem path."""
    if is_remote(source):
        return fetch_index(source, token)
    try:
        return Path(source).read_bytes()
    except OSError as exc:
        raise IndexFetchError(f"Failed to read index {source}: {exc}") from exc


def parse_index_payload(payload: bytes) -> dict[str, Any]:
    """Decode ``payload`` and check it against the index schema."""
    try:
        document = json.loads(payload.decode("utf-8-sig"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise IndexParseError(f"Index is not valid JSON: {exc}") from exc

    try:
        validate_index_document(document)
    except IndexSchemaError as exc:
        raise IndexParseError(f"Index failed schema validation:{exc}") from exc
    return document


def load_index(source: str, token: str | None = None) -> dict[str, Any]:
    return parse_index_payload(read_index(source, token))
