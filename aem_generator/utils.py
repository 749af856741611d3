"""Utility functions for loading generation requests.

A request is a JSON object read from a local file or fetched over HTTP.
Every failure surfaces as a JSONLoaderError naming the request source.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import requests

from .codegen.core.errors import GeneratorError, SchemaError
from .codegen.core.schema import GenerationRequest
from .logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_TIMEOUT = 30


class JSONLoaderError(GeneratorError):
    """Raised when a generation request cannot be loaded."""

    pass


def parse_request(data: Any, source: str) -> GenerationRequest:
    """Turn decoded request JSON into a GenerationRequest.

    Raises:
        JSONLoaderError: If the JSON is not a request object.
    """
    if not isinstance(data, dict):
        raise JSONLoaderError(
            f"Request in {source} must be a JSON object, got {type(data).__name__}"
        )

    try:
        request = GenerationRequest.from_dict(data)
    except SchemaError as e:
        raise JSONLoaderError(f"Invalid request in {source}: {e}") from e

    logger.debug("Parsed %s request from %s", request.component_type, source)
    return request


def read_request_file(file_path: str | Path) -> GenerationRequest:
    """Read a generation request from a local JSON file.

    Raises:
        JSONLoaderError: If the file is missing, unreadable or not a request.
    """
    path = Path(file_path)
    source = f"request file {path}"

    if not path.is_file():
        raise JSONLoaderError(f"Request file not found: {path}")

    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        logger.error("Request file %s is not valid JSON: %s", path, e)
        raise JSONLoaderError(f"Request file {path} is not valid JSON: {e}") from e
    except OSError as e:
        logger.error("Cannot read request file %s: %s", path, e)
        raise JSONLoaderError(f"Cannot read request file {path}: {e}") from e

    return parse_request(data, source)


def fetch_request(url: str, timeout: int = DEFAULT_TIMEOUT) -> GenerationRequest:
    """Fetch a generation request from an http(s) URL.

    Raises:
        JSONLoaderError: If the URL is not http(s), the fetch fails or the
            response body is not a request object.
    """
    parsed_url = urlparse(url)
    if parsed_url.scheme not in ("http", "https") or not parsed_url.netloc:
        raise JSONLoaderError(f"Request URL must be an http(s) URL: {url}")

    logger.debug("Fetching request from %s", url)
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
        data = response.json()
    except requests.exceptions.Timeout as e:
        logger.error("Timed out fetching request from %s", url)
        raise JSONLoaderError(f"Timed out after {timeout}s fetching request from {url}") from e
    except requests.exceptions.ConnectionError as e:
        logger.error("Cannot connect to %s: %s", url, e)
        raise JSONLoaderError(f"Cannot connect to request URL {url}") from e
    except requests.exceptions.HTTPError as e:
        status = e.response.status_code
        logger.error("Request URL %s answered HTTP %s", url, status)
        raise JSONLoaderError(f"Request URL {url} answered HTTP {status}") from e
    except requests.exceptions.RequestException as e:
        logger.error("Fetching request from %s failed: %s", url, e)
        raise JSONLoaderError(f"Fetching request from {url} failed: {e}") from e
    except ValueError as e:
        # requests raises a ValueError subclass for undecodable bodies
        logger.error("Request URL %s returned no JSON: %s", url, e)
        raise JSONLoaderError(f"Request URL {url} did not return JSON: {e}") from e

    return parse_request(data, f"request URL {url}")


def load_request(
    file_path: str | Path | None = None,
    url: str | None = None,
    timeout: int = DEFAULT_TIMEOUT,
) -> tuple[str, GenerationRequest]:
    """Load a generation request from exactly one of a file or a URL.

    Returns:
        Tuple of (source description, request).

    Raises:
        JSONLoaderError: If neither or both sources are given, or loading fails.
    """
    if bool(file_path) == bool(url):
        raise JSONLoaderError("Give either a request file or a request URL")

    if file_path:
        request = read_request_file(file_path)
        source = f"📄 {file_path}"
    else:
        request = fetch_request(url, timeout)
        source = f"🌐 {url}"

    logger.info("Loaded %s request from %s", request.component_type, source)
    return source, request


def parse_field_assignments(assignments: list[str] | None) -> dict[str, str]:
    """Parse ``name=value`` command-line assignments into field values."""
    values: dict[str, str] = {}
    for assignment in assignments or []:
        name, sep, value = assignment.partition("=")
        if not sep or not name.strip():
            raise JSONLoaderError(f"Field values must look like name=value: {assignment!r}")
        values[name.strip()] = value
    return values
