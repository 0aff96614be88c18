"""Utility functions for loading and saving bill configurations.

This module provides functions for loading the editor's bill JSON from files
and URLs with proper error handling, and for writing it back.
"""

import json
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import requests

from .core.model import BillConfig
from .logging_config import get_logger

logger = get_logger(__name__)


class BillConfigLoaderError(Exception):
    """Custom exception for bill configuration loading errors."""

    pass


def load_json_from_file(file_path: str | Path) -> Any:
    """Load JSON data from a local file.

    Args:
        file_path: Path to the JSON file.

    Returns:
        Parsed JSON data.

    Raises:
        BillConfigLoaderError: If the file is missing, unreadable or invalid.
    """
    file_path = Path(file_path)
    logger.debug(f"Attempting to load bill config from file: {file_path}")

    if not file_path.exists():
        logger.error(f"File not found: {file_path}")
        raise BillConfigLoaderError(f"File not found: {file_path}")

    if file_path.suffix.lower() != ".json":
        logger.warning(f"File does not have .json extension: {file_path}")

    try:
        with file_path.open("r", encoding="utf-8-sig") as f:
            data = json.load(f)
        logger.info(f"Loaded bill config from {file_path}")
        return data
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in file {file_path}: {e}")
        raise BillConfigLoaderError(f"Invalid JSON in file {file_path}: {e}") from e
    except OSError as e:
        logger.error(f"Error reading file {file_path}: {e}")
        raise BillConfigLoaderError(f"Error reading file {file_path}: {e}") from e


def load_json_from_url(url: str, timeout: int = 30) -> Any:
    """Fetch a bill configuration published as JSON over HTTP.

    Args:
        url: Absolute http(s) URL of the bill JSON.
        timeout: Request timeout in seconds.

    Returns:
        Parsed JSON data.

    Raises:
        BillConfigLoaderError: Bad URL, transport failure, error status or non-JSON body.
    """
    parsed_url = urlparse(url)
    if not (parsed_url.scheme and parsed_url.netloc):
        raise BillConfigLoaderError(f"Invalid URL: {url}")

    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
        data = response.json()
    except requests.exceptions.Timeout as e:
        raise BillConfigLoaderError(
            f"Timed out after {timeout}s fetching bill config: {url}"
        ) from e
    except requests.exceptions.HTTPError as e:
        raise BillConfigLoaderError(
            f"Bill config server answered HTTP {e.response.status_code}: {url}"
        ) from e
    except ValueError as e:
        # Also covers requests' JSONDecodeError
        raise BillConfigLoaderError(f"Bill config at {url} is not valid JSON: {e}") from e
    except requests.exceptions.RequestException as e:
        raise BillConfigLoaderError(f"Could not fetch bill config from {url}: {e}") from e

    logger.info("Fetched bill config %s", url)
    return data


def load_bill_config(
    file_path: str | Path | None = None,
    url: str | None = None,
    timeout: int = 30,
) -> BillConfig:
    """Load a bill configuration from either a file or URL.

    Args:
        file_path: Path to local JSON file (mutually exclusive with url).
        url: URL to fetch JSON from (mutually exclusive with file_path).
        timeout: Request timeout in seconds (only used for URLs).

    Returns:
        Parsed BillConfig.

    Raises:
        BillConfigLoaderError: If neither or both sources are given, or loading fails.
    """
    if not file_path and not url:
        raise BillConfigLoaderError("Either file_path or url must be provided")

    if file_path and url:
        raise BillConfigLoaderError("Cannot specify both file_path and url")

    data = load_json_from_file(file_path) if file_path else load_json_from_url(url, timeout)

    if not isinstance(data, dict):
        raise BillConfigLoaderError("Bill configuration must be a JSON object")

    try:
        return BillConfig.from_dict(data)
    except (TypeError, KeyError, AttributeError) as e:
        raise BillConfigLoaderError(f"Malformed bill configuration: {e}") from e


def save_bill_config(bill: BillConfig, file_path: str | Path) -> Path:
    """Write a bill configuration back as the editor's JSON.

    Used to persist identifiers assigned during metadata enrichment so
    the next run reuses them.

    Args:
        bill: Bill configuration to save.
        file_path: Destination JSON file.

    Returns:
        The written path.
    """
    file_path = Path(file_path)
    try:
        with file_path.open("w", encoding="utf-8") as f:
            json.dump(bill.to_dict(), f, indent=2, ensure_ascii=False)
            f.write("\n")
    except OSError as e:
        raise BillConfigLoaderError(f"Error writing file {file_path}: {e}") from e

    logger.info(f"Saved bill config to {file_path}")
    return file_path
