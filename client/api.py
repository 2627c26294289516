"""Thin HTTP client for the items backend.

All functions return parsed JSON (dicts/lists) or raise on failure.
Uses requests (synchronous); pass base_url to target a specific instance.
"""

from __future__ import annotations

import os
from typing import Any

import requests

BASE_URL = os.getenv("BACKEND_API_URL", "http://localhost:3000")
_TIMEOUT = 10  # seconds


def get_health(base_url: str = BASE_URL) -> str:
    """GET /health — plain-text liveness probe."""
    resp = requests.get(f"{base_url}/health", timeout=_TIMEOUT)
    resp.raise_for_status()
    return resp.text


def get_hello(base_url: str = BASE_URL) -> dict[str, Any]:
    """GET /api/hello — greeting and answering instance."""
    resp = requests.get(f"{base_url}/api/hello", timeout=_TIMEOUT)
    resp.raise_for_status()
    return resp.json()


def list_items(base_url: str = BASE_URL) -> list[dict[str, Any]]:
    """GET /api/items — every item held by the answering instance."""
    resp = requests.get(f"{base_url}/api/items", timeout=_TIMEOUT)
    resp.raise_for_status()
    return resp.json()


def add_item(text: str, base_url: str = BASE_URL) -> dict[str, Any]:
    """POST /api/items — append an item and return it."""
    resp = requests.post(
        f"{base_url}/api/items",
        json={"text": text},
        timeout=_TIMEOUT,
    )
    resp.raise_for_status()
    return resp.json()
