"""
Storage location configuration.

This module contains *only* the storage setup: it resolves where workflow
records and reference data live and hands out Record Store instances for
other repository modules to use.

Environment variables (optional, read from .env if present):
- OFFER_DB_DIR: directory holding inquiries.json / offers.json
- OFFER_REFERENCE_DIR: directory holding the read-only reference JSON files
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

from repositories.record_store import RecordStore

# Load environment variables from .env file in the project root
_PROJECT_ROOT = Path(__file__).parent.parent
load_dotenv(dotenv_path=_PROJECT_ROOT / ".env")

_DEFAULT_DB_DIR = _PROJECT_ROOT / "data" / "db"
_DEFAULT_REFERENCE_DIR = _PROJECT_ROOT / "data" / "reference"


def get_db_dir() -> Path:
    """
    Directory for workflow record files.

    Resolved on every call so a changed environment takes effect without
    re-importing.
    """

    return Path(os.getenv("OFFER_DB_DIR") or _DEFAULT_DB_DIR)


def get_reference_dir() -> Path:
    """Directory for static reference data files."""

    return Path(os.getenv("OFFER_REFERENCE_DIR") or _DEFAULT_REFERENCE_DIR)


def open_store(file_name: str) -> RecordStore:
    """Record Store for one record kind, e.g. ``open_store("offers.json")``."""

    return RecordStore(get_db_dir() / file_name)


__all__ = ["get_db_dir", "get_reference_dir", "open_store"]
