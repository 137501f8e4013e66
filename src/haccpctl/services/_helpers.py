"""Shared service-layer helper functions."""

from __future__ import annotations

from datetime import UTC, date, datetime


def utc_now() -> datetime:
    return datetime.now(UTC)


def today() -> date:
    """Today's date in UTC."""
    return utc_now().date()


def describe_failure(exc: Exception) -> str:
    """Short one-line description of a collaborator failure."""
    text = str(exc).strip()
    return f"{type(exc).__name__}: {text}" if text else type(exc).__name__
