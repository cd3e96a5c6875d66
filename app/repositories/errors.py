"""
Repository-layer exceptions for deal storage.
"""

from __future__ import annotations


class DealStoreError(Exception):
    """Base exception for deal storage failures."""


class DuplicateDealError(DealStoreError):
    """Raised when a deal identifier already exists in storage."""
