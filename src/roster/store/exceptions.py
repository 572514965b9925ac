"""Custom exceptions for the student store."""


class StoreError(Exception):
    """Base exception for student store errors."""
