"""
Abstract Storage Interface

DESIGN DECISION: Local persistence is a plain key-value store of strings,
the same contract a browser's local storage offers. This allows us to:
1. Keep the participant list in a JSON file for the Streamlit app
2. Use in-memory storage for testing
3. Swap the backend without touching the ledger

The interface is intentionally tiny - only what the participant cache needs.
"""

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStore(ABC):
    """
    Abstract interface for a string key-value store.

    Any storage implementation must implement these methods.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """
        Read the value stored under a key.

        Args:
            key: The storage key

        Returns:
            The stored string, or None if the key is absent

        Raises:
            StorageError: If the backend cannot be read
        """
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """
        Store a value under a key, replacing any previous value.

        Args:
            key: The storage key
            value: The string to store

        Raises:
            StorageWriteError: If the value could not be written
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class CorruptValueError(StorageError):
    """A stored value exists but cannot be decoded."""

    def __init__(self, key: str, reason: str):
        self.key = key
        super().__init__(f"Stored value for '{key}' is unreadable: {reason}")


class StorageWriteError(StorageError):
    """A value could not be written to the backend."""
    pass
