"""
Data store contract expected by the faas-flow engine.
"""

from abc import ABC, abstractmethod
from enum import Enum


class StoreState(str, Enum):
    """Lifecycle of a per-request data store."""

    UNINITIALIZED = "uninitialized"
    ACTIVE = "active"
    CLEANED = "cleaned"


class DataStore(ABC):
    """Key-value storage for the intermediate values of one workflow request."""

    @abstractmethod
    def init(self, flow_name: str, request_id: str) -> None:
        """
        Provision storage for a workflow request.

        Args:
            flow_name: Workflow name
            request_id: Request identifier
        """
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""
        pass

    @abstractmethod
    def get(self, key: str) -> str:
        """Return the value stored under ``key``."""
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove the value stored under ``key``."""
        pass

    @abstractmethod
    def cleanup(self) -> None:
        """Release the request's storage."""
        pass
