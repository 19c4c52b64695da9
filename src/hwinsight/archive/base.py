"""
Abstract base class for archive gateways.

The archive store (schema, indexing, retention) belongs to the sampler and is
not managed here. A gateway only executes a query string and returns flat
rows; the engine treats it as a pure function of that string.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List


Row = Dict[str, Any]


class ArchiveGateway(ABC):
    """Interface to the external archive store."""

    @abstractmethod
    def load(self, query: str) -> List[Row]:
        """
        Execute a query and return its rows.

        Args:
            query: SQL text produced by ``hwinsight.archive.queries``

        Returns:
            List of rows as dictionaries keyed by column alias, in store order

        Raises:
            ArchiveQueryError: If the store rejects or fails the query
        """
        pass

    def close(self) -> None:
        """Release any resources held by the gateway."""
