"""Project catalog interface (port) consumed by the serving layer.

This is the port in hexagonal architecture that the application cache implements.
"""
from abc import ABC, abstractmethod
from typing import Optional
from projects_api.domain.models import EnrichedProject, ProjectCollection


class IProjectCatalog(ABC):
    """Abstract interface for read access to the aggregated projects."""

    @abstractmethod
    async def list_all(self) -> ProjectCollection:
        """Get every project, most recently updated first.

        An empty collection means the upstream listing is unavailable right
        now; it is never a cached final answer.
        """
        pass

    @abstractmethod
    async def find_by_name(self, name: str) -> Optional[EnrichedProject]:
        """Find a project by name, ignoring case. Returns None when absent."""
        pass

    @abstractmethod
    async def find_by_url_fragment(self, fragment: str) -> Optional[EnrichedProject]:
        """Find the first project whose URL contains ``fragment``.

        Returns None when no project matches.
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections."""
        pass
