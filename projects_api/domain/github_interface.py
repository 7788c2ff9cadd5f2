"""GitHub interfaces (ports) for fetching repository data and scraped metadata.

This is the anti-corruption layer that shields the domain from GitHub API and
page-markup specifics.
"""
from abc import ABC, abstractmethod
from typing import List
from projects_api.domain.models import RawRepository


class IRepositorySource(ABC):
    """Abstract interface for listing an account's repositories."""

    @abstractmethod
    async def fetch_all(self) -> List[RawRepository]:
        """Fetch every non-fork repository of the configured account.

        Returns:
            RawRepository entities in the platform's own order. An empty list
            means the listing is temporarily unavailable; implementations
            must not raise.
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections."""
        pass


class IMetadataScraper(ABC):
    """Abstract interface for metadata only available from rendered pages.

    Both operations are best-effort and independent of each other.
    """

    @abstractmethod
    async def fetch_tags(self, repo_url: str) -> List[str]:
        """Return the repository's topic tags, deduplicated, or [] on failure."""
        pass

    @abstractmethod
    async def fetch_readme(self, repo_url: str) -> str:
        """Return the raw README text, or ``README_UNAVAILABLE`` on failure."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections."""
        pass
