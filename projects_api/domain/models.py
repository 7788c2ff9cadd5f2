"""Domain models representing core business entities."""
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional, Tuple


GITHUB_ORIGIN = "github"
README_UNAVAILABLE = "none"


@dataclass(frozen=True)
class RawRepository:
    """Immutable domain entity for a repository as listed by the GitHub API.

    Using frozen dataclass for immutability following clean architecture principles.
    """
    owner: str
    name: str
    full_name: str
    html_url: str
    description: str
    language: str
    created_at: datetime
    updated_at: datetime
    homepage: Optional[str] = None
    fork: bool = False


@dataclass(frozen=True)
class SimilarityEdge:
    """Directed link from one project to another, with a single reason token."""
    target_name: str
    reason: str
    target_url: str


@dataclass(frozen=True)
class EnrichedProject:
    """Repository augmented with scraped tags/README and normalized fields.

    ``tags`` and ``readme`` are always present: an empty tuple and the
    ``README_UNAVAILABLE`` sentinel stand in for data that could not be scraped.
    """
    owner: str
    name: str
    full_name: str
    description: str
    url: str
    language: str
    created_at: str
    updated_at: str
    homepage: Optional[str] = None
    readme: str = README_UNAVAILABLE
    tags: Tuple[str, ...] = ()
    similar_to: Tuple[SimilarityEdge, ...] = ()
    origin: str = GITHUB_ORIGIN

    def with_readme(self, readme: str) -> 'EnrichedProject':
        """Returns a new EnrichedProject carrying the given README text."""
        return replace(self, readme=readme)

    def with_similar_to(self, edges: Tuple[SimilarityEdge, ...]) -> 'EnrichedProject':
        """Returns a new EnrichedProject with its similarity edges set."""
        return replace(self, similar_to=tuple(edges))


ProjectCollection = Tuple[EnrichedProject, ...]
