"""Similar-project inference based on shared tags and languages."""
import logging
from typing import List, Optional, Sequence
from projects_api.domain.models import EnrichedProject, ProjectCollection, SimilarityEdge


logger = logging.getLogger(__name__)


def first_shared_tag(tags: Sequence[str], other_tags: Sequence[str]) -> Optional[str]:
    """First of ``tags``, in order, that also appears in ``other_tags``."""
    for tag in tags:
        if tag in other_tags:
            return tag
    return None


def tag_matching_language(tags: Sequence[str], language: str) -> Optional[str]:
    for tag in tags:
        if tag == language:
            return tag
    return None


def similarity_reason(project: EnrichedProject, other: EnrichedProject) -> Optional[str]:
    """Why ``other`` is related to ``project``, or None when it is not.

    The first matching rule wins:

    1. both have tags and share one: the first of ``project``'s shared tags;
    2. both use the same, non-empty language: that language;
    3. either has tags: a tag of ``other`` naming ``project``'s language,
       else a tag of ``project`` naming ``other``'s language.

    Rule 3 is only reached when the languages differ or are unknown.
    Unlike a plain equality check, two projects with no language are not
    related through rule 2.
    """
    if project.tags and other.tags:
        shared = first_shared_tag(project.tags, other.tags)
        if shared is not None:
            return shared

    if project.language and other.language == project.language:
        return other.language

    if project.tags or other.tags:
        return (
            tag_matching_language(other.tags, project.language)
            or tag_matching_language(project.tags, other.language)
        )

    return None


class SimilarityEngine:
    """Annotates every project with the projects it resembles.

    Edges are directional and computed independently per project, so A may
    point at B with a different reason than B points at A.
    """

    def find_similar(
        self, project: EnrichedProject, projects: Sequence[EnrichedProject]
    ) -> List[SimilarityEdge]:
        edges: List[SimilarityEdge] = []
        for other in projects:
            if other.name == project.name:
                continue
            reason = similarity_reason(project, other)
            if reason is not None:
                edges.append(
                    SimilarityEdge(target_name=other.name, reason=reason, target_url=other.url)
                )
        return edges

    def annotate(self, collection: ProjectCollection) -> ProjectCollection:
        """Return a new collection, same order, with ``similar_to`` populated."""
        annotated = tuple(
            project.with_similar_to(tuple(self.find_similar(project, collection)))
            for project in collection
        )
        edge_count = sum(len(project.similar_to) for project in annotated)
        logger.info(f"Found {edge_count} similarity edges across {len(annotated)} projects")
        return annotated
