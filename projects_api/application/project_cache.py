"""Process-wide cache of the enriched, similarity-annotated projects."""
import asyncio
import logging
from typing import Optional
from projects_api.application.enrichment_pipeline import EnrichmentPipeline
from projects_api.application.similarity import SimilarityEngine
from projects_api.domain.catalog_interface import IProjectCatalog
from projects_api.domain.models import EnrichedProject, ProjectCollection


logger = logging.getLogger(__name__)


class ProjectCache(IProjectCatalog):
    """Holds the last successfully computed project collection.

    The cache is either empty or populated. An empty cache recomputes on the
    next read; a recomputation that yields no projects is returned but not
    stored, so a failing upstream is retried on every call.

    Recomputation is single-flight: concurrent readers of an empty cache wait
    on one refresh and share its snapshot.
    """

    def __init__(
        self,
        pipeline: EnrichmentPipeline,
        similarity: Optional[SimilarityEngine] = None
    ):
        """Initialize the cache.

        Args:
            pipeline: Enrichment pipeline producing fresh collections
            similarity: Engine annotating related projects
        """
        self._pipeline = pipeline
        self._similarity = similarity or SimilarityEngine()
        self._snapshot: ProjectCollection = ()
        self._lock = asyncio.Lock()
        self._refresh_count = 0

    @property
    def is_populated(self) -> bool:
        return bool(self._snapshot)

    @property
    def refresh_count(self) -> int:
        """Number of recomputations run so far."""
        return self._refresh_count

    async def _recompute(self) -> ProjectCollection:
        """Run the pipeline and similarity pass. Caller must hold the lock."""
        self._refresh_count += 1
        logger.info(f"Refreshing project cache (run {self._refresh_count})")

        collection = self._similarity.annotate(await self._pipeline.run())
        if collection:
            # Single assignment; readers never see a partial collection
            self._snapshot = collection
            logger.info(f"Project cache populated with {len(collection)} projects")
        else:
            logger.warning("Refresh produced no projects; cache stays empty")
        return collection

    async def get_all(self) -> ProjectCollection:
        """Return the cached collection, computing it when the cache is empty."""
        if self._snapshot:
            return self._snapshot

        async with self._lock:
            # Another caller may have populated the cache while we waited
            if self._snapshot:
                return self._snapshot
            return await self._recompute()

    async def refresh(self) -> ProjectCollection:
        """Recompute unconditionally, replacing the snapshot on success.

        The previous snapshot keeps being served to readers until the new
        one is ready. An empty result leaves the previous snapshot in place.
        """
        async with self._lock:
            collection = await self._recompute()
            return collection or self._snapshot

    def invalidate(self) -> None:
        """Drop the snapshot; the next read recomputes."""
        self._snapshot = ()
        logger.info("Project cache invalidated")

    async def get_by_name(self, name: str) -> Optional[EnrichedProject]:
        wanted = str(name).lower()
        for project in await self.get_all():
            if project.name.lower() == wanted:
                return project
        return None

    async def get_by_url(self, fragment: str) -> Optional[EnrichedProject]:
        fragment = str(fragment)
        for project in await self.get_all():
            if project.url == fragment or fragment in project.url:
                return project
        return None

    async def list_all(self) -> ProjectCollection:
        return await self.get_all()

    async def find_by_name(self, name: str) -> Optional[EnrichedProject]:
        return await self.get_by_name(name)

    async def find_by_url_fragment(self, fragment: str) -> Optional[EnrichedProject]:
        return await self.get_by_url(fragment)

    async def close(self) -> None:
        """Close connections."""
        await self._pipeline.close()
