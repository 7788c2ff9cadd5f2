"""Enrichment pipeline turning raw GitHub repositories into projects."""
import asyncio
import logging
import time
from typing import Awaitable, List, Optional, TypeVar
from projects_api.domain.github_interface import IMetadataScraper, IRepositorySource
from projects_api.domain.models import (
    EnrichedProject,
    ProjectCollection,
    RawRepository,
    README_UNAVAILABLE
)
from projects_api.domain.normalization import format_date, normalize_language, unique_tags


logger = logging.getLogger(__name__)

T = TypeVar("T")


def order_by_last_update(repositories: List[RawRepository]) -> List[RawRepository]:
    """Most recently updated first; ties keep the source's order."""
    return sorted(repositories, key=lambda repository: repository.updated_at, reverse=True)


def to_project(repository: RawRepository, tags: List[str]) -> EnrichedProject:
    """Build a project with normalized fields and no README yet."""
    return EnrichedProject(
        owner=repository.owner,
        name=repository.name,
        full_name=repository.full_name,
        description=repository.description,
        url=repository.html_url,
        homepage=repository.homepage,
        language=normalize_language(repository.language),
        created_at=format_date(repository.created_at),
        updated_at=format_date(repository.updated_at),
        readme=README_UNAVAILABLE,
        tags=tuple(unique_tags(tags))
    )


class EnrichmentPipeline:
    """Application service producing the ordered, enriched project collection.

    Orchestrates the repository source and the metadata scraper. A scrape
    failure only ever degrades the affected project; it is never dropped.
    """

    def __init__(
        self,
        source: IRepositorySource,
        scraper: IMetadataScraper,
        concurrency: int = 8
    ):
        """Initialize the pipeline.

        Args:
            source: Repository listing implementation
            scraper: Tag and README scraper implementation
            concurrency: Maximum in-flight scrape requests, 0 for no limit
        """
        self._source = source
        self._scraper = scraper
        self._concurrency = concurrency

    async def _bounded(
        self, semaphore: Optional[asyncio.Semaphore], call: Awaitable[T]
    ) -> T:
        if semaphore is None:
            return await call
        async with semaphore:
            return await call

    async def _tags_for(self, repository: RawRepository) -> List[str]:
        try:
            return await self._scraper.fetch_tags(repository.html_url)
        except Exception as e:
            logger.warning(f"Tag scrape failed for {repository.full_name}: {e}")
            return []

    async def _readme_for(self, project: EnrichedProject) -> str:
        try:
            return await self._scraper.fetch_readme(project.url)
        except Exception as e:
            logger.warning(f"README scrape failed for {project.full_name}: {e}")
            return README_UNAVAILABLE

    async def _attach_tags(
        self, semaphore: Optional[asyncio.Semaphore], repository: RawRepository
    ) -> EnrichedProject:
        tags = await self._bounded(semaphore, self._tags_for(repository))
        return to_project(repository, tags)

    async def _attach_readme(
        self, semaphore: Optional[asyncio.Semaphore], project: EnrichedProject
    ) -> EnrichedProject:
        readme = await self._bounded(semaphore, self._readme_for(project))
        return project.with_readme(readme)

    async def run(self) -> ProjectCollection:
        """Fetch, order and enrich every repository.

        Returns:
            Projects ordered by descending last update. Empty when the
            repository listing is unavailable.
        """
        start_time = time.time()
        semaphore = asyncio.Semaphore(self._concurrency) if self._concurrency > 0 else None

        repositories = order_by_last_update(await self._source.fetch_all())
        if not repositories:
            logger.warning("No repositories to enrich")
            return ()

        # gather() returns results in argument order, whatever the completion order
        tagged = await asyncio.gather(
            *(self._attach_tags(semaphore, repository) for repository in repositories)
        )
        projects = await asyncio.gather(
            *(self._attach_readme(semaphore, project) for project in tagged)
        )

        duration = time.time() - start_time
        logger.info(f"Enriched {len(projects)} projects in {duration:.2f} seconds")
        return tuple(projects)

    async def close(self) -> None:
        """Close connections."""
        await self._source.close()
        await self._scraper.close()
