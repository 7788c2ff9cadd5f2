"""Wiring of infrastructure adapters into the application services."""
from projects_api.application.enrichment_pipeline import EnrichmentPipeline
from projects_api.application.project_cache import ProjectCache
from projects_api.application.similarity import SimilarityEngine
from projects_api.config import Settings
from projects_api.infrastructure.github_client import GitHubRestClient
from projects_api.infrastructure.github_scraper import GitHubPageScraper


def build_pipeline(settings: Settings) -> EnrichmentPipeline:
    source = GitHubRestClient(
        account=settings.github_account,
        api_url=settings.github_api_url,
        max_attempts=settings.github_fetch_attempts,
        timeout_seconds=settings.http_timeout_seconds
    )
    scraper = GitHubPageScraper(
        web_url=settings.github_web_url,
        timeout_seconds=settings.http_timeout_seconds
    )
    return EnrichmentPipeline(source, scraper, concurrency=settings.scrape_concurrency)


def build_project_cache(settings: Settings) -> ProjectCache:
    """Build the cache instance; callers keep exactly one per process."""
    return ProjectCache(build_pipeline(settings), SimilarityEngine())
