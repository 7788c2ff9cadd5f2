"""Best-effort scraper for metadata only rendered on GitHub's web pages.

Topics and the raw README link are not part of the unauthenticated REST
listing, so they are read from the HTML. The selectors below track GitHub's
markup and will silently stop matching when it changes; every operation then
degrades to its empty value.
"""
import asyncio
import logging
from typing import List, Optional
from urllib.parse import urljoin
import aiohttp
from bs4 import BeautifulSoup
from projects_api.domain.exceptions import ScrapeDegraded
from projects_api.domain.github_interface import IMetadataScraper
from projects_api.domain.models import README_UNAVAILABLE
from projects_api.domain.normalization import unique_tags


logger = logging.getLogger(__name__)


TOPIC_SELECTOR = "a[data-octo-click='topic_click'], a.topic-tag"
RAW_README_SELECTOR = "a#raw-url"
README_PATH = "blob/main/README.md"

BROWSER_HEADERS = {
    "User-Agent": "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36"
}


def extract_topic_tags(html: str) -> List[str]:
    """Return the topic tags found in a repository page, deduplicated."""
    soup = BeautifulSoup(html, "html.parser")
    return unique_tags(marker.get_text() for marker in soup.select(TOPIC_SELECTOR))


def extract_raw_readme_path(html: str) -> Optional[str]:
    """Return the href of the "Raw" button on a README blob page, if present."""
    soup = BeautifulSoup(html, "html.parser")
    raw_button = soup.select_one(RAW_README_SELECTOR)
    if raw_button is None:
        return None
    return raw_button.get("data-permalink-href") or raw_button.get("href") or None


class GitHubPageScraper(IMetadataScraper):
    """Reads topic tags and README text from rendered repository pages.

    Implements the IMetadataScraper port. Neither operation raises; the
    internal ``ScrapeDegraded`` errors are converted at the method boundary.
    """

    def __init__(
        self,
        web_url: str = "https://github.com",
        timeout_seconds: Optional[float] = 30,
        session: Optional[aiohttp.ClientSession] = None
    ):
        self._web_url = web_url.rstrip("/") + "/"
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self._session = session
        self._owns_session = session is None

    async def _init_session(self) -> aiohttp.ClientSession:
        """Initialize the HTTP session (lazy initialization)."""
        if self._session is None:
            self._session = aiohttp.ClientSession(
                headers=BROWSER_HEADERS,
                timeout=self._timeout
            )
        return self._session

    async def _get_text(self, url: str) -> str:
        """GET a page and return its body.

        Raises:
            ScrapeDegraded: When the page does not answer 200
        """
        session = await self._init_session()
        async with session.get(url) as response:
            if response.status != 200:
                raise ScrapeDegraded(f"{url} responded {response.status}")
            return await response.text()

    async def fetch_tags(self, repo_url: str) -> List[str]:
        try:
            html = await self._get_text(repo_url)
            return extract_topic_tags(html)
        except (ScrapeDegraded, aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.debug(f"No tags for {repo_url}: {e}")
            return []
        except Exception as e:
            logger.warning(f"Unexpected error scraping tags of {repo_url}: {e}")
            return []

    async def fetch_readme(self, repo_url: str) -> str:
        readme_page = f"{repo_url.rstrip('/')}/{README_PATH}"
        try:
            html = await self._get_text(readme_page)
            raw_path = extract_raw_readme_path(html)
            if raw_path is None:
                raise ScrapeDegraded(f"No raw link on {readme_page}")
            return await self._get_text(urljoin(self._web_url, raw_path))
        except (ScrapeDegraded, aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.debug(f"No README for {repo_url}: {e}")
            return README_UNAVAILABLE
        except Exception as e:
            logger.warning(f"Unexpected error scraping README of {repo_url}: {e}")
            return README_UNAVAILABLE

    async def close(self) -> None:
        """Close the HTTP session if this scraper created it."""
        if self._session is not None and self._owns_session:
            await self._session.close()
            self._session = None
