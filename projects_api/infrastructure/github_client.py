"""GitHub REST API client listing an account's repositories, with optional retry."""
import asyncio
import logging
from typing import Any, Dict, List, Optional
import aiohttp
from tenacity import (
    AsyncRetrying,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential
)
from projects_api.domain.exceptions import UpstreamUnavailable
from projects_api.domain.github_interface import IRepositorySource
from projects_api.domain.models import RawRepository
from projects_api.domain.normalization import parse_timestamp


logger = logging.getLogger(__name__)


def _is_transient(error: BaseException) -> bool:
    if isinstance(error, UpstreamUnavailable):
        return error.is_transient
    return isinstance(error, (aiohttp.ClientError, asyncio.TimeoutError))


def remove_forked(repositories: List[RawRepository]) -> List[RawRepository]:
    """Drop repositories that are forks of someone else's project."""
    return [repository for repository in repositories if not repository.fork]


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def to_raw_repository(node: Dict[str, Any]) -> Optional[RawRepository]:
    """Transform one REST API record into a domain entity.

    Returns None for records without an owner login or a name, or whose
    owner is not an object.
    """
    owner_node = node.get("owner")
    if not isinstance(owner_node, dict):
        return None
    owner = _text(owner_node.get("login"))
    name = _text(node.get("name"))
    if not owner or not name:
        return None

    return RawRepository(
        owner=owner,
        name=name,
        full_name=_text(node.get("full_name")) or f"{owner}/{name}",
        html_url=_text(node.get("html_url")),
        description=_text(node.get("description")),
        language=_text(node.get("language")),
        homepage=_text(node.get("homepage")) or None,
        fork=bool(node.get("fork", False)),
        created_at=parse_timestamp(node.get("created_at")),
        updated_at=parse_timestamp(node.get("updated_at"))
    )


class GitHubRestClient(IRepositorySource):
    """GitHub REST API client for one account's public repositories.

    Implements the IRepositorySource port. Every failure is converted into an
    empty result at the ``fetch_all`` boundary.
    """

    def __init__(
        self,
        account: str,
        api_url: str = "https://api.github.com",
        max_attempts: int = 1,
        timeout_seconds: Optional[float] = 30,
        session: Optional[aiohttp.ClientSession] = None
    ):
        """Initialize GitHub client.

        Args:
            account: GitHub user whose repositories are listed
            api_url: Base URL of the REST API
            max_attempts: Attempts per listing; 1 disables retries
            timeout_seconds: Total timeout per request, None for no limit
            session: Pre-built session; the client owns one it creates itself
        """
        self._account = account
        self._api_url = api_url.rstrip("/")
        self._max_attempts = max(1, max_attempts)
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self._session = session
        self._owns_session = session is None

    @property
    def listing_url(self) -> str:
        return f"{self._api_url}/users/{self._account}/repos"

    async def _init_session(self) -> aiohttp.ClientSession:
        """Initialize the HTTP session (lazy initialization)."""
        if self._session is None:
            self._session = aiohttp.ClientSession(
                headers={
                    "Accept": "application/vnd.github+json",
                    "User-Agent": "projects-api"
                },
                timeout=self._timeout
            )
        return self._session

    async def _request_repositories(self) -> List[Dict[str, Any]]:
        """GET the listing endpoint once.

        Raises:
            UpstreamUnavailable: On transport errors, non-200 responses or an
                unexpected payload
        """
        session = await self._init_session()
        try:
            async with session.get(self.listing_url) as response:
                if response.status != 200:
                    raise UpstreamUnavailable(
                        f"GitHub responded {response.status} for {self.listing_url}",
                        status=response.status
                    )
                payload = await response.json()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise UpstreamUnavailable(f"Error requesting {self.listing_url}: {e}") from e

        if not isinstance(payload, list):
            raise UpstreamUnavailable(
                f"Unexpected payload from {self.listing_url}", status=200
            )
        return payload

    async def fetch_all(self) -> List[RawRepository]:
        """Fetch the account's repositories, forks removed.

        Returns:
            RawRepository entities, or an empty list when GitHub is unavailable
        """
        logger.info(f"Fetching repositories of {self._account} from GitHub")

        try:
            async for attempt in AsyncRetrying(
                retry=retry_if_exception(_is_transient),
                stop=stop_after_attempt(self._max_attempts),
                wait=wait_exponential(multiplier=0.5, max=8),
                reraise=True
            ):
                with attempt:
                    nodes = await self._request_repositories()
        except UpstreamUnavailable as e:
            logger.warning(f"Repository listing unavailable: {e}")
            return []
        except Exception as e:
            logger.error(f"Unexpected error listing repositories: {e}", exc_info=True)
            return []

        repositories = [
            repository
            for repository in (
                to_raw_repository(node) for node in nodes if isinstance(node, dict)
            )
            if repository is not None
        ]
        repositories = remove_forked(repositories)

        logger.info(f"Fetched {len(repositories)} repositories (forks excluded)")
        return repositories

    async def close(self) -> None:
        """Close the HTTP session if this client created it."""
        if self._session is not None and self._owns_session:
            await self._session.close()
            self._session = None
