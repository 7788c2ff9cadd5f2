"""Tests for the GitHub page scraper."""
import asyncio
from projects_api.domain.models import README_UNAVAILABLE
from projects_api.infrastructure.github_scraper import (
    GitHubPageScraper,
    extract_raw_readme_path,
    extract_topic_tags
)
from tests._fixtures.fakes import FakeResponse, FakeSession


REPO_URL = "https://github.com/octocat/hello"

REPO_PAGE = """
<html><body>
  <div class="topics">
    <a class="topic-tag topic-tag-link" href="/topics/python">
      python
    </a>
    <a data-octo-click="topic_click" href="/topics/fastapi">fastapi</a>
    <a class="topic-tag" href="/topics/python">python</a>
    <a class="topic-tag" href="/topics/empty">  </a>
    <a class="other" href="/topics/ignored">ignored</a>
  </div>
</body></html>
"""

README_PAGE = """
<html><body>
  <a id="raw-url" href="/octocat/hello/raw/main/README.md"
     data-permalink-href="/octocat/hello/raw/abc123/README.md">Raw</a>
</body></html>
"""


def test_extract_topic_tags_deduplicates_and_strips():
    """Test topic tags are stripped and deduplicated."""
    assert extract_topic_tags(REPO_PAGE) == ["python", "fastapi"]


def test_extract_topic_tags_without_markers():
    """Test a page without topics has no tags."""
    assert extract_topic_tags("<html><body><p>no topics</p></body></html>") == []


def test_extract_raw_readme_path_prefers_permalink():
    """Test the permalink is preferred for the raw README link."""
    assert extract_raw_readme_path(README_PAGE) == "/octocat/hello/raw/abc123/README.md"


def test_extract_raw_readme_path_falls_back_to_href():
    """Test the raw link href is used without a permalink."""
    html = '<a id="raw-url" href="/octocat/hello/raw/main/README.md">Raw</a>'

    assert extract_raw_readme_path(html) == "/octocat/hello/raw/main/README.md"


def test_extract_raw_readme_path_missing():
    """Test a page without a raw link yields None."""
    assert extract_raw_readme_path("<html></html>") is None


def test_fetch_tags_reads_repository_page():
    """Test tags are read from the repository page."""
    session = FakeSession({REPO_URL: FakeResponse(200, REPO_PAGE)})
    scraper = GitHubPageScraper(session=session)

    assert asyncio.run(scraper.fetch_tags(REPO_URL)) == ["python", "fastapi"]


def test_fetch_tags_degrades_on_transport_error():
    """Test a transport error degrades tag scraping."""
    scraper = GitHubPageScraper(session=FakeSession())

    assert asyncio.run(scraper.fetch_tags(REPO_URL)) == []


def test_fetch_tags_degrades_on_error_status():
    """Test an error status degrades tag scraping."""
    session = FakeSession({REPO_URL: FakeResponse(404, REPO_PAGE)})
    scraper = GitHubPageScraper(session=session)

    assert asyncio.run(scraper.fetch_tags(REPO_URL)) == []


def test_fetch_readme_follows_raw_link():
    """Test the README is fetched through its raw link."""
    raw_url = "https://github.com/octocat/hello/raw/abc123/README.md"
    session = FakeSession({
        f"{REPO_URL}/blob/main/README.md": FakeResponse(200, README_PAGE),
        raw_url: FakeResponse(200, "# Hello\n"),
    })
    scraper = GitHubPageScraper(session=session)

    assert asyncio.run(scraper.fetch_readme(REPO_URL)) == "# Hello\n"
    assert session.requested == [f"{REPO_URL}/blob/main/README.md", raw_url]


def test_fetch_readme_without_readme_page():
    """Test a missing README page yields an empty README."""
    session = FakeSession({f"{REPO_URL}/blob/main/README.md": FakeResponse(404, "")})
    scraper = GitHubPageScraper(session=session)

    assert asyncio.run(scraper.fetch_readme(REPO_URL)) == README_UNAVAILABLE


def test_fetch_readme_without_raw_link():
    """Test a README page without a raw link yields an empty README."""
    session = FakeSession({f"{REPO_URL}/blob/main/README.md": FakeResponse(200, "<html></html>")})
    scraper = GitHubPageScraper(session=session)

    assert asyncio.run(scraper.fetch_readme(REPO_URL)) == README_UNAVAILABLE


def test_fetch_readme_when_raw_fetch_fails():
    """Test a failed raw fetch yields an empty README."""
    session = FakeSession({f"{REPO_URL}/blob/main/README.md": FakeResponse(200, README_PAGE)})
    scraper = GitHubPageScraper(session=session)

    assert asyncio.run(scraper.fetch_readme(REPO_URL)) == README_UNAVAILABLE


def test_close_leaves_injected_session_open():
    """Test closing the scraper leaves an injected session open."""
    session = FakeSession()
    asyncio.run(GitHubPageScraper(session=session).close())

    assert session.closed is False
