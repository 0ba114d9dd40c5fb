"""
GitHub enrichment for landscape nodes.

Nodes carrying a `github` property get repository metadata merged into their
properties: description, creation date (date of the first commit when it can
be found, repository creation otherwise), stars, forks and license name.

Requests go through a small thread pool with a randomized pause after each
node, retry with exponential backoff and wait out the rate limit when it
runs low. Fetching happens on worker threads; the graph itself is only
updated from the calling thread.
"""

import logging
import random
import re
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

import requests
from pydantic import BaseModel, Field
from tenacity import Retrying, before_sleep_log, retry_if_exception_type, stop_after_attempt, wait_exponential

from ..config import (
    ENRICH_CONCURRENCY,
    ENRICH_MAX_DELAY,
    ENRICH_MIN_DELAY,
    ENRICH_RETRIES,
    GITHUB_API_URL,
    GITHUB_USER_AGENT,
    RATE_LIMIT_FLOOR,
)
from ..core.exceptions import EnrichmentError
from ..core.graph import LandscapeGraph
from ..core.types import Node

logger = logging.getLogger(__name__)

GITHUB_REPO_RE = re.compile(r"github\.com/([^/]+)/([^/#?]+)")
LAST_PAGE_RE = re.compile(r"[?&]page=(\d+)>;\s*rel=\"last\"")

# Failures worth another attempt: HTTP/network errors and bad payloads
RETRYABLE = (EnrichmentError, requests.RequestException, ValueError)


class EnrichmentReport(BaseModel):
    total: int = 0
    success: int = 0
    failed: int = 0
    errors: Dict[str, str] = Field(default_factory=dict)


def extract_repo_info(url: str) -> Optional[Tuple[str, str]]:
    """Return (owner, repo) from a GitHub URL, or None if it is not one."""
    match = GITHUB_REPO_RE.search(url or "")
    if not match:
        return None
    repo = re.sub(r"\.git$", "", match.group(2))
    return match.group(1), repo


class GitHubClient:
    """Minimal authenticated client for the GitHub REST API."""

    def __init__(
        self,
        token: Optional[str],
        api_url: str = GITHUB_API_URL,
        timeout: float = 30.0,
        retries: int = ENRICH_RETRIES,
        sleep: Callable[[float], None] = time.sleep,
        session: Optional[requests.Session] = None,
    ):
        if not token:
            raise EnrichmentError("GITHUB_TOKEN not set in environment")

        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.retries = retries
        self._sleep = sleep
        self.session = session or requests.Session()
        self.session.headers.update({
            "Authorization": f"token {token}",
            "User-Agent": GITHUB_USER_AGENT,
            "Accept": "application/vnd.github.v3+json",
        })

    def _get(self, url: str) -> Tuple[Any, Mapping[str, str]]:
        """GET url and return (decoded JSON body, headers)."""
        try:
            resp = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            raise EnrichmentError(f"GET {url} failed: {e}") from e
        if not resp.ok:
            raise EnrichmentError(f"GET {url} failed: {resp.status_code} {resp.reason}")
        return resp.json(), resp.headers

    def _respect_rate_limit(self, headers: Mapping[str, str]) -> None:
        remaining = headers.get("x-ratelimit-remaining")
        reset = headers.get("x-ratelimit-reset")
        if remaining is None or reset is None:
            return
        if int(remaining) < RATE_LIMIT_FLOOR:
            wait = max(0, int(reset) - int(time.time()) + 5)
            logger.warning("Rate limit low. Waiting %ds...", wait)
            self._sleep(wait)

    def fetch_repo(self, owner: str, repo: str) -> Dict[str, Any]:
        """
        Fetch enrichment properties for one repository.

        Retryable failures are attempted `retries` times with waits of 1s,
        2s, 4s, ... in between; the last error propagates.
        """
        retrying = Retrying(
            stop=stop_after_attempt(self.retries),
            wait=wait_exponential(multiplier=1, max=30),
            retry=retry_if_exception_type(RETRYABLE),
            sleep=self._sleep,
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )
        return retrying(self._fetch_repo_once, owner, repo)

    def _fetch_repo_once(self, owner: str, repo: str) -> Dict[str, Any]:
        repo_url = f"{self.api_url}/repos/{owner}/{repo}"
        repo_data, headers = self._get(repo_url)
        if not isinstance(repo_data, dict):
            raise EnrichmentError(f"Unexpected repository payload for {owner}/{repo}")
        self._respect_rate_limit(headers)

        creation_date = repo_data.get("created_at")

        # With one commit per page, the last page holds the first commit
        _, commit_headers = self._get(f"{repo_url}/commits?per_page=1&page=1")
        last_page = LAST_PAGE_RE.search(commit_headers.get("link", ""))
        if last_page:
            commits, _ = self._get(f"{repo_url}/commits?per_page=1&page={last_page.group(1)}")
            if isinstance(commits, list) and commits and isinstance(commits[0], dict):
                author = (commits[0].get("commit") or {}).get("author") or {}
                if author.get("date"):
                    creation_date = author["date"]

        license_info = repo_data.get("license") or {}
        return {
            "github_description": repo_data.get("description") or "",
            "github_creation": creation_date,
            "stars": repo_data.get("stargazers_count"),
            "forks": repo_data.get("forks_count"),
            "license": license_info.get("name") or "",
        }


def nodes_needing_enrichment(graph: LandscapeGraph) -> List[Node]:
    """Nodes with a github URL that lack a description or creation date."""
    return [
        node
        for node in graph.iter_nodes()
        if node.properties.get("github")
        and (not node.properties.get("github_description") or not node.properties.get("github_creation"))
    ]


def enrich_graph(
    graph: LandscapeGraph,
    client: GitHubClient,
    concurrency: int = ENRICH_CONCURRENCY,
    min_delay: float = ENRICH_MIN_DELAY,
    max_delay: float = ENRICH_MAX_DELAY,
    progress: Optional[Callable[[int, int], None]] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> EnrichmentReport:
    """
    Enrich every node that needs it.

    A failing node is counted and logged; it never aborts the run.
    `progress(done, total)` is called after each node.
    """
    pending = nodes_needing_enrichment(graph)
    report = EnrichmentReport(total=len(pending))

    def work(node: Node) -> Tuple[str, Optional[Dict[str, Any]], Optional[str]]:
        try:
            info = extract_repo_info(node.properties["github"])
            if info is None:
                raise EnrichmentError(f"Invalid GitHub URL: {node.properties['github']}")
            return node.id, client.fetch_repo(*info), None
        except Exception as e:
            # recorded per node; the remaining nodes still run
            logger.debug("Enrichment error for %s", node.id, exc_info=True)
            return node.id, None, str(e) or type(e).__name__
        finally:
            sleep(random.uniform(min_delay, max_delay))

    with ThreadPoolExecutor(max_workers=max(1, concurrency)) as pool:
        for done, (node_id, data, failure) in enumerate(pool.map(work, pending), start=1):
            if failure is None and data is not None:
                graph.update_node_properties(node_id, data)
                report.success += 1
            else:
                report.failed += 1
                report.errors[node_id] = failure or "no data"
                logger.debug("Enrichment failed for %s: %s", node_id, failure)
            if progress:
                progress(done, report.total)

    logger.info("Enriched %d of %d nodes (%d failed)", report.success, report.total, report.failed)
    return report
