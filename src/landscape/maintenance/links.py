"""
Link verification and graph health checks.

Collects the `url` and `github` properties of every node, repairs common
formatting mistakes, requests each link over HTTP and reports which ones are
valid, malformed, broken or were fixed. The same report lists nodes sharing
a label and nodes without any edge.
"""

import json
import logging
import re
from collections import defaultdict
from datetime import date, datetime, timezone
from http import HTTPStatus
from pathlib import Path
from typing import Callable, Dict, List, Literal, Optional, Tuple, Union
from urllib.parse import urlparse, urlsplit, urlunsplit

import requests
from pydantic import BaseModel, Field

from ..config import LINK_CHECK_TIMEOUT, LINK_MAX_REDIRECTS, LINK_USER_AGENT
from ..core.graph import LandscapeGraph

logger = logging.getLogger(__name__)

LinkKind = Literal["all", "github", "website"]

COMMON_TYPOS: Dict[str, str] = {
    "github.con": "github.com",
    "githb.com": "github.com",
    "gitub.com": "github.com",
    "gihub.com": "github.com",
    "goole.com": "google.com",
    "googl.com": "google.com",
}


class LinkRecord(BaseModel):
    node_id: str
    label: str
    type: str
    url: str
    url_type: Literal["main", "github"]
    property_name: Literal["url", "github"]


class LinkCheck(BaseModel):
    status: int = 0
    ok: bool = False
    status_text: str = ""
    redirect_url: Optional[str] = None
    redirect_count: int = 0


class LinkOutcome(BaseModel):
    record: LinkRecord
    url: str
    original_url: Optional[str] = None
    status: int = 0
    error: str = ""
    redirect_url: Optional[str] = None
    redirect_count: int = 0


class DuplicateGroup(BaseModel):
    label: str
    count: int
    nodes: List[Dict[str, str]]


class OrphanNode(BaseModel):
    id: str
    label: str
    type: str


class VerificationReport(BaseModel):
    valid: List[LinkOutcome] = Field(default_factory=list)
    invalid: List[LinkOutcome] = Field(default_factory=list)
    broken: List[LinkOutcome] = Field(default_factory=list)
    fixed: List[LinkOutcome] = Field(default_factory=list)
    duplicates: List[DuplicateGroup] = Field(default_factory=list)
    orphans: List[OrphanNode] = Field(default_factory=list)

    def summary(self) -> Dict[str, int]:
        return {
            "total": len(self.valid) + len(self.invalid) + len(self.broken),
            "valid": len(self.valid),
            "invalid": len(self.invalid),
            "broken": len(self.broken),
            "fixed": len(self.fixed),
            "duplicate_labels": len(self.duplicates),
            "orphaned_nodes": len(self.orphans),
        }


# =============================================================================
# URL extraction and repair
# =============================================================================

def extract_urls(graph: LandscapeGraph, kind: LinkKind = "all") -> List[LinkRecord]:
    """Collect link properties; `website` keeps non-GitHub `url` values only."""
    records: List[LinkRecord] = []
    for node in graph.iter_nodes():
        props = node.properties
        base = {"node_id": node.id, "label": node.label, "type": node.type.value}

        url = props.get("url")
        if isinstance(url, str) and url.strip():
            on_github = "github.com" in url
            if kind == "all" or (kind == "github" and on_github) or (kind == "website" and not on_github):
                records.append(LinkRecord(**base, url=url, url_type="main", property_name="url"))

        github = props.get("github")
        if isinstance(github, str) and github.strip() and kind in ("all", "github"):
            records.append(LinkRecord(**base, url=github, url_type="github", property_name="github"))

    return records


def is_valid_url_format(url: str) -> bool:
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    return bool(parsed.scheme) and bool(parsed.netloc) and " " not in url.strip()


def attempt_url_fix(url: str) -> Tuple[bool, str]:
    """
    Repair common URL mistakes.

    Returns (changed, url). Applied in order: `ttps://` typo, missing
    scheme, http GitHub links, one trailing slash, doubled slashes in the
    path, known domain typos.
    """
    if not url:
        return False, url

    fixed = url.strip()

    if fixed.startswith("ttps://"):
        fixed = "https://" + fixed[len("ttps://"):]

    if not fixed.startswith(("http://", "https://")):
        fixed = "https://" + fixed

    if fixed.startswith("http://github.com"):
        fixed = "https://" + fixed[len("http://"):]

    if fixed.endswith("/") and not fixed.endswith("//"):
        fixed = fixed[:-1]

    # Only the path; query strings may legitimately hold "://"
    parts = urlsplit(fixed)
    if "//" in parts.path:
        fixed = urlunsplit(parts._replace(path=re.sub(r"/{2,}", "/", parts.path)))

    for typo, correction in COMMON_TYPOS.items():
        if typo in fixed:
            fixed = fixed.replace(typo, correction)

    return fixed != url, fixed


# =============================================================================
# HTTP checks
# =============================================================================

def _status_text(code: int) -> str:
    try:
        return HTTPStatus(code).phrase
    except ValueError:
        return "Unknown Status"


def check_url(
    url: str,
    timeout: float = LINK_CHECK_TIMEOUT,
    max_redirects: int = LINK_MAX_REDIRECTS,
    session: Optional[requests.Session] = None,
) -> LinkCheck:
    """
    GET url, following up to max_redirects redirects.

    Any status below 400 counts as reachable. Network failures, timeouts and
    unsupported URLs come back as a failed check with status 0 rather than
    raising.
    """
    session = session or requests.Session()
    session.max_redirects = max_redirects

    try:
        resp = session.get(url, timeout=timeout, headers={"User-Agent": LINK_USER_AGENT}, stream=True)
    except requests.TooManyRedirects:
        return LinkCheck(status_text="Too many redirects")
    except requests.Timeout:
        return LinkCheck(status_text="Request timed out")
    except requests.RequestException as e:
        return LinkCheck(status_text=str(e))

    try:
        redirects = len(resp.history)
        return LinkCheck(
            status=resp.status_code,
            ok=resp.status_code < 400,
            status_text=resp.reason or _status_text(resp.status_code),
            redirect_url=resp.url if redirects else None,
            redirect_count=redirects,
        )
    finally:
        resp.close()


# =============================================================================
# Graph health
# =============================================================================

def find_duplicate_nodes(graph: LandscapeGraph) -> List[DuplicateGroup]:
    """Groups of nodes sharing the same label."""
    by_label: Dict[str, List[Dict[str, str]]] = defaultdict(list)
    for node in graph.iter_nodes():
        by_label[node.label].append({"id": node.id, "type": node.type.value})

    return [
        DuplicateGroup(label=label, count=len(nodes), nodes=nodes)
        for label, nodes in by_label.items()
        if len(nodes) > 1
    ]


def find_orphaned_nodes(graph: LandscapeGraph) -> List[OrphanNode]:
    """Nodes with no incident edge."""
    return [
        OrphanNode(id=node.id, label=node.label, type=node.type.value)
        for node in graph.iter_nodes()
        if graph.degree(node.id) == 0
    ]


# =============================================================================
# Verification run
# =============================================================================

def verify_links(
    graph: LandscapeGraph,
    fix: bool = False,
    kind: LinkKind = "all",
    checker: Callable[[str], LinkCheck] = check_url,
    progress: Optional[Callable[[int, int], None]] = None,
) -> VerificationReport:
    """
    Verify every link in the graph.

    Malformed URLs are repaired when possible and then checked. With fix, the
    repaired URL is written back to the node's property.
    """
    report = VerificationReport()
    records = extract_urls(graph, kind)
    logger.info("Found %d URLs to verify", len(records))

    for done, record in enumerate(records, start=1):
        current = record.url
        original: Optional[str] = None

        if not is_valid_url_format(current):
            changed, candidate = attempt_url_fix(current)
            if not (changed and is_valid_url_format(candidate)):
                report.invalid.append(LinkOutcome(record=record, url=current, error="Invalid URL format"))
                if progress:
                    progress(done, len(records))
                continue

            original, current = current, candidate
            report.fixed.append(LinkOutcome(record=record, url=current, original_url=original))
            if fix:
                graph.update_node_properties(record.node_id, {record.property_name: current})

        result = checker(current)
        outcome = LinkOutcome(
            record=record,
            url=current,
            original_url=original,
            status=result.status,
            redirect_url=result.redirect_url,
            redirect_count=result.redirect_count,
        )
        if result.ok:
            report.valid.append(outcome)
        else:
            outcome.error = result.status_text
            report.broken.append(outcome)

        if progress:
            progress(done, len(records))

    report.duplicates = find_duplicate_nodes(graph)
    report.orphans = find_orphaned_nodes(graph)
    return report


def write_report(
    report: VerificationReport,
    directory: Union[str, Path] = ".",
    today: Optional[date] = None,
) -> Path:
    """Write the report as link-verification-YYYY-MM-DD.json."""
    day = today or date.today()
    out_path = Path(directory) / f"link-verification-{day.isoformat()}.json"
    payload = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "summary": report.summary(),
        **report.model_dump(mode="json"),
    }
    out_path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
    logger.info("Results exported to %s", out_path)
    return out_path


def fixed_dataset_path(graph_path: Union[str, Path]) -> Path:
    """data.json -> data-fixed.json"""
    path = Path(graph_path)
    return path.with_name(f"{path.stem}-fixed{path.suffix}")
