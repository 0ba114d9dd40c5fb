"""
Global Configuration and Defaults.

Constants used across the search session, the HTML export and the
maintenance tools, plus an optional per-project settings file
(.landscape/config.yaml) whose values can be overridden from the
environment.
"""

import logging
import os
from pathlib import Path
from typing import Dict, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)

# --- Search ---
# Depth used when the depth control is absent
DEFAULT_MAX_DEPTH = 3

# Padding (px) applied when fitting the view around the highlight focus
FIT_PADDING = 50

# --- Rendering ---
DEFAULT_LAYOUT = "cose-bilkent"
DEFAULT_GRAPH_FILE = "data.json"

# Per-type visual attributes handed to the renderer
NODE_STYLES: Dict[str, Dict[str, str]] = {
    "Company": {"background-color": "#66ddff", "shape": "round-hexagon"},
    "Product": {"background-color": "#66aaff", "shape": "ellipse"},
    "Investor": {"background-color": "#ff6666", "shape": "round-rectangle"},
    "UseCase": {"background-color": "#a126c6", "shape": "round-pentagon"},
    "Protocol": {"background-color": "#239b56", "shape": "round-triangle"},
    "Service": {"background-color": "#f39c12", "shape": "round-octagon"},
}

# --- GitHub enrichment ---
GITHUB_API_URL = "https://api.github.com"
GITHUB_USER_AGENT = "AI-Agent-Landscape-Script"
ENRICH_CONCURRENCY = 3
ENRICH_MIN_DELAY = 0.5  # seconds
ENRICH_MAX_DELAY = 1.5  # seconds
ENRICH_RETRIES = 3
# Wait for the rate-limit reset once fewer requests than this remain
RATE_LIMIT_FLOOR = 5

# --- Link verification ---
LINK_CHECK_TIMEOUT = 10.0  # seconds
LINK_MAX_REDIRECTS = 5
LINK_USER_AGENT = "Mozilla/5.0 (Landscape Link Verification Tool)"

DEFAULT_CONFIG_PATH = Path(".landscape/config.yaml")


class Settings(BaseModel):
    """Per-project settings, read from YAML and the environment."""
    graph_file: str = DEFAULT_GRAPH_FILE
    max_depth: int = Field(default=DEFAULT_MAX_DEPTH, ge=0)
    layout: str = DEFAULT_LAYOUT
    github_token: Optional[str] = None
    enrich_concurrency: int = Field(default=ENRICH_CONCURRENCY, ge=1)
    enrich_min_delay: float = Field(default=ENRICH_MIN_DELAY, ge=0)
    enrich_max_delay: float = Field(default=ENRICH_MAX_DELAY, ge=0)
    link_timeout: float = Field(default=LINK_CHECK_TIMEOUT, gt=0)


def load_settings(config_path: Optional[Path] = None) -> Settings:
    """
    Load settings from the YAML file, then apply environment overrides.

    A missing file yields the defaults. A file that is not valid YAML or
    holds invalid values raises ConfigError.
    """
    from .core.exceptions import ConfigError

    path = config_path or DEFAULT_CONFIG_PATH
    data: Dict[str, object] = {}

    if path.exists():
        try:
            with open(path, "r") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"Expected a mapping in {path}")
        logger.debug("Loaded settings from %s", path)

    env_overrides = {
        "graph_file": os.getenv("LANDSCAPE_GRAPH_FILE"),
        "max_depth": os.getenv("LANDSCAPE_MAX_DEPTH"),
        "github_token": os.getenv("GITHUB_TOKEN"),
    }
    data.update({k: v for k, v in env_overrides.items() if v})

    try:
        return Settings(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid settings: {e}") from e
