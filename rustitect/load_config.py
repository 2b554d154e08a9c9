"""Logic for loading and merging configuration files."""

import copy
import logging
from pathlib import Path
from typing import Any

import yaml

from rustitect.deep_merge import deep_merge
from rustitect.tag_sections import DEFAULT_TAGS

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: dict[str, Any] = {
    "document": {
        "output_format": "asciidoc",
        "embed": "inline",
        "heading_level": 2,
        "diagram_reference": "diagram.puml",
    },
    "tags": list(DEFAULT_TAGS),
    "extract": {
        "strict": False,
    },
}


def load_config(path: str | None = None) -> dict[str, Any]:
    """Load configuration from a YAML file and merge it with defaults."""
    config = copy.deepcopy(DEFAULT_CONFIG)
    if path:
        p = Path(path)
        if p.exists():
            user_config = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
            if not isinstance(user_config, dict):
                msg = f"Configuration root must be a mapping: {path}"
                raise ValueError(msg)
            config = deep_merge(config, user_config)
        else:
            logger.warning("Config file not found, using defaults: %s", path)
    return config
