"""Render wallet engine results for the terminal."""

from __future__ import annotations

import json
from enum import Enum
from typing import Any

import yaml


class OutputFormat(Enum):
    YAML = "yaml"
    JSON = "json"


JSON_INDENT = 2


def render_result(value: Any, output_format: OutputFormat) -> str | None:
    """Return ``value`` as text, or ``None`` when there is nothing to print."""

    if value is None:
        return None
    if output_format is OutputFormat.JSON:
        return json.dumps(value, indent=JSON_INDENT, ensure_ascii=False)
    text = yaml.safe_dump(
        value,
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
    )
    # Plain scalars come back with an explicit document end marker.
    if text.endswith("\n...\n"):
        text = text[: -len("...\n")]
    return text.rstrip("\n")
