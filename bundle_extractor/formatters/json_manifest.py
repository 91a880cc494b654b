"""JSON manifest formatter: module id → module source.

WHY: Tools downstream of the extractor (source-map rebuilding, per-module
analysis, build diffing) want the whole result in one machine-readable
file.

HOW: Builds ``{"bundle", "module_count", "modules"}``, validates it with
jsonschema against modules_manifest_schema.json and serializes it.

RULES:
- Module ids are JSON object keys (strings), ordered as found
- Validate output against the schema before returning; raise on failure
- Output suffix: "-modules.json"
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema

from bundle_extractor.core.extractor import BundleSources
from bundle_extractor.formatters.base import BaseFormatter, FormatterOutput

SCHEMA_PATH = Path(__file__).resolve().parent / "modules_manifest_schema.json"

_CACHED_SCHEMA: dict[str, Any] | None = None


def _get_schema() -> dict[str, Any]:
    global _CACHED_SCHEMA
    if _CACHED_SCHEMA is None:
        with open(SCHEMA_PATH, encoding="utf-8") as f:
            _CACHED_SCHEMA = json.load(f)
    return _CACHED_SCHEMA


class JSONManifestFormatter(BaseFormatter):
    """Single JSON document holding every recovered module."""

    @property
    def name(self) -> str:
        return "JSON manifest"

    def format(self, result: BundleSources, bundle_name: str) -> list[FormatterOutput]:
        """Render the result as a JSON manifest.

        Raises:
            jsonschema.ValidationError: If the manifest does not conform
                to the schema.
        """
        manifest: dict[str, Any] = {
            "bundle": bundle_name,
            "module_count": len(result.modules),
            "modules": dict(result.modules),
        }
        jsonschema.validate(instance=manifest, schema=_get_schema())

        return [
            FormatterOutput(
                suffix="-modules.json",
                content=json.dumps(manifest, indent=2, ensure_ascii=False),
                media_type="application/json",
            )
        ]
