"""Output formatter registry.

WHY: The CLI needs a single lookup to find a formatter by name. A
central dict makes adding a format one import and one line.

HOW: FORMATTERS maps string keys to formatter *classes* (not instances).
Callers instantiate as needed: ``formatter = FORMATTERS["json"]()``.

RULES:
- Keys are short lowercase identifiers (used in the --formats flag)
- Values are BaseFormatter subclasses (not instances)
- Every formatter listed here must be importable without side effects
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from bundle_extractor.formatters.json_manifest import JSONManifestFormatter
from bundle_extractor.formatters.module_files import ModuleFilesFormatter
from bundle_extractor.formatters.summary import SummaryFormatter

if TYPE_CHECKING:
    from bundle_extractor.formatters.base import BaseFormatter

FORMATTERS: dict[str, type[BaseFormatter]] = {
    "json": JSONManifestFormatter,
    "summary": SummaryFormatter,
    "files": ModuleFilesFormatter,
}
