"""One output file per recovered module.

WHY: Diffing two builds module by module, or feeding single modules to
a linter, is easiest when every module is its own file.

HOW: Emits one FormatterOutput per module whose suffix carries the
sanitized module id.

RULES:
- Suffix: ".module-<id>.js"
- Characters outside [A-Za-z0-9._-] in the id become "_"
- A trailing ".js" in the id is dropped so names do not end in ".js.js"
- Content is the module's wrapper expression source, unchanged
"""

from __future__ import annotations

import re

from bundle_extractor.core.extractor import BundleSources
from bundle_extractor.formatters.base import BaseFormatter, FormatterOutput
from bundle_extractor.formatters.summary import module_sort_key

_UNSAFE_CHARS_RE = re.compile(r"[^A-Za-z0-9._-]")


def safe_module_id(module_id: str) -> str:
    """Make a module id usable inside a file name.

    String ids are often request paths like "./src/index.js".
    """
    return _UNSAFE_CHARS_RE.sub("_", module_id) or "_"


def module_file_suffix(module_id: str) -> str:
    stem = safe_module_id(module_id)
    if stem.endswith(".js"):
        stem = stem[:-3] or "_"
    return ".module-{}.js".format(stem)


class ModuleFilesFormatter(BaseFormatter):
    """Each module written to its own .js file."""

    @property
    def name(self) -> str:
        return "Module files"

    def format(self, result: BundleSources, bundle_name: str) -> list[FormatterOutput]:
        return [
            FormatterOutput(
                suffix=module_file_suffix(module_id),
                content=result.modules[module_id],
                media_type="text/javascript",
            )
            for module_id in sorted(result.modules, key=module_sort_key)
        ]
