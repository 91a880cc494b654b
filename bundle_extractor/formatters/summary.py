"""Plain-text size summary, one line per module.

WHY: The quickest question about a bundle is usually "what is in here
and how big is it". A tab-separated listing answers it and stays easy
to sort or grep.

HOW: Orders module ids (numeric ids numerically, then the rest
alphabetically), prints ``<id>\\t<bytes>`` per module, then a total.

RULES:
- Sizes are UTF-8 byte lengths of each module's source
- Numeric ids (ASCII digits only) sort before string ids
- Last line: "total\\t<bytes>\\t<count> modules"
- Output suffix: "-modules.txt"
"""

from __future__ import annotations

from typing import List, Tuple

from bundle_extractor.core.extractor import BundleSources
from bundle_extractor.formatters.base import BaseFormatter, FormatterOutput


def module_sort_key(module_id: str) -> Tuple[int, int, str]:
    # isdigit() alone also accepts characters like "²" that int() rejects
    if module_id.isascii() and module_id.isdigit():
        return (0, int(module_id), "")
    return (1, 0, module_id)


class SummaryFormatter(BaseFormatter):
    """Tab-separated module sizes."""

    @property
    def name(self) -> str:
        return "Size summary"

    def format(self, result: BundleSources, bundle_name: str) -> list[FormatterOutput]:
        lines: List[str] = ["# {}".format(bundle_name)]
        total = 0
        for module_id in sorted(result.modules, key=module_sort_key):
            size = len(result.modules[module_id].encode("utf-8"))
            total += size
            lines.append("{}\t{}".format(module_id, size))
        lines.append("total\t{}\t{} modules".format(total, len(result.modules)))

        return [
            FormatterOutput(
                suffix="-modules.txt",
                content="\n".join(lines) + "\n",
                media_type="text/plain",
            )
        ]
