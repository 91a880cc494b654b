"""Abstract base formatter and output container.

WHY: The extraction result can be rendered several ways — a JSON
manifest for tooling, a size summary for humans, one file per module
for diffing. This base class gives the CLI a single interface to all of
them.

HOW: BaseFormatter is an ABC with two requirements — a ``name`` property
and a ``format()`` method. FormatterOutput is a plain dataclass that
bundles a file suffix with its content and MIME type.

RULES:
- Subclasses MUST implement ``name`` (human-readable) and ``format()``
- ``format()`` returns a list — most formatters return one item, the
  per-module formatter returns one per module
- ``suffix`` is appended to the bundle's file stem by the caller
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from bundle_extractor.core.extractor import BundleSources


@dataclass
class FormatterOutput:
    """One output file produced by a formatter.

    Attributes:
        suffix: File suffix appended to the bundle stem,
                e.g. ``"-modules.json"`` → ``"main-modules.json"``.
        content: The file content.
        media_type: MIME type for the content, e.g. ``"application/json"``.
    """

    suffix: str
    content: str
    media_type: str


class BaseFormatter(ABC):
    """Abstract base for all output formatters.

    To add a new output format:
    1. Create a new file in formatters/
    2. Subclass BaseFormatter
    3. Implement format() and name
    4. Register in FORMATTERS dict in formatters/__init__.py
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable format name, e.g. 'JSON manifest'."""

    @abstractmethod
    def format(self, result: BundleSources, bundle_name: str) -> list[FormatterOutput]:
        """Render an extraction result as one or more output files.

        Args:
            result: The modules recovered from one bundle.
            bundle_name: The bundle's file name, recorded in the output
                         where the format has room for it.

        Returns:
            List of FormatterOutput objects.
        """
