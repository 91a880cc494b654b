"""Bundle Extractor — recover per-module source from webpack bundles.

WHY: A bundler concatenates many source modules into one file and wraps
each of them in a container whose shape depends on the bundler version,
the output target and the optimizations applied. Source-map rebuilding,
per-module analysis and diffing across builds all need the reverse: a
map from module id to that module's exact source text.

HOW: Three-stage pipeline — parse (tree-sitter → syntax variants),
recognize (shape matchers find the module container), slice (byte
ranges → module source). Output formatters and a CLI sit on top.

RULES:
- The core never executes or rewrites module code
- "No container found" is None, not an exception
- Syntax errors surface as BundleParseError
"""

from bundle_extractor.core.extractor import (
    BundleSources,
    extract_modules,
    find_module_locations,
    parse_bundle,
)
from bundle_extractor.core.syntax import BundleParseError

__version__ = "0.1.0"

__all__ = [
    "BundleParseError",
    "BundleSources",
    "extract_modules",
    "find_module_locations",
    "parse_bundle",
]
