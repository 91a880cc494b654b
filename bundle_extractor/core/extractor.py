"""Driver: find the module container in a bundle and slice out every module.

WHY: This is the entry point the rest of the package (and library users)
call. It ties the parser, the traversal and the matchers together and
turns byte ranges back into module source text.

HOW: find_module_locations() walks the tree in pre-order with an explicit
stack. At every call it tries the container matchers; the first hit ends
the walk. A call that matches nothing is only searched through its
arguments, which is how containers wrapped by the dedupe plugin or by
UMD library output are found. extract_modules() parses the text, runs
the walk and slices each range out of the UTF-8 encoded source.

RULES:
- First match wins; nothing after it is visited, siblings included
- Unmatched calls: descend into arguments only, never into the callee
- Non-call nodes: descend into all children
- No container anywhere → None (not an error)
- Syntax errors propagate as BundleParseError
- Module sources are byte-exact slices, decoded from UTF-8
- Every call gets its own _WalkState; nothing is shared between calls
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union

from bundle_extractor.config import SOURCE_ENCODING
from bundle_extractor.core.locations import ModuleLocationMap
from bundle_extractor.core.matchers import match_container
from bundle_extractor.core.syntax import Call, SyntaxNode, parse_source

logger = logging.getLogger(__name__)


@dataclass
class BundleSources:
    """The result of a successful extraction.

    RULES:
    - src: the bundle text exactly as given
    - modules: module id → that module's wrapper expression source
    """

    src: str
    modules: Dict[str, str]


@dataclass
class _WalkState:
    """Scratch state for one traversal: pending nodes and the found map."""

    stack: List[SyntaxNode] = field(default_factory=list)
    locations: Optional[ModuleLocationMap] = None
    matcher: Optional[str] = None


def find_module_locations(root: SyntaxNode) -> Optional[ModuleLocationMap]:
    """Locate the first module container in ``root`` and map its modules.

    Args:
        root: The parsed bundle (usually from parse_source()).

    Returns:
        Module id → SourceRange for the first recognized container in
        pre-order, or None when no container exists. An empty dict means
        a container was found but holds no modules.
    """
    state = _WalkState(stack=[root])
    while state.stack:
        node = state.stack.pop()
        if isinstance(node, Call):
            hit = match_container(node)
            if hit is not None:
                state.matcher, state.locations = hit
                logger.debug(
                    "Matched %s container at byte %d (%d modules)",
                    state.matcher, node.start, len(state.locations),
                )
                break
            # Plugins (e.g. DedupePlugin) and UMD output wrap the
            # container in another call; keep looking in the arguments.
            pending = node.arguments
        else:
            pending = node.children
        state.stack.extend(reversed(pending))

    if state.locations is None:
        logger.debug("No module container found")
    return state.locations


def extract_modules(source: str) -> Optional[BundleSources]:
    """Recover per-module source text from bundle text.

    Args:
        source: The full text of one bundle file.

    Returns:
        BundleSources, or None if the text holds no recognizable
        module container.

    Raises:
        BundleParseError: If the text is not valid JavaScript.
    """
    data = source.encode("utf-8")
    locations = find_module_locations(parse_source(data))
    if locations is None:
        return None
    return BundleSources(
        src=source,
        modules={
            module_id: data[loc.start:loc.end].decode("utf-8")
            for module_id, loc in locations.items()
        },
    )


def parse_bundle(path: Union[str, Path], encoding: str = SOURCE_ENCODING) -> Optional[BundleSources]:
    """Read a bundle file from disk and extract its modules.

    Raises:
        FileNotFoundError: If the file does not exist.
        UnicodeDecodeError: If the file is not valid in ``encoding``.
        BundleParseError: If the file is not valid JavaScript.
    """
    # Line endings must survive untranslated
    content = Path(path).read_bytes().decode(encoding)
    logger.debug("Parsing bundle %s (%d chars)", path, len(content))
    return extract_modules(content)
