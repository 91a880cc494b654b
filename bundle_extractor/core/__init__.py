"""Shape recognition core: syntax variants, predicates, matchers, driver.

WHY: The core package holds the part of the extractor that has to be
exactly right — recognizing module containers and computing byte
ranges. Apart from parse_bundle() reading a file, it does no I/O.

HOW: syntax.py adapts tree-sitter into node variants, classify.py holds
the node predicates, matchers.py the container shapes, locations.py the
id → range extraction, extractor.py the traversal and slicing.

RULES:
- Dependencies point one way: syntax ← classify ← locations ← matchers ← extractor
- Nothing here keeps state between calls
"""
