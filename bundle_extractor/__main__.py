"""Package entry point for ``python -m bundle_extractor``.

WHY: Users run the extractor as ``python -m bundle_extractor bundle.js``.
Python's ``-m`` flag looks for ``__main__.py`` inside the package and
executes it.

HOW: Delegates to the CLI's main() and exits with its return code.
"""

import sys

if __name__ == "__main__":
    from bundle_extractor.cli import main
    sys.exit(main())
