"""Command-line interface for the Bundle Extractor.

WHY: Users need a simple way to pull the modules out of a bundle file
from the terminal. The CLI wires together file validation, extraction,
pluggable formatter output and file saving behind a single command.

HOW: Uses argparse to accept a bundle path, output format selection,
an output directory and a --stdout switch. Status messages go to
stderr; output files are saved next to the bundle (or to --output-dir)
unless --stdout is given.

RULES:
- Positional argument: bundle file path
- Warns (does not fail) when the extension is not in BUNDLE_FILE_EXTENSIONS
- --formats: comma-separated formatter keys (default: DEFAULT_FORMAT)
- --stdout: print the first output of the first format instead of saving
- Output naming: {stem}{suffix}, numeric suffix for conflicts (-modules-2.json)
- Status output goes to stderr (not stdout)
- Exit codes: 0 success, 1 missing file / bad flags / parse error / no container
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from bundle_extractor.config import (
    BUNDLE_FILE_EXTENSIONS,
    DEFAULT_FORMAT,
    SOURCE_ENCODING,
    load_log_level,
)
from bundle_extractor.core.extractor import parse_bundle
from bundle_extractor.core.syntax import BundleParseError
from bundle_extractor.formatters import FORMATTERS
from bundle_extractor.formatters.base import FormatterOutput

logger = logging.getLogger(__name__)


def _status(msg: str) -> None:
    """Print a status message to stderr, flushed immediately."""
    print(msg, file=sys.stderr, flush=True)


def _resolve_output_path(
    stem: str,
    suffix: str,
    output_dir: Path,
) -> Path:
    """Resolve the output file path, adding numeric suffix on conflict.

    WHY: Users may run the extractor several times on the same bundle.
    Overwriting previous output would lose work.

    HOW: Check if {stem}{suffix} exists. If so, increment a counter
    and insert it before the file extension until a free name is found.

    RULES:
    - First attempt: {stem}{suffix} (e.g. main-modules.json)
    - Conflict: split suffix at last dot, insert counter before extension
      (e.g. main-modules-2.json)
    - Counter starts at 2 and increments

    Returns:
        A Path that does not yet exist.
    """
    base_path = output_dir / "{}{}".format(stem, suffix)
    if not base_path.exists():
        return base_path

    dot_idx = suffix.rfind(".")
    if dot_idx > 0:
        suffix_name = suffix[:dot_idx]
        suffix_ext = suffix[dot_idx:]
    else:
        suffix_name = suffix
        suffix_ext = ""

    counter = 2
    while True:
        candidate = output_dir / "{}{}-{}{}".format(stem, suffix_name, counter, suffix_ext)
        if not candidate.exists():
            return candidate
        counter += 1


def _save_output(
    output: FormatterOutput,
    stem: str,
    output_dir: Path,
) -> Path:
    """Write one formatter output as UTF-8 and return where it went."""
    path = _resolve_output_path(stem, output.suffix, output_dir)
    # newline="" keeps module sources byte-for-byte
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(output.content)
    return path


def _parse_format_keys(formats: str) -> Optional[List[str]]:
    keys = [f.strip() for f in formats.split(",") if f.strip()]
    for key in keys:
        if key not in FORMATTERS:
            available = ", ".join(sorted(FORMATTERS.keys()))
            _status("Error: Unknown format '{}'. Available formats: {}".format(key, available))
            return None
    return keys


def run(args: argparse.Namespace) -> int:
    """Execute extraction and output for parsed arguments.

    RULES:
    - Validate the bundle path and formats before parsing anything
    - BundleParseError and "no container" both exit with 1
    - Each formatter's outputs are saved with conflict avoidance
    """
    bundle_path = Path(args.bundle).resolve()

    if not bundle_path.is_file():
        _status("Error: File not found: {}".format(bundle_path))
        return 1

    if bundle_path.suffix.lower() not in BUNDLE_FILE_EXTENSIONS:
        _status("Warning: '{}' does not look like a JavaScript bundle".format(bundle_path.name))

    format_keys = _parse_format_keys(args.formats)
    if not format_keys:
        return 1

    output_dir = Path(args.output_dir).resolve() if args.output_dir else bundle_path.parent
    if not args.stdout and not output_dir.is_dir():
        _status("Error: Output directory does not exist: {}".format(output_dir))
        return 1

    _status("Parsing {}...".format(bundle_path.name))
    try:
        result = parse_bundle(bundle_path, encoding=args.encoding)
    except BundleParseError as e:
        _status("Error: {}".format(e))
        return 1
    except UnicodeDecodeError as e:
        _status("Error: {} is not valid {}: {}".format(bundle_path.name, args.encoding, e))
        return 1

    if result is None:
        _status("Error: No webpack module container found in {}".format(bundle_path.name))
        return 1

    _status("  Found {} modules".format(len(result.modules)))

    if args.stdout:
        formatter = FORMATTERS[format_keys[0]]()
        outputs = formatter.format(result, bundle_path.name)
        if outputs:
            sys.stdout.write(outputs[0].content)
        return 0

    saved_files: List[Path] = []
    for key in format_keys:
        formatter = FORMATTERS[key]()
        _status("  Running {} formatter...".format(formatter.name))
        for output in formatter.format(result, bundle_path.name):
            saved_files.append(_save_output(output, bundle_path.stem, output_dir))
    logger.info("Wrote %d file(s) for %s", len(saved_files), bundle_path)

    _status("Done! Saved {} file(s) to {}".format(len(saved_files), output_dir))
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    WHY: Separating parser construction from main() makes the CLI
    testable — tests can inspect the parser without running extraction.
    """
    parser = argparse.ArgumentParser(
        prog="bundle_extractor",
        description="Recover per-module source text from a webpack bundle file.",
    )

    parser.add_argument(
        "bundle",
        help="Path to the bundle (.js) file.",
    )

    parser.add_argument(
        "--formats",
        default=DEFAULT_FORMAT,
        help="Comma-separated list of output formats. "
             "Available: {}. Default: %(default)s.".format(", ".join(sorted(FORMATTERS.keys()))),
    )

    parser.add_argument(
        "--output-dir",
        default=None,
        help="Directory to save output files (default: same as the bundle).",
    )

    parser.add_argument(
        "--stdout",
        action="store_true",
        help="Print the first format's output to stdout instead of saving files.",
    )

    parser.add_argument(
        "--encoding",
        default=SOURCE_ENCODING,
        help="Text encoding of the bundle file (default: %(default)s).",
    )

    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: BUNDLE_EXTRACTOR_LOG_LEVEL or WARNING).",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the CLI.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    - Returns the process exit code
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        level = load_log_level(args.log_level)
    except ValueError as e:
        parser.error(str(e))
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
