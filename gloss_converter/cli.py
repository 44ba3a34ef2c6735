"""Command-line interface for the Interlinear Gloss Converter.

WHY: Users exporting examples in bulk, or debugging a sentence whose
tiers look misaligned, need the pipeline without a browser. The CLI reads
the same JSON request the story viewer sends and either prints the result
panel or saves formatter outputs to files.

HOW: Uses argparse to accept a request file (or "-" for stdin), an
optional page URL override, formatter selection, and an output directory.
Without --output-dir the display blocks are written to stdout through a
StreamTarget. With it, each formatter's output is saved as
{stem}{suffix}. Status messages go to stderr.

RULES:
- Positional argument: request JSON file path, or "-" for stdin
- --formats: comma-separated formatter keys (default: all registered)
- Output naming: {stem}{suffix}, numeric suffix for conflicts (-gb4e-2.tex)
- Invalid JSON or missing request fields → "Error: ..." and exit 1
- Status output goes to stderr (not stdout)
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from gloss_converter.config import GLOSS_PAGE_URL, configure_logging
from gloss_converter.core.metadata import static_url
from gloss_converter.core.pipeline import process_request
from gloss_converter.formatters import FORMATTERS
from gloss_converter.formatters.base import FormatterOutput
from gloss_converter.formatters.gb4e import convert_to_latex
from gloss_converter.presenter import StreamTarget, display_result


def _status(msg: str) -> None:
    """Print a status message to stderr (stdout stays pipeable)."""
    print(msg, file=sys.stderr, flush=True)


def _fail(msg: str) -> None:
    print("Error: {}".format(msg), file=sys.stderr)
    sys.exit(1)


def _load_request(source: str) -> Dict[str, Any]:
    """Read and parse the request JSON from a path or stdin ("-").

    Raises:
        ValueError: if the file is missing or not a JSON object.
    """
    if source == "-":
        text = sys.stdin.read()
    else:
        path = Path(source)
        if not path.is_file():
            raise ValueError("File not found: {}".format(path))
        text = path.read_text(encoding="utf-8")

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValueError("Invalid JSON in {}: {}".format(source, exc))
    if not isinstance(data, dict):
        raise ValueError("Request must be a JSON object")
    return data


def _resolve_output_path(stem: str, suffix: str, output_dir: Path) -> Path:
    """Resolve the output file path, adding numeric suffix on conflict.

    RULES:
    - First attempt: {stem}{suffix} (e.g. story-gb4e.tex)
    - Conflict: insert counter before the extension (story-gb4e-2.tex)
    - Counter starts at 2 and increments
    """
    base_path = output_dir / "{}{}".format(stem, suffix)
    if not base_path.exists():
        return base_path

    dot_idx = suffix.rfind(".")
    if dot_idx > 0:
        suffix_name, suffix_ext = suffix[:dot_idx], suffix[dot_idx:]
    else:
        suffix_name, suffix_ext = suffix, ""

    counter = 2
    while True:
        candidate = output_dir / "{}{}-{}{}".format(stem, suffix_name, counter, suffix_ext)
        if not candidate.exists():
            return candidate
        counter += 1


def _save_output(output: FormatterOutput, stem: str, output_dir: Path) -> Path:
    path = _resolve_output_path(stem, output.suffix, output_dir)
    path.write_text(output.content, encoding="utf-8")
    return path


def _parse_formats(formats: Optional[str]) -> List[str]:
    if not formats:
        return list(FORMATTERS.keys())
    keys = [f.strip() for f in formats.split(",") if f.strip()]
    for key in keys:
        if key not in FORMATTERS:
            available = ", ".join(sorted(FORMATTERS.keys()))
            raise ValueError("Unknown format '{}'. Available formats: {}".format(key, available))
    return keys


def run(args: argparse.Namespace) -> None:
    """Execute the formatting pipeline for one request."""
    try:
        format_keys = _parse_formats(args.formats)
        request = _load_request(args.request_file)
        url_provider = static_url(args.page_url or GLOSS_PAGE_URL)
        result = process_request(request, url_provider=url_provider)
    except KeyError as exc:
        _fail("Request is missing field {}".format(exc))
    except (TypeError, ValueError) as exc:
        _fail(str(exc))

    _status("Formatted {} words from story {}".format(len(result.words), result.story_id))

    if args.output_dir is None:
        if args.formats:
            _status("Note: --formats only applies with --output-dir; printing the gb4e result panel.")
        sentence_id = request.get("sentenceId", request["sentence"].get("sentence_id"))
        target = StreamTarget(sys.stdout)
        display_result(target, str(sentence_id), result, convert_to_latex(result))
        target.reset()
        return

    output_dir = Path(args.output_dir).resolve()
    if not output_dir.is_dir():
        _fail("Output directory does not exist: {}".format(output_dir))

    stem = "stdin" if args.request_file == "-" else Path(args.request_file).stem
    for key in format_keys:
        formatter = FORMATTERS[key]()
        for output in formatter.format(result):
            saved = _save_output(output, stem, output_dir)
            _status("  Saved: {}".format(saved.name))


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="gloss_converter",
        description="Convert an annotated sentence into a gb4e interlinear "
                    "LaTeX example (and other interlinear formats).",
    )
    parser.add_argument(
        "request_file",
        help="JSON file with sentence, tierMap, metadata and sentenceId ('-' for stdin).",
    )
    parser.add_argument(
        "--page-url",
        default=None,
        help="URL of the story page, used for the sentence permalink "
             "(default: GLOSS_PAGE_URL).",
    )
    parser.add_argument(
        "--formats",
        default=None,
        help="Comma-separated list of output formats to save (requires --output-dir). "
             "Available: {}. Default: all.".format(", ".join(sorted(FORMATTERS.keys()))),
    )
    parser.add_argument(
        "--output-dir",
        default=None,
        help="Save formatter outputs here instead of printing the result panel.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: GLOSS_LOG_LEVEL or INFO).",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the CLI.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        configure_logging(args.log_level)
    except ValueError as exc:
        _fail(str(exc))
    run(args)


if __name__ == "__main__":
    main()
