"""
Command-line entry point: score an exported evidence file.

Reads a JSON array of evidence records (camelCase, as stored),
derives the root domain from ``--url`` and prints the score result
as JSON.  Intended for debugging scores outside the worker.
"""

from __future__ import annotations

import argparse
import json
import pathlib
import sys
from collections.abc import Sequence

import dotenv
import pydantic

from scanscore.analysis import report
from scanscore.analysis.scoring import calculate_scan_score
from scanscore.models import evidence
from scanscore.utils import errors, logger, serialization, url

log = logger.create_logger("CLI")

_evidence_list = pydantic.TypeAdapter(list[evidence.EvidenceRecord])


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="scanscore", description="Score a scan from exported evidence.")
    parser.add_argument("evidence", type=pathlib.Path, help="Path to a JSON array of evidence records")
    parser.add_argument("--url", required=True, help="The scanned URL or hostname")
    parser.add_argument("--indent", type=int, default=2, help="JSON indent (default: 2)")
    parser.add_argument("--top-fixes", action="store_true", help="Print the top fixes instead of the full result")
    return parser


def load_evidence(path: pathlib.Path) -> list[evidence.EvidenceRecord]:
    """Read and validate an evidence export.

    Raises:
        OSError: If the file cannot be read.
        pydantic.ValidationError: If the content is not a list of
            evidence records.
    """
    return _evidence_list.validate_json(path.read_bytes())


def main(argv: Sequence[str] | None = None) -> int:
    """Run the CLI and return a process exit code."""
    dotenv.load_dotenv()
    args = _build_parser().parse_args(argv)

    try:
        records = load_evidence(args.evidence)
    except (OSError, pydantic.ValidationError) as exc:
        log.error("Could not load evidence", {"path": str(args.evidence), "error": errors.get_error_message(exc)})
        return 1

    root_domain = url.get_root_domain(args.url)
    result = calculate_scan_score(records, root_domain)

    if args.top_fixes:
        fixes = [fix.model_dump(by_alias=True, mode="json") for fix in report.select_top_fixes(result.issues)]
        print(json.dumps(fixes, indent=args.indent))
    else:
        print(serialization.to_json(result, indent=args.indent))
    return 0


if __name__ == "__main__":
    sys.exit(main())
