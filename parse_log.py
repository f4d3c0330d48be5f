#!/usr/bin/env python3
"""
Inspect a saved prepress log locally.

Usage:
    python parse_log.py <log.json> [--summary] [--lang xx]
"""
import json
import sys
from pathlib import Path

from preflight.language import resolve_language
from preflight.pipeline import parse_prepress_log
from preflight.presentation import format_report_summary


def main(argv) -> int:
    if not argv or argv[0] in ("-h", "--help"):
        print(__doc__.strip())
        return 1

    log_path = Path(argv[0])
    show_summary = "--summary" in argv
    lang = None
    if "--lang" in argv:
        index = argv.index("--lang")
        if index + 1 < len(argv):
            lang = argv[index + 1]

    try:
        raw_text = log_path.read_text(encoding="utf-8")
    except OSError as e:
        print(f"❌ Cannot read {log_path}: {e}")
        return 1

    report = parse_prepress_log(raw_text)

    if show_summary:
        print(format_report_summary(report, lang=resolve_language(lang)))
    else:
        print(json.dumps(report.to_json_dict(), indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
