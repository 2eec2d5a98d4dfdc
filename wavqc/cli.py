"""Command-line entry point: analyze one WAVE file and print its report."""
import argparse
import json
import sys
from typing import List, Optional
from wavqc.audio.document import load_wave_document
from wavqc.audio.report import render_report
from wavqc.core.logging import setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wavqc",
        description="Report frame characteristics of an 8KHz 16bit mono PCM WAVE file."
    )
    parser.add_argument("path", nargs="?", help="WAVE file to analyze")
    parser.add_argument("--json", action="store_true", help="print characteristics as JSON")
    parser.add_argument("--log-level", default=None, help="override WAVQC_LOG_LEVEL")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Run the CLI. Returns the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.path is None:
        parser.print_usage()
        return 0

    setup_logging(args.log_level)

    document = load_wave_document(args.path)
    if document is None:
        return 1

    characteristics = document.characteristics
    if args.json:
        print(json.dumps({
            "source": document.source,
            "format": document.format_summary,
            "characteristics": characteristics.to_dict(),
        }, indent=2))
    else:
        print(document.format_summary)
        print(render_report(characteristics))
    return 0


if __name__ == "__main__":
    sys.exit(main())
