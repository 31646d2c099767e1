"""Command-line entry point: build the sprint HTML report from env configuration.

Usage:
    sprint-report
    sprint-report --env-file sprint18.env -o build/sprint18.html -v
"""

from __future__ import annotations
import argparse
import logging
import sys
from typing import List, Optional

from sprint_report.lib.config import ReportConfig, ReportConfigError
from sprint_report.lib.logging_setup import setup_logging
from sprint_report.lib.pipeline import run_report

logger = logging.getLogger("sprint_report")

def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="sprint-report", description="Render a sprint issue report from a CSV export.")
    p.add_argument("--env-file", help="dotenv file with the report settings (default: ./.env)")
    p.add_argument("-t", "--template", help="template file, overrides TEMPLATE_PATH")
    p.add_argument("-o", "--output", help="output HTML file, overrides OUTPUT_PATH")
    p.add_argument("--log-file", help="also write DEBUG logs to this file")
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return p.parse_args(argv)

def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging("DEBUG" if args.verbose else "INFO", args.log_file)

    try:
        config = ReportConfig.from_env(env_file=args.env_file)
    except ReportConfigError as e:
        logger.error("Invalid configuration: %s", e)
        return 2

    overrides = {}
    if args.template:
        overrides["template_path"] = args.template
    if args.output:
        overrides["output_path"] = args.output
    if overrides:
        config = ReportConfig.model_validate({**config.model_dump(), **overrides})
    if not args.verbose:
        setup_logging(config.log_level, args.log_file)

    try:
        out = run_report(config)
    except ReportConfigError as e:
        logger.error("Invalid configuration: %s", e)
        return 2
    except Exception as e:
        logger.error("Report failed: %s", e, exc_info=True)
        return 1
    print(out)
    return 0

if __name__ == "__main__":
    sys.exit(main())
