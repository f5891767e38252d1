"""
Climate summary orchestrator

Main entry point for the summary pipeline.
Streams each input file through the parser into a single aggregator,
then renders the report.
"""
import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

from .aggregator import ClimateAggregator
from .config import ClimateConfig, OUTPUT_FORMATS, get_config
from .parser import create_parser
from .report import render_report

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

logger = logging.getLogger(__name__)


class ClimateSummaryOrchestrator:
    """Orchestrates the single aggregation pass over all input files"""

    def __init__(self, config: Optional[ClimateConfig] = None):
        """
        Initialize orchestrator

        Args:
            config: Service configuration (default: from environment)
        """
        self.config = config or get_config()
        self.parser = create_parser(self.config)
        self.aggregator = ClimateAggregator()
        logger.debug("ClimateSummaryOrchestrator initialized")

    def process_source(self, path: Union[str, Path]) -> Dict[str, any]:
        """
        Fold every record of one TDV file into the aggregator

        A file that cannot be opened or read is logged and skipped.

        Args:
            path: Path to the TDV file

        Returns:
            Processing statistics for this file
        """
        logger.info(f"Opening file: {path}")

        lines_before = self.parser.lines_read
        skipped_before = self.parser.lines_skipped
        records_folded = 0

        try:
            with open(path, "r", encoding=self.config.encoding, errors="replace") as fh:
                records_folded = self.aggregator.consume(self.parser.parse_lines(fh))
        except OSError as e:
            logger.error(f"Error opening file {path}: {e.strerror or e}")
            return {
                "source": str(path),
                "status": "failed",
                "error": str(e),
                "records_folded": records_folded,
            }

        results = {
            "source": str(path),
            "status": "success",
            "lines_read": self.parser.lines_read - lines_before,
            "lines_skipped": self.parser.lines_skipped - skipped_before,
            "records_folded": records_folded,
        }

        logger.info(
            f"Finished {path}: {results['records_folded']} records, "
            f"{results['lines_skipped']} lines skipped"
        )
        return results

    def process_sources(self, paths: Sequence[Union[str, Path]]) -> Dict[str, any]:
        """
        Process input files strictly in the given order

        Args:
            paths: TDV file paths

        Returns:
            Combined results for all files
        """
        logger.info(f"Processing {len(paths)} sources")

        start_time = datetime.utcnow()
        source_results: List[Dict[str, any]] = [
            self.process_source(path) for path in paths
        ]
        duration = (datetime.utcnow() - start_time).total_seconds()

        successes = sum(1 for r in source_results if r["status"] == "success")
        failures = len(source_results) - successes

        summary = {
            "total_sources": len(source_results),
            "successful": successes,
            "failed": failures,
            "regions": self.aggregator.region_codes,
            "processing_time_seconds": duration,
            "source_results": source_results,
        }

        logger.info(
            f"Pass complete: {successes} succeeded, {failures} failed, "
            f"{len(self.aggregator)} regions in {duration:.2f}s"
        )

        return summary

    def render(self, output_format: Optional[str] = None) -> str:
        """
        Render the report for everything folded so far

        Args:
            output_format: 'text' or 'json' (default: from config)
        """
        return render_report(
            self.aggregator.snapshot(),
            output_format or self.config.output_format,
            self.config.tzinfo,
        )


def build_arg_parser() -> argparse.ArgumentParser:
    """CLI argument parser"""
    parser = argparse.ArgumentParser(
        prog="climate-summary",
        usage="%(prog)s [--format {text,json}] tdv_file1 tdv_file2 ... tdv_fileN",
        description="WeatherInsight climate summary of NOAA TDV files",
    )
    parser.add_argument(
        "files",
        nargs="*",
        help="Tab-delimited climate files, processed in order"
    )
    parser.add_argument(
        "--format",
        dest="output_format",
        default=None,
        choices=list(OUTPUT_FORMATS),
        help="Report format (default: text)"
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for CLI"""
    arg_parser = build_arg_parser()
    args = arg_parser.parse_args(argv)

    if not args.files:
        arg_parser.print_usage(sys.stdout)
        return 1

    config = get_config()

    logging.basicConfig(
        level=config.log_level.upper(),
        format=LOG_FORMAT,
        stream=sys.stderr,
    )

    orchestrator = ClimateSummaryOrchestrator(config)
    orchestrator.process_sources(args.files)

    sys.stdout.write(orchestrator.render(args.output_format))
    return 0


if __name__ == "__main__":
    sys.exit(main())
