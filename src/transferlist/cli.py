"""
Command-line interface for generating bank transfer lists.
"""

import argparse
import logging
import sys
from pathlib import Path

from .config import GeneratorConfig, load_config
from .csv_parser import TableReadError
from .generator import FileSavingError, InputError, TransfersListGenerator
from .output_formatter import default_output_filename

logger = logging.getLogger(__name__)


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Generate a bank transfer list from invoice and business trip tables",
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging (DEBUG level)",
    )

    parser.add_argument(
        "--config",
        help="Path to JSON configuration file (statuses, currency marker, delimiters, ...)",
    )

    parser.add_argument(
        "invoice_file",
        help="Path to the invoice table (tab or semicolon separated)",
    )

    parser.add_argument(
        "trip_file",
        nargs="?",
        help="Path to the business trip table (optional)",
    )

    parser.add_argument(
        "--output",
        "-o",
        help="Output file path (default: DDMMYYYY_invoice.ebgz)",
    )

    parser.add_argument(
        "--summary",
        action="store_true",
        help="Print a summary with totals and skipped rows",
    )

    args = parser.parse_args()

    # Configure logging
    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(levelname)s: %(message)s",
    )

    config = GeneratorConfig()
    if args.config:
        config = GeneratorConfig.from_dict(load_config(args.config))

    for file_path, file_type in (
        (args.invoice_file, "Invoice input"),
        (args.trip_file, "Business trip"),
    ):
        if file_path and not Path(file_path).exists():
            logger.error(f"Error: {file_type} file not found: {file_path}")
            sys.exit(1)

    output_file = args.output or default_output_filename()

    logger.info(f"Input file: {args.invoice_file}")
    if args.trip_file:
        logger.info(f"Business trip file: {args.trip_file}")
    logger.info(f"Output file: {output_file}")

    generator = TransfersListGenerator(config)
    try:
        result = generator.generate_file(args.invoice_file, args.trip_file, output_file)
    except (InputError, TableReadError, FileSavingError) as e:
        logger.error(f"Error generating transfer list: {e}")
        sys.exit(1)

    if args.summary:
        logger.info(generator.format_summary(result))

    logger.info(f"Generated output file: {output_file}")


if __name__ == "__main__":
    main()
