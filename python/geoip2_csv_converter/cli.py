"""Command-line entry point for block CSV conversion."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .convert import ConversionError, convert_file

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="geoip2-csv-converter",
        description=(
            "Convert a GeoIP2 or GeoLite2 block CSV to other representations of "
            "the network, such as IP ranges or integer ranges."
        ),
    )
    parser.add_argument(
        "--block-file",
        "-block-file",
        dest="block_file",
        type=Path,
        help="The path to the block CSV file to use as input (REQUIRED).",
    )
    parser.add_argument(
        "--output-file",
        "-output-file",
        dest="output_file",
        type=Path,
        help="The path to the output CSV (REQUIRED).",
    )
    parser.add_argument(
        "--include-cidr",
        "-include-cidr",
        dest="include_cidr",
        action="store_true",
        help="Include the network in CIDR format.",
    )
    parser.add_argument(
        "--include-range",
        "-include-range",
        dest="include_range",
        action="store_true",
        help="Include the IP range of the network in string format.",
    )
    parser.add_argument(
        "--include-integer-range",
        "-include-integer-range",
        dest="include_integer_range",
        action="store_true",
        help="Include the IP range of the network in integer format.",
    )
    parser.add_argument(
        "--include-hex-range",
        "-include-hex-range",
        dest="include_hex_range",
        action="store_true",
        help="Include the IP range of the network in hexadecimal format.",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="INFO",
        help="Log level for diagnostic output.",
    )
    return parser


def validate_args(args: argparse.Namespace) -> List[str]:
    errors: List[str] = []
    if args.block_file is None:
        errors.append("--block-file is required")
    if args.output_file is None:
        errors.append("--output-file is required")
    if (
        args.block_file is not None
        and args.output_file is not None
        and args.block_file == args.output_file
    ):
        errors.append("Your output file must be different than your block file (input file).")
    if not (
        args.include_cidr
        or args.include_range
        or args.include_integer_range
        or args.include_hex_range
    ):
        errors.append(
            "--include-cidr, --include-range, --include-integer-range, "
            "or --include-hex-range is required"
        )
    return errors


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level))

    errors = validate_args(args)
    if errors:
        parser.error("; ".join(errors))

    logger.info("Converting %s to %s", args.block_file, args.output_file)
    try:
        stats = convert_file(
            args.block_file,
            args.output_file,
            cidr=args.include_cidr,
            ip_range=args.include_range,
            integer_range=args.include_integer_range,
            hex_range=args.include_hex_range,
        )
    except ConversionError as exc:
        logger.error("Error: %s", exc)
        return 1

    logger.info("Wrote %d rows to %s", stats.rows_written, args.output_file)
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
