"""Command-line interface for passport extraction and command generation.

Provides subcommands for extracting a single passport, parsing saved
OCR text, generating reservation commands, and batch-exporting a folder
of passport images to CSV.
"""

import argparse
import csv
import json
import sys
from pathlib import Path

from passport_ocr.commands.formatter import CommandFormatter, TravellerDetails
from passport_ocr.extraction.pipeline import PassportParser
from passport_ocr.extraction.record import FIELD_NAMES, PassportRecord
from passport_ocr.ocr.errors import OCRServiceError
from passport_ocr.ocr.passport_processor import PassportProcessor
from passport_ocr.utils.config import AppConfig, load_config
from passport_ocr.utils.logger import get_logger, setup_logging

logger = get_logger(__name__)

_SUPPORTED_EXTENSIONS = (
    "*.png",
    "*.jpg",
    "*.jpeg",
    "*.tiff",
    "*.tif",
    "*.bmp",
    "*.gif",
)
_META_COLUMNS = ["filename", "status", "error"]


def _find_images(input_dir: Path) -> list[Path]:
    """Find all supported image files in a directory, sorted by name."""
    files: list[Path] = []
    for ext in _SUPPORTED_EXTENSIONS:
        files.extend(input_dir.glob(ext))
        files.extend(input_dir.glob(ext.upper()))
    return sorted(set(files))


def extract_single(
    file_path: Path, processor: PassportProcessor | None = None
) -> dict[str, object]:
    """Run OCR and parsing on one passport image.

    Args:
        file_path: Path to the passport image.
        processor: Processor to use; built from the default config if omitted.

    Returns:
        Dictionary with filename, fields, and raw_text.

    Raises:
        OCRServiceError: If OCR failed.
    """
    processor = processor or PassportProcessor(load_config())
    result = processor.process(file_path, file_path.name)
    return {
        "filename": file_path.name,
        "fields": result.record.to_dict(),
        "raw_text": result.raw_text,
    }


def process_folder(
    input_dir: Path,
    output_csv: Path,
    verbose: bool = False,
    config: AppConfig | None = None,
) -> dict[str, int]:
    """Extract every passport image in a folder and write one CSV row each.

    Args:
        input_dir: Directory containing passport images.
        output_csv: Path for the output CSV file.
        verbose: Whether to print per-file progress.
        config: Application config. Loaded from disk when omitted.

    Returns:
        Summary dict with total, successful, and failed counts.
    """
    processor = PassportProcessor(config or load_config())

    files = _find_images(input_dir)
    if not files:
        logger.warning("No images found in %s", input_dir)
        return {"total": 0, "successful": 0, "failed": 0}

    logger.info("Found %d images to process", len(files))

    rows: list[dict[str, object]] = []
    failed = 0
    for i, file_path in enumerate(files, 1):
        if verbose:
            print(f"Processing [{i}/{len(files)}]: {file_path.name}")
        try:
            result = processor.process(file_path, file_path.name)
        except OCRServiceError as exc:
            logger.error("Failed to process %s: %s", file_path.name, exc)
            rows.append(
                {"filename": file_path.name, "status": "failed", "error": str(exc)}
            )
            failed += 1
            continue
        row: dict[str, object] = {
            "filename": file_path.name,
            "status": "success",
            "error": "",
        }
        row.update(result.record.to_dict())
        rows.append(row)

    _write_csv(rows, output_csv)
    logger.info("Results written to %s", output_csv)

    summary = {"total": len(files), "successful": len(files) - failed, "failed": failed}
    _print_summary(summary, output_csv)
    return summary


def _write_csv(rows: list[dict[str, object]], output_path: Path) -> None:
    """Write extraction rows to CSV with metadata columns first."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=_META_COLUMNS + list(FIELD_NAMES))
        writer.writeheader()
        writer.writerows(rows)


def _print_summary(summary: dict[str, int], output_csv: Path) -> None:
    print(f"\n{'=' * 50}")
    print("Batch Processing Complete")
    print(f"{'=' * 50}")
    print(f"Total:      {summary['total']}")
    print(f"Successful: {summary['successful']}")
    print(f"Failed:     {summary['failed']}")
    print(f"Output:     {output_csv}")


def _read_text(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def _emit(payload: dict[str, object], output: Path | None) -> None:
    output_str = json.dumps(payload, indent=2)
    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(output_str)
        print(f"Output written to {output}")
    else:
        print(output_str)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Passport OCR Extractor",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    extract_parser = subparsers.add_parser("extract", help="Extract a passport image")
    extract_parser.add_argument("file", type=Path, help="Passport image to process")
    extract_parser.add_argument("-o", "--output", type=Path, help="Output JSON file")

    parse_parser = subparsers.add_parser("parse", help="Parse saved OCR text")
    parse_parser.add_argument(
        "text_file", help="Text file with OCR output, or - for stdin"
    )
    parse_parser.add_argument("-o", "--output", type=Path, help="Output JSON file")

    commands_parser = subparsers.add_parser(
        "commands", help="Generate NM1 and SR DOCS commands from a passport image"
    )
    commands_parser.add_argument("file", type=Path, help="Passport image to process")
    commands_parser.add_argument("--nationality", required=True, help="3-letter code")
    commands_parser.add_argument(
        "--gender", required=True, type=str.upper, choices=["M", "F"]
    )
    commands_parser.add_argument("--airline", required=True, help="Airline code")
    commands_parser.add_argument(
        "--issuing-location", required=True, help="Issuing location code"
    )

    batch_parser = subparsers.add_parser("batch", help="Process a folder of images")
    batch_parser.add_argument(
        "input_dir", type=Path, help="Input directory with images"
    )
    batch_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=Path("passports.csv"),
        help="Output CSV file (default: passports.csv)",
    )
    batch_parser.add_argument(
        "-v", "--verbose", action="store_true", help="Verbose output"
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and dispatch to the appropriate command.

    Args:
        argv: Command-line arguments (defaults to sys.argv).
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    config = load_config()
    setup_logging(config.log_level)

    if args.command == "batch":
        if not args.input_dir.is_dir():
            print(f"Error: {args.input_dir} is not a directory", file=sys.stderr)
            sys.exit(1)
        process_folder(args.input_dir, args.output, args.verbose, config)
    elif args.command == "parse":
        record = PassportParser(config.mrz).parse(_read_text(args.text_file))
        _emit(record.to_dict(), args.output)
    elif args.command in ("extract", "commands"):
        if not args.file.exists():
            print(f"Error: {args.file} does not exist", file=sys.stderr)
            sys.exit(1)
        try:
            result = extract_single(args.file, PassportProcessor(config))
        except OCRServiceError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            sys.exit(1)

        if args.command == "extract":
            _emit(result, args.output)
            return
        _print_commands(result, args)
    else:
        parser.print_help()
        sys.exit(0)


def _print_commands(result: dict[str, object], args: argparse.Namespace) -> None:
    record = PassportRecord(**result["fields"])
    details = TravellerDetails(
        nationality=args.nationality,
        gender=args.gender,
        airline_code=args.airline,
        issuing_location=args.issuing_location,
    )
    commands = CommandFormatter().generate(record, details)
    if not commands.success:
        for error in commands.errors:
            print(f"Error: {error}", file=sys.stderr)
        sys.exit(1)
    print(commands.name_command)
    print(commands.reservation_command)


if __name__ == "__main__":
    main()
