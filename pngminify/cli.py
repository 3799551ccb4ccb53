"""Command-line host: find PNGs in a folder and run them through pngquant."""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from pngminify.core.batch_runner import BatchRunner
from pngminify.core.config import DEFAULT_ARTIFACT_SUFFIX, MinifyConfig, ParameterValidator
from pngminify.core.errors import PngMinifyError
from pngminify.core.pngquant_executor import PngquantExecutor
from pngminify.core.tool_verifier import ToolVerifier
from pngminify.services.messages import available_locales, get_message
from pngminify.utils.file_processor import FileProcessor
from pngminify.utils.format import format_size
from pngminify.utils.logger import get_logger


EXIT_OK = 0
EXIT_CONFIG_ERROR = 1
EXIT_NO_FILES = 2
EXIT_CANCELLED = 130


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pngminify",
        description="Compress every PNG in a folder with pngquant and report the space saved.",
    )
    parser.add_argument("folder", type=Path, help="Folder containing PNG files")
    parser.add_argument("--pngquant-path", dest="tool_path", help="Path to the pngquant executable")
    parser.add_argument("--quality", type=int, default=100, help="pngquant quality, 0-100 (default: 100)")
    parser.add_argument(
        "--suffix",
        default=DEFAULT_ARTIFACT_SUFFIX,
        help=f"Suffix pngquant adds to output files (default: {DEFAULT_ARTIFACT_SUFFIX})",
    )
    parser.add_argument("--no-recursive", dest="recursive", action="store_false", help="Only scan the top folder")
    parser.add_argument(
        "--workers",
        type=int,
        default=1,
        help="Number of pngquant processes to run at once (default: 1; >1 tags output by file)",
    )
    parser.add_argument("--locale", default="en", choices=available_locales(), help="Message language")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level for the log file (default: INFO)",
    )
    parser.add_argument("--log-dir", default="logs", help="Directory for log files (default: logs)")
    parser.add_argument("--no-log-file", dest="log_file", action="store_false", help="Do not write a log file")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logger = get_logger()
    logger.configure(log_level=args.log_level, log_dir=args.log_dir, enable_file=args.log_file)

    config = MinifyConfig(
        tool_path=args.tool_path or PngquantExecutor.find_pngquant(),
        quality=args.quality,
        artifact_suffix=args.suffix,
        max_workers=args.workers,
        locale=args.locale,
    )

    try:
        ParameterValidator.validate(config)
    except ValueError as error:
        logger.error(f"Error: {error}")
        return EXIT_CONFIG_ERROR

    if not config.tool_path:
        logger.error(get_message("path_blank", config.locale))
        return EXIT_CONFIG_ERROR

    verifier = ToolVerifier(config.version_marker, config.verify_timeout)
    try:
        verifier.ensure(config.tool_path)
    except PngMinifyError as error:
        logger.error(f"{get_message('tool_not_found', config.locale)}: {error}")
        return EXIT_CONFIG_ERROR

    try:
        files = FileProcessor.collect_pngs(args.folder, recursive=args.recursive, suffix=config.artifact_suffix)
    except FileNotFoundError as error:
        logger.error(f"Error: {error}")
        return EXIT_CONFIG_ERROR

    if not files:
        logger.warning(get_message("no_png_files", config.locale, folder=args.folder))
        return EXIT_NO_FILES

    logger.info(get_message("found_files", config.locale, count=len(files)))
    logger.debug("png files: " + ", ".join(str(f) for f in files))

    runner = BatchRunner(config)
    logger.info(get_message("running", config.locale))
    future = runner.start(config.tool_path, files, config.quality, on_output_line=logger.info)
    cancelled = False
    try:
        try:
            summary = future.result()
        except KeyboardInterrupt:
            cancelled = True
            runner.cancel()
            summary = future.result()
    finally:
        runner.shutdown()

    print("\n" + "=" * 60)
    print(get_message("batch_cancelled" if cancelled else "batch_complete", config.locale))
    print("=" * 60)
    print(f"Files: {summary.file_count} ({summary.compressed_count} compressed)")
    print(f"Before: {format_size(summary.total_before)}")
    print(f"After: {format_size(summary.total_after)}")
    print(summary.format())
    if summary.failed_count:
        print(get_message("failed_files", config.locale, count=summary.failed_count))
    return EXIT_CANCELLED if cancelled else EXIT_OK


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
