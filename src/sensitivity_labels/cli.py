"""
Command-line entry point.

    labels [--flags] get PATH
    labels [--flags] set PATH LABEL_ID TENANT_ID
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from sensitivity_labels import __version__
from sensitivity_labels.config import Config, config_from_env
from sensitivity_labels.errors import LabelsError
from sensitivity_labels.logging_setup import configure_logging
from sensitivity_labels.model import FileLabelResult
from sensitivity_labels.pipeline import run
from sensitivity_labels.report import format_header, format_result
from sensitivity_labels.resolve import try_load_label_names
from sensitivity_labels.serialization import summary_to_json, summary_to_yaml

logger = logging.getLogger(__name__)


def build_argparser() -> argparse.ArgumentParser:
    """Build command-line argument parser."""
    parser = argparse.ArgumentParser(
        prog="labels",
        description="List or set Microsoft sensitivity labels on .docx/.xlsx/.pptx files",
        formatter_class=argparse.RawTextHelpFormatter,
        epilog="""
EXAMPLES:
  # List labels of every Office file below a directory, labeled files only:
  %(prog)s --recursive --labeled get ./documents

  # Apply a label to a single file and show a summary:
  %(prog)s --summary set ./report.docx 1234-1234-1234 4321-4321-4321

  # Preview a set without changing anything:
  %(prog)s --dry-run set ./documents 1234-1234-1234 4321-4321-4321
        """,
    )

    parser.add_argument("--labeled", action="store_true",
                        help="only show files with labels")
    parser.add_argument("--summary", action="store_true",
                        help="show summary of results")
    parser.add_argument("--summary-format", choices=("yaml", "json"), default="yaml",
                        help="summary output format (default: yaml)")
    parser.add_argument("--recursive", "--recurse", dest="recursive", action="store_true",
                        help="recurse through subdirectory files")
    parser.add_argument("--dry-run", action="store_true",
                        help="show results of set command without applying")
    parser.add_argument("--tmp-dir", default=None,
                        help="temporary directory for file extraction\n"
                             "(default: $LABELS_TMP_DIR or the system temp dir)")
    parser.add_argument("--keep-tmp", action="store_true",
                        help="keep extracted files for diagnostics")
    parser.add_argument("--resolve", default=None,
                        help="JSON/YAML file mapping label and tenant IDs to names (get only)")
    parser.add_argument("--strict", action="store_true",
                        help="fail on a malformed LabelInfo.xml instead of reporting no labels")
    parser.add_argument("--verbose", action="store_true",
                        help="show diagnostic output")
    parser.add_argument("--log-file", default=None,
                        help="also write diagnostic output to this file")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    commands = parser.add_subparsers(dest="command", metavar="command", required=True)

    get_parser = commands.add_parser(
        "get", help="list sensitivity labels for the provided file or directory")
    get_parser.add_argument("path", help="path to the file or directory")

    set_parser = commands.add_parser(
        "set", help="apply the provided sensitivity label ID to the provided file or directory")
    set_parser.add_argument("path", help="path to the file or directory")
    set_parser.add_argument("label_id", help="sensitivity label ID to apply")
    set_parser.add_argument("tenant_id", help="microsoft tenant ID to apply")

    return parser


def config_from_args(args: argparse.Namespace, base: Optional[Config] = None) -> Config:
    base = base if base is not None else Config()
    return base.with_overrides(
        tmp_dir=args.tmp_dir,
        resolve_file=args.resolve,
        log_file=args.log_file,
        verbose=args.verbose,
        labeled_only=args.labeled,
        summary=args.summary,
        summary_format=args.summary_format,
        recursive=args.recursive,
        dry_run=args.dry_run,
        keep_tmp=args.keep_tmp,
        strict=args.strict,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main program entry point."""
    parser = build_argparser()
    args = parser.parse_args(argv)

    config = config_from_args(args, config_from_env())
    configure_logging(verbose=config.verbose, log_file=config.log_file)
    logger.debug("parsed args: %s", vars(args))

    names = try_load_label_names(config.resolve_file) if args.command == "get" else None
    header_printed = False

    def show(result: FileLabelResult) -> None:
        nonlocal header_printed
        if not header_printed:
            print(format_header())
            header_printed = True
        if config.labeled_only and not result.labeled:
            return
        print(format_result(result, names), flush=True)

    try:
        results = run(
            args.command,
            args.path,
            config,
            label_id=getattr(args, "label_id", None),
            tenant_id=getattr(args, "tenant_id", None),
            on_result=show,
        )
    except ValueError as e:
        parser.error(str(e))
    except (LabelsError, OSError) as e:
        logger.debug("run aborted", exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 1

    if not results:
        print("No files found")
        return 0

    if config.summary:
        shown = [r for r in results if r.labeled or not config.labeled_only]
        if config.summary_format == "json":
            print(summary_to_json(shown))
        else:
            print(summary_to_yaml(shown), end="")

    return 0


if __name__ == "__main__":
    sys.exit(main())
