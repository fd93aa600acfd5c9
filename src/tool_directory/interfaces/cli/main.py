import argparse
import dataclasses
import logging
import sys
from pathlib import Path
from typing import Optional, Tuple
import importlib
import colorlog

from tool_directory.core.utils import DEFAULT_DATA_ROOT, get_data_paths

try:
    # Prefer package-defined version
    from tool_directory import __version__ as _PACKAGE_VERSION
except ImportError:  # pragma: no cover - defensive fallback
    _PACKAGE_VERSION = None  # type: ignore[assignment]
    try:
        # Fallback to installed package metadata
        from importlib.metadata import version as _pkg_version, PackageNotFoundError

        _PACKAGE_VERSION = _pkg_version("tool-directory-tools")  # type: ignore[assignment]
    except PackageNotFoundError:
        _PACKAGE_VERSION = "unknown"  # type: ignore[assignment]


def setup_logging(
    verbose: bool = False, warnings_only: bool = False, errors_only: bool = False
) -> None:
    logger = logging.getLogger()
    for h in list(logger.handlers):
        logger.removeHandler(h)
    log_format = (
        "%(asctime)s:%(levelname)s:%(name)s in %(filename)s:%(funcName)s:%(lineno)d: %(message)s"
    )
    log_colors = {
        "DEBUG": "cyan",
        "INFO": "green",
        "WARNING": "yellow",
        "ERROR": "red",
        "CRITICAL": "bold_red",
    }
    stream_handler = colorlog.StreamHandler(sys.stderr)
    formatter = colorlog.ColoredFormatter(f"%(log_color)s{log_format}", log_colors=log_colors)
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)
    if errors_only:
        logger.setLevel(logging.ERROR)
    elif warnings_only:
        logger.setLevel(logging.WARNING)
    else:
        # Default stays quiet: stdout carries the report, stderr only problems
        logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


def _resolve_paths(args: argparse.Namespace) -> Tuple[Path, Optional[Path]]:
    """Work out the primary dataset path and split directory from CLI args."""
    data_root = Path(getattr(args, "data_root", None) or DEFAULT_DATA_ROOT)
    default_primary, default_split = get_data_paths(data_root)
    primary_path = Path(getattr(args, "tools_file", None) or default_primary)
    if getattr(args, "no_split", False):
        return primary_path, None
    split_dir = Path(getattr(args, "split_dir", None) or default_split)
    return primary_path, split_dir


def _report_path(option, primary_path: Path, suffix: str) -> Path:
    if option is True:
        # Default location: next to the dataset
        return primary_path.parent / f"{primary_path.stem}_validation.{suffix}"
    report_dir = Path(option)
    report_dir.mkdir(parents=True, exist_ok=True)
    return report_dir / f"{primary_path.stem}_validation.{suffix}"


def cmd_validate(args: argparse.Namespace) -> int:
    """Validate the primary dataset and split category files.

    Returns:
        0 if no issues were found
        1 if any issue was found or the primary dataset could not be loaded
    """
    registry = importlib.import_module("tool_directory.validation.registry")
    config_mod = importlib.import_module("tool_directory.validation.config")
    loader = importlib.import_module("tool_directory.ingestion.loader")

    primary_path, split_dir = _resolve_paths(args)

    config_arg = getattr(args, "config", None)
    try:
        config = config_mod.load_config(Path(config_arg) if config_arg else None)
    except (OSError, ValueError) as e:
        logging.error("Failed to load validation config: %s", e)
        return 1
    if getattr(args, "cross_source_duplicates", False):
        config = dataclasses.replace(config, duplicates_span_sources=True)

    logging.info("Validating %s...", primary_path)
    try:
        report = registry.run_validation(primary_path, split_dir, config)
    except loader.MalformedDatasetError as e:
        print(f"❌ Error reading {primary_path.name}: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"❌ Error reading split files in {split_dir}: {e}", file=sys.stderr)
        return 1

    registry.print_report(report)

    report_md = getattr(args, "report", False)
    if report_md:
        report_path = _report_path(report_md, primary_path, "md")
        with open(report_path, "w", encoding="utf-8") as f:
            f.write(report.to_markdown())
        logging.info("Markdown report saved: %s", report_path)

    report_json = getattr(args, "report_json", False)
    if report_json:
        report_path = _report_path(report_json, primary_path, "json")
        with open(report_path, "w", encoding="utf-8") as f:
            f.write(report.to_json())
        logging.info("JSON report saved: %s", report_path)

    if report.has_issues():
        logging.info("Validation found %d issue(s).", report.issue_count())
        return 1
    return 0


def cmd_slugs(args: argparse.Namespace) -> int:
    """Generate missing slugs and sort categories in the primary dataset."""
    slugs = importlib.import_module("tool_directory.maintenance.slugs")

    primary_path, _ = _resolve_paths(args)
    try:
        update = slugs.update_slugs(primary_path, dry_run=args.dry_run)
    except (OSError, ValueError) as e:
        logging.error("Error processing slugs: %s", e)
        return 1
    for title, slug in update.generated:
        print(f"Generated slug for {title}: {slug}")
    for name in update.sorted_categories:
        print(f"Sorted tools in category: {name}")
    if not update.modified:
        print(f"✅ {primary_path.name} already up to date (slugs & sorting)")
    elif args.dry_run:
        print(f"Dry run: {primary_path.name} not written")
    else:
        print(f"✅ Updated {primary_path.name} (slugs & sorting)")
    return 0


def _add_path_arguments(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--data-root",
        default=None,
        help=f"Site data directory holding tools.json and tools/ (defaults to ./{DEFAULT_DATA_ROOT})",
    )
    p.add_argument(
        "--tools-file",
        default=None,
        help="Path to the primary dataset (defaults to <data-root>/tools.json)",
    )


def _add_validate_arguments(p: argparse.ArgumentParser) -> None:
    _add_path_arguments(p)
    p.add_argument(
        "--split-dir",
        default=None,
        help="Directory of per-category JSON files (defaults to <data-root>/tools)",
    )
    p.add_argument(
        "--no-split",
        action="store_true",
        help="Skip the split category files",
    )
    p.add_argument(
        "--config",
        default=None,
        help="Path to a validation YAML config (e.g. config/validation.yaml)",
    )
    p.add_argument(
        "--cross-source-duplicates",
        action="store_true",
        help="Include split-file URLs in duplicate detection",
    )
    p.add_argument(
        "--report",
        nargs="?",
        const=True,
        default=False,
        help="Write a detailed Markdown report next to the dataset, or into the given directory.",
    )
    p.add_argument(
        "--report-json",
        nargs="?",
        const=True,
        default=False,
        help="Write a detailed JSON report next to the dataset, or into the given directory.",
    )


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="tool-directory",
        description=f"Tool Directory Tools (v{_PACKAGE_VERSION}). Runs 'validate' when no command is given.",
    )
    p.add_argument("--verbose", action="store_true", help="Enable verbose logging")
    p.add_argument(
        "--warnings-only",
        action="store_true",
        help="Show only warnings and errors (overrides --verbose)",
    )
    p.add_argument(
        "--errors-only",
        action="store_true",
        help="Show only errors (overrides --warnings-only and --verbose)",
    )
    # Bare invocation runs validate, so it accepts the validate options too
    _add_validate_arguments(p)
    p.set_defaults(func=cmd_validate)

    sub = p.add_subparsers(dest="command")

    p_validate = sub.add_parser("validate", help="Check the tools dataset for integrity issues")
    _add_validate_arguments(p_validate)
    p_validate.set_defaults(func=cmd_validate)

    p_slugs = sub.add_parser("slugs", help="Generate missing slugs and sort tools by title")
    _add_path_arguments(p_slugs)
    p_slugs.add_argument(
        "--dry-run",
        action="store_true",
        help="Report what would change without writing tools.json",
    )
    p_slugs.set_defaults(func=cmd_slugs)

    return p


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(
        verbose=bool(args.verbose),
        warnings_only=bool(getattr(args, "warnings_only", False)),
        errors_only=bool(getattr(args, "errors_only", False)),
    )
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
