"""
CLI runner for the jfmt engine.

This module provides the per-file pipeline (read, parse, check, optionally
fix and write back) and the command line entry point. Files are processed
independently on a thread pool; results are reported in input order.
"""

import argparse
import concurrent.futures
import json
import logging
import os
import sys
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from . import fixer
from .config import Configuration, load_config, load_config_from
from .errors import ConfigError, ConflictingEdits, JfmtError
from .formatter import diagnostics_to_json, format_diagnostics
from .java_adapter import JavaAdapter, default_java_adapter, get_parse_error
from .linter import lint
from .position import SourceText
from .registry import get_enabled_rules, get_rule_ids
from .types import Diagnostic, Rule, RuleContext

logger = logging.getLogger(__name__)


@dataclass
class FileReport:
    """Result of running the pipeline over one file."""
    path: str
    text: Optional[SourceText] = None
    diagnostics: List[Diagnostic] = field(default_factory=list)
    edits_applied: int = 0
    error: Optional[str] = None

    @property
    def fixed(self) -> bool:
        return self.edits_applied > 0

    @property
    def failed(self) -> bool:
        return self.error is not None or bool(self.diagnostics)


def process_file(path: str, config: Configuration, rules: Sequence[Rule], fix: bool = False,
                 adapter: Optional[JavaAdapter] = None) -> FileReport:
    """
    Check one file and, when fix is set, rewrite it with every safe fix.

    After a successful rewrite the file is checked again so the report only
    holds the diagnostics that remain. Failures are recorded on the report
    rather than raised.
    """
    adapter = adapter or default_java_adapter
    report = FileReport(path=path)

    try:
        with open(path, 'rb') as f:
            source = SourceText(f.read())
    except OSError as e:
        report.error = f"failed to read {path}: {e}"
        return report
    report.text = source

    try:
        tree = adapter.parse(source)
    except JfmtError as e:
        report.error = str(e)
        return report

    ctx = RuleContext(text=source, tree=tree, config=config, file_path=path)
    report.diagnostics = lint(ctx, rules)

    if not fix:
        return report

    error_span = get_parse_error(tree)
    if error_span is not None:
        line, column = source.offset_to_position(error_span[0])
        report.error = f"not fixed: syntax error at {line}:{column}"
        logger.warning("%s: %s", path, report.error)
        return report

    try:
        result = fixer.fix(ctx, rules)
    except ConflictingEdits as e:
        report.error = f"not fixed: {e}"
        logger.error("%s: %s", path, e)
        return report

    if result.text == source:
        return report

    try:
        with open(path, 'wb') as f:
            f.write(result.text.data)
    except OSError as e:
        report.error = f"failed to write {path}: {e}"
        return report
    report.edits_applied = len(result.applied)

    # Re-lint the fixed content to report remaining issues only
    try:
        fixed_tree = adapter.parse(result.text)
    except JfmtError as e:
        report.error = str(e)
        return report
    fixed_ctx = RuleContext(text=result.text, tree=fixed_tree, config=config, file_path=path)
    report.text = result.text
    report.diagnostics = lint(fixed_ctx, rules)
    return report


def run(paths: List[str], config: Configuration, rules: Sequence[Rule], fix: bool = False,
        jobs: int = 0, adapter: Optional[JavaAdapter] = None) -> List[FileReport]:
    """Run the pipeline over every Java file under paths."""
    adapter = adapter or default_java_adapter
    files = adapter.list_files(paths)
    if not files:
        return []

    if jobs <= 0:
        jobs = os.cpu_count() or 1
    jobs = min(jobs, len(files))

    def work(file_path: str) -> FileReport:
        try:
            return process_file(file_path, config, rules, fix=fix, adapter=adapter)
        except Exception as e:
            logger.exception("Failed to process %s", file_path)
            return FileReport(path=file_path, error=f"internal error: {e}")

    if jobs == 1:
        return [work(file_path) for file_path in files]

    with concurrent.futures.ThreadPoolExecutor(max_workers=jobs) as executor:
        return list(executor.map(work, files))


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jfmt",
        description="Check Java sources against jfmt's style rules and apply safe fixes",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  jfmt src/Main.java
  jfmt --fix src/
  jfmt --rules "no-*" --format json src/
        """
    )
    parser.add_argument("paths", nargs="+", help="Java files or directories to check")
    parser.add_argument("--fix", action="store_true", help="Apply safe fixes in place")
    parser.add_argument(
        "--rules",
        default="*",
        help="Comma-separated rule ids or patterns to run (default: *)"
    )
    parser.add_argument(
        "--config",
        help="Path to configuration file (default: nearest jfmt.yml or jfmt.toml above the current directory)"
    )
    parser.add_argument(
        "--format",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)"
    )
    parser.add_argument(
        "--jobs",
        type=int,
        default=0,
        help="Number of parallel jobs (0=auto, 1=sequential)"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose output")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point. Returns the process exit status."""
    parser = _build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else 2

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s: %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        config = load_config(args.config) if args.config else load_config_from(os.getcwd())
    except ConfigError as e:
        print(f"error loading config: {e}", file=sys.stderr)
        return 2
    logger.info("Using configuration: %s", config.to_dict())

    patterns = [p.strip() for p in args.rules.split(",") if p.strip()]
    rules = get_enabled_rules(patterns)
    if not rules:
        print(f"error: no rules match {args.rules!r} (available: {', '.join(get_rule_ids())})",
              file=sys.stderr)
        return 2
    logger.info("Running %d rules: %s", len(rules), [r.meta.id for r in rules])

    failures = 0
    paths = []
    for path in args.paths:
        if not os.path.exists(path):
            print(f"{path}: error: no such file or directory", file=sys.stderr)
            failures += 1
        elif os.path.isdir(path) or path.endswith(".java"):
            paths.append(path)
        else:
            print(f"Skipping non-Java file: {path}", file=sys.stderr)

    reports = run(paths, config, rules, fix=args.fix, jobs=args.jobs)

    json_findings = []
    json_errors = []
    for report in reports:
        if report.fixed:
            print(f"applied fixes: {report.path}", file=sys.stderr)
        if report.error:
            failures += 1
            if args.format == "json":
                json_errors.append({"file": report.path, "error": report.error})
            else:
                print(f"{report.path}: error: {report.error}", file=sys.stderr)
        if report.text is None:
            continue
        if report.diagnostics:
            failures += 1
        if args.format == "json":
            json_findings.extend(diagnostics_to_json(report.path, report.diagnostics, report.text))
        else:
            for line in format_diagnostics(report.path, report.diagnostics, report.text):
                print(line)

    if args.format == "json":
        print(json.dumps({
            "files_checked": len(reports),
            "findings": json_findings,
            "errors": json_errors,
        }, indent=2))

    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
