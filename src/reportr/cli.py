from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from reportr import __version__
from reportr.config import load_config
from reportr.errors import ReportError
from reportr.pipeline.generate import DEFAULT_LOGGER_NAME, run_pipeline
from reportr.pipeline.loader import load_record
from reportr.pipeline.normalizer import canonicalize, parse_record
from reportr.summary import RecordSummary
from reportr.validation import check_record_shape


def _configure_logging(verbose: bool) -> logging.Logger:
    """Send reportr diagnostics to stderr."""
    logger = logging.getLogger(DEFAULT_LOGGER_NAME)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logger.handlers[:] = [handler]
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    logger.propagate = False
    return logger


def _cmd_generate(args: argparse.Namespace) -> int:
    """Generate the HTML report for a Cucumber JSON record."""
    config = load_config(
        config_file=args.config,
        overrides={
            "output_dir": args.out,
            "template": args.template,
            "template_dir": args.template_dir,
            "check_shape": False if args.no_shape_check else None,
        },
    )

    outcome = run_pipeline(
        Path(args.record),
        config.output_dir,
        logger=logging.getLogger(DEFAULT_LOGGER_NAME),
        assets=config.asset_provider(),
        template=config.template,
        check_shape=config.check_shape,
    )

    if args.json:
        print(json.dumps(outcome.to_dict(), indent=2, ensure_ascii=False))
    elif outcome.ok:
        print(outcome.output_path)

    return 0 if outcome.ok else 1


def _cmd_validate(args: argparse.Namespace) -> int:
    """Check that a record would embed cleanly, without writing anything."""
    record_path = Path(args.record)
    try:
        document = parse_record(load_record(record_path))
        canonicalize(document)
    except ReportError as e:
        print(f"✗ {record_path}: invalid", file=sys.stderr)
        print(str(e), file=sys.stderr)
        return 1

    summary = RecordSummary.from_document(document)
    issues = check_record_shape(document)

    if not issues:
        print(f"✓ {record_path}: Valid")
    else:
        print(f"⚠ {record_path}: {len(issues)} shape finding(s)")
        for issue in issues[:20]:
            print(f"  {issue}")
        if len(issues) > 20:
            print(f"  ... and {len(issues) - 20} more")
    print(f"  {summary.describe()}")

    if issues and args.strict:
        return 1
    return 0


def _cmd_show_config(args: argparse.Namespace) -> int:
    """Print the resolved configuration."""
    config = load_config(config_file=args.config)

    if args.json:
        print(json.dumps(config.to_dict(), indent=2))
        return 0

    print("reportr configuration")
    print("=" * 40)
    for key, value in config.to_dict().items():
        print(f"  {key:<18} {value if value is not None else '(not set)'}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="reportr",
        description="Self-contained HTML reports from Cucumber JSON test records",
    )

    # Global flags
    p.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Show debug diagnostics and full tracebacks",
    )
    p.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    sub = p.add_subparsers(dest="cmd", required=True)

    # generate
    p_gen = sub.add_parser(
        "generate",
        help="Embed a Cucumber JSON record into the HTML report template",
    )
    p_gen.add_argument("record", help="Path to the Cucumber JSON record")
    p_gen.add_argument("--out", help="Output directory (default: target/cucumber)")
    p_gen.add_argument("--template", help="Template identifier (default: index.html)")
    p_gen.add_argument("--template-dir", help="Load templates from this directory instead of the bundled ones")
    p_gen.add_argument("--config", help="Path to reportr.yaml (default: auto-discover)")
    p_gen.add_argument(
        "--no-shape-check",
        action="store_true",
        help="Do not warn when the record does not look like Cucumber JSON",
    )
    p_gen.add_argument("--json", action="store_true", help="Print the run outcome as JSON")
    p_gen.set_defaults(func=_cmd_generate)

    # validate
    p_val = sub.add_parser(
        "validate",
        help="Check a record without writing a report",
    )
    p_val.add_argument("record", help="Path to the Cucumber JSON record")
    p_val.add_argument(
        "--strict",
        action="store_true",
        help="Exit non-zero on shape findings too",
    )
    p_val.set_defaults(func=_cmd_validate)

    # show-config
    p_show = sub.add_parser(
        "show-config",
        help="Show the resolved configuration",
    )
    p_show.add_argument("--config", help="Path to reportr.yaml (default: auto-discover)")
    p_show.add_argument("--json", action="store_true", help="Output as JSON")
    p_show.set_defaults(func=_cmd_show_config)

    return p


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    _configure_logging(args.verbose)

    try:
        rc = args.func(args)
        raise SystemExit(rc)
    except SystemExit:
        raise
    except KeyboardInterrupt:
        print("\n⚠️  Interrupted by user", file=sys.stderr)
        raise SystemExit(130)
    except ReportError as e:
        print(str(e), file=sys.stderr)
        raise SystemExit(1)
    except Exception as e:
        if args.verbose:
            import traceback
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
            print("Run with --verbose for full traceback", file=sys.stderr)
        raise SystemExit(1)
