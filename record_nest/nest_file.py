"""CLI entrypoint: flat records file → nested JSON.

Usage:
    python -m record_nest.nest_file records.jsonl
    python -m record_nest.nest_file records.json --output tree.json
    python -m record_nest.nest_file rows.parquet --parent-field parent_id --strict
"""

import argparse
import json
import logging
import sys
import uuid
from datetime import datetime, timezone
from typing import Optional

from dotenv import load_dotenv

from record_nest.config import NestConfig
from record_nest.transform import nest_with_report
from record_nest.utils import RunLogger, read_records, setup_logging, timed_operation, write_json

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


def run_nest(
    input_path: str,
    output_path: Optional[str] = None,
    config: Optional[NestConfig] = None,
    indent: int = 2,
    run_id: Optional[str] = None,
    stdout=None,
) -> dict:
    """Read flat records, nest them and write the forest.

    Args:
        input_path: Path to a .jsonl, .json or .parquet file
        output_path: Where to write the JSON forest (stdout if omitted)
        config: Field names and strictness (environment defaults if omitted)
        indent: JSON indentation for the output
        run_id: Optional run ID (auto-generated if not provided)
        stdout: Stream used when no output path is given

    Returns:
        Run summary
    """
    if run_id is None:
        run_id = uuid.uuid4().hex[:12]

    start_time = datetime.now(timezone.utc)
    run_logger = RunLogger(source=input_path, run_id=run_id)

    try:
        config = config or NestConfig()

        run_logger.start("read")
        records = read_records(input_path)
        run_logger.success("read", row_count=len(records))

        with timed_operation("nest", logger) as timer:
            report = nest_with_report(records, **config.as_kwargs())

        run_logger.log_nest(
            input_count=len(records),
            root_count=len(report.roots),
            node_count=report.node_count,
            dropped_count=report.dropped_count,
            duration_ms=timer.duration_ms,
        )

        if not report.is_clean:
            logger.warning(
                f"Input is not a clean forest: {len(report.errors())} issues",
                extra={"run_id": run_id, "issues": report.errors()[:20]},
            )

        run_logger.start("write")
        if output_path:
            write_json(report.roots, output_path, indent=indent)
        else:
            stream = stdout or sys.stdout
            json.dump(report.roots, stream, indent=indent, default=str)
            stream.write("\n")
        run_logger.success("write", row_count=len(report.roots))

    except Exception as e:
        run_logger.error("run", e)
        logger.error(f"Failed to nest {input_path}: {e}", exc_info=True)
        return {
            "run_id": run_id,
            "input": input_path,
            "status": "error",
            "error": str(e),
        }

    duration_seconds = (datetime.now(timezone.utc) - start_time).total_seconds()

    summary = {
        "run_id": run_id,
        "input": input_path,
        "output": output_path,
        "status": "success",
        "records_read": len(records),
        "root_count": len(report.roots),
        "node_count": report.node_count,
        "dropped_count": report.dropped_count,
        "duplicate_count": len(report.duplicate_ids),
        "self_reference_count": len(report.self_referencing),
        "duration_seconds": duration_seconds,
    }

    logger.info(
        f"Nested {len(records)} records into {len(report.roots)} roots "
        f"in {duration_seconds:.2f}s",
        extra={"summary": summary},
    )

    return summary


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Nest flat parent-linked records into a JSON forest"
    )
    parser.add_argument("input", help="Input file (.jsonl, .ndjson, .json or .parquet)")
    parser.add_argument(
        "--output",
        "-o",
        default=None,
        help="Output JSON file (default: stdout)",
    )
    parser.add_argument("--id-field", default=None, help="Identifier field (default: id)")
    parser.add_argument("--parent-field", default=None, help="Parent field (default: parent)")
    parser.add_argument(
        "--children-field",
        default=None,
        help="Children field (default: children)",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail on duplicate ids, unknown parents or self-references",
    )
    parser.add_argument("--indent", type=int, default=2, help="JSON indentation (default: 2)")
    parser.add_argument(
        "--run-id",
        type=str,
        default=None,
        help="Run ID (auto-generated if not provided)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Log level (default: INFO)",
    )
    return parser


def main(argv: Optional[list[str]] = None):
    """CLI entrypoint."""
    args = build_parser().parse_args(argv)

    # Logs go to stderr so stdout stays valid JSON
    setup_logging(level=args.log_level, json_format=True)

    config = NestConfig(
        id_field=args.id_field,
        parent_field=args.parent_field,
        children_field=args.children_field,
        strict=True if args.strict else None,
    )

    result = run_nest(
        args.input,
        output_path=args.output,
        config=config,
        indent=args.indent,
        run_id=args.run_id,
    )

    # Exit with error code on failure
    if result["status"] != "success":
        sys.exit(1)


if __name__ == "__main__":
    main()
