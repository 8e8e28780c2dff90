"""File I/O helpers for flat record input and nested output."""

import json
import logging
from pathlib import Path
from typing import Union

logger = logging.getLogger(__name__)

JSONL_SUFFIXES = {".jsonl", ".ndjson"}


def read_jsonl(file_path: Union[str, Path]) -> list[dict]:
    """Read records from a JSONL file.

    Args:
        file_path: Path to JSONL file

    Returns:
        List of parsed records
    """
    records = []

    with open(file_path, "r", encoding="utf-8") as f:
        for line in f:
            if line.strip():
                records.append(json.loads(line))

    logger.debug(f"Read {len(records)} records from {file_path}")
    return records


def read_json(file_path: Union[str, Path]) -> list[dict]:
    """Read records from a JSON file.

    Accepts a top-level array of objects, or an object with a
    ``records`` array.
    """
    with open(file_path, "r", encoding="utf-8") as f:
        data = json.load(f)

    if isinstance(data, dict) and isinstance(data.get("records"), list):
        data = data["records"]

    if not isinstance(data, list) or not all(isinstance(r, dict) for r in data):
        raise ValueError(f"Expected a JSON array of objects in {file_path}")

    logger.debug(f"Read {len(data)} records from {file_path}")
    return data


def read_parquet(file_path: Union[str, Path]) -> list[dict]:
    """Read records from a Parquet file.

    Requires pyarrow to be installed.
    """
    try:
        import pyarrow.parquet as pq
    except ImportError:
        raise ImportError("pyarrow is required for Parquet support")

    records = pq.read_table(file_path).to_pylist()
    logger.debug(f"Read {len(records)} records from Parquet at {file_path}")
    return records


def read_records(file_path: Union[str, Path]) -> list[dict]:
    """Read flat records, choosing the reader by file suffix."""
    suffix = Path(file_path).suffix.lower()

    if suffix in JSONL_SUFFIXES:
        return read_jsonl(file_path)
    if suffix == ".json":
        return read_json(file_path)
    if suffix == ".parquet":
        return read_parquet(file_path)

    raise ValueError(f"Unsupported input format: {suffix or file_path}")


def write_json(
    forest: list[dict],
    output_path: Union[str, Path],
    indent: int = 2,
) -> dict:
    """Write a nested forest to a JSON file.

    Args:
        forest: Root records with nested children
        output_path: Output file path
        indent: JSON indentation

    Returns:
        Metadata dict with file info
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(forest, f, indent=indent, default=str)
        f.write("\n")

    metadata = {
        "file_path": str(output_path),
        "root_count": len(forest),
        "file_size_bytes": output_path.stat().st_size,
    }

    logger.info(f"Wrote {len(forest)} root records to {output_path}", extra=metadata)

    return metadata
