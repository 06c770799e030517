"""
Output of tracking results.
Serializes a TrackingResult and writes it to stdout or a file.
"""

import pickle
import sys
from pathlib import Path
import orjson
from loguru import logger

from parcel.config import OUTPUT_FORMATS, STDOUT
from parcel.exceptions import OutputError
from parcel.models import TrackingResult


def serialize(result: TrackingResult, fmt: str = "json", pretty: bool = False) -> bytes:
    """
    Serialize a tracking result.

    Args:
        result: Result to serialize
        fmt: "json" or "pickle"
        pretty: Indent JSON output

    Returns:
        Encoded bytes; JSON always ends with a newline
    """
    if fmt == "pickle":
        return pickle.dumps(result)
    if fmt != "json":
        raise OutputError(f"Unknown output format: {fmt!r} (expected one of {', '.join(OUTPUT_FORMATS)})")

    option = orjson.OPT_APPEND_NEWLINE
    if pretty:
        option |= orjson.OPT_INDENT_2
    return orjson.dumps(result.to_dict(), option=option)


def write_output(data: bytes, target: str = STDOUT) -> None:
    """
    Write encoded output to stdout or a file.

    A file target is created, or truncated if it exists.

    Raises:
        OutputError: If the target cannot be written
    """
    if target in (STDOUT, "-"):
        try:
            sys.stdout.buffer.write(data)
            sys.stdout.buffer.flush()
        except OSError as e:
            raise OutputError(f"Could not write to stdout: {e}") from e
        return

    path = Path(target)
    try:
        with open(path, "wb") as f:
            f.write(data)
    except OSError as e:
        raise OutputError(f"Could not write {path}: {e}", path=str(path)) from e

    logger.info(f"Wrote {len(data)} bytes to {path}")
