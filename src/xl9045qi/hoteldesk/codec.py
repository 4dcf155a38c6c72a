# Flat-file storage for entity collections.
#
# File layout:
#   line 1:   number of records
#   line 2..: one record per line, serialized as a JSON object
#
# JSON escaping keeps spaces, pipes, quotes and newlines inside free-text
# fields from breaking the line structure. Field order inside a record does
# not matter on load.

import json
import logging
import os
import os.path
import tempfile
from typing import Optional

import pydantic
from pydantic import TypeAdapter

from xl9045qi.hoteldesk.errors import FileCorruptedError, FileReadError, FileWriteError, ValidationError

logger = logging.getLogger(__name__)

_adapters = {}

def _adapter(model) -> TypeAdapter:
    if model not in _adapters:
        _adapters[model] = TypeAdapter(model)
    return _adapters[model]

def encode_record(record, model) -> str:
    return _adapter(model).dump_json(record).decode("utf-8")

def decode_record(line: str, model):
    return _adapter(model).validate_json(line)

def save_collection(path: str, records: list, model):
    """Write a collection of records to 'path', replacing the file atomically.

    Args:
        path (str): Target file.
        records (list): Instances of 'model'.
        model: The pydantic dataclass the records belong to.

    Raises:
        FileWriteError: If the file cannot be written.
    """
    lines = [str(len(records))]
    lines.extend(encode_record(r, model) for r in records)
    _atomic_write(path, "\n".join(lines) + "\n")
    logger.debug("Saved %d %s record(s) to %s", len(records), model.__name__, path)

def load_collection(path: str, model) -> list:
    """Load a collection written by save_collection().

    A missing file means there is no data yet and yields an empty list.

    Raises:
        FileReadError: If the file exists but cannot be read.
        FileCorruptedError: If the count line is missing or wrong, or any record fails to parse or validate.
    """
    text = _read(path)
    if text is None:
        return []

    lines = text.splitlines()
    count = _parse_count(path, lines)

    records = []
    for line_no, line in enumerate(lines[1:], start=2):
        if not line.strip():
            continue
        try:
            records.append(decode_record(line, model))
        except (pydantic.ValidationError, ValidationError, TypeError) as e:
            raise FileCorruptedError(path, f"line {line_no}: {e}") from e

    if len(records) != count:
        raise FileCorruptedError(path, f"header says {count} record(s) but {len(records)} found")

    logger.debug("Loaded %d %s record(s) from %s", len(records), model.__name__, path)
    return records

def save_document(path: str, document: dict):
    """Write a single JSON document using the same count-prefixed layout."""
    _atomic_write(path, "1\n" + json.dumps(document, sort_keys=True) + "\n")

def load_document(path: str) -> Optional[dict]:
    text = _read(path)
    if text is None:
        return None

    lines = text.splitlines()
    count = _parse_count(path, lines)
    body = [line for line in lines[1:] if line.strip()]
    if count != 1 or len(body) != 1:
        raise FileCorruptedError(path, "expected exactly one document")
    try:
        document = json.loads(body[0])
    except json.JSONDecodeError as e:
        raise FileCorruptedError(path, f"line 2: {e}") from e
    if not isinstance(document, dict):
        raise FileCorruptedError(path, "line 2: expected a JSON object")
    return document

def _parse_count(path: str, lines: list) -> int:
    if not lines:
        raise FileCorruptedError(path, "missing record count")
    try:
        count = int(lines[0].strip())
    except ValueError:
        raise FileCorruptedError(path, f"line 1: record count '{lines[0].strip()}' is not a number")
    if count < 0:
        raise FileCorruptedError(path, f"line 1: negative record count {count}")
    return count

def _read(path: str) -> Optional[str]:
    if not os.path.exists(path):
        return None
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise FileReadError(path, str(e)) from e

def _atomic_write(path: str, text: str):
    directory = os.path.dirname(os.path.abspath(path))
    tmp_path = None
    try:
        os.makedirs(directory, exist_ok=True)
        with tempfile.NamedTemporaryFile("w", encoding="utf-8", dir=directory,
                                         prefix="." + os.path.basename(path), suffix=".tmp",
                                         delete=False) as f:
            tmp_path = f.name
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, path)
    except OSError as e:
        if tmp_path is not None and os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise FileWriteError(path, str(e)) from e
