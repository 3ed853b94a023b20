"""
Shareable progress codes

A code is the prefix 'DIEDRICO-LAB-V1_' followed by base64-encoded JSON
{"n": student name, "c": completed levels, "d": ISO timestamp}.
"""

import base64
import binascii
import json
from datetime import datetime, timezone
from typing import NamedTuple

from .config import DEFAULT_STUDENT, PROGRESS_PREFIX
from .errors import ProgressCodeError


class Progress(NamedTuple):
    name: str
    completed: list
    date: str = None


def encode_progress(name, completed, date=None):
    """
    Build a progress code

    Args:
        name: Student name, defaults to 'Anonimo' when empty
        completed: Iterable of completed level numbers
        date: ISO timestamp, defaults to now (UTC)

    Returns:
        Progress code string
    """
    if date is None:
        date = datetime.now(timezone.utc).isoformat(timespec='milliseconds')
        date = date.replace('+00:00', 'Z')
    payload = {
        'n': name or DEFAULT_STUDENT,
        'c': sorted({int(level) for level in completed}),
        'd': date,
    }
    raw = json.dumps(payload, separators=(',', ':'), ensure_ascii=False)
    # Latin-1 bytes, as a browser's btoa() produces; UTF-8 only for names outside it
    try:
        data = raw.encode('latin-1')
    except UnicodeEncodeError:
        data = raw.encode('utf-8')
    return PROGRESS_PREFIX + base64.b64encode(data).decode('ascii')


def _decode_text(data):
    try:
        return data.decode('utf-8')
    except UnicodeDecodeError:
        return data.decode('latin-1')


def decode_progress(code):
    """
    Read a progress code back

    Raises:
        ProgressCodeError: The code is not base64 JSON or has no level list
    """
    raw = code.strip().replace(PROGRESS_PREFIX, '', 1)
    try:
        data = json.loads(_decode_text(base64.b64decode(raw, validate=True)))
    except (binascii.Error, ValueError) as e:
        raise ProgressCodeError(f"Could not read progress code: {e}") from e

    if not isinstance(data, dict) or not isinstance(data.get('c'), list):
        raise ProgressCodeError("Progress code has no list of completed levels")
    try:
        completed = [int(level) for level in data['c']]
    except (TypeError, ValueError) as e:
        raise ProgressCodeError(f"Invalid level in progress code: {e}") from e
    return Progress(
        name=data.get('n') or DEFAULT_STUDENT,
        completed=completed,
        date=data.get('d'),
    )
