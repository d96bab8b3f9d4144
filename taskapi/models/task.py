# taskapi/models/task.py

import itertools
import os
import random
import re
import time
from dataclasses import dataclass
from datetime import datetime, timezone

MAX_TEXT_LENGTH = 200

_TASK_ID_RE = re.compile(r"^[0-9a-fA-F]{24}$")

# 5 random bytes per process plus a rolling 3-byte counter, like a Mongo ObjectId.
_PROCESS_UNIQUE = os.urandom(5)
_id_counter = itertools.count(random.randint(0, 0xFFFFFF))


class TaskValidationError(ValueError):
    """Raised when task input breaks one of the record rules."""


@dataclass(frozen=True)
class Task:
    id: str
    text: str
    created_at: str
    updated_at: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "text": self.text,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }


def new_task_id() -> str:
    """Generate a 24-char hex id: seconds timestamp, process bytes, counter."""
    seconds = int(time.time()).to_bytes(4, "big")
    counter = (next(_id_counter) & 0xFFFFFF).to_bytes(3, "big")
    return (seconds + _PROCESS_UNIQUE + counter).hex()


def is_valid_task_id(value) -> bool:
    return isinstance(value, str) and bool(_TASK_ID_RE.match(value))


def utc_timestamp() -> str:
    now = datetime.now(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


def clean_task_text(value) -> str:
    """
    Return the trimmed task text or raise TaskValidationError.

    Checks run in order: type, UTF-8 encodability, emptiness after trim,
    length after trim.
    """
    if not isinstance(value, str):
        raise TaskValidationError("Task text must be a string")
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        # Lone surrogates from JSON "\ud800" escapes.
        raise TaskValidationError("Task text must be valid UTF-8") from None
    cleaned = value.strip()
    if not cleaned:
        raise TaskValidationError("Task text is required")
    if len(cleaned) > MAX_TEXT_LENGTH:
        raise TaskValidationError(f"Task text must be at most {MAX_TEXT_LENGTH} characters")
    return cleaned
