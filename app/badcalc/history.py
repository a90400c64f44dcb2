"""
History Module

Keeps the log of computed operations.

Every record lives in memory for the life of the process and is also
appended, best effort, to a flat text file:

    5|3|+|8.0
    3,5|2|*|7.0

Operands are stored as typed, so the log keeps the user's decimal
separator. The file is never read back or rewritten.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Union

from tenacity import (
    retry,
    stop_after_attempt,
    wait_fixed,
    retry_if_exception_type,
    before_sleep_log,
)

from .errors import HistoryWriteError, StartupError
from .logging_config import get_logger

logger = get_logger("history")

FIELD_SEPARATOR = "|"


def format_result(value: float) -> str:
    """Shortest text that round-trips to the same float."""
    return repr(float(value))


@dataclass(frozen=True)
class OperationRecord:
    """
    One computed operation.

    Operands are the original input text, not the parsed values.
    """
    operand_a: str
    operand_b: str
    operator: str
    result: float

    def to_line(self) -> str:
        """Render as a delimited history line (without terminator)."""
        return FIELD_SEPARATOR.join([
            self.operand_a,
            self.operand_b,
            self.operator,
            format_result(self.result),
        ])

    def __str__(self) -> str:
        return self.to_line()


def ensure_data_dir(path: Union[str, Path]) -> Path:
    """
    Create the data directory (and parents) if missing.

    Raises:
        StartupError: If the directory cannot be created
    """
    data_dir = Path(path)
    try:
        data_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise StartupError(f"Could not create data directory {data_dir}: {e}") from e
    return data_dir


class HistoryStore:
    """
    Append-only operation history.

    The in-memory list is the source of truth for display. The file is
    a mirror that may fall behind if writes fail.
    """

    def __init__(self, path: Union[str, Path], write_attempts: int = 1,
                 retry_wait: float = 0.1):
        """
        Initialize the store.

        Args:
            path: History file to append to
            write_attempts: Tries per record before giving up on the file
            retry_wait: Seconds between tries
        """
        self.path = Path(path)
        self.write_attempts = max(1, write_attempts)
        self.retry_wait = retry_wait
        self._records: List[OperationRecord] = []

    def append(self, record: OperationRecord) -> bool:
        """
        Add a record to memory, then to the file.

        A file failure is logged and does not undo the in-memory add.

        Returns:
            True if the record reached the file
        """
        self._records.append(record)
        try:
            self._write_line(record.to_line())
        except HistoryWriteError as e:
            logger.warning(f"History not persisted: {e}")
            return False
        logger.debug(f"Recorded operation: {record}")
        return True

    def all(self) -> List[OperationRecord]:
        """All records in insertion order."""
        return list(self._records)

    def _create_retry_decorator(self):
        """Create a retry decorator based on the store settings."""
        return retry(
            stop=stop_after_attempt(self.write_attempts),
            wait=wait_fixed(self.retry_wait),
            retry=retry_if_exception_type(OSError),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )

    def _write_line(self, line: str) -> None:
        """Open, append one line, close. Raises HistoryWriteError."""
        retry_decorator = self._create_retry_decorator()

        @retry_decorator
        def _append():
            # newline="" so os.linesep is written as-is
            with open(self.path, "a", encoding="utf-8", newline="") as f:
                f.write(line + os.linesep)

        try:
            _append()
        except OSError as e:
            raise HistoryWriteError(str(e)) from e

    def __iter__(self) -> Iterator[OperationRecord]:
        return iter(list(self._records))

    def __len__(self) -> int:
        """Number of records in memory."""
        return len(self._records)

    def __str__(self) -> str:
        return f"HistoryStore({len(self._records)} records, {self.path})"
