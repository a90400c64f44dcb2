"""
Session Module

The interactive read-evaluate-display loop.

Each pass through the loop handles one menu choice:
    MENU -> AWAIT_OPERAND_A -> AWAIT_OPERAND_B -> MENU   (arithmetic)
    MENU -> MENU                                        (history)
    MENU -> DONE                                        (exit or end of input)

Errors are handled per operation, so a bad input never ends the session.
"""

import re
import sys
from enum import Enum
from typing import Optional, TextIO

from rich.console import Console

from .config import Config, load_config
from .errors import InvalidInput, StartupError
from .evaluator import compute, is_undefined, operator_for_code
from .history import HistoryStore, OperationRecord, ensure_data_dir, format_result
from .logging_config import get_logger, new_operation_id, set_operation_id, setup_logging

# User text goes through these consoles verbatim: no markup, no emoji
# codes, no reflowing of long lines.
console = Console(markup=False, emoji=False, highlight=False, soft_wrap=True)
error_console = Console(stderr=True, markup=False, emoji=False, highlight=False, soft_wrap=True)

# Module logger
logger = get_logger("session")

MENU_TITLE = "CALCULADORA"
MENU_OPTIONS = "1:+ 2:- 3:* 4:/ 5:^ 6:% 7:hist 0:exit"
EXIT_CODE = "0"
HISTORY_CODE = "7"
EMPTY_HISTORY = "[empty history]"

# C0 controls and DEL, except TAB, LF and CR
_CONTROL_CHARS_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")


class SessionState(Enum):
    """Where the loop is in the current menu cycle."""
    MENU = "menu"
    AWAIT_OPERAND_A = "await_operand_a"
    AWAIT_OPERAND_B = "await_operand_b"
    DONE = "done"


def strip_line_terminator(line: str) -> str:
    """Drop one trailing LF, CRLF or CR."""
    if line.endswith("\n"):
        line = line[:-1]
    if line.endswith("\r"):
        line = line[:-1]
    return line


def sanitize(line: str) -> str:
    """Remove control characters other than CR, LF and TAB."""
    return _CONTROL_CHARS_RE.sub("", line)


def read_line(stream: TextIO) -> Optional[str]:
    """Read one line without its terminator. None at end of input."""
    line = stream.readline()
    if line == "":
        return None
    return strip_line_terminator(line)


def read_safe_line(stream: TextIO, max_length: int) -> str:
    """
    Read one bounded, sanitized line.

    End of input reads as an empty string.

    Raises:
        InvalidInput: If the line is longer than max_length
    """
    line = read_line(stream)
    if line is None:
        return ""
    if len(line) > max_length:
        raise InvalidInput(f"Input exceeds maximum length of {max_length} characters")
    return sanitize(line)


class CalculatorSession:
    """
    One interactive calculator session.

    Owns its history and I/O streams, so several sessions (or tests)
    can run side by side without touching the user's real files.
    """

    def __init__(
        self,
        history: HistoryStore,
        config: Optional[Config] = None,
        input_stream: Optional[TextIO] = None,
        output: Optional[Console] = None,
        errors: Optional[Console] = None,
    ):
        self.history = history
        self.config = config or Config()
        self.input_stream = input_stream if input_stream is not None else sys.stdin
        self.console = output or console
        self.error_console = errors or error_console
        self.state = SessionState.MENU
        self.operations_recorded = 0

    def run(self) -> int:
        """
        Run until the user exits or input ends.

        Returns:
            Number of operations recorded during the session
        """
        logger.info(f"Session started, history file: {self.history.path}")
        try:
            while self.state is not SessionState.DONE:
                self.step()
        except KeyboardInterrupt:
            self.console.print()
            self.state = SessionState.DONE
        finally:
            set_operation_id(None)
        logger.info(f"Session ended after {self.operations_recorded} operations")
        return self.operations_recorded

    def step(self) -> None:
        """Handle one menu choice."""
        new_operation_id()
        self.state = SessionState.MENU
        self.display_menu()

        choice = read_line(self.input_stream)
        if choice is None or choice == EXIT_CODE:
            self.state = SessionState.DONE
        elif choice == HISTORY_CODE:
            self.show_history()
        else:
            self.process_math_operation(choice)

    def display_menu(self) -> None:
        self.console.print(MENU_TITLE)
        self.console.print(MENU_OPTIONS)
        self.console.print("opt: ", end="")

    def show_history(self) -> None:
        """Print every recorded operation, oldest first."""
        records = self.history.all()
        if not records:
            self.console.print(EMPTY_HISTORY)
            return
        for record in records:
            self.console.print(record.to_line())

    def process_math_operation(self, code: str) -> None:
        """
        Read two operands, compute, then record and display the result.

        Always leaves the session back at the menu.
        """
        max_length = self.config.max_input_length
        try:
            self.state = SessionState.AWAIT_OPERAND_A
            self.console.print("a: ", end="")
            a = read_safe_line(self.input_stream, max_length)

            self.state = SessionState.AWAIT_OPERAND_B
            self.console.print("b: ", end="")
            b = read_safe_line(self.input_stream, max_length)

            operator = operator_for_code(code)
            result = compute(a, b, operator, self.config.max_numeric_length)

            if is_undefined(result):
                logger.info(f"Undefined result for {a!r} {operator} {b!r}")
                self.console.print(
                    "[ERROR] Invalid operation (division by zero or undefined result)",
                    style="red",
                )
                return

            recorded = self.history.append(OperationRecord(a, b, operator, result))
            self.operations_recorded += 1
            if not recorded:
                self.error_console.print(
                    f"[ERROR] Could not write history file: {self.history.path}",
                    style="red",
                )
            self.console.print(f"= {format_result(result)}")

        except InvalidInput as e:
            logger.info(f"Rejected input: {e}")
            self.console.print(f"[ERROR] Invalid input: {e}", style="red")
        except Exception as e:
            logger.exception("Unexpected error during operation")
            self.console.print(f"[ERROR] Unexpected error: {e}", style="red")
        finally:
            self.state = SessionState.MENU


# === Command Line Interface ===

def main() -> int:
    """
    Start an interactive calculator session.

    Usage:
        python -m badcalc

    Returns:
        Process exit status
    """
    try:
        config = load_config()
    except ValueError as e:
        error_console.print(f"[FATAL] {e}", style="bold red")
        return 1

    setup_logging(level=config.log_level, log_file=config.log_file, json_format=config.json_logs)

    try:
        ensure_data_dir(config.data_dir)
    except StartupError as e:
        logger.error(str(e))
        error_console.print(f"[FATAL] {e}", style="bold red")
        return 1

    history = HistoryStore(
        config.history_path,
        write_attempts=config.history_write_attempts,
        retry_wait=config.history_retry_wait,
    )
    CalculatorSession(history, config).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
