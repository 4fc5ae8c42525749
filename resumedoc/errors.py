"""Error types raised by resumedoc and their process exit codes."""
from __future__ import annotations

import sys
import traceback
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional

__all__ = [
    "ExitCode",
    "ResumeDocError",
    "OptionsError",
    "InputNotFoundError",
    "UsageError",
    "handle_error",
]


class ExitCode(IntEnum):
    OK = 0
    FAILURE = 1
    USAGE = 2
    BAD_OPTIONS = 3
    MISSING_INPUT = 6
    INTERRUPTED = 130


@dataclass
class ResumeDocError(Exception):
    """A failure the CLI reports as one line plus an optional hint."""
    message: str
    code: ExitCode = ExitCode.FAILURE
    hint: Optional[str] = None

    def __str__(self) -> str:
        return self.message


class OptionsError(ResumeDocError):
    """Options file unreadable or not a mapping."""
    def __init__(self, message: str, hint: Optional[str] = None):
        super().__init__(message, ExitCode.BAD_OPTIONS, hint)


class InputNotFoundError(ResumeDocError):
    def __init__(self, message: str, hint: Optional[str] = None):
        super().__init__(message, ExitCode.MISSING_INPUT, hint)


class UsageError(ResumeDocError):
    def __init__(self, message: str, hint: Optional[str] = None):
        super().__init__(message, ExitCode.USAGE, hint)


def handle_error(error: BaseException, verbose: bool = False) -> int:
    """Write ``error`` to stderr and map it to an exit code."""
    if isinstance(error, KeyboardInterrupt):
        sys.stderr.write("\nInterrupted.\n")
        return int(ExitCode.INTERRUPTED)

    lines = [f"resumedoc: {error}"]
    if isinstance(error, ResumeDocError):
        if error.hint:
            lines.append(f"  hint: {error.hint}")
        code = error.code
    else:
        code = ExitCode.FAILURE
    sys.stderr.write("\n".join(lines) + "\n")
    if verbose and not isinstance(error, ResumeDocError):
        traceback.print_exception(type(error), error, error.__traceback__)
    return int(code)
