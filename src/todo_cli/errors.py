# src/todo_cli/errors.py

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class TodoError(Exception):
    code: str
    message: str
    detail: str | None = None

    def __str__(self) -> str:
        if self.detail:
            return f"{self.message} ({self.detail})"
        return self.message


class StoreIOError(TodoError):
    """Backing file could not be read or written."""

    def __init__(self, message: str, detail: str | None = None) -> None:
        super().__init__(code="store_io", message=message, detail=detail)


class StoreDecodeError(TodoError):
    """Backing file exists but is not a task document."""

    def __init__(self, message: str, detail: str | None = None) -> None:
        super().__init__(code="store_decode", message=message, detail=detail)


class UserInputError(TodoError):
    """Missing or malformed command arguments."""

    def __init__(self, message: str, detail: str | None = None) -> None:
        super().__init__(code="user_input", message=message, detail=detail)


def format_error(error: BaseException) -> str:
    if isinstance(error, TodoError):
        prefix = f"[{error.code}] " if error.code else ""
        return f"{prefix}{error}"
    return f"{error}"


def wrap_io_error(error: OSError, *, message: str) -> StoreIOError:
    return StoreIOError(message, detail=error.strerror or str(error))
