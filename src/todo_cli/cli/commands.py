# src/todo_cli/cli/commands.py

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from ..errors import UserInputError
from ..tasks.task_models import Task
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)

PROG = "todo"

EXIT_OK = 0
EXIT_NOT_FOUND = 1
EXIT_USAGE = 2

TABLE_HEADER = " ID | Status | Title"
TABLE_RULE = "-" * 37

# ASCII digits with an optional sign; no whitespace, underscores or other scripts.
TASK_ID_RE = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True, slots=True)
class CommandResult:
    text: str
    exit_code: int = EXIT_OK


CommandHandler = Callable[[TaskStore, list[str]], CommandResult]


class CommandRegistry:
    """Maps the first CLI argument to a handler (add, list, complete, ...)."""

    def __init__(self, prog: str = PROG) -> None:
        self.prog = prog
        self._handlers: dict[str, CommandHandler] = {}
        self._help: list[tuple[str, str]] = []

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_lines: list[tuple[str, str]],
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        self._handlers[name] = handler
        self._help.extend(help_lines)
        for alias in aliases:
            self._handlers[alias] = handler

    def handle(self, store: TaskStore, argv: Sequence[str]) -> CommandResult:
        """
        Dispatch argv (without the program name) to a handler.

        User input problems come back as an "Error: ..." result with
        EXIT_USAGE; store errors propagate to the caller.
        """
        if not argv:
            return CommandResult(self.build_help(), EXIT_USAGE)

        name = argv[0]
        args = list(argv[1:])

        handler = self._handlers.get(name)
        if handler is None:
            return CommandResult(
                f"{name} is not a valid command. See '{self.prog} help'", EXIT_USAGE
            )

        try:
            return handler(store, args)
        except UserInputError as e:
            logger.debug("Rejected %s %s: %s", name, args, e)
            return CommandResult(f"Error: {e.message}", EXIT_USAGE)

    def build_help(self) -> str:
        lines = ["Commands"]
        for usage, text in self._help:
            lines.append(f"  {self.prog} {usage:<20} {text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _parse_task_id(args: list[str]) -> int:
    if not args:
        raise UserInputError("Missing task ID")
    raw = args[0]
    if not TASK_ID_RE.fullmatch(raw):
        raise UserInputError("Invalid task ID", detail=raw)
    return int(raw)


def render_task_table(tasks: Sequence[Task]) -> str:
    lines = [TABLE_HEADER, TABLE_RULE]
    for task in tasks:
        lines.append(f" {task.id:2d} |   {task.status_marker}  | {task.title}")
    return "\n".join(lines)


def cmd_add(store: TaskStore, args: list[str]) -> CommandResult:
    if not args:
        raise UserInputError("Missing task title")
    task = store.add_task(args[0])
    return CommandResult(f"Added task {task.title}")


def cmd_list(store: TaskStore, args: list[str]) -> CommandResult:
    """
    list        -> active tasks
    list --all  -> every task, completed ones included
    """
    show_completed = bool(args) and args[0] == "--all"
    tasks = store.list_tasks(show_completed)
    if not tasks:
        return CommandResult("No tasks available")
    return CommandResult(render_task_table(tasks))


def cmd_complete(store: TaskStore, args: list[str]) -> CommandResult:
    task_id = _parse_task_id(args)
    if store.complete_task(task_id):
        return CommandResult(f"Marked task {task_id} as completed")
    return CommandResult(f"Task {task_id} not found", EXIT_NOT_FOUND)


def cmd_delete(store: TaskStore, args: list[str]) -> CommandResult:
    task_id = _parse_task_id(args)
    if store.delete_task(task_id):
        return CommandResult(f"Deleted task {task_id}")
    return CommandResult(f"Task {task_id} not found", EXIT_NOT_FOUND)


def cmd_help(store: TaskStore, args: list[str]) -> CommandResult:
    return CommandResult(registry.build_help())


registry.register("add", cmd_add, [("add <task title>", "Add a new task")])
registry.register(
    "list",
    cmd_list,
    [
        ("list", "List active tasks"),
        ("list --all", "List all tasks including completed"),
    ],
)
registry.register("complete", cmd_complete, [("complete <id>", "Mark a task as completed")])
registry.register("delete", cmd_delete, [("delete <id>", "Delete a task")])
registry.register(
    "help", cmd_help, [("help", "Show available commands")], aliases=["-h", "--help"]
)
