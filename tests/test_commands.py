# tests/test_commands.py

from __future__ import annotations

from todo_cli.cli.commands import (
    EXIT_NOT_FOUND,
    EXIT_OK,
    EXIT_USAGE,
    CommandRegistry,
    CommandResult,
    registry,
)
from todo_cli.errors import UserInputError
from todo_cli.tasks.task_store import TaskStore


def test_command_registry_routes_and_aliases(store: TaskStore) -> None:
    reg = CommandRegistry(prog="t")
    seen: list[list[str]] = []

    def handler(store, args):
        seen.append(args)
        return CommandResult("ok")

    reg.register("ping", handler, [("ping", "Ping")], aliases=["p"])

    assert reg.handle(store, ["ping", "x"]).text == "ok"
    assert reg.handle(store, ["p"]).text == "ok"
    assert seen == [["x"], []]
    assert reg.handle(store, ["PING"]).exit_code == EXIT_USAGE
    assert len(seen) == 2
    assert reg.build_help() == "Commands\n  t ping                 Ping"


def test_command_registry_turns_user_input_errors_into_messages(store: TaskStore) -> None:
    reg = CommandRegistry()

    def handler(store, args):
        raise UserInputError("Missing thing")

    reg.register("boom", handler, [("boom", "Fails")])
    result = reg.handle(store, ["boom"])
    assert result == CommandResult("Error: Missing thing", EXIT_USAGE)


def test_unknown_command_and_empty_argv(store: TaskStore) -> None:
    result = registry.handle(store, ["frobnicate"])
    assert result.text == "frobnicate is not a valid command. See 'todo help'"
    assert result.exit_code == EXIT_USAGE

    empty = registry.handle(store, [])
    assert empty.text.startswith("Commands")
    assert empty.exit_code == EXIT_USAGE


def test_add_requires_title_and_leaves_store_untouched(store: TaskStore) -> None:
    result = registry.handle(store, ["add"])
    assert result == CommandResult("Error: Missing task title", EXIT_USAGE)
    assert store.tasks == []
    assert not store.file_path.exists()

    ok = registry.handle(store, ["add", "buy milk"])
    assert ok == CommandResult("Added task buy milk", EXIT_OK)
    assert [t.title for t in store.tasks] == ["buy milk"]


def test_list_renders_table_and_empty_message(store: TaskStore) -> None:
    assert registry.handle(store, ["list"]).text == "No tasks available"

    store.add_task("buy milk")
    store.add_task("walk dog")
    store.complete_task(2)

    active = registry.handle(store, ["list"]).text
    assert active.splitlines() == [
        " ID | Status | Title",
        "-------------------------------------",
        "  1 |   [ ]  | buy milk",
    ]

    everything = registry.handle(store, ["list", "--all"]).text
    assert everything.splitlines()[2:] == [
        "  1 |   [ ]  | buy milk",
        "  2 |   [✓]  | walk dog",
    ]

    # Only the literal flag switches to "all".
    assert registry.handle(store, ["list", "--ALL"]).text.count("\n") == 2


def test_complete_argument_handling(store: TaskStore) -> None:
    store.add_task("a")

    assert registry.handle(store, ["complete"]) == CommandResult(
        "Error: Missing task ID", EXIT_USAGE
    )
    assert registry.handle(store, ["complete", "one"]) == CommandResult(
        "Error: Invalid task ID", EXIT_USAGE
    )
    assert registry.handle(store, ["complete", "7"]) == CommandResult(
        "Task 7 not found", EXIT_NOT_FOUND
    )
    assert registry.handle(store, ["complete", "1"]) == CommandResult(
        "Marked task 1 as completed", EXIT_OK
    )
    assert store.tasks[0].completed is True


def test_delete_argument_handling(store: TaskStore) -> None:
    store.add_task("a")
    store.add_task("b")

    assert registry.handle(store, ["delete"]).text == "Error: Missing task ID"
    assert registry.handle(store, ["delete", "1.5"]).text == "Error: Invalid task ID"
    assert registry.handle(store, ["delete", "1"]) == CommandResult("Deleted task 1", EXIT_OK)
    assert registry.handle(store, ["delete", "1"]) == CommandResult(
        "Task 1 not found", EXIT_NOT_FOUND
    )
    assert [t.id for t in store.tasks] == [2]


def test_help_lists_every_command(store: TaskStore) -> None:
    text = registry.handle(store, ["help"]).text
    assert text.splitlines() == [
        "Commands",
        "  todo add <task title>     Add a new task",
        "  todo list                 List active tasks",
        "  todo list --all           List all tasks including completed",
        "  todo complete <id>        Mark a task as completed",
        "  todo delete <id>          Delete a task",
        "  todo help                 Show available commands",
    ]
    assert registry.handle(store, ["--help"]).text == text


def test_command_names_are_case_sensitive(store: TaskStore) -> None:
    result = registry.handle(store, ["ADD", "x"])
    assert result == CommandResult("ADD is not a valid command. See 'todo help'", EXIT_USAGE)
    assert store.tasks == []
    assert not store.file_path.exists()


def test_malformed_ids_never_touch_tasks(store: TaskStore) -> None:
    store.add_task("a")

    for raw in (" 1 ", "0_1", "١", "1\n", "", "0x1"):
        assert registry.handle(store, ["delete", raw]) == CommandResult(
            "Error: Invalid task ID", EXIT_USAGE
        )
        assert registry.handle(store, ["complete", raw]) == CommandResult(
            "Error: Invalid task ID", EXIT_USAGE
        )
    assert [(t.id, t.completed) for t in store.tasks] == [(1, False)]

    # Signed ids parse like any integer; they simply do not match a task.
    assert registry.handle(store, ["delete", "-1"]) == CommandResult(
        "Task -1 not found", EXIT_NOT_FOUND
    )
    assert registry.handle(store, ["complete", "+1"]) == CommandResult(
        "Marked task 1 as completed", EXIT_OK
    )
