# src/task_tracker/cli/commands.py

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum

from ..core.state import AppState
from ..tasks.task_models import TaskStatus

CommandHandler = Callable[[AppState, list[str]], str]

logger = logging.getLogger(__name__)


class ResultKind(StrEnum):
    OK = "ok"  # command ran; soft validation failures included
    USAGE = "usage"  # help, unknown command, missing arguments
    FAILED = "failed"  # unexpected exception inside a handler


@dataclass(frozen=True, slots=True)
class CommandResult:
    kind: ResultKind
    text: str

    @property
    def should_save(self) -> bool:
        return self.kind is ResultKind.OK


@dataclass(frozen=True, slots=True)
class _Command:
    handler: CommandHandler
    help_text: str
    usage: str
    min_args: int
    requires: str


class CommandRegistry:
    """Positional command registry: argv[0] picks the command, the rest are its args."""

    def __init__(self) -> None:
        self._commands: dict[str, _Command] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        *,
        usage: str | None = None,
        min_args: int = 0,
        requires: str = "",
    ) -> None:
        self._commands[name.lower()] = _Command(
            handler=handler,
            help_text=help_text,
            usage=usage or name,
            min_args=min_args,
            requires=requires,
        )

    def usage_line(self, name: str) -> str:
        return f"  {self._commands[name].usage}"

    def build_usage(self) -> str:
        lines = ["Usage:"]
        for cmd in self._commands.values():
            lines.append(f"  {cmd.usage:<40} {cmd.help_text}")
        return "\n".join(lines)

    def build_help(self, state: AppState) -> str:
        text = self.build_usage()
        tasks_path = getattr(state.settings, "tasks_path", None)
        if tasks_path is not None:
            text += f"\n\nTasks file: {tasks_path} (override with TT_TASKS_PATH or a .env file)"
        return text

    def handle(self, state: AppState, argv: list[str]) -> CommandResult:
        """
        Run one command line (without the program name).

        Never raises: unexpected handler errors come back as ResultKind.FAILED.
        """
        if not argv:
            return CommandResult(ResultKind.USAGE, self.build_help(state))

        name = argv[0].lower()
        args = argv[1:]

        if name == "help":
            return CommandResult(ResultKind.USAGE, self.build_help(state))

        cmd = self._commands.get(name)
        if cmd is None:
            logger.debug("Unknown command %r", argv[0])
            return CommandResult(
                ResultKind.USAGE,
                "Unknown command, please try again\n" + self.build_usage(),
            )

        if len(args) < cmd.min_args:
            return CommandResult(ResultKind.USAGE, f"Error: '{name}' requires {cmd.requires}.")

        try:
            reply = cmd.handler(state, args)
        except Exception as e:
            logger.exception("Command %s failed args=%r", name, args)
            return CommandResult(ResultKind.FAILED, f"An exception has occurred: {e!r}")

        return CommandResult(ResultKind.OK, reply)


registry = CommandRegistry()

LIST_FILTERS: dict[str, TaskStatus] = {
    "--notdone": TaskStatus.NOT_DONE,
    "--inprogress": TaskStatus.IN_PROGRESS,
    "--done": TaskStatus.DONE,
}

MARKABLE_STATUSES = (TaskStatus.IN_PROGRESS, TaskStatus.DONE)

# ASCII digits only: int() alone would also take "1_0" and non-Latin digits.
_INT_RE = re.compile(r"[ \t]*[+-]?[0-9]+[ \t]*", re.ASCII)
_INT32_MIN, _INT32_MAX = -(2**31), 2**31 - 1


def _parse_int(raw: str) -> int | None:
    if not _INT_RE.fullmatch(raw):
        return None
    value = int(raw)
    if not _INT32_MIN <= value <= _INT32_MAX:
        return None
    return value


def _not_found(task_id: int) -> str:
    return f"Task with ID {task_id} not found."


def cmd_add(state: AppState, args: list[str]) -> str:
    task = state.task_store.add_task(args[0])
    return f"Added task: {task}"


def cmd_update(state: AppState, args: list[str]) -> str:
    task_id = _parse_int(args[0])
    if task_id is None:
        return "Invalid task ID."

    task = state.task_store.update_task_description(task_id, args[1])
    if task is None:
        return _not_found(task_id)
    return f"Updated task: {task}"


def cmd_delete(state: AppState, args: list[str]) -> str:
    task_id = _parse_int(args[0])
    if task_id is None:
        return "Invalid task ID."

    task = state.task_store.delete_task(task_id)
    if task is None:
        return _not_found(task_id)
    return f"Deleted task: {task}"


def cmd_list(state: AppState, args: list[str]) -> str:
    """
    list               -> every task
    list --notdone     -> only NotDone
    list --inprogress  -> only InProgress
    list --done        -> only Done

    An unknown flag is reported and the full list is printed anyway.
    """
    lines: list[str] = []
    status: TaskStatus | None = None

    if args:
        status = LIST_FILTERS.get(args[0].lower())
        if status is None:
            lines.append(f"Error: unknown list filter '{args[0]}'.")
            lines.append(registry.usage_line("list"))

    lines.append("Tasks:")
    lines.extend(str(t) for t in state.task_store.list_tasks(status))
    return "\n".join(lines)


def cmd_mark(state: AppState, args: list[str]) -> str:
    """
    mark <id> 1  -> InProgress
    mark <id> 2  -> Done

    NotDone (0) cannot be set here. Any other status may be replaced, backwards included.
    """
    code = _parse_int(args[1])
    if code not in [s.code for s in MARKABLE_STATUSES]:
        return f"Error: status code '{args[1]}' is out of bounds.\n" + registry.usage_line("mark")
    new_status = TaskStatus.from_code(code)

    task_id = _parse_int(args[0])
    if task_id is None:
        return "Invalid task ID."

    task = state.task_store.update_task_status(task_id, new_status)
    if task is None:
        return _not_found(task_id)
    return f"Marked task: {task}"


registry.register(
    "add",
    cmd_add,
    help_text="Add a new task.",
    usage='add "Task description"',
    min_args=1,
    requires="a task description",
)
registry.register(
    "update",
    cmd_update,
    help_text="Replace a task's description.",
    usage='update <taskId> "New description"',
    min_args=2,
    requires="a task ID and new description",
)
registry.register(
    "delete",
    cmd_delete,
    help_text="Delete a task.",
    usage="delete <taskId>",
    min_args=1,
    requires="a task ID",
)
registry.register(
    "list",
    cmd_list,
    help_text="List tasks, optionally filtered by status.",
    usage="list [--notdone|--done|--inprogress]",
)
registry.register(
    "mark",
    cmd_mark,
    help_text="Set status: 1 = InProgress, 2 = Done.",
    usage="mark <taskId> [1|2]",
    min_args=2,
    requires="a task ID and new status",
)
