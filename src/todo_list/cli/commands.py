# src/todo_list/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from ..core.state import AppState, with_draft, with_filter
from ..core.view_model import Screen, TaskRow, render
from ..tasks import edit_session
from ..tasks.errors import NotFoundError, TodoError, ValidationError
from ..tasks.task_models import FilterMode, Priority

Confirm = Callable[[str], bool]
CommandHandler = Callable[[AppState, list[str], Confirm | None], str]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /add, /done, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, state: AppState, line: str, confirm: Confirm | None = None) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            return handler(state, args, confirm)
        except TodoError as e:
            return error_message(e)

    def build_help(self) -> str:
        lines = ["Available commands:", "  <text> - add a task (or save the task being edited)"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- rendering ----


def _ts_local(dt: datetime | None) -> str:
    if dt is None:
        return "-"
    return dt.astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _format_row(row: TaskRow) -> str:
    box = "[x]" if row.completed else "[ ]"
    mark = " (editing)" if row.editing else ""
    lines = [f"{row.number:>3}. {box} {row.text}  <{row.priority.value}>  {row.status}{mark}"]
    stamps = f"Created: {_ts_local(row.created_at)}"
    if row.completed_at is not None:
        stamps += f" | Completed: {_ts_local(row.completed_at)}"
    lines.append(f"        {stamps}")
    return "\n".join(lines)


def format_screen(screen: Screen) -> str:
    tabs = " | ".join(
        f"{'>' if mode == screen.filter_mode else ' '}{mode.value} ({screen.counts[mode]})"
        for mode in FilterMode
    )
    lines = [tabs]
    if screen.is_empty:
        lines.append("  No tasks found")
    else:
        lines.extend(_format_row(r) for r in screen.rows)
    if screen.editing_id is not None:
        lines.append(f"Editing: {screen.draft_text!r} <{screen.draft_priority.value}> (/save or /cancel)")
    elif screen.draft_priority != Priority.MEDIUM:
        lines.append(f"Next task priority: {screen.draft_priority.value}")
    return "\n".join(lines)


def current_screen(state: AppState) -> Screen:
    return render(state.store.tasks, state.view)


def error_message(e: TodoError) -> str:
    if isinstance(e, ValidationError):
        return f"Error: {e}."
    if isinstance(e, NotFoundError):
        return "That task no longer exists. Use /list to refresh or /cancel to drop the draft."
    return f"Error: {e}"


def _default_priority(state: AppState) -> Priority:
    return getattr(state.settings, "default_priority", Priority.MEDIUM)


def _pick_row(state: AppState, args: list[str], usage: str) -> TaskRow:
    if not args:
        raise ValueError(usage)
    try:
        number = int(args[0])
    except ValueError:
        raise ValueError(usage) from None
    row = current_screen(state).row(number)
    if row is None:
        raise ValueError(f"No task #{number} in the current view.")
    return row


# ---- draft commit (plain text input) ----


def submit_text(state: AppState, text: str) -> str:
    """Stage `text` as the draft text and commit it (add, or update while editing)."""
    draft = edit_session.set_text(state.view.draft, text)
    state.view = with_draft(state.view, draft)
    return _commit_draft(state)


def _commit_draft(state: AppState) -> str:
    draft = state.view.draft
    try:
        _, fresh = edit_session.commit(draft, state.store, default_priority=_default_priority(state))
    except TodoError as e:
        # draft stays staged so the user can fix it or /cancel
        return error_message(e)

    state.view = with_draft(state.view, fresh)
    verb = "Updated" if draft.is_editing else "Added"
    return f"{verb}.\n{format_screen(current_screen(state))}"


# ---- commands ----


def cmd_help(state: AppState, args: list[str], confirm: Confirm | None = None) -> str:
    return registry.build_help()


def cmd_list(state: AppState, args: list[str], confirm: Confirm | None = None) -> str:
    return format_screen(current_screen(state))


def cmd_add(state: AppState, args: list[str], confirm: Confirm | None = None) -> str:
    """
    /add <text>  -> add a new task with the staged priority (even while editing)
    """
    draft = state.view.draft
    tasks = state.store.add(" ".join(args), draft.priority)
    if not draft.is_editing:
        state.view = with_draft(state.view, edit_session.new_draft(_default_priority(state)))
    logger.debug("Added via /add total=%d", len(tasks))
    return f"Added.\n{format_screen(current_screen(state))}"


def cmd_priority(state: AppState, args: list[str], confirm: Confirm | None = None) -> str:
    """
    /priority            -> show staged priority
    /priority low|medium|high
    """
    if not args:
        return f"Staged priority: {state.view.draft.priority.value}. Use /priority low|medium|high."
    try:
        priority = Priority.parse(args[0])
    except ValueError:
        return "Usage: /priority low|medium|high."
    state.view = with_draft(state.view, edit_session.set_priority(state.view.draft, priority))
    return f"Priority set to {priority.value}."


def cmd_edit(state: AppState, args: list[str], confirm: Confirm | None = None) -> str:
    try:
        row = _pick_row(state, args, "Usage: /edit N")
    except ValueError as e:
        return str(e)
    state.view = with_draft(state.view, edit_session.begin(state.store, row.id))
    return (
        f"Editing #{row.number}: {row.text!r} <{row.priority.value}>.\n"
        "Type the new text (or /priority, then /save). /cancel to stop editing."
    )


def cmd_save(state: AppState, args: list[str], confirm: Confirm | None = None) -> str:
    if not state.view.draft.is_editing:
        return "Nothing is being edited. Type a task to add it."
    return _commit_draft(state)


def cmd_cancel(state: AppState, args: list[str], confirm: Confirm | None = None) -> str:
    was_editing = state.view.draft.is_editing
    state.view = with_draft(
        state.view, edit_session.cancel(state.view.draft, _default_priority(state))
    )
    return "Edit cancelled." if was_editing else "Draft cleared."


def cmd_done(state: AppState, args: list[str], confirm: Confirm | None = None) -> str:
    try:
        row = _pick_row(state, args, "Usage: /done N")
    except ValueError as e:
        return str(e)
    state.store.toggle_complete(row.id)
    task = state.store.get(row.id)
    return f"{'Completed' if task.completed else 'Reopened'}: {task.text}"


def cmd_remove(state: AppState, args: list[str], confirm: Confirm | None = None) -> str:
    try:
        row = _pick_row(state, args, "Usage: /rm N")
    except ValueError as e:
        return str(e)
    if confirm is not None and not confirm(f"Delete task {row.text!r}? Are you sure?"):
        return "Cancelled."
    state.store.remove(row.id)
    if state.view.draft.target_id == row.id:
        state.view = with_draft(state.view, edit_session.new_draft(_default_priority(state)))
    return f"Deleted: {row.text}"


def cmd_filter(state: AppState, args: list[str], confirm: Confirm | None = None) -> str:
    if not args:
        return f"Filter is {state.view.filter_mode.value}. Use /filter all|ongoing|completed."
    try:
        mode = FilterMode.parse(args[0])
    except ValueError:
        return "Usage: /filter all|ongoing|completed."
    state.view = with_filter(state.view, mode)
    return format_screen(current_screen(state))


def cmd_status(state: AppState, args: list[str], confirm: Confirm | None = None) -> str:
    counts = current_screen(state).counts
    last = state.store.last_save
    if last is None:
        save_state = "no changes yet"
    elif not last.done():
        save_state = "pending"
    elif last.exception() is not None:
        save_state = f"FAILED ({last.exception()})"
    else:
        save_state = "ok"
    return (
        "Status:\n"
        f"  Storage: {state.persistence.describe()}\n"
        f"  Tasks: {counts[FilterMode.ALL]} "
        f"(ongoing {counts[FilterMode.ONGOING]}, completed {counts[FilterMode.COMPLETED]})\n"
        f"  Filter: {state.view.filter_mode.value}\n"
        f"  Last save: {save_state}"
    )


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Show tasks for the current filter.", aliases=["ls", "l"])
registry.register("add", cmd_add, help_text="Add a task: /add <text>.", aliases=["a"])
registry.register(
    "priority", cmd_priority, help_text="Stage a priority: /priority low|medium|high.", aliases=["p"]
)
registry.register("edit", cmd_edit, help_text="Start editing a task: /edit N.", aliases=["e"])
registry.register("save", cmd_save, help_text="Save the task being edited.")
registry.register("cancel", cmd_cancel, help_text="Stop editing / clear the draft.")
registry.register("done", cmd_done, help_text="Toggle completion: /done N.", aliases=["x", "toggle"])
registry.register("rm", cmd_remove, help_text="Delete a task: /rm N.", aliases=["del", "delete"])
registry.register(
    "filter", cmd_filter, help_text="Filter tasks: /filter all|ongoing|completed.", aliases=["f"]
)
registry.register("status", cmd_status, help_text="Show storage and save status.")
