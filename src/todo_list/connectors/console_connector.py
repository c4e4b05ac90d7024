# src/todo_list/connectors/console_connector.py

from __future__ import annotations

import logging

from ..cli.commands import current_screen, format_screen, submit_text
from ..cli.commands import registry as command_registry
from ..core.state import AppState

logger = logging.getLogger(__name__)


def _prompt_label(state: AppState) -> str:
    draft = state.view.draft
    if draft.is_editing:
        return f"edit <{draft.priority.value}>> "
    return f"new <{draft.priority.value}>> "


def confirm_console(question: str) -> bool:
    try:
        answer = input(f"{question} [y/N] ").strip().lower()
    except (EOFError, KeyboardInterrupt):
        print()
        return False
    return answer in ("y", "yes")


def handle_line(state: AppState, line: str) -> str | None:
    """One REPL step: slash command or draft text. Returns the text to print."""
    if not line:
        return None

    try:
        reply = command_registry.handle(state, line, confirm=confirm_console)
        if reply is None:
            reply = submit_text(state, line)
    except Exception:
        logger.exception("Command handler crashed.")
        return "Internal error while handling a command."
    return reply


def run_console_loop(state: AppState) -> None:
    app_name = str(getattr(getattr(state, "settings", None), "app_name", "todo"))
    logger.info("Console started (%d tasks).", len(state.store))

    print(f"{app_name}: type a task to add it. Use /help for commands, /exit to quit.\n")
    print(format_screen(current_screen(state)))

    while True:
        try:
            user_input = input(f"\n{_prompt_label(state)}").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if user_input.lower() in ("/exit", "/quit", "/q"):
            logger.info("Console exit command received.")
            break

        reply = handle_line(state, user_input)
        if reply is not None:
            print(reply)

    logger.info("Console finished.")
