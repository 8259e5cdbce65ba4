"""Text formatting for the TUI.

Turns reducer state into Rich renderables. Holds no state of its own.
"""

from rich.table import Table
from rich.text import Text

from ..core.models import ChatRole, Message
from ..state.actions import Mode
from .config import KEY_BINDINGS

_ROLE_STYLES = {
    ChatRole.USER: "bold cyan",
    ChatRole.ASSISTANT: "bold magenta",
}

_MODE_LABELS = {
    Mode.NORMAL: ("NORMAL", "bold green"),
    Mode.INSERT: ("INSERT", "bold yellow"),
    Mode.PROCESSING: ("WAITING", "bold magenta"),
}


def format_transcript(messages: tuple[Message, ...], pending: bool = False) -> Text:
    """Render the conversation with styled role prefixes."""
    text = Text()
    for index, msg in enumerate(messages):
        if index:
            text.append("\n")
        text.append(f"{msg.role.value}:", style=_ROLE_STYLES[msg.role])
        if msg.content:
            text.append(" ")
            text.append(msg.content)
        is_last = index == len(messages) - 1
        if pending and is_last:
            text.append(" ▌", style="blink dim")
    if not messages:
        text.append("Press / to start chatting, ? for help.", style="dim")
    return text


def format_input(buffer: str, mode: Mode) -> Text:
    """Render the input line with a mode badge."""
    label, style = _MODE_LABELS[mode]
    text = Text()
    text.append(f" {label} ", style=f"{style} reverse")
    text.append(" ")
    if mode is Mode.INSERT:
        text.append(buffer, style="yellow")
        text.append("▏", style="yellow")
    elif buffer:
        text.append(buffer, style="dim")
    else:
        text.append("(Press / to start, Esc to finish)", style="dim")
    return text


def format_recent_keys(keys: list[str]) -> str:
    return " ".join(keys)


def format_help() -> Table:
    """Key binding table shown in the help panel."""
    table = Table(show_header=True, header_style="bold", box=None, expand=True)
    table.add_column("Key", style="bold yellow", width=10)
    table.add_column("Action")
    for key, action in KEY_BINDINGS:
        table.add_row(key, action)
    return table
