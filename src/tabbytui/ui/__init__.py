"""Terminal UI module for tabbytui.

Provides a Textual-based TUI on top of the reducer state.

Module structure:
- widgets.py: Transcript, input line, help overlay, log panel
- formatting.py: HomeState to Rich renderables
- styles.py: CSS styling (layout decisions)
- themes.py: Color palette
- app.py: Key forwarding, action loop worker, rendering
"""

from .app import TabbyTuiApp, run_tui
from .widgets import ChatView, DebugPanel, HelpPanel, InputLine

__all__ = [
    "ChatView",
    "DebugPanel",
    "HelpPanel",
    "InputLine",
    "TabbyTuiApp",
    "run_tui",
]
