"""Theme definitions for the TUI.

To add a new theme, define it here and register it in the app.
"""

from textual.theme import Theme

# Dark palette modelled on a terminal default: amber accents on charcoal
TABBY_DARK = Theme(
    name="tabby-dark",
    primary="#e5a50a",      # Amber - borders and focus
    secondary="#7aa2f7",    # Soft blue - user prefix
    accent="#f6c177",       # Light amber - highlights
    foreground="#d8dee9",
    background="#16161e",
    success="#9ece6a",      # Normal mode badge
    warning="#e0af68",      # Insert mode badge
    error="#f7768e",        # Unreachable server, failed exchange
    surface="#1f2335",
    panel="#1a1b26",
    dark=True,
    variables={
        "border": "#3b4261",
        "border-blurred": "#292e42",
        "scrollbar": "#292e42",
        "scrollbar-hover": "#3b4261",
        "scrollbar-active": "#e5a50a",
        "footer-key-foreground": "#e5a50a",
        "text-muted": "#565f89",
    },
)
