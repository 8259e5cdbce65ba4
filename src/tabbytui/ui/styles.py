"""CSS styles for the TUI.

Hides layout and styling decisions from the application logic.
"""

APP_CSS = """
Screen {
    layout: vertical;
    layers: base overlay;
    background: $background;
}

/* Transcript: takes all remaining height */
#chat-view {
    height: 1fr;
    background: $panel;
    border: round $border;
    border-title-color: $primary;
    border-title-style: bold;
    padding: 0 1;
    scrollbar-gutter: stable;

    &.processing {
        border: round $warning;
    }
}

#transcript {
    width: 100%;
    height: auto;
}

/* Input line */
#input-line {
    height: 3;
    border: round $border;
    border-title-color: $text-muted;
    padding: 0 1;

    &.inserting {
        border: round $warning;
        border-title-color: $warning;
    }
}

/* Help overlay floats above the transcript */
#help-panel {
    layer: overlay;
    dock: top;
    margin: 2 4;
    height: auto;
    border: round $warning;
    border-title-style: bold;
    background: $surface;
    padding: 1 2;
}

#key-trail {
    height: 1;
    width: 100%;
    text-align: right;
    padding: 0 1;
}

#debug-panel {
    height: 12;
    border: round $border;
    border-title-color: $secondary;
    border-subtitle-color: $text-muted;
    background: $panel;
}
"""
