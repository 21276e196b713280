"""CSS styles for the TUI.

Hides layout and styling decisions from the application logic.
Layout, top to bottom: header, chat viewport, pending indicator,
log panel (hidden by default), input bar, footer.
"""

APP_CSS = """
Screen {
    layout: vertical;
    background: $background;
}

/* Chat viewport */
#chat-history {
    height: 1fr;
    background: $panel;
    border: round $primary 60%;
    border-title-color: $primary;
    border-title-style: bold;
    border-title-align: left;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    padding: 0 1;
    scrollbar-gutter: stable;

    &:focus-within {
        border: round $primary;
    }

    &.-pending {
        border: round $warning;
        border-title-color: $warning;
    }
}

.chat-entry {
    height: auto;
    margin: 0 0 1 0;
}

.entry-header {
    height: auto;
}

.entry-content {
    height: auto;
    padding: 0 0 0 2;
}

.assistant-entry .entry-content {
    padding: 0;
    margin: 0 0 0 2;
}

.error-entry .entry-content {
    color: $error;
}

.system-entry .entry-content {
    color: $text-muted;
    text-style: italic;
}

/* Pending indicator */
#thinking {
    height: 1;
    padding: 0 2;
    color: $text-muted;
    display: none;

    &.-active {
        display: block;
    }
}

/* Log panel */
#debug-panel {
    height: 10;
    display: none;
    background: $panel;
    border: round $accent 60%;
    border-title-color: $accent;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    padding: 0 1;
}

/* Input bar */
#chat-input-bar {
    height: auto;
    padding: 0 1;
}

#chat-input {
    width: 1fr;
    border: tall $border;

    &:focus {
        border: tall $primary;
    }
}

#send-btn {
    width: 10;
    margin: 0 0 0 1;
}
"""
