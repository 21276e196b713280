"""Theme definitions for the TUI.

This module hides the design decisions about:
- Color palettes and visual appearance
- Theme variables (borders, scrollbars, etc.)

The palette follows the 256-color terminal scheme of the line-mode
transcript: white user labels, cyan bot labels, grey timestamps.
"""

from textual.theme import Theme

TERMINAL_DARK = Theme(
    name="pipechat-dark",
    primary="#00ffff",      # Bright cyan - bot label, focus
    secondary="#ffffff",    # White - user label
    accent="#8a8a8a",       # Grey - timestamps, hints
    foreground="#d0d0d0",
    background="#121212",
    success="#5fd75f",
    warning="#ffaf5f",
    error="#ff5f5f",
    surface="#1c1c1c",
    panel="#161616",
    dark=True,
    variables={
        "input-cursor-background": "#d0d0d0",
        "input-cursor-foreground": "#121212",
        "input-selection-background": "#00ffff 30%",

        "border": "#444444",
        "border-blurred": "#303030",

        "scrollbar": "#303030",
        "scrollbar-hover": "#444444",
        "scrollbar-active": "#00ffff",
        "scrollbar-background": "#161616",
        "scrollbar-corner-color": "#161616",

        "footer-foreground": "#bcbcbc",
        "footer-background": "#121212",
        "footer-key-foreground": "#00ffff",
        "footer-key-background": "#262626",

        "text-muted": "#626262",
        "text-disabled": "#444444",
    },
)
