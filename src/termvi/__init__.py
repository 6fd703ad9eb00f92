"""Modal vi-style terminal text editor."""

__all__ = [
    "actions",
    "buffer",
    "keymaps",
    "modes",
    "runtime",
    "screen",
    "terminal",
]

__version__ = "0.1.0"
