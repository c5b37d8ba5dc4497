"""Rich-based terminal UI for the calculator.

Modules:
- app.py: Main interactive loop
- display.py: Rich renderables for panels/tables
- renderer.py: Formatting utilities
- input_handler.py: Prompt helpers and command parsing
- config.py: TUI styles and constants
"""

__all__ = [
    "app",
    "display",
    "renderer",
    "input_handler",
    "config",
]
