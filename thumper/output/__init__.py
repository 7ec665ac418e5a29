# Thumper Output Module
# Rich console output

from thumper.output.console import Console, create_console

__all__ = [
    "Console",
    "create_console",
]
