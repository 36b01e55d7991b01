"""
Logging setup for the Sweet Shop backend.

Modules log through ``logging.getLogger(__name__)``; this installs a single
Rich handler on the root logger so output is readable in a terminal.
"""

import logging

from rich.logging import RichHandler

_configured = False


def configure_logging(level: str = "INFO") -> None:
    """
    Configure root logging once.

    Subsequent calls only adjust the level.
    """
    global _configured

    root = logging.getLogger()
    root.setLevel(level.upper())

    if _configured:
        return

    handler = RichHandler(rich_tracebacks=True, show_path=False)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    root.addHandler(handler)
    _configured = True
