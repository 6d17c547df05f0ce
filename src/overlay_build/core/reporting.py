"""Line-oriented status output shared by the build steps and the CLI."""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from rich.console import Console
from rich.text import Text

logger = logging.getLogger(__name__)

LEVEL_STYLES = {"info": "", "warn": "yellow", "error": "bold red"}


class BuildReporter:
    """Print ``[build]`` status lines and keep a transcript of them.

    Info and warning lines go to stdout, error lines to stderr. Messages are
    rendered as plain ``Text`` so paths containing brackets are never read
    as Rich markup, and soft wrapping keeps long paths on one line.
    """

    def __init__(
        self,
        console: Optional[Console] = None,
        err_console: Optional[Console] = None,
        prefix: str = "build",
    ):
        self.console = console or Console()
        self.err_console = err_console or Console(stderr=True)
        self.prefix = prefix
        self.messages: List[Tuple[str, str]] = []

    @property
    def warnings(self) -> List[str]:
        return [text for level, text in self.messages if level == "warn"]

    def info(self, message: str) -> None:
        self._emit("info", message)

    def warn(self, message: str) -> None:
        self._emit("warn", message)

    def error(self, message: str) -> None:
        self._emit("error", message)

    def _emit(self, level: str, message: str) -> None:
        self.messages.append((level, message))
        logger.debug("%s: %s", level, message)

        tag = f"[{self.prefix}]" if level == "info" else f"[{self.prefix}][{level}]"
        line = Text(f"{tag} {message}", style=LEVEL_STYLES[level])
        target = self.err_console if level == "error" else self.console
        target.print(line, soft_wrap=True, highlight=False)


__all__ = ["BuildReporter"]
