"""Output for the ``mobingi`` command line.

The access token and endpoint listings go to stdout so they can be piped or
captured; status lines, errors and library log records go to stderr.
Colour is dropped when stdout is not a terminal, when ``NO_COLOR`` is set,
when ``TERM=dumb``, or with ``--no-color``.

The app callback installs one :class:`OutputManager` per invocation with
:func:`set_output`; commands use the module-level helpers.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from enum import Enum
from typing import Any, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.syntax import Syntax


class OutputFormat(str, Enum):
    """How stdout data is rendered. ``AUTO`` picks ``RICH`` on a colour TTY."""

    AUTO = "auto"
    JSON = "json"
    PLAIN = "plain"
    RICH = "rich"


class OutputManager:
    """Routes CLI output to stdout or stderr.

    Args:
        format: Rendering for :meth:`format_response`.
        no_color: Write stderr lines without Rich markup.
        quiet: Drop :meth:`success` lines.
        verbose: Show :meth:`debug` lines and DEBUG library logging.
    """

    def __init__(
        self,
        format: OutputFormat = OutputFormat.AUTO,
        no_color: bool = False,
        quiet: bool = False,
        verbose: bool = False,
    ) -> None:
        self._no_color = no_color or _should_disable_color()
        self._quiet = quiet
        self._verbose = verbose

        if format != OutputFormat.AUTO:
            self._format = format
        elif _is_tty() and not self._no_color:
            self._format = OutputFormat.RICH
        else:
            self._format = OutputFormat.PLAIN

        self._stdout = Console(file=sys.stdout, no_color=self._no_color)
        self._stderr = Console(file=sys.stderr, no_color=self._no_color, stderr=True)

    @property
    def format(self) -> OutputFormat:
        return self._format

    def configure_logging(self) -> None:
        """Send ``mobingi.*`` log records to stderr through Rich.

        The level is DEBUG with ``--verbose`` and WARNING otherwise. A handler
        from an earlier call is replaced, not duplicated.
        """
        package_logger = logging.getLogger("mobingi")
        for old in [h for h in package_logger.handlers if getattr(h, "_mobingi_cli", False)]:
            package_logger.removeHandler(old)

        handler = RichHandler(console=self._stderr, show_path=False, markup=False)
        handler._mobingi_cli = True  # type: ignore[attr-defined]
        package_logger.addHandler(handler)
        package_logger.setLevel(logging.DEBUG if self._verbose else logging.WARNING)

    # stdout

    def format_response(self, data: Any) -> None:
        """Write *data* to stdout in the active format."""
        if self._format == OutputFormat.JSON:
            self.print_data(json.dumps(data, indent=2, ensure_ascii=False, default=str))
        elif self._format == OutputFormat.RICH and isinstance(data, (dict, list)):
            rendered = json.dumps(data, indent=2, ensure_ascii=False, default=str)
            self._stdout.print(Syntax(rendered, "json", theme="monokai", word_wrap=True))
        elif isinstance(data, dict):
            for key, value in data.items():
                self.print_data(f"{key}\t{value}")
        else:
            self.print_data(str(data))

    def print_data(self, text: str) -> None:
        print(text, file=sys.stdout, flush=True)

    # stderr

    def success(self, message: str) -> None:
        if not self._quiet:
            self._diagnostic(message, f"[green]{message}[/green]")

    def error(self, message: str) -> None:
        """Report *message* as an error. ``--quiet`` does not hide it."""
        self._diagnostic(f"Error: {message}", f"[bold red]Error:[/bold red] {message}")

    def debug(self, message: str) -> None:
        if self._verbose:
            self._diagnostic(f"[debug] {message}", f"[dim]\\[debug] {message}[/dim]")

    def _diagnostic(self, plain: str, markup: str) -> None:
        if self._no_color:
            print(plain, file=sys.stderr, flush=True)
        else:
            self._stderr.print(markup)


def _is_tty() -> bool:
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def _should_disable_color() -> bool:
    return os.environ.get("NO_COLOR") is not None or os.environ.get("TERM") == "dumb"


_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """Return the installed :class:`OutputManager`, creating a default one."""
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    global _output
    _output = output


def reset_output() -> None:
    global _output
    _output = None


def format_response(data: Any) -> None:
    get_output().format_response(data)


def print_data(text: str) -> None:
    get_output().print_data(text)


def success(message: str) -> None:
    get_output().success(message)


def error(message: str) -> None:
    get_output().error(message)


def debug(message: str) -> None:
    get_output().debug(message)
