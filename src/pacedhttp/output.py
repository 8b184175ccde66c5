"""Diagnostics output for pacedhttp, written to stderr.

The client never prints to stdout: everything it reports (cache hits,
scheduled delays, swallowed fetch failures) is a diagnostic and goes to
stderr.  Colour is disabled when ``NO_COLOR`` is set, ``TERM=dumb``, or
the caller passes ``no_color=True``.

The module exposes two layers:

1. :class:`OutputManager` -- a stateful object holding a Rich console and
   the quiet/verbose flags.  Any object with ``info`` and ``warning``
   methods can stand in for it as the client's logger.
2. The global ``OutputManager`` instance and :func:`debug`, which the
   client uses for pacing internals that sit below its injected logger.
"""

from __future__ import annotations

import os
import sys
from typing import Optional, Protocol

from rich.console import Console


class Logger(Protocol):
    """What the client needs from a diagnostics sink."""

    def info(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...


class OutputManager:
    """Routes diagnostic messages to stderr.

    Args:
        no_color: Disable all colour and Rich markup.
        quiet: Suppress informational messages.  Warnings are always
            shown.
        verbose: Enable debug-level messages.
    """

    def __init__(
        self,
        no_color: bool = False,
        quiet: bool = False,
        verbose: bool = False,
    ) -> None:
        self._no_color = no_color or _should_disable_color()
        self._quiet = quiet
        self._verbose = verbose
        self._stderr = Console(
            file=sys.stderr,
            no_color=self._no_color,
            stderr=True,
        )

    @property
    def is_quiet(self) -> bool:
        """Whether quiet mode is enabled."""
        return self._quiet

    @property
    def is_verbose(self) -> bool:
        """Whether verbose mode is enabled."""
        return self._verbose

    def info(self, message: str) -> None:
        """Print an informational message. Suppressed by ``quiet``.

        Args:
            message: The message text.
        """
        if not self._quiet:
            if self._no_color:
                print(message, file=sys.stderr, flush=True)
            else:
                self._stderr.print(message, markup=False, highlight=False)

    def warning(self, message: str) -> None:
        """Print a yellow warning. NOT suppressed by ``quiet``.

        Args:
            message: The warning text.
        """
        if self._no_color:
            print(f"Warning: {message}", file=sys.stderr, flush=True)
        else:
            self._stderr.print("[yellow]Warning:[/yellow] ", end="")
            self._stderr.print(message, markup=False, highlight=False)

    def debug(self, message: str) -> None:
        """Print a debug message. Only shown when ``verbose`` is active.

        Args:
            message: The debug text (prefixed with ``[debug]`` on output).
        """
        if self._verbose:
            if self._no_color:
                print(f"[debug] {message}", file=sys.stderr, flush=True)
            else:
                self._stderr.print(f"[debug] {message}", style="dim", markup=False)


def _should_disable_color() -> bool:
    """Check if colour should be disabled.

    Returns True when the NO_COLOR env var is set (any value) or TERM=dumb.
    """
    if os.environ.get("NO_COLOR") is not None:
        return True
    if os.environ.get("TERM") == "dumb":
        return True
    return False


# ------------------------------------------------------------------ #
# Global output instance
# ------------------------------------------------------------------ #

_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """Return the global :class:`OutputManager` instance.

    A default manager is created lazily if none was installed via
    :func:`set_output`.
    """
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    """Install *output* as the global :class:`OutputManager` instance."""
    global _output
    _output = output


def reset_output() -> None:
    """Reset the global :class:`OutputManager` to ``None``.

    Primarily useful in test suites to ensure a clean state between tests.
    """
    global _output
    _output = None


# ------------------------------------------------------------------ #
# Convenience function that uses the global instance
# ------------------------------------------------------------------ #


def debug(message: str) -> None:
    """Print debug message to stderr via the global OutputManager."""
    get_output().debug(message)
