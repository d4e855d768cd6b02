# floor_cutlist/logger.py
# Prefixed console messages for the allocator, runner and CLI.
# info/debug go to stdout, warnings and errors to stderr; debug lines only
# appear with verbose=True (--debug), and --quiet mutes everything but errors.

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import TextIO


@dataclass
class Logger:
    enabled: bool = True
    verbose: bool = False
    prefix: str = "[cutlist]"

    def _emit(self, stream: TextIO, tag: str, msg: str) -> None:
        head = f"{self.prefix} {tag}: " if tag else f"{self.prefix} "
        print(head + msg, file=stream)

    def debug(self, msg: str) -> None:
        if self.enabled and self.verbose:
            self._emit(sys.stdout, "debug", msg)

    def info(self, msg: str) -> None:
        if self.enabled:
            self._emit(sys.stdout, "", msg)

    def warn(self, msg: str) -> None:
        if self.enabled:
            self._emit(sys.stderr, "WARNING", msg)

    def error(self, msg: str) -> None:
        # errors are shown even when quiet
        self._emit(sys.stderr, "ERROR", msg)


LOGGER = Logger()


def set_enabled(flag: bool) -> None:
    LOGGER.enabled = bool(flag)


def set_verbose(flag: bool) -> None:
    LOGGER.verbose = bool(flag)


def get_logger() -> Logger:
    return LOGGER
