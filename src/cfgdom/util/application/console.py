"""
Phase timing output for the command line.

Phases such as reading the input and solving are wrapped in named scopes.
Each scope writes a ``begin`` line when it opens and an ``end`` line with
its elapsed time when it closes. Nested scopes print as a path, e.g.
``[ read | parse ]``.
"""

import sys
import time
from cfgdom.util.io import formatting


class PhaseScope(object):
    """Context manager returned by ``Console.scope``."""

    __slots__ = "console", "name"

    def __init__(self, console, name):
        self.console = console
        self.name = name

    def __enter__(self):
        self.console.begin(self.name)
        return self

    def __exit__(self, type, value, tb):
        self.console.end()


class Console(object):
    """Writes timed phase markers to ``out`` (default: sys.stderr).

    When ``enabled`` is False the phase stack is still kept but nothing is
    written, so callers can wrap phases unconditionally.
    """

    def __init__(self, out=None, enabled=True):
        self.out = sys.stderr if out is None else out
        self.enabled = enabled
        self.phases = []

    @property
    def depth(self):
        return len(self.phases)

    def path(self):
        return "[ %s ]" % " | ".join(name for name, _ in self.phases)

    def begin(self, name):
        self.phases.append((name, time.perf_counter()))
        self.write("begin %s" % self.path())

    def end(self):
        elapsed = time.perf_counter() - self.phases[-1][1]
        self.write("end   %s %s" % (self.path(), formatting.elapsedTime(elapsed)))
        self.phases.pop()

    def scope(self, name):
        return PhaseScope(self, name)

    def write(self, line):
        if self.enabled:
            print(line, file=self.out)
