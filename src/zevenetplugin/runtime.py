"""Functions and classes to interface with the system.

:class:`Runtime` prints the report and terminates the process with the
exit code of the check's state. Check scripts do not use it directly:
they call :func:`emit_report` (or :meth:`~.check.Check.main`) and decorate
their `main` function with :func:`guarded`, which reports any unexpected
exception as UNKNOWN instead of a bare Python traceback.
"""

from __future__ import annotations

import functools
import io
import logging
import sys
import traceback
import typing
from typing import Any, Callable, NoReturn, Optional, ParamSpec, TypeVar

from typing_extensions import Self

from .output import Output

if typing.TYPE_CHECKING:
    from .check import Check


P = ParamSpec("P")
R = TypeVar("R")


def guarded(
    original_function: Optional[Callable[P, R]] = None, verbose: Optional[int] = None
) -> Callable[P, R]:
    """Runs a function in the plugin's Runtime environment.

    If the decorated function aborts with an uncaught exception, the
    plugin prints an UNKNOWN status line (plus the traceback in verbose
    mode) and exits with code 3.

    :param verbose: verbosity level used until :func:`emit_report` sets
        the one given on the command line, e.g. `@guarded(verbose=0)`
    """

    def _decorate(func: Callable[P, R]):
        @functools.wraps(func)
        # pylint: disable-next=inconsistent-return-statements
        def wrapper(*args: Any, **kwds: Any):
            runtime = Runtime()
            if verbose is not None:
                runtime.verbose = verbose
            try:
                return func(*args, **kwds)
            except Exception:
                runtime._handle_exception()  # type: ignore

        return wrapper

    if original_function is not None:
        assert callable(original_function), (
            'Function {!r} not callable. Forgot to add "verbose=" keyword?'.format(
                original_function
            )
        )
        return _decorate(original_function)
    return _decorate  # type: ignore


def emit_report(check: "Check", verbose: Any = None) -> NoReturn:
    """Runs `check`, prints its report and exits with its exit code."""
    Runtime().execute(check, verbose)


class Runtime:
    instance = None
    check: Optional["Check"] = None
    _verbose = 0
    logchan: logging.StreamHandler[io.StringIO]
    output: Output
    stdout = None
    exitcode: int = 70  # EX_SOFTWARE

    def __new__(cls) -> Self:
        if not cls.instance:
            cls.instance = super(Runtime, cls).__new__(cls)
        return cls.instance

    def __init__(self) -> None:
        rootlogger = logging.getLogger(__name__.split(".", 1)[0])
        rootlogger.setLevel(logging.DEBUG)
        previous = getattr(self, "logchan", None)
        if previous is not None:
            rootlogger.removeHandler(previous)
        self.logchan = logging.StreamHandler(io.StringIO())
        self.logchan.setFormatter(logging.Formatter("%(message)s"))
        rootlogger.addHandler(self.logchan)
        self.output = Output(self.logchan)
        self.verbose = self._verbose

    def _handle_exception(self, statusline: Optional[str] = None) -> NoReturn:
        exc_type, value = sys.exc_info()[0:2]
        name = self.check.name.upper() + " " if self.check else ""
        self.output.status = "{0}UNKNOWN: {1}".format(
            name,
            statusline or traceback.format_exception_only(exc_type, value)[0].strip(),
        )
        if self.verbose > 0:
            self.output.add_longoutput(traceback.format_exc())
        print("{0}".format(self.output), end="", file=self.stdout)
        self.exitcode = 3
        self.sysexit()

    @property
    def verbose(self) -> int:
        return self._verbose

    @verbose.setter
    def verbose(self, verbose: Any) -> None:
        if isinstance(verbose, int):
            self._verbose = verbose
        elif isinstance(verbose, float):
            self._verbose = int(verbose)
        else:
            self._verbose = len(verbose or [])
        if self._verbose >= 3:
            self.logchan.setLevel(logging.DEBUG)
            self._verbose = 3
        elif self._verbose == 2:
            self.logchan.setLevel(logging.INFO)
        else:
            self.logchan.setLevel(logging.WARNING)
        self.output.verbose = self._verbose

    def run(self, check: "Check") -> None:
        check()
        self.output.add(check)
        self.exitcode = check.exitcode

    def execute(self, check: "Check", verbose: Any = None) -> NoReturn:
        self.check = check
        if verbose is not None:
            self.verbose = verbose
        self.run(check)
        print("{0}".format(self.output), end="", file=self.stdout)
        self.sysexit()

    def sysexit(self) -> NoReturn:
        sys.exit(self.exitcode)
