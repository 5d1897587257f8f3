"""Rendering of the plugin output.

The first line is ``<LABEL> <STATE> - <message> | <perfdata>``. In verbose
mode long output, captured log records and the perfdata follow on separate
lines. The ``|`` character separates perfdata from text, so it is screened
out of everything else.
"""

import io
import typing
from logging import StreamHandler

from .performance import format_perfdata

if typing.TYPE_CHECKING:
    from .check import Check


def filter_output(output: str, filtered: str) -> str:
    """Filters out characters from output"""
    for char in filtered:
        output = output.replace(char, "")
    return output


class Output:
    ILLEGAL = "|"

    logchan: StreamHandler[io.StringIO]
    verbose: int
    status: str
    out: list[str]
    warnings: list[str]
    longperfdata: list[str]

    def __init__(self, logchan: StreamHandler[io.StringIO], verbose: int = 0) -> None:
        self.logchan = logchan
        self.verbose = verbose
        self.status = ""
        self.out = []
        self.warnings = []
        self.longperfdata = []

    def add(self, check: "Check") -> None:
        self.status = self.format_status(check)
        perfdata = self.format_perfdata(check)
        if self.verbose == 0:
            if perfdata:
                self.status += " " + perfdata
        else:
            self.add_longoutput(check.verbose_str)
            if perfdata:
                self.longperfdata.append(perfdata)

    def format_status(self, check: "Check") -> str:
        if check.name:
            name_prefix = check.name.upper() + " "
        else:
            name_prefix = ""
        summary_str = check.summary_str.strip()
        return self._screen_chars(
            "{0}{1}{2}".format(
                name_prefix,
                str(check.state).upper(),
                " - " + summary_str if summary_str else "",
            ),
            "status line",
        )

    def format_perfdata(self, check: "Check") -> str:
        out = format_perfdata(check.perfdata)
        if not out:
            return ""
        return "| " + self._screen_chars(out, "perfdata")

    def add_longoutput(self, text: typing.Union[str, list[str], tuple[str, ...]]) -> None:
        if isinstance(text, (list, tuple)):
            for line in text:
                self.add_longoutput(line)
        else:
            self.out.append(self._screen_chars(text, "long output"))

    def __str__(self) -> str:
        output = [
            elem
            for elem in [self.status]
            + self.out
            + [self._screen_chars(self.logchan.stream.getvalue(), "logging output")]
            + self.warnings
            + self.longperfdata
            if elem
        ]
        return "\n".join(output) + "\n"

    def _screen_chars(self, text: str, where: str) -> str:
        text = text.rstrip("\n")
        screened = filter_output(text, self.ILLEGAL)
        if screened != text:
            self.warnings.append(
                self._illegal_chars_warning(where, set(text) - set(screened))
            )
        return screened

    @staticmethod
    def _illegal_chars_warning(where: str, removed_chars: set[str]) -> str:
        hex_chars = ", ".join("0x{0:x}".format(ord(c)) for c in removed_chars)
        return "warning: removed illegal characters ({0}) from {1}".format(
            hex_chars, where
        )
