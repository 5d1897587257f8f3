"""Service states reported by the Zevenet checks.

The four states of the :term:`Nagios plugin API` are modelled as
singleton subclasses of :class:`ServiceState`. Each state knows its exit
code, so the report emitter never has to translate between names and
numbers itself.

Note that the *warning* state is defined by the :class:`Warn` class. The
class has not been named `Warning` to avoid being confused with the
built-in Python exception of the same name.
"""

from __future__ import annotations

import functools
from typing import Any


def worst(states: list["ServiceState"]) -> "ServiceState":
    """Reduce list of *states* to the most significant state."""
    return functools.reduce(lambda a, b: a if a > b else b, states, ok)


class ServiceState:
    """Abstract base class for all states.

    :attr:`text` is printed (upper-cased) right after the check label in
    the status line, :attr:`code` is the process exit code. Both are fixed
    by the monitoring plugin contract and must never be renumbered.
    """

    code: int

    text: str

    def __init__(self, code: int, text: str) -> None:
        self.code = code
        self.text = text

    def __str__(self) -> str:
        return self.text

    def __int__(self) -> int:
        return self.code

    def __repr__(self) -> str:
        return "<ServiceState {0} ({1})>".format(self.text, self.code)

    def __gt__(self, other: Any) -> bool:
        return (
            hasattr(other, "code")
            and isinstance(other.code, int)
            and self.code > other.code
        )

    def __eq__(self, value: Any) -> bool:
        return (
            hasattr(value, "code")
            and isinstance(value.code, int)
            and self.code == value.code
            and hasattr(value, "text")
            and isinstance(value.text, str)
            and self.text == value.text
        )

    def __hash__(self) -> int:
        return hash((self.code, self.text))


class Ok(ServiceState):
    def __init__(self) -> None:
        super().__init__(0, "ok")


ok = Ok()


class Warn(ServiceState):
    def __init__(self) -> None:
        super().__init__(1, "warning")


warn = Warn()


class Critical(ServiceState):
    def __init__(self) -> None:
        super().__init__(2, "critical")


critical = Critical()


class Unknown(ServiceState):
    def __init__(self) -> None:
        super().__init__(3, "unknown")


unknown = Unknown()
