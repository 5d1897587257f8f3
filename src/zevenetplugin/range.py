import math
from typing import Optional, Union


class Range:
    """Represents a threshold range.

    The general format is "[@][start:][end]". "start:" may be omitted if
    start==0. "~:" means that start is negative infinity. If `end` is
    omitted, infinity is assumed. To invert the match condition, prefix
    the range expression with "@".

    A range without any bound ("" or ":") is the *null* range. It is
    what an operator gets when a threshold is left empty (``-c ""``) and
    it never raises an alert.

    See
    https://github.com/monitoring-plugins/monitoring-plugin-guidelines/blob/main/definitions/01.range_expressions.md
    for details.
    """

    invert: bool

    start: float

    end: float

    null: bool

    def __init__(self, spec: Optional["RangeSpec"] = None) -> None:
        """Creates a Range object according to `spec`.

        :param spec: may be either a string, a number, or another
            Range object.
        :raises ValueError: if `spec` is not a valid range expression
        """
        if spec is None:
            spec = ""
        if isinstance(spec, Range):
            self.invert = spec.invert
            self.start = spec.start
            self.end = spec.end
            self.null = spec.null
        elif isinstance(spec, bool):
            raise ValueError("cannot build a range from a boolean", spec)
        elif isinstance(spec, (int, float)):
            self.invert = False
            self.start = 0
            self.end = spec
            self.null = False
        elif isinstance(spec, str):
            self.start, self.end, self.invert, self.null = Range._parse(spec.strip())
        else:
            raise ValueError("cannot build a range from {0!r}".format(spec))
        Range._verify(self.start, self.end)

    @classmethod
    def _parse(cls, spec: str) -> tuple[float, float, bool, bool]:
        invert = False
        start: float
        end: float
        if spec.startswith("@"):
            invert = True
            spec = spec[1:]
        if spec.count(":") > 1:
            raise ValueError("range {0!r} has more than one colon".format(spec))
        if ":" in spec:
            start_str, end_str = spec.split(":")
        else:
            start_str, end_str = "", spec
        if start_str == "~":
            start = float("-inf")
        else:
            start = cls._parse_atom(start_str, 0)
        end = cls._parse_atom(end_str, float("inf"))
        return start, end, invert, start_str == "" and end_str == ""

    @staticmethod
    def _parse_atom(atom: str, default: float) -> float:
        if atom == "":
            return default
        try:
            return int(atom)
        except ValueError:
            pass
        value = float(atom)
        if math.isnan(value):
            raise ValueError("range bound must be a number, not {0!r}".format(atom))
        return value

    @staticmethod
    def _verify(start: float, end: float) -> None:
        """Throws ValueError if the range is not consistent."""
        if start > end:
            raise ValueError("start %s must not be greater than end %s" % (start, end))

    def match(self, value: float) -> bool:
        """Decides if `value` is inside/outside the threshold.

        :returns: `True` if value is inside the bounds for non-inverted
            Ranges.

        Also available as `in` operator.
        """
        if value < self.start:
            return False ^ self.invert
        if value > self.end:
            return False ^ self.invert
        return True ^ self.invert

    def __contains__(self, value: float) -> bool:
        return self.match(value)

    def violated_by(self, value: float) -> bool:
        """Returns `True` if `value` raises an alert for this threshold.

        The null range is never violated.
        """
        if self.null:
            return False
        return not self.match(value)

    @property
    def level(self) -> Optional[float]:
        """The finite bound a value is compared against.

        This is `end` for ranges like "10" or "5:10" and `start` for open
        ranges like "20:". The null range has no level.
        """
        if self.null:
            return None
        if self.end != float("inf"):
            return self.end
        if self.start == float("-inf"):
            return None
        return self.start

    def scaled(self, factor: float, ndigits: Optional[int] = None) -> "Range":
        """Returns a new range with both bounds multiplied by `factor`.

        Infinite bounds stay infinite. With `ndigits` the finite bounds
        are rounded.
        """
        scaled = Range(self)
        scaled.start = Range._scale(self.start, factor, ndigits)
        scaled.end = Range._scale(self.end, factor, ndigits)
        return scaled

    @staticmethod
    def _scale(bound: float, factor: float, ndigits: Optional[int]) -> float:
        if math.isinf(bound) or bound == 0:
            return bound
        if ndigits is None:
            return bound * factor
        return round(bound * factor, ndigits)

    def _format(self, omit_zero_start: bool = True) -> str:
        result: list[str] = []
        if self.invert:
            result.append("@")
        if self.start == float("-inf"):
            result.append("~:")
        elif not omit_zero_start or self.start != 0:
            result.append(("%s:" % self.start))
        if self.end != float("inf"):
            result.append(("%s" % self.end))
        return "".join(result)

    def __str__(self) -> str:
        """Human-readable range specification."""
        return self._format()

    def __repr__(self) -> str:
        """Parseable range specification."""
        return "Range(%r)" % str(self)

    def __eq__(self, value: object) -> bool:
        if not isinstance(value, Range):
            return False
        return (
            self.invert == value.invert
            and self.start == value.start
            and self.end == value.end
            and self.null == value.null
        )

    def __hash__(self) -> int:
        return hash((self.invert, self.start, self.end, self.null))

    @property
    def violation(self) -> str:
        """Human-readable description why a value does not match."""
        if self.invert:
            return "inside range {0}".format(self._format(False)[1:])
        return "outside range {0}".format(self._format(False))


RangeSpec = Union[str, int, float, Range]
