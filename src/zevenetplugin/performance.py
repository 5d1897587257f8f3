"""Performance data (perfdata) rendering and parsing.

Every item is rendered as ``label=value[uom];[warn];[crit][;min[;max]]``.
The warning and critical fields are always written, empty if there is no
threshold, so graphing add-ons that map perfdata by column position see
the same layout on every run (``Idle=60%;20;10`` next to ``IOWait=0%;;``).
"""

import re
from typing import Any, Iterable, Optional, Union

from .range import Range, RangeSpec

_PERFDATA_ITEM = re.compile(r"(?:'(?P<quoted>[^']+)'|(?P<plain>[^\s'=]+))=(?P<data>\S+)")

_VALUE_UOM = re.compile(r"^(?P<value>[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)(?P<uom>.*)$")

Threshold = Union[RangeSpec, None]


def quote(label: str) -> str:
    if re.match(r"^\w+$", label):
        return label
    return f"'{label}'"


def _render_threshold(threshold: Threshold) -> str:
    if threshold is None:
        return ""
    if isinstance(threshold, Range):
        return "" if threshold.null else str(threshold)
    return str(threshold)


def _number(text: str) -> Union[int, float]:
    try:
        return int(text)
    except ValueError:
        return float(text)


class Performance:
    """
    Performance data (perfdata) representation.

    :term:`Performance data` are created during metric evaluation in a context
    and are written into the *perfdata* section of the plugin's output.
    https://github.com/monitoring-plugins/monitoring-plugin-guidelines/blob/main/monitoring_plugins_interface/03.Output.md#performance-data
    """

    label: str
    """short identifier, results in graph titles for example"""

    value: Any
    """measured value, usually an int or float"""

    uom: Optional[str]
    """unit of measure"""

    warn: Threshold
    """warning range or level"""

    crit: Threshold
    """critical range or level"""

    min: Optional[float]

    max: Optional[float]

    # pylint: disable-next=redefined-builtin,too-many-arguments
    def __init__(
        self,
        label: str,
        value: Any,
        uom: Optional[str] = None,
        warn: Threshold = None,
        crit: Threshold = None,
        min: Optional[float] = None,
        max: Optional[float] = None,
    ) -> None:
        if "'" in label or "=" in label:
            raise RuntimeError("label contains illegal characters", label)
        self.label = label
        self.value = value
        self.uom = uom
        self.warn = warn
        self.crit = crit
        self.min = min
        self.max = max

    def __str__(self) -> str:
        """String representation conforming to the plugin API.

        Labels containing spaces or special characters will be quoted.
        """
        performance = f"{quote(self.label)}={self.value}{self.uom or ''}"
        out: list[str] = [
            performance,
            _render_threshold(self.warn),
            _render_threshold(self.crit),
        ]
        if self.min is not None or self.max is not None:
            out.append("" if self.min is None else str(self.min))
        if self.max is not None:
            out.append(str(self.max))
        return ";".join(out)

    def __repr__(self) -> str:
        return "Performance(%r)" % str(self)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Performance):
            return False
        return str(self) == str(other)

    @classmethod
    def parse(cls, item: str) -> "Performance":
        """Parses a single rendered perfdata item.

        Threshold fields come back as :class:`~.range.Range` objects,
        empty fields as `None`.

        :raises ValueError: if `item` is not valid perfdata
        """
        match = _PERFDATA_ITEM.fullmatch(item.strip())
        if not match:
            raise ValueError("not a perfdata item", item)
        label = match.group("quoted") or match.group("plain")
        fields = match.group("data").split(";")
        value_uom = _VALUE_UOM.match(fields[0])
        if not value_uom:
            raise ValueError("perfdata value is not a number", item)
        fields += [""] * (5 - len(fields))
        warn, crit, min_, max_ = fields[1:5]
        return cls(
            label,
            _number(value_uom.group("value")),
            value_uom.group("uom") or None,
            Range(warn) if warn else None,
            Range(crit) if crit else None,
            _number(min_) if min_ else None,
            _number(max_) if max_ else None,
        )


def format_perfdata(performances: Iterable[Optional[Performance]]) -> str:
    """Renders perfdata items space-separated, skipping missing ones."""
    return " ".join(str(p) for p in performances if p is not None)


def parse_perfdata(perfdata: str) -> list[Performance]:
    """Parses a perfdata block as written after the ``|`` of a status line."""
    perfdata = perfdata.strip()
    if perfdata.startswith("|"):
        perfdata = perfdata[1:]
    return [Performance.parse(m.group(0)) for m in _PERFDATA_ITEM.finditer(perfdata)]
