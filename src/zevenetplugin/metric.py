"""Structured representation for data points.

A :class:`~.resource.Resource` extracts the values it needs from one API
response and hands them to the :class:`~.check.Check` controller as a list
of :class:`Metric` objects. The list order is the perfdata order.
"""

import numbers
import typing
from typing import Any, Optional, TypedDict

from typing_extensions import Self, Unpack

from .performance import Performance

if typing.TYPE_CHECKING:
    from .context import Context
    from .resource import Resource
    from .result import Result


class MetricKwargs(TypedDict, total=False):
    name: str
    value: Any
    uom: str
    min: float
    max: float
    context: str
    contextobj: "Context"
    resource: "Resource"


class Metric:
    """Single measured value.

    The name doubles as the perfdata label, so it should read well in a
    graph title ("Load 1 min", "Free").
    """

    name: str
    value: Any
    uom: Optional[str] = None
    min: Optional[float] = None
    max: Optional[float] = None
    context: str
    contextobj: Optional["Context"] = None
    resource: Optional["Resource"] = None

    # pylint: disable-next=redefined-builtin
    def __init__(
        self,
        name: str,
        value: Any,
        uom: Optional[str] = None,
        min: Optional[float] = None,
        max: Optional[float] = None,
        context: Optional[str] = None,
        contextobj: Optional["Context"] = None,
        resource: Optional["Resource"] = None,
    ) -> None:
        """Creates new Metric instance.

        :param name: identifier for the value, also the perfdata label
        :param value: data point, usually numeric; status metrics carry
            the status string reported by the appliance
        :param uom: :term:`unit of measure` like "%" or "Mb"
        :param min: minimum value or None if there is no known minimum
        :param max: maximum value or None if there is no known maximum
        :param context: name of the associated context (defaults to the
            metric's name if left out)
        :param contextobj: set by :class:`~.check.Check`
        :param resource: set by :class:`~.check.Check`
        """
        self.name = name
        self.value = value
        self.uom = uom
        self.min = min
        self.max = max
        if context is not None:
            self.context = context
        else:
            self.context = name
        self.contextobj = contextobj
        self.resource = resource

    def __str__(self) -> str:
        """Same as :attr:`valueunit`."""
        return self.valueunit

    def __repr__(self) -> str:
        return "Metric({0!r}, {1!r}, {2!r})".format(self.name, self.value, self.uom)

    def replace(self, **attr: Unpack[MetricKwargs]) -> Self:
        """Updates attributes in place and returns the metric."""
        for key, value in attr.items():
            setattr(self, key, value)
        return self

    @property
    def description(self) -> Optional[str]:
        """Human-readable description, delegated to the context."""
        if self.contextobj:
            return self.contextobj.describe(self)
        return str(self)

    @property
    def valueunit(self) -> str:
        """Value and unit, floats limited to a few significant digits."""
        return "%s%s" % (self._human_readable_value, self.uom or "")

    @property
    def _human_readable_value(self) -> str:
        if isinstance(self.value, numbers.Real) and not isinstance(
            self.value, numbers.Integral
        ):
            return "%.4g" % self.value
        return str(self.value)

    def evaluate(self) -> "Result":
        """Evaluates this instance according to the context.

        :raise RuntimeError: if no context has been associated yet
        """
        if not self.contextobj:
            raise RuntimeError("no context set for metric", self.name)
        if not self.resource:
            raise RuntimeError("no resource set for metric", self.name)
        return self.contextobj.evaluate(self, self.resource)

    def performance(self) -> Optional[Performance]:
        """Generates performance data according to the context.

        :raise RuntimeError: if no context has been associated yet
        """
        if not self.contextobj:
            raise RuntimeError("no context set for metric", self.name)
        if not self.resource:
            raise RuntimeError("no resource set for metric", self.name)
        return self.contextobj.performance(self, self.resource)
