"""Metadata about metrics to perform data :term:`evaluation`.

A context decides the state of a metric and derives its performance data.
:func:`evaluate_threshold` is the single threshold rule shared by all
checks; :class:`ScalarContext` applies it to a metric and
:class:`StatusContext` covers the "is it up?" checks. Metrics are matched
to contexts by name, the same context may serve several metrics.
"""

import typing
from typing import Any, Callable, Optional, Union

from .performance import Performance
from .range import Range, RangeSpec
from .result import Result
from .state import ServiceState, critical, ok, unknown, warn

if typing.TYPE_CHECKING:
    from .metric import Metric
    from .resource import Resource


FmtMetric = Union[str, Callable[["Metric", "Context"], str]]


def evaluate_threshold(
    value: float,
    warn_range: Optional[Range] = None,
    critical_range: Optional[Range] = None,
) -> ServiceState:
    """Compares `value` with a warning and a critical threshold.

    The critical threshold is checked first. Missing (`None`) and null
    ranges never trigger.

    :returns: :obj:`~.state.critical`, :obj:`~.state.warn` or
        :obj:`~.state.ok`
    """
    if critical_range is not None and critical_range.violated_by(value):
        return critical
    if warn_range is not None and warn_range.violated_by(value):
        return warn
    return ok


class Context:
    name: str
    fmt_metric: Optional[FmtMetric]
    result_cls: type[Result]

    def __init__(
        self,
        name: str,
        fmt_metric: Optional[FmtMetric] = None,
        result_cls: type[Result] = Result,
    ) -> None:
        """Creates generic context identified by `name`.

        Generic contexts evaluate always to :obj:`~.state.ok` and produce
        no performance data.

        :param name: matched against :attr:`Metric.context`
        :param fmt_metric: format string or callable describing a metric
        :param result_cls: class used to represent the evaluation outcome
        """
        self.name = name
        self.fmt_metric = fmt_metric
        self.result_cls = result_cls

    def evaluate(
        self, metric: "Metric", resource: "Resource"
    ) -> Union[Result, ServiceState]:
        return self.result_cls(ok, metric=metric)

    def ok(self, hint: Optional[str] = None, metric: Optional["Metric"] = None) -> Result:
        return self.result_cls(ok, hint=hint, metric=metric)

    def warn(
        self, hint: Optional[str] = None, metric: Optional["Metric"] = None
    ) -> Result:
        return self.result_cls(warn, hint=hint, metric=metric)

    def critical(
        self, hint: Optional[str] = None, metric: Optional["Metric"] = None
    ) -> Result:
        return self.result_cls(critical, hint=hint, metric=metric)

    def unknown(
        self, hint: Optional[str] = None, metric: Optional["Metric"] = None
    ) -> Result:
        return self.result_cls(unknown, hint=hint, metric=metric)

    # pylint: disable-next=no-self-use
    def performance(
        self, metric: "Metric", resource: "Resource"
    ) -> Optional[Performance]:
        return None

    def describe(self, metric: "Metric") -> Optional[str]:
        """Provides human-readable metric description.

        If :attr:`fmt_metric` is a string, it is formatted with the
        metric's attributes (`name`, `value`, `uom`, `valueunit`, `min`,
        `max`). A callable gets the metric and this context. Without
        :attr:`fmt_metric` there is no description.
        """
        if not self.fmt_metric:
            return None

        if isinstance(self.fmt_metric, str):
            return self.fmt_metric.format(
                name=metric.name,
                value=metric.value,
                uom=metric.uom,
                valueunit=metric.valueunit,
                min=metric.min,
                max=metric.max,
            )

        return self.fmt_metric(metric, self)


class ScalarContext(Context):
    warn_range: Range

    critical_range: Range

    def __init__(
        self,
        name: str,
        warning: Optional[RangeSpec] = None,
        critical: Optional[RangeSpec] = None,
        fmt_metric: FmtMetric = "{name} is {valueunit}",
        result_cls: type[Result] = Result,
    ) -> None:
        """Context for a numeric metric with warning and critical thresholds.

        :param warning: warning threshold as :class:`~.range.Range` or
            range string; `None` means no threshold
        :param critical: critical threshold, same format
        """
        super().__init__(name, fmt_metric, result_cls)
        self.warn_range = Range(warning)
        self.critical_range = Range(critical)

    def evaluate(self, metric: "Metric", resource: "Resource") -> Result:
        return self.evaluate_value(metric.value, metric)

    def evaluate_value(self, value: float, metric: "Metric") -> Result:
        """Evaluates `value` on behalf of `metric`.

        Subclasses that compare something derived from the metric (a
        percentage instead of an absolute value) call this directly.
        """
        state = evaluate_threshold(value, self.warn_range, self.critical_range)
        if state == critical:
            return self.result_cls(critical, self.critical_range.violation, metric)
        if state == warn:
            return self.result_cls(warn, self.warn_range.violation, metric)
        return self.result_cls(ok, None, metric)

    def performance(self, metric: "Metric", resource: "Resource") -> Performance:
        return Performance(
            metric.name,
            metric.value,
            metric.uom,
            self.warn_range,
            self.critical_range,
            metric.min,
            metric.max,
        )


class LevelContext(ScalarContext):
    """ScalarContext that renders thresholds as plain levels in perfdata.

    ``-w 20: -c 10:`` is written as ``;20;10``, the format graphing
    add-ons expect for these checks.
    """

    def performance(self, metric: "Metric", resource: "Resource") -> Performance:
        return Performance(
            metric.name,
            metric.value,
            metric.uom,
            self.warn_range.level,
            self.critical_range.level,
            metric.min,
            metric.max,
        )


class StatusContext(Context):
    """Evaluates a status string: ok if it is one of `healthy`, critical
    otherwise."""

    healthy: tuple[str, ...]

    def __init__(
        self,
        name: str,
        healthy: tuple[str, ...] = ("up",),
        fmt_metric: Optional[FmtMetric] = "{name} is {value}",
        result_cls: type[Result] = Result,
    ) -> None:
        super().__init__(name, fmt_metric, result_cls)
        self.healthy = healthy

    def evaluate(self, metric: "Metric", resource: "Resource") -> Result:
        if metric.value in self.healthy:
            return self.ok(metric=metric)
        return self.critical("not {0}".format(" or ".join(self.healthy)), metric)


class Contexts:
    """Container for collecting all generated contexts.

    ``default`` evaluates to ok and renders perfdata without thresholds,
    ``null`` evaluates to ok and renders nothing.
    """

    by_name: dict[str, Context]

    def __init__(self) -> None:
        self.by_name = dict(
            default=ScalarContext("default", None, None), null=Context("null")
        )

    def add(self, context: Context) -> None:
        self.by_name[context.name] = context

    def __getitem__(self, context_name: str) -> Context:
        try:
            return self.by_name[context_name]
        except KeyError:
            raise KeyError(
                "cannot find context",
                context_name,
                "known contexts: {0}".format(", ".join(self.by_name.keys())),
            )

    def __contains__(self, context_name: Any) -> bool:
        return context_name in self.by_name

    def __iter__(self) -> typing.Iterator[str]:
        return iter(self.by_name)
