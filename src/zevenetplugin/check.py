"""Controller logic for check execution.

A :class:`Check` is populated with one resource, the contexts its metrics
refer to, a summary and optionally a custom results container. Calling it
probes the resource, evaluates every metric in its context and collects
results and performance data. :meth:`Check.main` hands the populated check
to the :class:`~.runtime.Runtime`, which prints the report and exits.
"""

import logging
from typing import Any, NoReturn, Optional, Union

from .context import Context, Contexts
from .error import CheckError
from .metric import Metric
from .performance import Performance
from .resource import Resource
from .result import Result, Results
from .runtime import emit_report
from .state import ServiceState, ok, unknown
from .summary import Summary

_log = logging.getLogger(__name__)

CheckObject = Union[Resource, Context, Summary, Results]


class Check:
    resources: list[Resource]
    contexts: Contexts
    summary: Summary
    results: Results
    perfdata: list[Performance]
    name: str

    def __init__(self, *objects: CheckObject, name: Optional[str] = None) -> None:
        """Creates and configures a check.

        *objects* are passed to :meth:`add`. *name* becomes the label at
        the start of the status line; without it the first resource's
        name is used.
        """
        self.resources = []
        self.contexts = Contexts()
        self.summary = Summary()
        self.results = Results()
        self.perfdata = []
        self.name = name if name is not None else ""
        self._named = name is not None
        self.add(*objects)

    def add(self, *objects: CheckObject) -> "Check":
        """Adds domain objects to a check.

        :raises TypeError: for objects that are none of
            :class:`~.resource.Resource`, :class:`~.context.Context`,
            :class:`~.summary.Summary` or :class:`~.result.Results`
        """
        for obj in objects:
            if isinstance(obj, Resource):
                self.resources.append(obj)
                if not self._named and not self.name:
                    self.name = self.resources[0].name
            elif isinstance(obj, Context):
                self.contexts.add(obj)
            elif isinstance(obj, Summary):
                self.summary = obj
            elif isinstance(obj, Results):  # type: ignore
                self.results = obj
            else:
                raise TypeError("cannot add type {0} to check".format(type(obj)), obj)
        return self

    def _evaluate_resource(self, resource: Resource) -> None:
        try:
            metrics = resource.probe()
            if not metrics:
                _log.warning("resource %s did not produce any metric", resource.name)
            if isinstance(metrics, Metric):
                metrics = [metrics]
            # no partial results if a generator fails halfway
            metrics = list(metrics)
        except CheckError as e:
            _log.info("%s: %s", type(e).__name__, e)
            self.results.add(Result(e.state, str(e)))
            return
        for metric in metrics:
            context = self.contexts[metric.context]
            metric = metric.replace(contextobj=context, resource=resource)
            result = metric.evaluate()
            if isinstance(result, ServiceState):
                result = Result(result, metric=metric)
            elif not isinstance(result, Result):  # type: ignore
                raise ValueError(
                    "evaluate() returned neither Result nor ServiceState object",
                    metric.name,
                    result,
                )
            self.results.add(result)
            performance = metric.performance()
            if performance is not None:
                self.perfdata.append(performance)

    def __call__(self) -> None:
        """Actually run the check.

        Afterwards :attr:`results` and :attr:`perfdata` are populated.
        Perfdata keep the order in which the resource emitted its
        metrics.
        """
        for resource in self.resources:
            self._evaluate_resource(resource)

    def main(self, verbose: Any = None) -> NoReturn:
        """Runs the check, prints the report and exits.

        :param verbose: output verbosity level between 0 and 3
        """
        emit_report(self, verbose)

    @property
    def state(self) -> ServiceState:
        """Overall check state.

        Decided by the results container, :obj:`~.state.unknown` if no
        results have been collected.
        """
        try:
            return self.results.most_significant_state
        except ValueError:
            return unknown

    @property
    def summary_str(self) -> str:
        """Status line message, queried from the :class:`Summary`."""
        if not self.results:
            return self.summary.empty() or ""

        if self.state == ok:
            return self.summary.ok(self.results) or ""

        return self.summary.problem(self.results) or ""

    @property
    def verbose_str(self) -> list[str]:
        """Additional lines of output in verbose mode."""
        return self.summary.verbose(self.results) or []

    @property
    def exitcode(self) -> int:
        """Exit code according to the plugin API, matches :attr:`state`."""
        return int(self.state)
