"""Outcomes from evaluating metrics in contexts.

The :class:`Result` class represents the outcome of evaluating one metric.
:class:`Results` collects them and decides the overall state the way most
checks want it: the worst state wins. :class:`OrderedResults` implements
the alternative used by the load check, where the first problem in probe
order wins.
"""

import collections
import typing
from typing import Iterator, Optional, Union

from .state import ServiceState, ok, worst

if typing.TYPE_CHECKING:
    from .context import Context
    from .metric import Metric
    from .resource import Resource


class Result:
    """Evaluation outcome consisting of state and explanation.

    A Result is typically emitted by a :class:`~.context.Context` and
    refers to the metric it was computed from. Results created from a
    :class:`~.error.CheckError` carry the error message as :attr:`hint`
    and no metric.
    """

    state: ServiceState

    hint: Optional[str]

    metric: Optional["Metric"]

    def __init__(
        self,
        state: ServiceState,
        hint: Optional[str] = None,
        metric: Optional["Metric"] = None,
    ) -> None:
        self.state = state
        self.hint = hint
        self.metric = metric

    def __str__(self) -> str:
        """Textual result explanation.

        The metric's description, followed by the hint in parentheses
        if both are present. The state is not part of the text.

        :returns: result explanation or empty string
        """
        if self.metric and self.metric.description:
            desc = self.metric.description
        else:
            desc = None

        if self.hint and desc:
            return "{0} ({1})".format(desc, self.hint)
        if self.hint:
            return self.hint
        if desc:
            return desc
        return ""

    def __repr__(self) -> str:
        return "Result({0!r}, {1!r}, {2!r})".format(self.state, self.hint, self.metric)

    @property
    def resource(self) -> Optional["Resource"]:
        """Reference to the resource used to generate this result."""
        if not self.metric:
            return None
        return self.metric.resource

    @property
    def context(self) -> Optional["Context"]:
        """Reference to the context used to generate this result."""
        if not self.metric:
            return None
        return self.metric.contextobj

    def __eq__(self, value: object) -> bool:
        if not isinstance(value, Result):
            return False
        return (
            self.state == value.state
            and self.hint == value.hint
            and self.metric == value.metric
        )


class Results:
    """Container for result sets.

    Results can be looked up by index, by metric name or by state, which
    keeps :class:`~.summary.Summary` implementations short.
    """

    results: list[Result]
    by_state: dict[ServiceState, list[Result]]
    by_name: dict[str, Result]

    def __init__(self, *results: Result) -> None:
        self.results = []
        self.by_state = collections.defaultdict(list)
        self.by_name = {}
        if results:
            self.add(*results)

    def add(self, *results: Result) -> "Results":
        """Adds more results to the container.

        :raises ValueError: if `result` is not a :class:`Result` object
        """
        for result in results:
            if not isinstance(result, Result):  # type: ignore
                raise ValueError(
                    "trying to add non-Result to Results container", result
                )
            self.results.append(result)
            self.by_state[result.state].append(result)
            if result.metric is not None:
                self.by_name[result.metric.name] = result
        return self

    def __iter__(self) -> Iterator[Result]:
        """Iterates over all results, most significant state first."""
        for state in reversed(sorted(self.by_state)):
            for result in self.by_state[state]:
                yield result

    def __len__(self) -> int:
        return len(self.results)

    def __getitem__(self, item: Union[int, str]) -> Result:
        """Access result by index or metric name.

        :raises KeyError: if no matching result is found
        """
        if isinstance(item, int):
            return self.results[item]
        return self.by_name[item]

    def __contains__(self, name: str) -> bool:
        return name in self.by_name

    def value(self, name: str) -> typing.Any:
        """Value of the metric called `name`."""
        metric = self[name].metric
        assert metric is not None
        return metric.value

    @property
    def most_significant_state(self) -> ServiceState:
        """The "worst" state found in all results.

        :raises ValueError: if no results are present
        """
        if not self.by_state:
            raise ValueError("no results")
        return worst(list(self.by_state))

    @property
    def most_significant(self) -> list[Result]:
        """Results sharing the most significant state, or an empty list."""
        try:
            return self.by_state[self.most_significant_state]
        except ValueError:
            return []

    @property
    def first_significant(self) -> Result:
        """One result with the most significant state.

        :raises IndexError: if no results are present
        """
        return self.most_significant[0]


class OrderedResults(Results):
    """Results where the first non-ok result in probe order decides.

    With thresholds per metric this gives priority by metric order: a
    warning on the first metric beats a critical on a later one.
    """

    @property
    def most_significant_state(self) -> ServiceState:
        """State of the first non-ok result, ok if there is none.

        :raises ValueError: if no results are present
        """
        if not self.results:
            raise ValueError("no results")
        return self.first_significant.state

    @property
    def most_significant(self) -> list[Result]:
        try:
            return [self.first_significant]
        except IndexError:
            return []

    @property
    def first_significant(self) -> Result:
        """The first non-ok result, or the first result if all are ok.

        :raises IndexError: if no results are present
        """
        for result in self.results:
            if result.state != ok:
                return result
        return self.results[0]
