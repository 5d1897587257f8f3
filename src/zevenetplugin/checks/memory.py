"""Check free memory of a Zevenet ADC Load Balancer appliance.

Thresholds are percentages of free memory (``-w 20: -c 10:``). The
perfdata report absolute values in Mb, so the threshold levels are
converted into Mb of the appliance's total memory.
"""

from typing import Optional, Sequence, Union

from .. import __version__
from ..check import Check
from ..cli import (
    Options,
    add_appliance_arguments,
    add_threshold_arguments,
    parse_options,
    setup_argparser,
)
from ..context import ScalarContext
from ..error import ResponseError
from ..metric import Metric
from ..performance import Performance
from ..range import Range
from ..resource import ApplianceResource, field, number
from ..result import Result, Results
from ..runtime import guarded
from ..summary import Summary
from . import APPLIANCE, LICENSE, STATS_MEMORY


class FreeSpace(ApplianceResource):
    """Free and total amount of some memory pool, reported in Mb.

    After probing, :attr:`total` and :attr:`free_percentage` hold what
    the threshold and the summary need.
    """

    path = STATS_MEMORY

    #: word used in the status line
    noun = "memory"

    free_field = "MemFree"

    total_field = "MemTotal"

    #: further (perfdata label, ZAPI field) pairs after "Free"
    extra_fields: tuple[tuple[str, str], ...] = (
        ("Buffers", "Buffers"),
        ("Cached", "Cached"),
        ("Used", "MemUsed"),
        ("Total", "MemTotal"),
    )

    free: Union[int, float]
    total: Union[int, float]
    free_percentage: float

    def probe(self) -> list[Metric]:
        params = field(self.fetch(), "params")
        self.free = number(params, self.free_field)
        self.total = number(params, self.total_field)
        if self.total <= 0:
            raise ResponseError(
                "ZAPI field '{0}' is {1}, cannot compute free {2}".format(
                    self.total_field, self.total, self.noun
                )
            )
        self.free_percentage = self.free / self.total * 100
        metrics = [Metric("Free", self.free, "Mb", context="free")]
        for label, key in self.extra_fields:
            metrics.append(Metric(label, number(params, key), "Mb", context="default"))
        return metrics


class FreeSpaceContext(ScalarContext):
    """Compares the free percentage, renders the thresholds in Mb."""

    def evaluate(self, metric: Metric, resource: FreeSpace) -> Result:
        return self.evaluate_value(resource.free_percentage, metric)

    def performance(self, metric: Metric, resource: FreeSpace) -> Performance:
        factor = resource.total / 100
        return Performance(
            metric.name,
            metric.value,
            metric.uom,
            self._in_mb(self.warn_range, factor),
            self._in_mb(self.critical_range, factor),
        )

    @staticmethod
    def _in_mb(threshold: Range, factor: float) -> Optional[float]:
        return threshold.scaled(factor, 2).level


class FreeSpaceSummary(Summary):
    def __init__(self, resource: FreeSpace) -> None:
        self.resource = resource

    def ok(self, results: Results) -> str:
        return "{0} free {1} is {2:.2f} % (Free {3} Mb / Total: {4} Mb)".format(
            APPLIANCE,
            self.resource.noun,
            self.resource.free_percentage,
            self.resource.free,
            self.resource.total,
        )

    def problem(self, results: Results) -> str:
        if "Free" not in results:
            return super().problem(results)
        return self.ok(results)


def make_check(
    options: Options,
    resource_cls: type[FreeSpace] = FreeSpace,
    name: str = "zevenet_memory",
) -> Check:
    resource = resource_cls(options.target)
    return Check(
        resource,
        FreeSpaceContext("free", options.warning, options.critical),
        FreeSpaceSummary(resource),
        name=name,
    )


@guarded
def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = setup_argparser(
        "zevenet_memory",
        version=__version__,
        license=LICENSE,
        description="Check free memory of a Zevenet ADC Load Balancer appliance.",
    )
    add_appliance_arguments(parser)
    add_threshold_arguments(
        parser,
        "Warning threshold for the free memory percentage, e.g. 20:",
        "Critical threshold for the free memory percentage, e.g. 10:",
    )
    options = parse_options(parser, argv, require_threshold=True)
    make_check(options).main(options.verbose)


if __name__ == "__main__":
    main()
