"""Check CPU usage of a Zevenet ADC Load Balancer appliance.

Thresholds apply to the idle percentage: ``-w 20: -c 10:`` warns when
less than 20 % and alarms when less than 10 % of the CPU is idle.
"""

from typing import Optional, Sequence

from .. import __version__
from ..check import Check
from ..cli import (
    Options,
    add_appliance_arguments,
    add_threshold_arguments,
    parse_options,
    setup_argparser,
)
from ..context import LevelContext
from ..metric import Metric
from ..resource import ApplianceResource, field, number
from ..result import Results
from ..runtime import guarded
from ..summary import Summary
from . import APPLIANCE, LICENSE, STATS_CPU

# (perfdata label, ZAPI field) in perfdata order
CPU_FIELDS = (
    ("Idle", "idle"),
    ("IOWait", "iowait"),
    ("IRQ", "irq"),
    ("Nice", "nice"),
    ("SoftIRQ", "softirq"),
    ("Sys", "sys"),
    ("Usage", "usage"),
    ("User", "user"),
)

# "usage" overlaps the other fields and is not part of the total
TOTAL_FIELDS = ("idle", "iowait", "irq", "nice", "softirq", "sys", "user")


def cpu_total(params: dict) -> float:
    total = sum(number(params, key) for key in TOTAL_FIELDS)
    if isinstance(total, float):
        return round(total, 2)
    return total


class Cpu(ApplianceResource):
    path = STATS_CPU

    def probe(self) -> list[Metric]:
        params = field(self.fetch(), "params")
        metrics = [
            Metric(label, number(params, key), "%", context="default")
            for label, key in CPU_FIELDS
        ]
        metrics[0] = metrics[0].replace(context="idle")
        metrics.append(Metric("Total", cpu_total(params), "%", context="default"))
        return metrics


class CpuSummary(Summary):
    def ok(self, results: Results) -> str:
        return "{0} CPU usage is {1} % ({2} % idle)".format(
            APPLIANCE, results.value("Usage"), results.value("Idle")
        )

    def problem(self, results: Results) -> str:
        if "Idle" not in results:
            return super().problem(results)
        return self.ok(results)


def make_check(options: Options) -> Check:
    return Check(
        Cpu(options.target),
        LevelContext("idle", options.warning, options.critical),
        CpuSummary(),
        name="zevenet_cpu",
    )


@guarded
def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = setup_argparser(
        "zevenet_cpu",
        version=__version__,
        license=LICENSE,
        description="Check CPU usage of a Zevenet ADC Load Balancer appliance.",
    )
    add_appliance_arguments(parser)
    add_threshold_arguments(
        parser,
        "Warning threshold for the idle CPU percentage, e.g. 20:",
        "Critical threshold for the idle CPU percentage, e.g. 10:",
    )
    options = parse_options(parser, argv, require_threshold=True)
    make_check(options).main(options.verbose)


if __name__ == "__main__":
    main()
