"""Check the load averages of a Zevenet ADC Load Balancer appliance.

``-w`` and ``-c`` take one threshold per load average, e.g.
``-w 80,85,90 -c 95,95,95``. The averages are evaluated in the order
1, 5 and 15 minutes and the first one that violates its threshold
decides state and message.
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
from ..context import ScalarContext
from ..metric import Metric
from ..resource import ApplianceResource, field, number
from ..result import OrderedResults, Results
from ..runtime import guarded
from ..summary import Summary
from . import APPLIANCE, LICENSE, STATS_LOAD

# (minutes, ZAPI field)
LOAD_FIELDS = ((1, "Last_1"), (5, "Last_5"), (15, "Last_15"))


def load_label(minutes: int) -> str:
    return "Load {0} min".format(minutes)


class Load(ApplianceResource):
    path = STATS_LOAD

    def probe(self) -> list[Metric]:
        params = field(self.fetch(), "params")
        return [
            Metric(
                load_label(minutes),
                number(params, key),
                "Avg.",
                context="load{0}".format(minutes),
            )
            for minutes, key in LOAD_FIELDS
        ]


class LoadSummary(Summary):
    def ok(self, results: Results) -> str:
        return "{0} Load average is OK (Avg. load is {1})".format(
            APPLIANCE,
            "/".join(
                str(results.value(load_label(minutes))) for minutes, _ in LOAD_FIELDS
            ),
        )

    def problem(self, results: Results) -> str:
        result = results.first_significant
        if result.metric is None:
            return super().problem(results)
        minutes = result.metric.name.split()[1]
        return "{0} {1} Min Load average is {2} (Avg. {1} min load is {3})".format(
            APPLIANCE, minutes, str(result.state).upper(), result.metric.value
        )


def make_check(options: Options) -> Check:
    check = Check(
        Load(options.target), LoadSummary(), OrderedResults(), name="zevenet_load"
    )
    for index, (minutes, _) in enumerate(LOAD_FIELDS):
        check.add(
            ScalarContext(
                "load{0}".format(minutes),
                options.warning[index] if options.warning else None,
                options.critical[index] if options.critical else None,
            )
        )
    return check


@guarded
def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = setup_argparser(
        "zevenet_load",
        version=__version__,
        license=LICENSE,
        description="Check the load averages of a Zevenet ADC Load Balancer appliance.",
    )
    add_appliance_arguments(parser)
    add_threshold_arguments(
        parser,
        "Warning thresholds for the 1, 5 and 15 minute load averages, e.g. 80,85,90",
        "Critical thresholds for the 1, 5 and 15 minute load averages, e.g. 95,95,95",
        triple=True,
    )
    options = parse_options(parser, argv, require_threshold=True)
    make_check(options).main(options.verbose)


if __name__ == "__main__":
    main()
