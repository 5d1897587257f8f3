"""Check the number of connections tracked by a Zevenet ADC Load Balancer."""

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
from . import APPLIANCE, LICENSE, STATS_CONNECTIONS


class TotalConnections(ApplianceResource):
    path = STATS_CONNECTIONS

    def probe(self) -> Metric:
        params = field(self.fetch(), "params")
        return Metric(
            "Total connections",
            number(params, "connections"),
            "Conns.",
            context="connections",
        )


class TotalConnectionsSummary(Summary):
    def ok(self, results: Results) -> str:
        return "{0}: {1} total tracked connections".format(
            APPLIANCE, results.value("Total connections")
        )

    def problem(self, results: Results) -> str:
        if "Total connections" not in results:
            return super().problem(results)
        return self.ok(results)


def make_check(options: Options) -> Check:
    return Check(
        TotalConnections(options.target),
        LevelContext("connections", options.warning, options.critical),
        TotalConnectionsSummary(),
        name="zevenet_total_connections",
    )


@guarded
def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = setup_argparser(
        "zevenet_total_connections",
        version=__version__,
        license=LICENSE,
        description=(
            "Check the number of connections tracked by a Zevenet ADC Load "
            "Balancer appliance."
        ),
    )
    add_appliance_arguments(parser)
    add_threshold_arguments(
        parser,
        "Warning threshold for the tracked connections, e.g. 8000",
        "Critical threshold for the tracked connections, e.g. 10000",
    )
    options = parse_options(parser, argv, require_threshold=True)
    make_check(options).main(options.verbose)


if __name__ == "__main__":
    main()
