"""Check the status of one farm on a Zevenet ADC Load Balancer.

The farm is OK while the appliance reports it ``up`` and CRITICAL
otherwise. Established and pending connections are reported as perfdata.
"""

import logging
from typing import Any, Optional, Sequence

from .. import __version__
from ..check import Check
from ..cli import Options, add_appliance_arguments, parse_options, setup_argparser
from ..client import ApplianceTarget
from ..context import StatusContext
from ..error import NotFoundError
from ..metric import Metric
from ..resource import ApplianceResource, field, find, number
from ..result import Results
from ..runtime import guarded
from ..summary import Summary
from . import APPLIANCE, LICENSE, STATS_FARMS

_log = logging.getLogger(__name__)


class Farm(ApplianceResource):
    path = STATS_FARMS

    farm: dict[str, Any]

    def __init__(self, target: ApplianceTarget, farmname: str) -> None:
        super().__init__(target)
        self.farmname = farmname
        self.farm = {}

    def probe(self) -> list[Metric]:
        farms = field(self.fetch(), "farms")
        farm = find(farms, farmname=self.farmname)
        if farm is None:
            raise NotFoundError(
                "{0} farm '{1}' not found!".format(APPLIANCE, self.farmname)
            )
        self.farm = farm
        _log.info("farm %s: %s", self.farmname, self.farm)
        return [
            Metric("status", field(self.farm, "status"), context="status"),
            Metric(
                "Stablished connections",
                number(self.farm, "established"),
                context="default",
            ),
            Metric(
                "Pending connections", number(self.farm, "pending"), context="default"
            ),
        ]


class FarmSummary(Summary):
    def __init__(self, resource: Farm) -> None:
        self.resource = resource

    def ok(self, results: Results) -> str:
        farm = self.resource.farm
        return (
            "{0} {1} farm '{2}' listen at {3}:{4} is {5} "
            "(established connections: {6} / pending connections: {7})"
        ).format(
            APPLIANCE,
            farm.get("profile", ""),
            self.resource.farmname,
            farm.get("vip", ""),
            farm.get("vport", ""),
            results.value("status"),
            results.value("Stablished connections"),
            results.value("Pending connections"),
        )

    def problem(self, results: Results) -> str:
        if "status" not in results:
            return super().problem(results)
        return self.ok(results)


def make_check(options: Options) -> Check:
    resource = Farm(options.target, options.name)
    return Check(
        resource,
        StatusContext("status"),
        FarmSummary(resource),
        name="zevenet_farm",
    )


@guarded
def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = setup_argparser(
        "zevenet_farm",
        version=__version__,
        license=LICENSE,
        description=(
            "Check the status of a farm on a Zevenet ADC Load Balancer appliance."
        ),
    )
    add_appliance_arguments(parser)
    parser.add_argument("-n", "--name", required=True, help="Farm name.")
    options = parse_options(parser, argv)
    make_check(options).main(options.verbose)


if __name__ == "__main__":
    main()
