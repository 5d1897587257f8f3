"""Check a network interface of a Zevenet ADC Load Balancer.

Physical NICs are searched first, then bonds. The interface is OK while
the appliance reports it ``up`` and CRITICAL otherwise.
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
from . import APPLIANCE, LICENSE, STATS_INTERFACES

_log = logging.getLogger(__name__)

# (ZAPI list, interface kind) in search order, the first match wins: a NIC
# shadows a bond entry of the same name
INTERFACE_LISTS = (("nic", "NIC"), ("bond", "Bond"))


class Interface(ApplianceResource):
    path = STATS_INTERFACES

    interface_name: str
    kind: Optional[str]
    interface: dict[str, Any]

    def __init__(self, target: ApplianceTarget, name: str) -> None:
        super().__init__(target)
        self.interface_name = name
        self.kind = None
        self.interface = {}

    def probe(self) -> list[Metric]:
        params = field(self.fetch(), "params")
        for key, kind in INTERFACE_LISTS:
            items = params.get(key, []) if isinstance(params, dict) else None
            interface = find(items, interface=self.interface_name)
            if interface is not None:
                break
        else:
            raise NotFoundError(
                "{0} interface '{1}' not found!".format(
                    APPLIANCE, self.interface_name
                )
            )
        self.kind = kind
        self.interface = interface
        _log.info("%s interface %s: %s", kind, self.interface_name, interface)
        return [
            Metric("status", field(interface, "status"), context="status"),
            Metric("Traffic in", number(interface, "in"), context="default"),
            Metric("Traffic out", number(interface, "out"), context="default"),
        ]


class InterfaceSummary(Summary):
    def __init__(self, resource: Interface) -> None:
        self.resource = resource

    def ok(self, results: Results) -> str:
        interface = self.resource.interface
        return (
            "{0} interface '{1}' is {2} (Traffic in: {3} Mbps / Traffic out: {4} Mbps)"
        ).format(
            APPLIANCE,
            self.resource.interface_name,
            results.value("status"),
            interface.get("in"),
            interface.get("out"),
        )

    def problem(self, results: Results) -> str:
        if "status" not in results:
            return super().problem(results)
        return self.ok(results)


def make_check(options: Options) -> Check:
    resource = Interface(options.target, options.name)
    return Check(
        resource,
        StatusContext("status"),
        InterfaceSummary(resource),
        name="zevenet_interface",
    )


@guarded
def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = setup_argparser(
        "zevenet_interface",
        version=__version__,
        license=LICENSE,
        description=(
            "Check a network interface of a Zevenet ADC Load Balancer appliance."
        ),
    )
    add_appliance_arguments(parser)
    parser.add_argument(
        "-n", "--name", required=True, help="Interface name, e.g. eth0 or bond0."
    )
    options = parse_options(parser, argv)
    make_check(options).main(options.verbose)


if __name__ == "__main__":
    main()
