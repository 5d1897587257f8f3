"""Check one backend of a farm on a Zevenet ADC Load Balancer.

A backend that is not ``up`` is CRITICAL. While it is up, its established
connections are compared with ``-w`` and ``-c``.
"""

import logging
from typing import Any, Optional, Sequence
from urllib.parse import quote

from .. import __version__
from ..check import Check
from ..cli import (
    Options,
    add_appliance_arguments,
    add_threshold_arguments,
    parse_options,
    setup_argparser,
)
from ..client import ApplianceTarget
from ..context import ScalarContext, StatusContext
from ..error import NotFoundError, ResponseError
from ..metric import Metric
from ..resource import ApplianceResource, field, find, number
from ..result import Result, Results
from ..runtime import guarded
from ..state import ok
from ..summary import Summary
from . import APPLIANCE, LICENSE, STATS_FARMS

_log = logging.getLogger(__name__)

ESTABLISHED = "Backend established connections"

PENDING = "Backend pending connections"


class Backend(ApplianceResource):
    farm: str
    backend_id: str
    service_id: Optional[str]
    backend: dict[str, Any]

    def __init__(
        self,
        target: ApplianceTarget,
        farm: str,
        backend_id: str,
        service_id: Optional[str] = None,
    ) -> None:
        super().__init__(target)
        self.farm = farm
        self.backend_id = backend_id
        self.service_id = service_id
        self.backend = {}
        self.path = "{0}/{1}".format(STATS_FARMS, quote(farm, safe=""))

    @property
    def up(self) -> bool:
        return self.backend.get("status") == "up"

    def not_found(self) -> NotFoundError:
        if self.service_id is None:
            where = "farm '{0}'".format(self.farm)
        else:
            where = "service '{0}' of farm '{1}'".format(
                self.service_id, self.farm
            )
        return NotFoundError(
            "{0} backend with ID '{1}' not found in {2}!".format(
                APPLIANCE, self.backend_id, where
            )
        )

    def probe(self) -> list[Metric]:
        try:
            document = self.fetch()
        except ResponseError as exc:
            if exc.status_code != 404:
                raise
            _log.info("farm %s: %s", self.farm, exc)
            raise self.not_found() from None
        # no backends list means an unknown farm
        backends = document.get("backends")
        if not isinstance(backends, list):
            raise self.not_found()
        backend = find(backends, id=self.backend_id, service=self.service_id)
        if backend is None:
            raise self.not_found()
        self.backend = backend
        _log.info("backend %s in farm %s: %s", self.backend_id, self.farm, backend)
        return [
            Metric("status", field(backend, "status"), context="status"),
            Metric(
                ESTABLISHED, number(backend, "established"), context="established"
            ),
            Metric(PENDING, number(backend, "pending"), context="default"),
        ]


class EstablishedContext(ScalarContext):
    """Thresholds on established connections, only applied while the
    backend is up."""

    def evaluate(self, metric: Metric, resource: Backend) -> Result:
        if not resource.up:
            return self.ok(metric=metric)
        return super().evaluate(metric, resource)


class BackendSummary(Summary):
    def __init__(self, resource: Backend) -> None:
        self.resource = resource

    def _describe(self, results: Results, verb: str) -> str:
        status = results.value("status")
        if status == "up":
            status = status.capitalize()
        return (
            "with ID '{0}' and IP address '{1}' in farm '{2}' {3} in '{4}' "
            "state (established connections: {5} / pending connections: {6})"
        ).format(
            self.resource.backend_id,
            self.resource.backend.get("ip", ""),
            self.resource.farm,
            verb,
            status,
            results.value(ESTABLISHED),
            results.value(PENDING),
        )

    def ok(self, results: Results) -> str:
        return "Backend " + self._describe(results, "is")

    def problem(self, results: Results) -> str:
        if "status" not in results:
            return super().problem(results)
        if results["status"].state != ok:
            return self.ok(results)
        return "{0} established connections in backend {1}".format(
            results.value(ESTABLISHED), self._describe(results, "which is")
        )


def make_check(options: Options) -> Check:
    resource = Backend(
        options.target, options.farm, options.backend_id, options.service_id
    )
    return Check(
        resource,
        StatusContext("status"),
        EstablishedContext("established", options.warning, options.critical),
        BackendSummary(resource),
        name="zevenet_farm_backend",
    )


@guarded
def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = setup_argparser(
        "zevenet_farm_backend",
        version=__version__,
        license=LICENSE,
        description=(
            "Check a backend of a farm on a Zevenet ADC Load Balancer appliance."
        ),
    )
    add_appliance_arguments(parser)
    parser.add_argument("-f", "--farm", required=True, help="Farm name.")
    parser.add_argument("-s", "--serviceid", help="Service ID.")
    parser.add_argument("-b", "--backendid", required=True, help="Backend ID.")
    add_threshold_arguments(
        parser,
        "Warning threshold for the established connections of the backend.",
        "Critical threshold for the established connections of the backend.",
    )
    options = parse_options(parser, argv, require_threshold=True)
    make_check(options).main(options.verbose)


if __name__ == "__main__":
    main()
