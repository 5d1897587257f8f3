"""Domain model for data :term:`acquisition`.

The :class:`~.check.Check` controller calls :meth:`Resource.probe` on its
resource to acquire metrics. Every Zevenet check has exactly one
:class:`ApplianceResource` subclass which fetches one ZAPI document and
extracts the fields it is interested in.
"""

import math
import typing
from typing import Any, Optional, Union

from .client import ApplianceTarget, fetch_appliance
from .error import ResponseError

if typing.TYPE_CHECKING:
    from .metric import Metric


class Resource:
    """Abstract base class for custom domain models.

    Subclasses may add arguments to the constructor to parametrize
    information retrieval.
    """

    @property
    def name(self) -> str:
        return self.__class__.__name__

    # pylint: disable=no-self-use
    def probe(
        self,
    ) -> Union[list["Metric"], "Metric", typing.Generator["Metric", None, None]]:
        """Query system state and return metrics.

        This is the only method called by the check controller.

        :return: list of :class:`~.metric.Metric` objects, a generator
            emitting them, or a single metric
        """
        return []


class ApplianceResource(Resource):
    """A resource read from one ZAPI v3 statistics endpoint.

    Subclasses set :attr:`path` and implement :meth:`probe`, calling
    :meth:`fetch` exactly once.
    """

    path: str = ""

    target: ApplianceTarget

    def __init__(self, target: ApplianceTarget) -> None:
        self.target = target

    def fetch(self) -> dict[str, Any]:
        return fetch_appliance(self.target, self.path)


def field(document: Any, *keys: str) -> Any:
    """Walks `keys` down a decoded JSON document.

    :raises ResponseError: if a key is missing or a level is not an
        object
    """
    value = document
    for depth, key in enumerate(keys):
        if not isinstance(value, dict) or key not in value:
            raise ResponseError(
                "ZAPI response lacks field '{0}'".format(".".join(keys[: depth + 1]))
            )
        value = value[key]
    return value


def number(document: Any, *keys: str) -> Union[int, float]:
    """Like :func:`field`, but the value must be numeric.

    Numeric strings are converted, the appliance reports some counters
    as JSON strings. NaN and infinity are rejected.
    """
    raw = field(document, *keys)
    if isinstance(raw, bool):
        raise ResponseError("ZAPI field '{0}' is not a number".format(".".join(keys)))
    if isinstance(raw, int):
        return raw
    value: float
    if isinstance(raw, float):
        value = raw
    else:
        try:
            return int(raw)
        except (TypeError, ValueError):
            pass
        try:
            value = float(raw)
        except (TypeError, ValueError):
            raise ResponseError(
                "ZAPI field '{0}' is not a number: {1!r}".format(".".join(keys), raw)
            ) from None
    if not math.isfinite(value):
        raise ResponseError(
            "ZAPI field '{0}' is not a finite number: {1!r}".format(
                ".".join(keys), raw
            )
        )
    return value


def find(items: Any, **wanted: Optional[str]) -> Optional[dict[str, Any]]:
    """Returns the first object in the list `items` matching all of `wanted`.

    Values are compared as strings, `None` matches anything.

    :raises ResponseError: if `items` is not a list
    """
    if not isinstance(items, list):
        raise ResponseError("ZAPI response does not contain a list")
    for item in items:
        if not isinstance(item, dict):
            continue
        if all(
            value is None or str(item.get(key)) == value
            for key, value in wanted.items()
        ):
            return item
    return None
