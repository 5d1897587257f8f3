"""HTTPS client for the Zevenet ZAPI v3 management interface.

One check invocation issues exactly one GET request. Failures are mapped
onto the :mod:`~.error` taxonomy so that the check controller can report
them without knowing anything about HTTP.

Zevenet appliances ship with self-signed certificates, therefore TLS
certificate and host name verification are switched off. The API key is
still sent in a header, so only point the checks at appliances reachable
over a trusted network.
"""

import dataclasses
import logging
from typing import Any

import requests
import urllib3
from urllib3.exceptions import InsecureRequestWarning

from .error import AuthError, ResponseError, TransportError

ZAPI_PORT = 444

ZAPI_PREFIX = "/zapi/v3/zapi.cgi"

DEFAULT_TIMEOUT = 15

AUTHORIZATION_REQUIRED = "Authorization required"

_log = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class ApplianceTarget:
    """Where and how to reach the appliance. Immutable per invocation."""

    host: str
    key: str
    port: int = ZAPI_PORT
    timeout: float = DEFAULT_TIMEOUT

    def url(self, path: str) -> str:
        return "https://{0}:{1}{2}".format(self.host, self.port, path)


def fetch_appliance(target: ApplianceTarget, path: str) -> dict[str, Any]:
    """GETs `path` from the appliance and returns the decoded JSON object.

    :param target: appliance address, key and timeout
    :param path: absolute API path, e.g. ``/zapi/v3/zapi.cgi/stats/farms``
    :raises TransportError: if the appliance cannot be reached in time
    :raises AuthError: if the appliance rejects the ZAPI key
    :raises ResponseError: on non-2xx responses and on bodies that are
        not a JSON object
    """
    url = target.url(path)
    _log.debug("GET %s (timeout %ss)", url, target.timeout)
    urllib3.disable_warnings(category=InsecureRequestWarning)
    try:
        response = requests.get(
            url,
            headers={"ZAPI_KEY": target.key, "Content-Type": "application/json"},
            timeout=target.timeout,
            verify=False,
        )
    except requests.exceptions.Timeout:
        raise TransportError(
            "Could not connect to Zevenet API at {0}: timeout after {1}s".format(
                target.host, target.timeout
            )
        ) from None
    except requests.exceptions.SSLError as exc:
        raise TransportError(
            "Could not connect to Zevenet API at {0}: TLS error ({1})".format(
                target.host, exc
            )
        ) from None
    except requests.exceptions.ConnectionError as exc:
        raise TransportError(
            "Could not connect to Zevenet API at {0}: {1}".format(target.host, exc)
        ) from None
    except requests.exceptions.RequestException as exc:
        raise TransportError("Request to Zevenet API failed: {0}".format(exc)) from None

    _log.debug("HTTP %s from %s", response.status_code, url)
    try:
        document = response.json()
    except ValueError:
        document = None

    # A bad key is reported in the body, whatever the status code.
    if isinstance(document, dict) and document.get("message") == AUTHORIZATION_REQUIRED:
        raise AuthError()

    if not response.ok:
        message = "Could not fetch data from Zevenet API: HTTP error code was {0}".format(
            response.status_code
        )
        if isinstance(document, dict) and document.get("message"):
            message += " ({0})".format(document["message"])
        raise ResponseError(message, response.status_code)

    if document is None:
        raise ResponseError(
            "Could not decode Zevenet API response as JSON", response.status_code
        )
    if not isinstance(document, dict):
        raise ResponseError(
            "Unexpected Zevenet API response: expected a JSON object, got {0}".format(
                type(document).__name__
            ),
            response.status_code,
        )
    return document
