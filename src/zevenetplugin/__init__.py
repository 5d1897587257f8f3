"""Monitoring plugins for Zevenet ADC Load Balancer appliances.

The checks live in :mod:`zevenetplugin.checks`, one module per console
script. This package holds what they share: the ZAPI v3 client, threshold
ranges and their evaluation, perfdata rendering and the report emitter.
"""

from importlib import metadata

from .check import Check
from .client import ApplianceTarget, fetch_appliance
from .context import (
    Context,
    Contexts,
    LevelContext,
    ScalarContext,
    StatusContext,
    evaluate_threshold,
)
from .error import (
    AuthError,
    CheckError,
    NotFoundError,
    ResponseError,
    TransportError,
    UsageError,
)
from .metric import Metric
from .multiarg import MultiArg
from .performance import Performance, format_perfdata, parse_perfdata
from .range import Range
from .resource import ApplianceResource, Resource
from .result import OrderedResults, Result, Results
from .runtime import Runtime, emit_report, guarded
from .state import ServiceState, critical, ok, unknown, warn, worst
from .summary import Summary

__version__: str = metadata.version("zevenetplugin")

__all__ = [
    "ApplianceResource",
    "ApplianceTarget",
    "AuthError",
    "Check",
    "CheckError",
    "Context",
    "Contexts",
    "LevelContext",
    "Metric",
    "MultiArg",
    "NotFoundError",
    "OrderedResults",
    "Performance",
    "Range",
    "Resource",
    "ResponseError",
    "Result",
    "Results",
    "Runtime",
    "ScalarContext",
    "ServiceState",
    "StatusContext",
    "Summary",
    "TransportError",
    "UsageError",
    "critical",
    "emit_report",
    "evaluate_threshold",
    "fetch_appliance",
    "format_perfdata",
    "guarded",
    "ok",
    "parse_perfdata",
    "unknown",
    "warn",
    "worst",
]
