"""The Zevenet checks, one module per console script.

Each module defines the :class:`~zevenetplugin.resource.ApplianceResource`
that extracts its metrics, a :class:`~zevenetplugin.summary.Summary` for
the status line, ``make_check(options)`` assembling the
:class:`~zevenetplugin.check.Check` and a guarded ``main(argv)``.
"""

from ..client import ZAPI_PREFIX

APPLIANCE = "Zevenet ADC Load Balancer"

LICENSE = "GPL-3.0-or-later"

STATS_CPU = ZAPI_PREFIX + "/stats/system/cpu"
STATS_MEMORY = ZAPI_PREFIX + "/stats/system/memory"
STATS_LOAD = ZAPI_PREFIX + "/stats/system/load"
STATS_CONNECTIONS = ZAPI_PREFIX + "/stats/system/connections"
STATS_INTERFACES = ZAPI_PREFIX + "/stats/system/network/interfaces"
STATS_FARMS = ZAPI_PREFIX + "/stats/farms"
