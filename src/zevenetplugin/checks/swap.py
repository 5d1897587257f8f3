"""Check free swap space of a Zevenet ADC Load Balancer appliance.

Works like :mod:`~zevenetplugin.checks.memory` on the swap fields of the
same ZAPI document.
"""

from typing import Optional, Sequence

from .. import __version__
from ..cli import (
    add_appliance_arguments,
    add_threshold_arguments,
    parse_options,
    setup_argparser,
)
from ..runtime import guarded
from . import LICENSE
from .memory import FreeSpace, make_check


class Swap(FreeSpace):
    noun = "swap space"

    free_field = "SwapFree"

    total_field = "SwapTotal"

    extra_fields = (
        ("Cached", "SwapCached"),
        ("Used", "SwapUsed"),
        ("Total", "SwapTotal"),
    )


@guarded
def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = setup_argparser(
        "zevenet_swap",
        version=__version__,
        license=LICENSE,
        description="Check free swap space of a Zevenet ADC Load Balancer appliance.",
    )
    add_appliance_arguments(parser)
    add_threshold_arguments(
        parser,
        "Warning threshold for the free swap percentage, e.g. 20:",
        "Critical threshold for the free swap percentage, e.g. 10:",
    )
    options = parse_options(parser, argv, require_threshold=True)
    make_check(options, Swap, "zevenet_swap").main(options.verbose)


if __name__ == "__main__":
    main()
