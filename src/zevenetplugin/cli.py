"""Command line handling shared by all Zevenet checks.

Arguments are parsed once into an immutable :class:`Options` value which
is then passed down to the resource. Thresholds are converted into
:class:`~.range.Range` objects by argparse itself, so a malformed
threshold is a usage error and the appliance is never contacted.

Usage errors, ``--help`` and ``--version`` exit with UNKNOWN (3), according
to the `Monitoring Plugin Guidelines
<https://github.com/monitoring-plugins/monitoring-plugin-guidelines/blob/main/monitoring_plugins_interface/02.Input.md>`__.
"""

import argparse
import dataclasses
import sys
import typing
from typing import Optional, Sequence, Union

from .client import DEFAULT_TIMEOUT, ZAPI_PORT, ApplianceTarget
from .error import UsageError
from .multiarg import MultiArg
from .range import Range

ThresholdArg = Union[Range, tuple[Range, ...]]


class _PluginArgumentParser(argparse.ArgumentParser):
    label: str

    def __init__(self, *args: typing.Any, label: str = "", **kwargs: typing.Any) -> None:
        super().__init__(*args, **kwargs)
        self.label = label

    def exit(
        self, status: int = 3, message: typing.Optional[str] = None
    ) -> typing.NoReturn:
        if message:
            self._print_message(message, sys.stderr)
        sys.exit(status)

    def error(self, message: str) -> typing.NoReturn:
        """Reports a usage error on stdout as UNKNOWN and exits with 3."""
        self.print_usage(sys.stderr)
        prefix = self.label.upper() + " " if self.label else ""
        print("{0}UNKNOWN - {1}".format(prefix, message))
        sys.exit(3)


def setup_argparser(
    name: typing.Optional[str],
    version: typing.Optional[str] = None,
    license: typing.Optional[str] = None,
    description: typing.Optional[str] = None,
) -> argparse.ArgumentParser:
    """
    Set up an argument parser for a check according to the Monitoring
    Plugin Guidelines.

    :param name: The check name, e.g. ``zevenet_cpu``. It is the label of
        the status line; the program name is prefixed with ``check_``.
    :param version: The version number of the plugin, shown by ``-V``.
    :param license: The license of the plugin, shown by ``-h``.
    :param description: What the check does, appended after a blank line.

    :returns: A configured ArgumentParser with RawDescriptionHelpFormatter
        and 80 character width.
    """
    description_lines: list[str] = []

    prog = name
    if prog is not None and not prog.startswith("check"):
        prog = f"check_{prog}"

    if version is not None:
        description_lines.append(f"version {version}")

    if license is not None:
        description_lines.append(f"Licensed under the {license}.")

    if description is not None:
        description_lines.append("")
        description_lines.append(description)

    parser: argparse.ArgumentParser = _PluginArgumentParser(
        prog=prog,
        formatter_class=lambda prog: argparse.RawDescriptionHelpFormatter(
            prog, width=80
        ),
        description="\n".join(description_lines),
        label=name or "",
    )

    if version is not None:
        parser.add_argument(
            "-V",
            "--version",
            action="version",
            version=f"%(prog)s {version}",
        )

    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase output verbosity (use up to 3 times).",
    )

    return parser


def threshold(text: str) -> Range:
    """argparse type for a single threshold range like ``20:`` or ``@5:10``."""
    try:
        return Range(text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(
            "invalid threshold {0!r}: {1}".format(text, exc)
        ) from None


def threshold_triple(text: str) -> tuple[Range, ...]:
    """argparse type for three comma-separated thresholds like ``2,1.5,1``.

    Shorter lists are padded with their last element.
    """
    try:
        return MultiArg(text).ranges(3)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(
            "invalid thresholds {0!r}: {1}".format(text, exc)
        ) from None


def add_appliance_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-H",
        "--host",
        required=True,
        help="Zevenet ADC Load Balancer appliance IP address or FQDN hostname.",
    )
    parser.add_argument(
        "-z",
        "--zapikey",
        required=True,
        help="Zevenet API v3 ZAPI_KEY.",
    )
    parser.add_argument(
        "-t",
        "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT,
        help="Timeout value in seconds (default: %(default)s).",
    )


def add_threshold_arguments(
    parser: argparse.ArgumentParser,
    warning_help: str,
    critical_help: str,
    triple: bool = False,
) -> None:
    """Adds ``-w`` and ``-c``.

    :param triple: accept comma-separated triples (load averages)
        instead of a single range
    """
    kind = threshold_triple if triple else threshold
    metavar = "RANGE,RANGE,RANGE" if triple else "RANGE"
    parser.add_argument(
        "-w", "--warning", type=kind, metavar=metavar, help=warning_help
    )
    parser.add_argument(
        "-c", "--critical", type=kind, metavar=metavar, help=critical_help
    )


@dataclasses.dataclass(frozen=True)
class Options:
    """Immutable configuration of one check invocation."""

    target: ApplianceTarget
    warning: Optional[ThresholdArg] = None
    critical: Optional[ThresholdArg] = None
    name: Optional[str] = None
    farm: Optional[str] = None
    service_id: Optional[str] = None
    backend_id: Optional[str] = None
    verbose: int = 0


def check_thresholds(
    warning: Optional[ThresholdArg], critical: Optional[ThresholdArg]
) -> None:
    """Fails unless at least one threshold argument was supplied.

    :raises UsageError: if both are missing
    """
    if warning is None and critical is None:
        raise UsageError("You didn't supply a threshold argument")


def parse_options(
    parser: argparse.ArgumentParser,
    argv: Optional[Sequence[str]] = None,
    require_threshold: bool = False,
) -> Options:
    """Parses `argv` into :class:`Options`.

    Usage errors are reported through ``parser.error`` and end the
    process with UNKNOWN before anything is fetched.
    """
    args = parser.parse_args(argv)
    try:
        if args.timeout <= 0:
            raise UsageError("timeout must be a positive number of seconds")
        if require_threshold:
            check_thresholds(
                getattr(args, "warning", None), getattr(args, "critical", None)
            )
    except UsageError as exc:
        parser.error(str(exc))
    return Options(
        target=ApplianceTarget(
            host=args.host, key=args.zapikey, port=ZAPI_PORT, timeout=args.timeout
        ),
        warning=getattr(args, "warning", None),
        critical=getattr(args, "critical", None),
        name=getattr(args, "name", None),
        farm=getattr(args, "farm", None),
        service_id=getattr(args, "serviceid", None),
        backend_id=getattr(args, "backendid", None),
        verbose=args.verbose,
    )
