"""Create status line from results.

:class:`Summary` turns the check's :class:`~.result.Results` into the
message that follows the state in the status line. Each Zevenet check
subclasses it to word the message the way operators know it from the
appliance ("Zevenet ADC Load Balancer CPU usage is ...").

Results that stem from a :class:`~.error.CheckError` have no metric; the
default :meth:`Summary.problem` prints their hint, so subclasses fall back
to it whenever the metrics they describe are missing.
"""

import typing

from .state import ok

if typing.TYPE_CHECKING:
    from .result import Results


class Summary:
    """Creates a summary formatter object.

    Subclasses may take constructor arguments, typically the resource
    whose data they describe.
    """

    # pylint: disable-next=no-self-use
    def ok(self, results: "Results") -> str:
        """Formats status line when overall state is ok.

        The default implementation returns a string representation of
        the first result.
        """
        return "{0}".format(results[0])

    # pylint: disable-next=no-self-use
    def problem(self, results: "Results") -> str:
        """Formats status line when overall state is not ok.

        The default implementation returns a string representation of the
        first significant result.
        """
        return "{0}".format(results.first_significant)

    # pylint: disable-next=no-self-use
    def verbose(self, results: "Results") -> list[str]:
        """Provides extra lines if verbose plugin execution is requested.

        The default implementation lists all results that are in a
        non-ok state.
        """
        msgs: list[str] = []
        for result in results:
            if result.state == ok:
                continue
            msgs.append("{0}: {1}".format(result.state, result))
        return msgs

    # pylint: disable-next=no-self-use
    def empty(self) -> str:
        """Formats status line when the result set is empty."""
        return "no check results"
