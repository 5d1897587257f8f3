import io
import logging

import pytest

from zevenetplugin.runtime import Runtime, guarded
from zevenetplugin.state import ok


def make_check():
    class Check(object):
        summary_str = "summary"
        verbose_str = "long output"
        name = "zevenet_check"
        state = ok
        exitcode = 0
        perfdata = []

        def __call__(self):
            pass

    return Check()


class TestRuntimeBase:
    def setup_method(self) -> None:
        Runtime.instance = None
        self.r = Runtime()
        self.r.sysexit = lambda: None  # type: ignore
        self.r.stdout = io.StringIO()


class TestRuntime(TestRuntimeBase):
    def test_runtime_is_singleton(self) -> None:
        assert self.r is Runtime()

    def test_run_sets_exitcode(self) -> None:
        self.r.run(make_check())  # type: ignore
        assert 0 == self.r.exitcode

    def test_verbose(self) -> None:
        testcases = [
            (None, logging.WARNING, 0),
            (1, logging.WARNING, 1),
            ("vv", logging.INFO, 2),
            (3, logging.DEBUG, 3),
            ("vvvv", logging.DEBUG, 3),
        ]
        for argument, exp_level, exp_verbose in testcases:
            self.r.verbose = argument
            assert exp_level == self.r.logchan.level
            assert exp_verbose == self.r.verbose

    def test_execute_uses_defaults(self) -> None:
        self.r.execute(make_check())  # type: ignore
        assert 0 == self.r.verbose
        assert "ZEVENET_CHECK OK - summary\n" == self.r.stdout.getvalue()  # type: ignore

    def test_execute_sets_verbose(self) -> None:
        self.r.execute(make_check(), 2)  # type: ignore
        assert 2 == self.r.verbose
        assert (
            "ZEVENET_CHECK OK - summary\nlong output\n"
            == self.r.stdout.getvalue()  # type: ignore
        )

    def test_reinit_does_not_duplicate_log_handlers(self) -> None:
        root = logging.getLogger("zevenetplugin")
        before = len(root.handlers)
        Runtime()
        Runtime()
        assert before == len(root.handlers)


class TestRuntimeException(TestRuntimeBase):
    def run_main_with_exception(self, exc: Exception) -> None:
        @guarded
        def main():
            raise exc

        main()

    def test_handle_exception_set_exitcode_and_formats_output(self) -> None:
        self.run_main_with_exception(RuntimeError("problem"))
        assert 3 == self.r.exitcode
        assert "UNKNOWN: RuntimeError: problem" in self.r.stdout.getvalue()  # type: ignore

    def test_handle_exception_prints_no_traceback(self) -> None:
        self.r.verbose = 0
        self.run_main_with_exception(RuntimeError("problem"))
        assert "Traceback" not in self.r.stdout.getvalue()  # type: ignore

    def test_handle_exception_verbose(self) -> None:
        self.r.verbose = 1
        self.run_main_with_exception(RuntimeError("problem"))
        assert "Traceback" in self.r.stdout.getvalue()  # type: ignore

    def test_guarded_set_verbosity(self) -> None:
        @guarded(verbose=0)
        def main():
            pass

        main()
        assert 0 == self.r.verbose

    def test_guarded_no_keyword(self) -> None:
        with pytest.raises(AssertionError):

            @guarded(0)  # type: ignore
            def main():
                pass

    def test_system_exit_passes_through(self) -> None:
        @guarded
        def main():
            raise SystemExit(2)

        with pytest.raises(SystemExit):
            main()
