import logging
from typing import Any, Callable, Optional, Sequence
from unittest import mock

import pytest

from zevenetplugin.runtime import Runtime

HOST = "zevenet.example.com"

KEY = "s3cr3t"

APPLIANCE_ARGS = ["-H", HOST, "-z", KEY]


class FakeResponse:
    """Stands in for :class:`requests.Response`."""

    def __init__(
        self, document: Any = None, status_code: int = 200, invalid: bool = False
    ) -> None:
        self.document = document
        self.status_code = status_code
        self.invalid = invalid

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def json(self) -> Any:
        if self.invalid:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self.document


@pytest.fixture(autouse=True)
def fresh_runtime():
    yield
    if Runtime.instance is not None:
        logging.getLogger("zevenetplugin").removeHandler(Runtime.instance.logchan)
    Runtime.instance = None


@pytest.fixture
def zapi():
    """Patches ``requests.get``; call the fixture to set the response."""
    with mock.patch("zevenetplugin.client.requests.get") as get:

        def respond(
            document: Any = None, status_code: int = 200, invalid: bool = False
        ) -> mock.MagicMock:
            get.return_value = FakeResponse(document, status_code, invalid)
            return get

        respond.get = get  # type: ignore
        yield respond


@pytest.fixture
def run_plugin(capsys: pytest.CaptureFixture[str]):
    """Runs a check's ``main`` and returns exit code and stdout."""

    def run(
        main: Callable[[Optional[Sequence[str]]], None], argv: Sequence[str]
    ) -> tuple[int, str]:
        with pytest.raises(SystemExit) as exc:
            main(list(argv))
        return exc.value.code, capsys.readouterr().out

    return run
