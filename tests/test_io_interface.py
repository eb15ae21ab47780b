import pytest
from twentyone.common.io_interface import (
    ConsoleIOInterface,
    DummyIOInterface,
    LoggingIOInterface,
    TestIOInterface,
)


def test_dummy_io_interface_output():
    interface = DummyIOInterface()
    assert interface.output("Test") is None


def test_test_io_interface_collects_messages():
    interface = TestIOInterface()
    interface.output("one")
    interface.output("two")
    assert interface.sent_messages == ["one", "two"]


def test_console_io_interface_prints(capsys):
    ConsoleIOInterface().output("Dealer dealt A♤")
    assert capsys.readouterr().out == "Dealer dealt A♤\n"


def test_logging_io_interface_appends(tmp_path):
    path = tmp_path / "game.log"
    interface = LoggingIOInterface(str(path))
    interface.output("first")
    interface.output("second")
    assert path.read_text(encoding="utf-8") == "first\nsecond\n"


@pytest.mark.asyncio
async def test_logging_io_interface_output_async(tmp_path):
    path = tmp_path / "game.log"
    interface = LoggingIOInterface(str(path))
    await interface.output_async("async line")
    assert path.read_text(encoding="utf-8") == "async line\n"


@pytest.mark.asyncio
async def test_default_output_async_uses_output():
    interface = TestIOInterface()
    await interface.output_async("queued")
    assert interface.sent_messages == ["queued"]
