import json
import logging

import httpx
import pytest
import respx

from asanak_sms.messaging.client import AsanakSmsClient
from asanak_sms.ops.structured_logger import JsonFormatter, attach_debug_handler, setup_logging

GATEWAY = "https://smsapi.asanak.ir/services/CompositeSmsGateway"


def _record(**extra):
    rec = logging.LogRecord("asanak.client", logging.INFO, __file__, 1, "asanak_send_start", None, None)
    if extra:
        rec.extra = extra
    return rec


@pytest.fixture
def isolated_asanak_logger():
    # Detached from the root so no pytest capture handler is visible to hasHandlers().
    logger = logging.getLogger("asanak")
    handlers, level, propagate = logger.handlers[:], logger.level, logger.propagate
    logger.handlers[:] = []
    logger.setLevel(logging.NOTSET)
    logger.propagate = False
    yield logger
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate


def test_json_formatter_merges_extra_payload():
    out = json.loads(JsonFormatter().format(_record(event="asanak_send_start", to="091***789")))
    assert out["severity"] == "INFO"
    assert out["event"] == "asanak_send_start"
    assert out["logger"] == "asanak.client"
    assert out["service"] == "asanak-sms"
    assert out["to"] == "091***789"


def test_json_formatter_error_message_does_not_replace_event():
    out = json.loads(JsonFormatter().format(_record(message="HTTP 500: Internal Server Error")))
    assert out["event"] == "asanak_send_start"
    assert out["message"] == "HTTP 500: Internal Server Error"


def test_json_formatter_redacts_password_fields():
    line = JsonFormatter().format(_record(password="s3cret", ASANAK_PASSWORD="s3cret"))
    assert "s3cret" not in line
    assert json.loads(line)["password"] == "***"


def test_json_formatter_keeps_non_ascii():
    line = JsonFormatter().format(_record(raw_xml="<msgBody>سلام</msgBody>"))
    assert "سلام" in line


def test_attach_debug_handler_adds_json_stdout_handler_once(isolated_asanak_logger, capsys):
    attach_debug_handler()
    attach_debug_handler()
    assert len(isolated_asanak_logger.handlers) == 1
    assert isolated_asanak_logger.level == logging.INFO

    logging.getLogger("asanak.client").info("asanak_init", extra={"extra": {"source_address": "9821000"}})
    out = json.loads(capsys.readouterr().out.strip())
    assert out["event"] == "asanak_init"
    assert out["source_address"] == "9821000"


@pytest.mark.asyncio
async def test_debug_client_prints_stage_events_without_host_logging(isolated_asanak_logger, capsys):
    with respx.mock:
        respx.post(GATEWAY).mock(return_value=httpx.Response(200, text="<ok/>"))
        await AsanakSmsClient("u", "s3cret", "9821000", debug=True).send("09123456789", "hello")

    lines = [json.loads(line) for line in capsys.readouterr().out.splitlines()]
    assert [e["event"] for e in lines] == [
        "asanak_init",
        "asanak_send_start",
        "asanak_http_response",
        "asanak_response_end",
        "asanak_send_success",
    ]
    assert lines[1]["to"] == "091***789"


def test_non_debug_client_leaves_logging_alone(isolated_asanak_logger):
    AsanakSmsClient("u", "p", "1")
    assert isolated_asanak_logger.handlers == []
    assert isolated_asanak_logger.level == logging.NOTSET


def test_setup_logging_installs_json_handler_and_quiets_httpx():
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        setup_logging("DEBUG")
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JsonFormatter)
        assert logging.getLogger("httpx").level == logging.WARNING
        assert logging.getLogger("httpcore").level == logging.WARNING
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
