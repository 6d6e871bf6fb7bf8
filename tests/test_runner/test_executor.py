"""Tests for the runner executor."""

import json
import sys

import pytest

from request_scope import ContextNotInitializedError
from request_scope.runner import __main__ as runner_main
from request_scope.runner.executor import Executor
from request_scope.runner.schema import ReportingConfigSchema, RunnerInput


class FixedIds:
    def __init__(self, request_id):
        self.request_id = request_id

    def new_id(self):
        return self.request_id


HANDLERS = {
    "ok": """
import asyncio

from request_scope import get_request_id


async def handler(request, response):
    await asyncio.sleep(0)
    response["status"] = 200
    return {"echo": request, "request_id": get_request_id()}
""",
    "sync": """
def handler(request, response):
    return request["n"] * 2
""",
    "not_found": """
from request_scope import NotFoundException


def find_widget(widget_id):
    raise NotFoundException(f"Widget {widget_id} missing", metadata={"widget_id": widget_id})


def handler(request, response):
    response["status"] = 404
    return find_widget(request["id"])
""",
    "crash": """
def handler(request, response):
    raise ZeroDivisionError("division by zero")
""",
    "custom_kind": """
from request_scope import ExceptionBase


class PaymentDeclinedException(ExceptionBase):
    code = "TEST_PAYMENT_DECLINED"


def handler(request, response):
    raise PaymentDeclinedException("declined")
""",
    "bad_wiring": """
from request_scope import ContextNotInitializedError


def handler(request, response):
    raise ContextNotInitializedError("boundary forgot something")
""",
}


@pytest.fixture
def make_input(tmp_path):
    def _make(kind, request=None, **kwargs):
        path = tmp_path / f"{kind}_handler.py"
        path.write_text(HANDLERS[kind])
        return RunnerInput(
            request=request,
            handler_path=str(path),
            work_dir=str(tmp_path),
            **kwargs,
        )

    return _make


@pytest.fixture
def executor():
    return Executor(id_generator=FixedIds("gen-1"))


class TestExecute:
    """Tests for Executor.execute()."""

    async def test_success_with_generated_id(self, executor, make_input):
        output = await executor.execute(make_input("ok", request={"q": 1}))

        assert output.success is True
        assert output.request_id == "gen-1"
        assert output.result == {"echo": {"q": 1}, "request_id": "gen-1"}
        assert output.response == {"status": 200}
        assert output.error is None

    async def test_propagated_request_id(self, executor, make_input):
        output = await executor.execute(make_input("ok", request={}, request_id="upstream-7"))

        assert output.request_id == "upstream-7"
        assert output.result["request_id"] == "upstream-7"

    async def test_sync_handler(self, executor, make_input):
        output = await executor.execute(make_input("sync", request={"n": 21}))
        assert output.success is True
        assert output.result == 42

    async def test_domain_exception_is_serialized(self, executor, make_input):
        output = await executor.execute(make_input("not_found", request={"id": 9}))

        assert output.success is False
        assert output.error_type == "NotFoundException"
        assert output.response == {"status": 404}
        assert output.error.code == "NOT_FOUND"
        assert output.error.message == "Widget 9 missing"
        assert output.error.correlation_id == "gen-1"
        assert output.error.metadata == {"widget_id": 9}
        assert output.error.stack is None

    async def test_include_stack(self, executor, make_input):
        output = await executor.execute(
            make_input(
                "not_found",
                request={"id": 1},
                reporting=ReportingConfigSchema(include_stack=True),
            )
        )
        assert "find_widget" in output.error.stack

    async def test_unexpected_error_is_wrapped(self, executor, make_input):
        output = await executor.execute(make_input("crash"))

        assert output.success is False
        assert output.error_type == "InternalServerErrorException"
        assert output.error.code == "INTERNAL_SERVER_ERROR"
        assert output.error.message == "Internal server error"
        assert output.error.cause == "ZeroDivisionError: division by zero"
        assert output.error.correlation_id == "gen-1"

    async def test_wiring_defect_propagates(self, executor, make_input):
        with pytest.raises(ContextNotInitializedError):
            await executor.execute(make_input("bad_wiring"))

    async def test_handler_load_error(self, executor, tmp_path):
        output = await executor.execute(
            RunnerInput(handler_path=str(tmp_path / "missing.py"), work_dir=str(tmp_path))
        )
        assert output.success is False
        assert output.error_type == "HandlerLoadError"
        assert output.request_id == ""

    async def test_handler_with_custom_kind_serves_repeated_requests(self, executor, make_input):
        input_data = make_input("custom_kind")

        first = await executor.execute(input_data)
        second = await executor.execute(input_data)

        for output in (first, second):
            assert output.error_type == "PaymentDeclinedException"
            assert output.error.code == "TEST_PAYMENT_DECLINED"

    async def test_custom_kind_reloaded_by_new_executor(self, make_input):
        input_data = make_input("custom_kind")

        first = await Executor(FixedIds("a")).execute(input_data)
        second = await Executor(FixedIds("b")).execute(input_data)

        assert first.error.correlation_id == "a"
        assert second.error.correlation_id == "b"

    async def test_sequential_requests_get_their_own_ids(self, make_input):
        first = await Executor(FixedIds("a")).execute(make_input("ok", request={}))
        second = await Executor(FixedIds("b")).execute(make_input("ok", request={}))
        assert first.result["request_id"] == "a"
        assert second.result["request_id"] == "b"


class TestMain:
    """Tests for the ``python -m request_scope.runner`` entry point."""

    def run_main(self, monkeypatch, capsys, payload):
        monkeypatch.setattr(sys, "stdin", _Stdin(payload))
        code = runner_main.main()
        return code, json.loads(capsys.readouterr().out)

    def test_error_output_uses_camel_case(self, monkeypatch, capsys, make_input):
        payload = make_input("not_found", request={"id": 2}, request_id="r-9").model_dump_json()
        code, out = self.run_main(monkeypatch, capsys, payload)

        assert code == 1
        assert out["error"]["correlationId"] == "r-9"
        assert out["error"]["code"] == "NOT_FOUND"
        assert "stack" not in out["error"]
        assert "cause" not in out["error"]

    def test_success_exit_code(self, monkeypatch, capsys, make_input):
        payload = make_input("sync", request={"n": 2}).model_dump_json()
        code, out = self.run_main(monkeypatch, capsys, payload)

        assert code == 0
        assert out["result"] == 4

    def test_invalid_input(self, monkeypatch, capsys):
        code, out = self.run_main(monkeypatch, capsys, "{not json")

        assert code == 1
        assert out["success"] is False
        assert out["error_type"] == "ValidationError"


class _Stdin:
    def __init__(self, text):
        self._text = text

    def read(self):
        return self._text
