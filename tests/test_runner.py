from __future__ import annotations

import asyncio

from doctor.contracts.diagnostics import EXCEPTION, INCORRECT_DATA, Report, ValidationError
from doctor.diagnostics.runner import DiagnosticRunner, run
from doctor.diagnostics.sink import ListSink


def _err(field: str) -> ValidationError:
    return ValidationError(type=INCORRECT_DATA, mint_block_hash="M", field=field, message=f"bad {field}")


def test_empty_error_list_is_success():
    report, sink = Report(), ListSink()

    async def case():
        return []

    asyncio.run(run("a", report, sink, case))
    assert report["a"].success is True
    assert report["a"].errors == []
    assert sink.lines == ["success: a"]


def test_errors_are_kept_in_order():
    report, sink = Report(), ListSink()
    errs = [_err("owner"), _err("block_hash"), _err("locked")]

    async def case():
        return errs

    asyncio.run(run("b", report, sink, case))
    assert report["b"].success is False
    assert report["b"].errors == errs
    assert sink.lines == ["err: b"]


def test_raised_fault_becomes_one_exception_entry():
    report, sink = Report(), ListSink()

    async def case():
        raise RuntimeError("boom")

    asyncio.run(run("c", report, sink, case))
    out = report["c"]
    assert out.success is False
    assert len(out.errors) == 1
    assert out.errors[0].type == EXCEPTION
    assert out.errors[0].message == "RuntimeError: boom"
    assert out.errors[0].field == ""
    assert sink.lines == ["err: c"]


def test_no_sink_is_fine():
    report = Report()

    async def case():
        raise KeyError("asset_chain")

    asyncio.run(run("d", report, None, case))
    assert report["d"].success is False


def test_fault_does_not_stop_later_cases():
    report, sink = Report(), ListSink()
    runner = DiagnosticRunner(sink)

    async def ok():
        return []

    async def broken():
        raise ValueError("no json")

    async def go():
        await runner.run("first", report, ok)
        await runner.run("second", report, broken)
        await runner.run("third", report, ok)

    asyncio.run(go())
    assert list(report) == ["first", "second", "third"]
    assert [o.success for o in report.values()] == [True, False, True]
    assert sink.lines == ["success: first", "err: second", "success: third"]
    assert report.failed() == ["second"]
    assert report.ok is False


def test_report_to_dict_shape():
    report = Report()

    async def case():
        return [_err("account")]

    asyncio.run(run("e", report, None, case))
    assert report.to_dict() == {
        "e": {
            "success": False,
            "errors": [{"type": "incorrect data", "mint_block_hash": "M", "field": "account", "message": "bad account"}],
        }
    }
