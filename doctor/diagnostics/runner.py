from __future__ import annotations

import logging
from typing import Awaitable, Callable, List, Optional

from doctor.contracts.diagnostics import DiagnosticOutcome, Report, ValidationError, exception_error
from doctor.diagnostics.sink import NullSink, ProgressSink

logger = logging.getLogger(__name__)

CaseFn = Callable[[], Awaitable[List[ValidationError]]]


class DiagnosticRunner:
    """
    Runs one named case and records its outcome. Never raises on case faults.
    """

    def __init__(self, sink: Optional[ProgressSink] = None) -> None:
        self.sink = sink if sink is not None else NullSink()

    async def run(self, name: str, report: Report, case_fn: CaseFn) -> DiagnosticOutcome:
        try:
            errors = list(await case_fn())
            outcome = DiagnosticOutcome(success=len(errors) == 0, errors=errors)
        except Exception as e:
            logger.exception("case raised: %s", name)
            outcome = DiagnosticOutcome(success=False, errors=[exception_error(e)])

        report[name] = outcome
        if outcome.success:
            logger.info("success: %s", name)
            self.sink.append(f"success: {name}")
        else:
            logger.warning("err: %s (%d errors)", name, len(outcome.errors))
            self.sink.append(f"err: {name}")
        return outcome


async def run(name: str, report: Report, sink: Optional[ProgressSink], case_fn: CaseFn) -> DiagnosticOutcome:
    return await DiagnosticRunner(sink).run(name, report, case_fn)
