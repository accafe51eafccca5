from __future__ import annotations

from structlog.testing import capture_logs

from onboarding.core.constants import StepStatus, SubmissionStatus
from onboarding.forms.submission import FormSubmission
from onboarding.pipeline import SubmissionContext, SubmissionEngine, SubmissionStep
from onboarding.pipeline.engine import UNEXPECTED_ERROR_MESSAGE
from onboarding.pipeline.errors import (
    AccessDeniedError,
    NotificationError,
    PersistenceError,
    StepExecutionError,
)
from onboarding.pipeline.steps.validate_form import ValidateFormStep


class _RecordingStep(SubmissionStep):
    def __init__(self, name: str, calls: list[str], *, error: Exception | None = None,
                 critical: bool = True, skip: bool = False) -> None:
        self.name = name
        self.description = f"{name} step"
        self.critical = critical
        self._calls = calls
        self._error = error
        self._skip = skip

    async def should_skip(self, ctx: SubmissionContext) -> bool:
        return self._skip

    async def execute(self, ctx: SubmissionContext):
        started_at = self._now()
        self._calls.append(self.name)
        if self._error is not None:
            raise self._error
        return self._success(started_at, metadata={"ok": True})


def _ctx(profile) -> SubmissionContext:
    return SubmissionContext(profile=profile, form=FormSubmission())


async def test_all_steps_complete(profile) -> None:
    calls: list[str] = []
    ctx = _ctx(profile)
    steps = [_RecordingStep("one", calls), _RecordingStep("two", calls)]

    result = await SubmissionEngine().run_steps(ctx, steps)

    assert calls == ["one", "two"]
    assert result.status == SubmissionStatus.COMPLETED
    assert result.succeeded is True
    assert result.failure is None
    assert result.steps_completed == 2
    assert result.execution_id == ctx.execution_id
    assert [r["status"] for r in result.step_results] == [StepStatus.COMPLETED, StepStatus.COMPLETED]


async def test_critical_failure_stops_later_steps(profile) -> None:
    calls: list[str] = []
    denied = AccessDeniedError("Only @hts.asia accounts can submit onboarding packets.")
    steps = [
        _RecordingStep("gate", calls, error=denied),
        _RecordingStep("send", calls),
    ]
    ctx = _ctx(profile)

    result = await SubmissionEngine().run_steps(ctx, steps)

    assert calls == ["gate"]
    assert result.status == SubmissionStatus.FAILED
    assert result.failure is denied
    assert denied.step_name == "gate"
    assert denied.execution_id == ctx.execution_id
    assert result.error == denied.message
    assert ctx.errors == [f"Step 'gate' failed: {denied.message}"]


async def test_non_critical_failure_is_partial(profile) -> None:
    calls: list[str] = []
    steps = [
        _RecordingStep("send", calls),
        _RecordingStep("persist", calls, error=PersistenceError("db down"), critical=False),
    ]

    result = await SubmissionEngine().run_steps(_ctx(profile), steps)

    assert calls == ["send", "persist"]
    assert result.status == SubmissionStatus.PARTIALLY_COMPLETED
    assert result.succeeded is True
    assert result.failure is None
    assert result.step_results[-1]["status"] == StepStatus.FAILED
    assert result.step_results[-1]["error"] == "db down"


async def test_skipped_step_is_recorded(profile) -> None:
    calls: list[str] = []
    steps = [_RecordingStep("persist", calls, skip=True)]

    result = await SubmissionEngine().run_steps(_ctx(profile), steps)

    assert calls == []
    assert result.status == SubmissionStatus.COMPLETED
    assert result.step_results[0]["status"] == StepStatus.SKIPPED


async def test_unexpected_error_is_wrapped_generically(profile) -> None:
    calls: list[str] = []
    steps = [_RecordingStep("boom", calls, error=RuntimeError("kaboom"))]

    result = await SubmissionEngine().run_steps(_ctx(profile), steps)

    assert result.status == SubmissionStatus.FAILED
    assert isinstance(result.failure, StepExecutionError)
    assert result.failure.message == UNEXPECTED_ERROR_MESSAGE
    assert result.failure.status_code == 500
    assert isinstance(result.failure.__cause__, RuntimeError)
    assert result.step_results[0]["error"] == "Unexpected: kaboom"


async def test_validation_rejection_is_not_logged_as_failure(profile, form_payload) -> None:
    ctx = SubmissionContext(profile=profile, form=FormSubmission.model_validate(form_payload(nominees=[])))

    with capture_logs() as logs:
        result = await SubmissionEngine().run_steps(ctx, [ValidateFormStep()])

    assert result.status == SubmissionStatus.FAILED
    assert result.failure.status_code == 400
    assert [entry for entry in logs if entry["log_level"] == "error"] == []
    rejected = [entry for entry in logs if entry["event"] == "Submission rejected, stopping"]
    assert rejected[0]["log_level"] == "info"
    assert rejected[0]["status_code"] == 400


async def test_gate_rejection_logs_info_and_transport_failure_logs_error(profile) -> None:
    calls: list[str] = []
    denied = AccessDeniedError("Only @hts.asia accounts can submit onboarding packets.")
    refused = NotificationError("Graph sendMail failed (403): ErrorAccessDenied", transport_status=403)

    with capture_logs() as logs:
        await SubmissionEngine().run_steps(_ctx(profile), [_RecordingStep("gate", calls, error=denied)])
        await SubmissionEngine().run_steps(_ctx(profile), [_RecordingStep("send", calls, error=refused)])

    levels = {entry["step_name"]: entry["log_level"] for entry in logs if "stopping" in entry["event"]}
    assert levels == {"gate": "info", "send": "error"}
