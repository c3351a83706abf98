"""Submit handling in the Streamlit app: validation gates the orchestrator."""

from contextlib import nullcontext
from pathlib import Path
import sys

import pytest

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import streamlit_app  # noqa: E402
from bi_assistant.errors import ServiceError  # noqa: E402
from bi_assistant.results import TextResult  # noqa: E402
from bi_assistant.tasks import TaskType, get_task  # noqa: E402


class _RecordingOrchestrator:
    def __init__(self, result=None, error=None):
        self.calls = []
        self._result = result
        self._error = error

    async def generate(self, task, text="", file=None):
        self.calls.append((task, text, file))
        if self._error is not None:
            raise self._error
        return self._result


class _Upload:
    name = "chart.png"
    type = "image/png"

    def getvalue(self):
        return b"png-bytes"


@pytest.fixture
def session(monkeypatch):
    state = {"bi_input_text": "", "bi_output": "stale", "bi_error": "stale"}
    monkeypatch.setattr(streamlit_app.st, "session_state", state)
    monkeypatch.setattr(streamlit_app.st, "spinner", lambda *_args, **_kwargs: nullcontext())
    return state


@pytest.mark.parametrize(
    ("task", "text", "message"),
    [
        (TaskType.IMAGE_ANALYSIS, "What is in this chart?", "Please upload a file for this task."),
        (TaskType.VIDEO_ANALYSIS, "", "Please upload a file for this task."),
        (TaskType.SWOT, "   \n\t ", "Input text cannot be empty."),
    ],
)
def test_invalid_submission_never_reaches_orchestrator(session, task, text, message):
    orchestrator = _RecordingOrchestrator()
    session["bi_input_text"] = text

    streamlit_app._run_generation({"orchestrator": orchestrator}, get_task(task), None)

    assert orchestrator.calls == []
    assert session["bi_error"] == message
    assert session["bi_output"] is None


def test_valid_submission_stores_result(session):
    orchestrator = _RecordingOrchestrator(result=TextResult("## Strengths"))
    session["bi_input_text"] = "We sell bikes."

    streamlit_app._run_generation({"orchestrator": orchestrator}, get_task(TaskType.SWOT), None)

    assert orchestrator.calls == [(TaskType.SWOT, "We sell bikes.", None)]
    assert session["bi_output"] == TextResult("## Strengths")
    assert session["bi_error"] is None


def test_upload_is_passed_as_media_file(session):
    orchestrator = _RecordingOrchestrator(result=TextResult("A bar chart."))

    streamlit_app._run_generation(
        {"orchestrator": orchestrator}, get_task(TaskType.IMAGE_ANALYSIS), _Upload()
    )

    (_, _, file), = orchestrator.calls
    assert (file.name, file.mime_type, file.data) == ("chart.png", "image/png", b"png-bytes")


def test_generation_failure_is_shown_as_error(session):
    orchestrator = _RecordingOrchestrator(error=ServiceError("AI service error: 503"))
    session["bi_input_text"] = "notes"

    streamlit_app._run_generation({"orchestrator": orchestrator}, get_task(TaskType.KEY_INSIGHTS), None)

    assert session["bi_error"] == "An error occurred: AI service error: 503"
    assert session["bi_output"] is None
