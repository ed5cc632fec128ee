"""
Tests for the session reducer and the async controller around it.
"""

import asyncio
import json
import pytest
from dataclasses import replace

from reasoning_assistant.config import settings
from reasoning_assistant.models.analysis import AnalysisResult
from reasoning_assistant.models.session import SessionPhase, SessionState
from reasoning_assistant.services.reasoning_client import (
    ReasoningClient,
    ANALYSIS_FAILED_MESSAGE,
    SUGGESTION_FAILED_MESSAGE,
    MISSING_INPUT_MESSAGE,
)
from reasoning_assistant.services.session_controller import (
    SessionController,
    reduce,
    append_suggestions,
    DataEdited,
    AssumptionsEdited,
    ExtractionStarted,
    ExtractionSucceeded,
    ExtractionFailed,
    AnalysisRequested,
    AnalysisSucceeded,
    AnalysisFailed,
    SuggestionStarted,
    SuggestionSucceeded,
    SuggestionFailed,
    BackToInputs,
    ClearSession,
    EXTRACTION_FAILED_MESSAGE,
)

from conftest import FakeBackend

DATA = "Revenue,Q1,Q2\nNorth,100,150"


@pytest.fixture
def result(analysis_payload):
    return AnalysisResult.model_validate(analysis_payload)


@pytest.fixture
def ready_state():
    return SessionState(data=DATA, assumptions="- North grew quarter over quarter")


class TestAppendSuggestions:

    def test_existing_text_is_kept_as_prefix(self):
        existing = "- North grew quarter over quarter"
        combined = append_suggestions(existing, ["Q3 will grow", "South is missing"])

        assert combined.startswith(existing)
        assert combined == existing + "\n- Q3 will grow\n- South is missing"

    def test_empty_assumptions_get_only_suggestions(self):
        assert append_suggestions("", ["A", "B"]) == "- A\n- B"

    def test_whitespace_only_assumptions_are_replaced(self):
        assert append_suggestions("  \n", ["A"]) == "- A"

    def test_trailing_newline_is_preserved(self):
        assert append_suggestions("- A\n", ["B"]) == "- A\n\n- B"

    def test_no_suggestions_leaves_text_unchanged(self):
        assert append_suggestions("- A", []) == "- A"


@pytest.mark.parametrize("state,expected", [
    (SessionState(data=DATA, assumptions="- a"), True),
    (SessionState(data=DATA, assumptions="  "), False),
    (SessionState(data="", assumptions="- a"), False),
    (SessionState(data=DATA, assumptions="- a", is_suggesting=True), False),
])
def test_can_evaluate(state, expected):
    assert state.can_evaluate is expected


class TestReducer:

    def test_edits_clear_error(self):
        state = SessionState(error="old", phase=SessionPhase.ERRORED)

        state = reduce(state, DataEdited("x"))
        assert state.data == "x"
        assert state.error is None
        assert state.phase == SessionPhase.IDLE

        state = reduce(replace(state, error="again"), AssumptionsEdited("y"))
        assert state.assumptions == "y"
        assert state.error is None

    @pytest.mark.parametrize("data,assumptions", [("", "- a"), (DATA, "   "), (" \n", "")])
    def test_analysis_guard_refuses_blank_input(self, data, assumptions):
        state = reduce(SessionState(data=data, assumptions=assumptions), AnalysisRequested())

        assert state.is_analyzing is False
        assert state.phase == SessionPhase.IDLE
        assert state.error == MISSING_INPUT_MESSAGE

    def test_analysis_guard_drops_live_result(self, ready_state, result):
        state = replace(ready_state, result=result, phase=SessionPhase.RESULT_READY)

        state = reduce(state, AssumptionsEdited("   "))
        state = reduce(state, AnalysisRequested())

        assert state.error == MISSING_INPUT_MESSAGE
        assert state.result is None
        assert state.phase == SessionPhase.IDLE

    def test_extraction_failure_drops_live_result(self, ready_state, result):
        state = replace(ready_state, result=result, phase=SessionPhase.RESULT_READY)
        started = reduce(state, ExtractionStarted())

        failed = reduce(started, ExtractionFailed("bad file", started.epoch))

        assert failed.error == "bad file"
        assert failed.result is None
        assert failed.data == DATA
        assert failed.phase == SessionPhase.ERRORED

    def test_analysis_start_clears_result_and_error(self, ready_state, result):
        state = replace(ready_state, result=result, error="stale")

        state = reduce(state, AnalysisRequested())

        assert state.is_analyzing is True
        assert state.phase == SessionPhase.ANALYZING
        assert state.result is None
        assert state.error is None

    def test_analysis_success_and_failure(self, ready_state, result):
        started = reduce(ready_state, AnalysisRequested())

        done = reduce(started, AnalysisSucceeded(result, started.epoch))
        assert done.phase == SessionPhase.RESULT_READY
        assert done.result is result
        assert done.is_analyzing is False

        failed = reduce(started, AnalysisFailed("boom", started.epoch))
        assert failed.phase == SessionPhase.ERRORED
        assert failed.result is None
        assert failed.error == "boom"

    def test_analysis_refused_while_suggesting(self, ready_state):
        suggesting = reduce(ready_state, SuggestionStarted())
        assert reduce(suggesting, AnalysisRequested()) == suggesting

    def test_suggestion_refused_while_analyzing(self, ready_state):
        analyzing = reduce(ready_state, AnalysisRequested())
        assert reduce(analyzing, SuggestionStarted()) == analyzing

    def test_extraction_refused_while_busy(self, ready_state):
        analyzing = reduce(ready_state, AnalysisRequested())
        assert reduce(analyzing, ExtractionStarted()) == analyzing

    def test_suggestion_silently_refused_without_data(self):
        state = SessionState(assumptions="- a")
        assert reduce(state, SuggestionStarted()) == state

    def test_suggestion_success_appends(self, ready_state):
        started = reduce(ready_state, SuggestionStarted())
        done = reduce(started, SuggestionSucceeded(["Q3 will grow"], started.epoch))

        assert done.assumptions == "- North grew quarter over quarter\n- Q3 will grow"
        assert done.phase == SessionPhase.IDLE
        assert done.is_suggesting is False

    def test_suggestion_from_result_keeps_result(self, ready_state, result):
        state = replace(ready_state, result=result, phase=SessionPhase.RESULT_READY)
        started = reduce(state, SuggestionStarted())
        done = reduce(started, SuggestionSucceeded(["X"], started.epoch))

        assert done.result is result
        assert done.phase == SessionPhase.RESULT_READY

    def test_suggestion_failure_keeps_assumptions(self, ready_state, result):
        state = replace(ready_state, result=result, phase=SessionPhase.RESULT_READY)
        started = reduce(state, SuggestionStarted())
        failed = reduce(started, SuggestionFailed("nope", started.epoch))

        assert failed.assumptions == ready_state.assumptions
        assert failed.error == "Could not generate suggestions: nope"
        assert failed.result is None
        assert failed.phase == SessionPhase.ERRORED

    def test_back_to_inputs_keeps_texts(self, ready_state, result):
        state = replace(ready_state, result=result, phase=SessionPhase.RESULT_READY)

        state = reduce(state, BackToInputs())

        assert state.result is None
        assert state.phase == SessionPhase.IDLE
        assert state.data == DATA
        assert state.assumptions == ready_state.assumptions

    def test_back_to_inputs_outside_result_is_ignored(self, ready_state):
        assert reduce(ready_state, BackToInputs()) == ready_state

    def test_clear_resets_everything_and_bumps_epoch(self, ready_state, result):
        state = replace(ready_state, result=result, error="x", is_analyzing=True, epoch=3)

        assert reduce(state, ClearSession()) == SessionState(epoch=4)

    def test_stale_completion_is_dropped(self, ready_state, result):
        started = reduce(ready_state, AnalysisRequested())
        cleared = reduce(started, ClearSession())

        assert reduce(cleared, AnalysisSucceeded(result, started.epoch)) == cleared
        assert reduce(cleared, ExtractionSucceeded("late data", started.epoch)) == cleared

    def test_unknown_action(self):
        with pytest.raises(TypeError):
            reduce(SessionState(), object())


class BlockingBackend(FakeBackend):
    """Holds the response until the test releases it"""

    def __init__(self, response_text):
        super().__init__(response_text)
        self.started = asyncio.Event()
        self.release = asyncio.Event()

    async def generate_json(self, prompt, schema, task):
        self.started.set()
        await self.release.wait()
        return await super().generate_json(prompt, schema, task)


class TestSessionController:

    @pytest.fixture
    def controller(self, fake_backend):
        return SessionController(reasoning_client=ReasoningClient(backend=fake_backend))

    @pytest.mark.asyncio
    async def test_upload_populates_data(self, controller):
        state = await controller.upload("data.csv", DATA.encode("utf-8"))

        assert state.data == DATA
        assert state.phase == SessionPhase.IDLE
        assert state.is_extracting is False

    @pytest.mark.asyncio
    async def test_unsupported_upload_leaves_data(self, controller):
        controller.edit_data("keep me")

        state = await controller.upload("slides.pptx", b"...")

        assert state.data == "keep me"
        assert state.phase == SessionPhase.ERRORED
        assert "Unsupported file format" in state.error

    @pytest.mark.asyncio
    async def test_allowed_extension_without_a_reader_is_rejected(self, controller, monkeypatch):
        monkeypatch.setattr(settings, "ALLOWED_EXTENSIONS", settings.ALLOWED_EXTENSIONS + [".json"])

        state = await controller.upload("data.json", b"{}")

        assert state.is_extracting is False
        assert state.phase == SessionPhase.ERRORED
        assert "Unsupported file format" in state.error

    @pytest.mark.asyncio
    async def test_corrupt_upload_reports_parse_error(self, controller):
        state = await controller.upload("report.pdf", b"not a pdf document")

        assert state.error == EXTRACTION_FAILED_MESSAGE
        assert state.data == ""

    @pytest.mark.asyncio
    async def test_evaluate_produces_result(self, controller, fake_backend):
        controller.edit_data(DATA)
        controller.edit_assumptions("- North grew quarter over quarter")

        state = await controller.evaluate()

        assert state.phase == SessionPhase.RESULT_READY
        assert state.result.evaluations[0].assumption == "North grew quarter over quarter"
        assert len(fake_backend.calls) == 1

    @pytest.mark.asyncio
    async def test_evaluate_with_blank_input_makes_no_call(self, controller, fake_backend):
        controller.edit_data(DATA)

        state = await controller.evaluate()

        assert state.error == MISSING_INPUT_MESSAGE
        assert fake_backend.calls == []

    @pytest.mark.asyncio
    async def test_evaluate_failure_surfaces_opaque_message(self):
        backend = FakeBackend(error=RuntimeError("provider exploded"))
        controller = SessionController(reasoning_client=ReasoningClient(backend=backend))
        controller.edit_data(DATA)
        controller.edit_assumptions("- a")

        state = await controller.evaluate()

        assert state.phase == SessionPhase.ERRORED
        assert state.error == ANALYSIS_FAILED_MESSAGE
        assert state.result is None

    @pytest.mark.asyncio
    async def test_suggest_appends_to_assumptions(self):
        backend = FakeBackend(json.dumps(["Q3 will grow", "South data is missing"]))
        controller = SessionController(reasoning_client=ReasoningClient(backend=backend))
        controller.edit_data(DATA)
        controller.edit_assumptions("- North grew")

        state = await controller.suggest()

        assert state.assumptions == "- North grew\n- Q3 will grow\n- South data is missing"

    @pytest.mark.asyncio
    async def test_suggest_failure_keeps_assumptions(self):
        backend = FakeBackend("not json")
        controller = SessionController(reasoning_client=ReasoningClient(backend=backend))
        controller.edit_data(DATA)
        controller.edit_assumptions("- North grew")

        state = await controller.suggest()

        assert state.assumptions == "- North grew"
        assert state.error == "Could not generate suggestions: " + SUGGESTION_FAILED_MESSAGE

    @pytest.mark.asyncio
    async def test_suggest_without_data_is_silent(self, controller, fake_backend):
        state = await controller.suggest()

        assert state == SessionState()
        assert fake_backend.calls == []

    @pytest.mark.asyncio
    async def test_clear_during_analysis_drops_late_result(self, analysis_payload):
        backend = BlockingBackend(json.dumps(analysis_payload))
        controller = SessionController(reasoning_client=ReasoningClient(backend=backend))
        controller.edit_data(DATA)
        controller.edit_assumptions("- North grew quarter over quarter")

        task = asyncio.create_task(controller.evaluate())
        await backend.started.wait()
        assert controller.state.is_analyzing is True

        controller.clear()
        backend.release.set()
        await task

        assert controller.state == SessionState(epoch=1)

    @pytest.mark.asyncio
    async def test_second_analysis_is_refused_while_first_runs(self, analysis_payload):
        backend = BlockingBackend(json.dumps(analysis_payload))
        controller = SessionController(reasoning_client=ReasoningClient(backend=backend))
        controller.edit_data(DATA)
        controller.edit_assumptions("- a")

        first = asyncio.create_task(controller.evaluate())
        await backend.started.wait()
        await controller.evaluate()
        await controller.suggest()
        backend.release.set()
        await first

        assert len(backend.calls) == 1
        assert controller.state.phase == SessionPhase.RESULT_READY

    @pytest.mark.asyncio
    async def test_unexpected_extractor_error_releases_session(self, fake_backend):
        class BrokenExtractor:
            def extract(self, file_name, content):
                raise KeyError("sheet")

        controller = SessionController(
            reasoning_client=ReasoningClient(backend=fake_backend), extractor=BrokenExtractor()
        )

        state = await controller.upload("data.csv", b"a,b")

        assert state.is_extracting is False
        assert state.phase == SessionPhase.ERRORED
        assert state.error == EXTRACTION_FAILED_MESSAGE

        controller.edit_data(DATA)
        controller.edit_assumptions("- North grew quarter over quarter")
        state = await controller.evaluate()
        assert state.phase == SessionPhase.RESULT_READY

    @pytest.mark.asyncio
    async def test_unexpected_client_error_releases_session(self):
        class BrokenClient:
            async def analyze(self, data, assumptions):
                raise KeyError("evaluations")

            async def suggest_assumptions(self, data):
                raise KeyError("items")

        controller = SessionController(reasoning_client=BrokenClient())
        controller.edit_data(DATA)
        controller.edit_assumptions("- a")

        state = await controller.evaluate()
        assert state.is_analyzing is False
        assert state.error == ANALYSIS_FAILED_MESSAGE

        state = await controller.suggest()
        assert state.is_suggesting is False
        assert state.error == "Could not generate suggestions: " + SUGGESTION_FAILED_MESSAGE
