# ==============================================
# Tests for Advisor Module (prompt + Gemini client)
# ==============================================

import pytest
import requests

from retention_advisor.advisor import (
    MODEL_FALLBACK_CHAIN,
    GeminiClient,
    PromptBuilder,
    is_model_not_found,
)
from retention_advisor.analysis import (
    AnalysisResult,
    DatasetSummary,
    DepartmentSummary,
    SimilarEmployee,
    SimilarityEngine,
)
from retention_advisor.config import GeminiConfig
from retention_advisor.errors import ConfigurationError, GenerationError
from tests.conftest import FakeResponse, FakeSession, not_found_response, text_response


# ==============================================
# Prompt
# ==============================================

class TestPromptBuilder:

    def test_full_prompt(self, scenario_dataset):
        analysis = SimilarityEngine().analyze(scenario_dataset, 0)
        prompt = PromptBuilder().build(analysis.employee, analysis)

        assert prompt.startswith("You are an HR analytics assistant.\n\n")
        assert "Dataset summary: total rows = 3, overall attrition rate = 33.33%" in prompt
        assert "Top departments by attrition: Sales (50% over 2 employees), R&D (0% over 1 employees)" in prompt
        assert "Numeric columns used for similarity: Age" in prompt
        assert "- Department: Sales\n- Attrition: Yes\n- Age: 30" in prompt
        assert "idx 2 | distance 1.225 | attrition: No -> Department: R&D, Attrition: No, Age: 35" in prompt
        assert prompt.endswith("Limit each strategy to at most 6 lines.")

    def test_missing_summary_values(self):
        analysis = AnalysisResult(summary=DatasetSummary(), employee={})
        prompt = PromptBuilder().build({"Age": None, "Remote": True}, analysis)

        assert "total rows = unknown, overall attrition rate = unknown%" in prompt
        assert "Top departments by attrition: not available" in prompt
        assert "Numeric columns used for similarity: none" in prompt
        assert "- Age: null\n- Remote: true" in prompt
        assert "historical data:\nNot available\n" in prompt

    def test_similar_limited_to_five_and_six_fields(self):
        row = {f"f{n}": n for n in range(8)}
        similar = [SimilarEmployee(index=n, distance=n / 10, row=row) for n in range(1, 9)]
        analysis = AnalysisResult(
            summary=DatasetSummary(total=9, attrition_rate=0.0, top_departments=[
                DepartmentSummary(department="Sales", count=9, attrition_rate=0.0),
            ]),
            employee={},
            similar=similar,
        )

        prompt = PromptBuilder().build({}, analysis)

        assert "idx 5 | distance 0.500 -> f0: 0, f1: 1, f2: 2, f3: 3, f4: 4, f5: 5\n" in prompt
        assert "idx 6 " not in prompt
        assert "f6: 6" not in prompt

    def test_lowercase_attrition_key(self):
        similar = [SimilarEmployee(index=1, distance=0.0, row={"attrition": "Yes"})]
        analysis = AnalysisResult(summary=DatasetSummary(), employee={}, similar=similar)

        prompt = PromptBuilder().build({}, analysis)

        assert "idx 1 | distance 0.000 | attrition: Yes -> attrition: Yes" in prompt


# ==============================================
# Gemini client
# ==============================================

@pytest.fixture
def gemini_config():
    return GeminiConfig(api_key="test-key", base_url="https://gemini.test/v1beta", timeout_seconds=12.0)


class TestModelCandidates:

    def test_default_chain(self, gemini_config):
        client = GeminiClient(gemini_config, session=FakeSession())
        assert client.model_candidates() == MODEL_FALLBACK_CHAIN

    def test_preferred_model_first_without_duplicates(self, gemini_config):
        gemini_config.preferred_model = " gemini-1.5-pro "
        client = GeminiClient(gemini_config, session=FakeSession())

        candidates = client.model_candidates()

        assert candidates[0] == "gemini-1.5-pro"
        assert candidates.count("gemini-1.5-pro") == 1
        assert len(candidates) == len(MODEL_FALLBACK_CHAIN)

    def test_custom_preferred_model_prepended(self, gemini_config):
        gemini_config.preferred_model = "gemini-exp"
        client = GeminiClient(gemini_config, session=FakeSession())
        assert client.model_candidates() == ["gemini-exp"] + MODEL_FALLBACK_CHAIN


class TestModelNotFound:

    def test_matches_404_model_messages(self):
        assert is_model_not_found("[404 Not Found] models/gemini-pro is not found")
        assert is_model_not_found("404: MODEL missing")

    def test_other_errors(self):
        assert not is_model_not_found("[403 Forbidden] API key invalid")
        assert not is_model_not_found("[404 Not Found] page missing")


class TestGeminiClient:

    def test_success_on_first_model(self, gemini_config):
        session = FakeSession(default=text_response("1. Offer mentoring"))
        client = GeminiClient(gemini_config, session=session)

        result = client.generate("prompt text")

        assert result.strategy == "1. Offer mentoring"
        assert result.model == "gemini-2.0-flash"

        call = session.calls[0]
        assert call["url"] == "https://gemini.test/v1beta/models/gemini-2.0-flash:generateContent"
        assert call["headers"] == {"x-goog-api-key": "test-key"}
        assert call["timeout"] == 12.0
        assert call["json"]["contents"] == [{"role": "user", "parts": [{"text": "prompt text"}]}]
        assert call["json"]["generationConfig"] == {
            "temperature": 0.25,
            "topP": 0.8,
            "maxOutputTokens": 768,
            "responseMimeType": "text/plain",
        }
        assert "HR business partner" in call["json"]["systemInstruction"]["parts"][0]["text"]

    def test_falls_back_on_model_not_found(self, gemini_config):
        session = FakeSession(responses={
            "gemini-2.0-flash": not_found_response("gemini-2.0-flash"),
            "gemini-2.0-flash-exp": not_found_response("gemini-2.0-flash-exp"),
            "gemini-1.5-flash-latest": text_response("strategies"),
        })
        client = GeminiClient(gemini_config, session=session)

        result = client.generate("prompt")

        assert result.model == "gemini-1.5-flash-latest"
        assert [call["model"] for call in session.calls] == MODEL_FALLBACK_CHAIN[:3]

    def test_other_error_aborts_immediately(self, gemini_config):
        session = FakeSession(responses={
            "gemini-2.0-flash": not_found_response("gemini-2.0-flash"),
            "gemini-2.0-flash-exp": FakeResponse(
                status_code=403,
                reason="Forbidden",
                body={"error": {"code": 403, "message": "API key not valid"}},
            ),
            "gemini-1.5-flash-latest": text_response("never reached"),
        })
        client = GeminiClient(gemini_config, session=session)

        with pytest.raises(GenerationError) as exc_info:
            client.generate("prompt")

        error = exc_info.value
        assert "403" in error.message
        assert "API key not valid" in error.message
        assert [attempt.model for attempt in error.attempts] == ["gemini-2.0-flash", "gemini-2.0-flash-exp"]
        assert len(session.calls) == 2

    def test_all_models_unavailable(self, gemini_config):
        session = FakeSession(default=not_found_response("any"))
        client = GeminiClient(gemini_config, session=session)

        with pytest.raises(GenerationError) as exc_info:
            client.generate("prompt")

        error = exc_info.value
        assert error.message.startswith("Gemini model unavailable.")
        assert "Last error:" in error.message
        assert len(error.attempts) == len(MODEL_FALLBACK_CHAIN)
        assert error.to_dict()["attempts"][0]["model"] == "gemini-2.0-flash"

    def test_network_error_aborts(self, gemini_config):
        session = FakeSession(default=requests.exceptions.ConnectionError("connection refused"))
        client = GeminiClient(gemini_config, session=session)

        with pytest.raises(GenerationError) as exc_info:
            client.generate("prompt")

        assert "connection refused" in exc_info.value.message
        assert len(session.calls) == 1

    def test_blocked_prompt(self, gemini_config):
        session = FakeSession(default=FakeResponse(body={"promptFeedback": {"blockReason": "SAFETY"}}))
        client = GeminiClient(gemini_config, session=session)

        with pytest.raises(GenerationError) as exc_info:
            client.generate("prompt")

        assert "SAFETY" in exc_info.value.message

    def test_multiple_parts_are_joined(self, gemini_config):
        body = {"candidates": [{"content": {"parts": [{"text": "1. A\n"}, {"text": "2. B"}]}}]}
        session = FakeSession(default=FakeResponse(body=body))

        result = GeminiClient(gemini_config, session=session).generate("prompt")

        assert result.strategy == "1. A\n2. B"

    def test_missing_api_key(self):
        session = FakeSession(default=text_response("unused"))
        client = GeminiClient(GeminiConfig(api_key=None), session=session)

        with pytest.raises(ConfigurationError):
            client.generate("prompt")
        assert session.calls == []
