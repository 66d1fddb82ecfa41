# ==============================================
# Pytest Configuration and Fixtures
# ==============================================
#
# Shared fixtures for all tests.
#
# - scenario_dataset   → three-employee dataset (Sales / R&D)
# - hr_dataset         → a dozen IBM-style HR rows, all values as text
# - app_config         → AppConfig with a fake API key
# - FakeSession        → requests-style session returning canned responses
#
# ==============================================

import pytest

from retention_advisor.config import AppConfig, AnalysisConfig, GeminiConfig


class FakeResponse:
    """Just enough of requests.Response for GeminiClient."""

    def __init__(self, status_code=200, body=None, reason="OK", text=None):
        self.status_code = status_code
        self.reason = reason
        self._body = body
        self.text = text if text is not None else str(body)

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        if self._body is None:
            raise ValueError("No JSON body")
        return self._body


class FakeSession:
    """
    Records every POST and answers per model name.

    responses: {model_name: FakeResponse | Exception}
    """

    def __init__(self, responses=None, default=None):
        self.responses = responses or {}
        self.default = default
        self.calls = []

    def post(self, url, json=None, headers=None, timeout=None):
        model = url.rsplit("/models/", 1)[1].split(":", 1)[0]
        self.calls.append({
            "url": url,
            "model": model,
            "json": json,
            "headers": headers,
            "timeout": timeout,
        })
        response = self.responses.get(model, self.default)
        if isinstance(response, Exception):
            raise response
        return response


def text_response(text):
    return FakeResponse(body={"candidates": [{"content": {"parts": [{"text": text}]}}]})


def not_found_response(model):
    return FakeResponse(
        status_code=404,
        reason="Not Found",
        body={"error": {"code": 404, "message": f"models/{model} is not found for API version v1beta"}},
    )


@pytest.fixture
def scenario_dataset():
    return [
        {"Department": "Sales", "Attrition": "Yes", "Age": 30},
        {"Department": "Sales", "Attrition": "No", "Age": 40},
        {"Department": "R&D", "Attrition": "No", "Age": 35},
    ]


@pytest.fixture
def hr_dataset():
    rows = [
        ("1", "41", "Yes", "Sales", "Sales Executive", "5993", "1"),
        ("2", "49", "No", "Research & Development", "Research Scientist", "5130", "8"),
        ("4", "37", "Yes", "Research & Development", "Laboratory Technician", "2090", "2"),
        ("5", "33", "No", "Research & Development", "Research Scientist", "2909", "3"),
        ("7", "27", "No", "Research & Development", "Laboratory Technician", "3468", "2"),
        ("8", "32", "No", "Research & Development", "Laboratory Technician", "3068", "2"),
        ("10", "59", "No", "Research & Development", "Laboratory Technician", "2670", "3"),
        ("11", "30", "No", "Research & Development", "Laboratory Technician", "2693", "24"),
        ("12", "38", "No", "Research & Development", "Manufacturing Director", "9526", "23"),
        ("13", "36", "No", "Research & Development", "Healthcare Representative", "5237", "27"),
        ("14", "35", "No", "Human Resources", "Human Resources", "2426", "16"),
        ("15", "29", "Yes", "Sales", "Sales Representative", "2028", "15"),
    ]
    return [
        {
            "EmployeeNumber": number,
            "Age": age,
            "Attrition": attrition,
            "Department": department,
            "JobRole": role,
            "MonthlyIncome": income,
            "DistanceFromHome": distance,
        }
        for number, age, attrition, department, role, income, distance in rows
    ]


@pytest.fixture
def app_config():
    return AppConfig(
        gemini=GeminiConfig(api_key="test-key", base_url="https://gemini.test/v1beta"),
        analysis=AnalysisConfig(),
    )
