"""Shared fixtures for the KTS analyzer tests."""

import json

import pytest

from kts_analyzer.streamlit_app.components.score_plot import load_background
from kts_analyzer.streamlit_app.models import AnalysisResult
from kts_analyzer.streamlit_app.services import AnalysisService, ClassificationProvider


class FakeProvider(ClassificationProvider):
    """Records requests and answers with a canned response or exception."""

    def __init__(self, response=None, exc=None, default_model="test-model"):
        self.response = response
        self.exc = exc
        self.default_model = default_model
        self.requests = []

    def send(self, request):
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc
        return self.response


@pytest.fixture
def result_payload() -> dict:
    return {
        "uncertainty_score": -6.5,
        "possibility_score": -4,
        "style": "Focused",
        "uncertainty_reasoning": "The author justifies every step with data.",
        "possibility_reasoning": "The text stays within established categories.",
        "key_indicators": [
            "based on concrete data",
            "judge the viability",
            "setting objectives",
            "rational thinking",
            "had to drop it",
        ],
        "summary": "A reason-led, structure-bound account of a decision.",
    }


@pytest.fixture
def analysis_result(result_payload) -> AnalysisResult:
    return AnalysisResult.model_validate(result_payload)


@pytest.fixture
def text_response():
    """Wrap text in a boundary success response."""
    def _wrap(text: str) -> dict:
        return {"content": [{"type": "text", "text": text}]}
    return _wrap


@pytest.fixture
def make_service(result_payload, text_response):
    """Build an AnalysisService around a FakeProvider."""
    def _make(response=None, exc=None):
        if response is None and exc is None:
            response = text_response(json.dumps(result_payload))
        provider = FakeProvider(response=response, exc=exc)
        return AnalysisService(provider=provider), provider
    return _make


@pytest.fixture(autouse=True)
def _clear_background_cache():
    load_background.cache_clear()
    yield
    load_background.cache_clear()
