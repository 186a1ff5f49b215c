"""Shared fixtures: fake analysis clients and canned service bodies."""

from typing import List, Optional

import pytest

from risk_scanner.models import AnalysisRequest, SuccessResult, parse_result
from risk_scanner.session import AnalysisSession

API_BASE = "http://risk.test"

RISKY_TRANSFER = {
    "status": "success",
    "risk_level": "High",
    "function_name": "transfer",
    "arguments": ["0x1", "100"],
    "explanation": "**Warning**: risky",
}


class FakeAnalysisClient:
    """Returns a canned result and records every request it sees."""

    def __init__(self, result=None, error: Optional[BaseException] = None):
        self.result = result or SuccessResult(risk_level="Low")
        self.error = error
        self.calls: List[AnalysisRequest] = []
        self.on_call = None

    def analyze(self, request: AnalysisRequest):
        self.calls.append(request)
        if self.on_call:
            self.on_call(request)
        if self.error:
            raise self.error
        return self.result


@pytest.fixture
def fake_client():
    return FakeAnalysisClient()


@pytest.fixture
def session(fake_client):
    return AnalysisSession(fake_client)


@pytest.fixture
def risky_result():
    return parse_result(RISKY_TRANSFER)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in (
        "RISK_SCANNER_API_BASE",
        "RISK_SCANNER_TIMEOUT",
        "RISK_SCANNER_LOG_LEVEL",
        "RISK_SCANNER_CONFIG",
    ):
        monkeypatch.delenv(var, raising=False)
