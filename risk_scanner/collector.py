# risk_scanner/collector.py
from typing import Optional

from risk_scanner.models import AnalysisRequest, ErrorResult, SuccessResult
from risk_scanner.session import AnalysisSession


class InputCollector:
    """
    Operator-facing input fields bound to a session.

    Fields are read-only while the session is loading. Submission is
    silently skipped unless both fields are non-empty.
    """

    def __init__(self, session: AnalysisSession):
        self.session = session
        self.target = ""
        self.payload = ""

    @property
    def read_only(self) -> bool:
        return self.session.loading

    def set_target(self, value: str) -> bool:
        if self.read_only:
            return False
        self.target = value
        return True

    def set_payload(self, value: str) -> bool:
        if self.read_only:
            return False
        self.payload = value
        return True

    def ready(self) -> bool:
        return bool(self.target) and bool(self.payload) and not self.read_only

    def submit(self) -> Optional[SuccessResult | ErrorResult]:
        if not self.ready():
            return None

        request = AnalysisRequest(target=self.target, payload=self.payload)
        return self.session.submit(request)
