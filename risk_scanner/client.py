# risk_scanner/client.py
from typing import Optional, Protocol

import requests
from loguru import logger
from pydantic import ValidationError

from risk_scanner.models import AnalysisRequest, ErrorResult, SuccessResult, parse_result

CONNECTION_ERROR_MESSAGE = "Error de conexión"


class AnalysisClient(Protocol):
    """
    Anything that can turn a request into a result.
    Implementations must not raise; failures come back as ErrorResult.
    """

    def analyze(self, request: AnalysisRequest) -> SuccessResult | ErrorResult:
        ...


class HttpAnalysisClient:
    def __init__(
        self,
        base_url: str,
        timeout: Optional[float] = None,
        http: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.http = http or requests.Session()

    def analyze(self, request: AnalysisRequest) -> SuccessResult | ErrorResult:
        return self._call("/analysis", request)

    def decode(self, request: AnalysisRequest) -> SuccessResult | ErrorResult:
        """Decode-only round-trip: function name, arguments and ABI, no verdict."""
        return self._call("/decode", request)

    def _call(self, path: str, request: AnalysisRequest) -> SuccessResult | ErrorResult:
        url = self.base_url + path
        logger.info(f"POST {url} target={request.target}")

        try:
            body = self._post(url, request.to_wire())
            result = parse_result(body)
        except (requests.RequestException, ValidationError, ValueError) as e:
            logger.error(f"Request to {url} failed: {e}")
            return ErrorResult(message=CONNECTION_ERROR_MESSAGE, details=str(e))

        logger.info(f"{url} -> status={result.status}")
        return result

    def _post(self, url: str, payload: dict) -> dict:
        r = self.http.post(url, json=payload, timeout=self.timeout)

        try:
            body = r.json()
        except ValueError:
            # non-JSON body: report the HTTP status if there is one
            r.raise_for_status()
            raise

        # Error bodies from the service carry a status and are passed
        # through even on 4xx/5xx.
        if not isinstance(body, dict) or "status" not in body:
            r.raise_for_status()

        if not isinstance(body, dict):
            raise ValueError(f"Expected a JSON object, got {type(body).__name__}")

        return body
