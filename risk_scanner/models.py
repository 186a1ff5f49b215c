# risk_scanner/models.py
from __future__ import annotations

from typing import Annotated, Any, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class AnalysisRequest(BaseModel):
    """
    One submission. Target and payload are opaque to the client;
    only non-emptiness is enforced.
    """
    model_config = ConfigDict(frozen=True)

    target: str = Field(min_length=1)
    payload: str = Field(min_length=1)

    def to_wire(self) -> dict:
        return {
            "contract_address": self.target,
            "call_data": self.payload,
        }


class SuccessResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["success"] = "success"
    risk_level: Optional[str] = None
    explanation: Optional[str] = None
    function_name: Optional[str] = None
    arguments: Optional[List[str]] = None
    message: Optional[str] = None
    # only returned by /decode
    abi: Optional[Any] = None


class ErrorResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["error"] = "error"
    message: str
    details: Optional[str] = None


AnalysisResult = Annotated[
    Union[SuccessResult, ErrorResult],
    Field(discriminator="status"),
]

_RESULT_ADAPTER: TypeAdapter = TypeAdapter(AnalysisResult)

UNKNOWN_STATUS_MESSAGE = "Unrecognized response from analysis service"
SERVICE_ERROR_MESSAGE = "Analysis service reported an error"


def parse_result(body: dict) -> SuccessResult | ErrorResult:
    """
    Parse a decoded response body into one of the two result shapes.

    A missing or unknown `status` falls back to the error shape so the
    caller never treats an unrecognized body as a verdict.
    Raises pydantic.ValidationError on a malformed body.
    """
    status = body.get("status")
    if status not in ("success", "error"):
        return ErrorResult(
            message=body.get("message") or UNKNOWN_STATUS_MESSAGE,
            details=body.get("details") or f"status: {status!r}",
        )
    if status == "error" and not body.get("message"):
        body = {**body, "message": SERVICE_ERROR_MESSAGE}
    return _RESULT_ADAPTER.validate_python(body)
