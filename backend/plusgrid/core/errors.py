from __future__ import annotations

import dataclasses
from typing import Any


@dataclasses.dataclass(slots=True)
class APIError(Exception):
    """Business error that must map to the standard error envelope."""

    code: str
    message: str
    status_code: int = 400
    details: Any | None = None


# Error codes raised by the code service.
CODE_INVALID = "CODE_INVALID"
CODE_NOT_FULL = "CODE_NOT_FULL"
CODE_NOT_SHORT = "CODE_NOT_SHORT"
CODE_LENGTH_INVALID = "CODE_LENGTH_INVALID"
CODE_TRUNCATION_INVALID = "CODE_TRUNCATION_INVALID"
CODE_NOT_SHORTENABLE = "CODE_NOT_SHORTENABLE"
CODE_REFERENCE_REQUIRED = "CODE_REFERENCE_REQUIRED"
CODE_BATCH_TOO_LARGE = "CODE_BATCH_TOO_LARGE"
CODE_LOCATION_INVALID = "CODE_LOCATION_INVALID"


def code_error(code: str, message: str, *, value: str | None = None) -> APIError:
    """Build a 400 APIError, echoing the offending code when given."""

    details = {"code": value} if value is not None else None
    return APIError(code=code, message=message, status_code=400, details=details)


def make_error_payload(
    *, code: str, message: str, trace_id: str | None, details: Any | None
) -> dict[str, Any]:
    return {
        "code": code,
        "message": message,
        "details": details,
        "trace_id": trace_id,
    }
