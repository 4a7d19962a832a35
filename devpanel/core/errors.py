"""
Custom exception hierarchy for the progress panel API.

Rule: every HTTP error has a machine-readable `code` string so clients
can branch on it without parsing English messages.

The scoring engine itself never raises; these errors belong to the
boundaries around it (config loading, entry creation, lookups).
"""
from __future__ import annotations

from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status


# ---------------------------------------------------------------------------
# Exception classes
# ---------------------------------------------------------------------------

class DevPanelException(Exception):
    """Base class for all application-level errors."""
    http_status: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class InvalidRuleConfigError(DevPanelException):
    http_status = 422
    code = "RULE_CONFIG_INVALID"

    def __init__(self, problems: list[str]):
        super().__init__(
            message="Rule configuration is invalid.",
            details={"problems": problems},
        )


class IncompleteEvaluationError(DevPanelException):
    http_status = 422
    code = "EVALUATION_INCOMPLETE"

    def __init__(self, missing: list[str]):
        super().__init__(
            message=f"Evaluation is missing scores for {len(missing)} categories.",
            details={"missing_categories": missing},
        )


class ScoreOutOfRangeError(DevPanelException):
    http_status = 422
    code = "SCORE_OUT_OF_RANGE"

    def __init__(self, category_index: int, score: int, minimum: int, maximum: int):
        super().__init__(
            message=(
                f"Score {score} for category {category_index} is outside "
                f"[{minimum}, {maximum}]."
            ),
            details={
                "category_index": category_index,
                "score": score,
                "min": minimum,
                "max": maximum,
            },
        )


class UnknownCategoryError(DevPanelException):
    http_status = 422
    code = "UNKNOWN_CATEGORY"

    def __init__(self, category_index: int, category_count: int):
        super().__init__(
            message=(
                f"Category index {category_index} does not exist "
                f"({category_count} categories configured)."
            ),
            details={"category_index": category_index, "category_count": category_count},
        )


class ChildNotFoundError(DevPanelException):
    http_status = status.HTTP_404_NOT_FOUND
    code = "CHILD_NOT_FOUND"

    def __init__(self, child_id: str):
        super().__init__(
            message=f"Child {child_id} not found.",
            details={"child_id": child_id},
        )


# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------

async def devpanel_exception_handler(request: Request, exc: DevPanelException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.http_status,
        content=exc.to_dict(),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return structured 422 with machine-readable field errors."""
    field_errors = []
    for error in exc.errors():
        field_errors.append({
            "field": ".".join(str(loc) for loc in error["loc"] if loc != "body"),
            "message": error["msg"],
            "type": error["type"],
        })
    return JSONResponse(
        status_code=422,
        content={
            "code": "VALIDATION_ERROR",
            "message": "Request validation failed.",
            "details": {"errors": field_errors},
        },
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "code": "INTERNAL_ERROR",
            "message": "An unexpected error occurred.",
        },
    )
