"""
Custom exception classes and RFC 7807 error handling.

Summarization pipeline failures are raised as `SummaryError` subclasses. The
orchestrator tags each one with the pipeline stage it failed in before it
reaches the caller, and the API layer maps them to problem responses.
"""
from typing import Optional
from pydantic import BaseModel, ConfigDict
from fastapi import Request
from fastapi.responses import JSONResponse

from app.models.enums import PipelineStage


class ErrorResponse(BaseModel):
    """RFC 7807 Problem Details response model."""
    type: str
    title: str
    status: int
    detail: str
    instance: Optional[str] = None
    stage: Optional[str] = None

    model_config = ConfigDict(frozen=True)


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        status_code: int,
        error_type: str,
        title: str,
        detail: str,
    ):
        self.status_code = status_code
        self.error_type = error_type
        self.title = title
        self.detail = detail
        super().__init__(detail)


class BadRequestError(AppException):
    """Bad request exception."""

    def __init__(self, detail: str):
        super().__init__(
            status_code=400,
            error_type="https://problems.example.com/bad-request",
            title="Bad Request",
            detail=detail,
        )


class InternalServerError(AppException):
    """Internal server error exception."""

    def __init__(self, detail: str = "An unexpected error occurred."):
        super().__init__(
            status_code=500,
            error_type="https://problems.example.com/internal-error",
            title="Internal Server Error",
            detail=detail,
        )


class SummaryError(AppException):
    """Base class for summarization pipeline failures."""

    def __init__(
        self,
        reason: str,
        status_code: int,
        error_type: str,
        title: str,
        stage: Optional[PipelineStage] = None,
    ):
        self.reason = reason
        self.stage: Optional[PipelineStage] = None
        super().__init__(
            status_code=status_code,
            error_type=error_type,
            title=title,
            detail=reason,
        )
        if stage is not None:
            self.at_stage(stage)

    def at_stage(self, stage: PipelineStage) -> "SummaryError":
        """Tag the error with the stage it failed in; the first tag wins."""
        if self.stage is None:
            self.stage = stage
            self.detail = f"{stage.value}: {self.reason}"
            self.args = (self.detail,)
        return self


class ConfigurationError(SummaryError):
    """Completion service is not configured."""

    def __init__(self, reason: str = "LLM not configured", stage: Optional[PipelineStage] = None):
        super().__init__(
            reason=reason,
            status_code=503,
            error_type="https://problems.example.com/llm-not-configured",
            title="Service Unavailable",
            stage=stage,
        )


class NotAvailableError(SummaryError):
    """No caption resource exists for the video."""

    def __init__(self, video_id: str, stage: Optional[PipelineStage] = None):
        super().__init__(
            reason=f"no subtitles available for video '{video_id}'",
            status_code=404,
            error_type="https://problems.example.com/captions-unavailable",
            title="Captions Unavailable",
            stage=stage,
        )


class FetchError(SummaryError):
    """An HTTP or metadata fetch failed or timed out."""

    def __init__(
        self,
        reason: str,
        status: Optional[int] = None,
        stage: Optional[PipelineStage] = None,
    ):
        self.status = status
        super().__init__(
            reason=reason,
            status_code=502,
            error_type="https://problems.example.com/fetch-failed",
            title="Bad Gateway",
            stage=stage,
        )


class EmptyContentError(SummaryError):
    """Captions were fetched but yielded no usable text."""

    def __init__(self, video_id: str, stage: Optional[PipelineStage] = None):
        super().__init__(
            reason=f"no text content found in subtitles for video '{video_id}'",
            status_code=422,
            error_type="https://problems.example.com/empty-transcript",
            title="Empty Transcript",
            stage=stage,
        )


class CompletionError(SummaryError):
    """The completion service failed, timed out, or was cancelled."""

    def __init__(self, reason: str, stage: Optional[PipelineStage] = None):
        super().__init__(
            reason=reason,
            status_code=502,
            error_type="https://problems.example.com/completion-failed",
            title="Bad Gateway",
            stage=stage,
        )


def create_error_response(
    request: Request,
    status_code: int,
    error_type: str,
    title: str,
    detail: str,
    stage: Optional[str] = None,
) -> JSONResponse:
    """Create a RFC 7807 compliant JSON error response."""
    error = ErrorResponse(
        type=error_type,
        title=title,
        status=status_code,
        detail=detail,
        instance=str(request.url.path),
        stage=stage,
    )
    return JSONResponse(
        status_code=status_code,
        content=error.model_dump(exclude_none=True),
        media_type="application/problem+json",
    )


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Handle AppException and return RFC 7807 response."""
    stage = None
    if isinstance(exc, SummaryError) and exc.stage is not None:
        stage = exc.stage.value
    return create_error_response(
        request=request,
        status_code=exc.status_code,
        error_type=exc.error_type,
        title=exc.title,
        detail=exc.detail,
        stage=stage,
    )
