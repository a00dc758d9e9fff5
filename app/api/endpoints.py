"""
API endpoints for video summaries.
"""
from typing import Union

from fastapi import APIRouter, Depends
from loguru import logger
from pydantic import ValidationError
import time

from app.api.dependencies import get_summary_service
from app.core.exceptions import AppException, BadRequestError, InternalServerError
from app.models import VideoID, VideoSummaryResponse
from app.services.mock import MockSummaryService
from app.services.summarization import SummaryService


router = APIRouter()


@router.get("/videos/{video_id}/summary", response_model=VideoSummaryResponse)
async def get_video_summary(
    video_id: str,
    summary_service: Union[SummaryService, MockSummaryService] = Depends(get_summary_service),
):
    """
    Returns the summary of a YouTube video, generating it on demand.

    Args:
        video_id: Raw 11-character YouTube video ID.
        summary_service: The service handling the business logic.

    Returns:
        VideoSummaryResponse: Summary, model reasoning and provenance.
    """
    try:
        vid = VideoID.parse(video_id)
    except ValidationError as e:
        raise BadRequestError(e.errors()[0]["msg"]) from e

    logger.info(f"Incoming summary request for video {vid.raw}")

    start_time = time.perf_counter()
    try:
        result = await summary_service.get_or_generate_summary(vid.raw)
    except AppException:
        raise
    except Exception as e:
        logger.exception(f"Unexpected error while summarizing {vid.raw}: {e}")
        raise InternalServerError() from e
    duration = time.perf_counter() - start_time
    logger.info(f"Summary request completed in {duration:.2f}s (tracked={result.tracked})")

    return VideoSummaryResponse.from_result(result)
