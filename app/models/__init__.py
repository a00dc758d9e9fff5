from .youtube import (
    YtDlpCaption,
    YtDlpResponse,
    TimedTextSeg,
    TimedTextEvent,
    TimedTextDocument,
    TimedSegment,
    CaptionResource,
    VideoID,
)
from .summary import LLMConfig, SummaryResult
from .api import VideoSummaryResponse, HealthResponse
from .enums import LLMRole, LLMProviderType, CaptionFormat, PipelineStage
