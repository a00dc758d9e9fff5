from abc import ABC, abstractmethod
from typing import Dict, Optional

from app.models import SummaryResult


class SummaryRepository(ABC):
    """
    Lookup and storage of summaries for tracked videos.

    Only tracked, successful results may be stored; ad-hoc summaries stay ephemeral.
    """

    @abstractmethod
    async def get(self, video_id: str) -> Optional[SummaryResult]:
        """
        Retrieves the stored summary for a video.

        Args:
            video_id (str): Raw YouTube video ID.

        Returns:
            Optional[SummaryResult]: The stored result, or None.
        """
        ...

    @abstractmethod
    async def save(self, result: SummaryResult) -> None:
        """
        Stores a tracked summary.

        Raises:
            ValueError: If the result is untracked or failed.
        """
        ...

    @staticmethod
    def _check_persistable(result: SummaryResult) -> None:
        if result.error is not None:
            raise ValueError(f"refusing to persist failed summary for {result.video_id}")
        if not result.tracked:
            raise ValueError(f"refusing to persist untracked summary for {result.video_id}")


class InMemorySummaryRepository(SummaryRepository):
    """
    Repository keeping tracked summaries in a dict indexed by video ID.
    """

    def __init__(self):
        self._summaries: Dict[str, SummaryResult] = {}

    async def get(self, video_id: str) -> Optional[SummaryResult]:
        return self._summaries.get(video_id)

    async def save(self, result: SummaryResult) -> None:
        self._check_persistable(result)
        self._summaries[result.video_id] = result

    def __len__(self) -> int:
        return len(self._summaries)
