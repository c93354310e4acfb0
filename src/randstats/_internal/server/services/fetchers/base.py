from abc import ABC, abstractmethod
from typing import List

from randstats._internal.core.models.jobs import FetchRequest


class BaseSequenceFetcher(ABC):
    @abstractmethod
    async def fetch(self, request: FetchRequest) -> List[int]:
        """
        Returns a sequence of exactly `request.sequence_length` integers.
        Raises `UpstreamError` if the sequence cannot be obtained.
        """
        pass

    async def close(self) -> None:
        pass
