from abc import ABC, abstractmethod
from typing import Any


class AbstractWeatherClient(ABC):
    """Interface for current-conditions weather providers."""

    @abstractmethod
    async def fetch_current(self, *, base_url: str, api_key: str, city: str) -> dict[str, Any]:
        """Fetch the raw current-conditions payload for ``city``.

        Raises:
            UpstreamAppError: If the provider is unreachable or answers with
                an error status or a non-JSON body.
        """
        ...
