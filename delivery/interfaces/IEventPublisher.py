from abc import ABC, abstractmethod
from typing import Any

class IEventPublisher(ABC):
    @abstractmethod
    def publish(self, event: str, payload: Any) -> None:
        """Fire-and-forget. Implementations must not raise."""
        pass
