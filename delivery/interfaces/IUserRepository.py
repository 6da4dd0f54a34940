from abc import ABC, abstractmethod
from typing import Optional

from delivery.domain.models import User

class IUserRepository(ABC):
    @abstractmethod
    def get_user(self, user_id: int) -> Optional[User]:
        pass
