from typing import Optional

from delivery.domain.models import User
from delivery.infrastructure.database import SessionLocal
from delivery.interfaces.IUserRepository import IUserRepository

class SqlUserRepository(IUserRepository):

    def __init__(self, session_factory=SessionLocal):
        self.session_factory = session_factory

    def get_user(self, user_id: int) -> Optional[User]:
        session = self.session_factory()
        try:
            return session.get(User, user_id)
        finally:
            session.close()
