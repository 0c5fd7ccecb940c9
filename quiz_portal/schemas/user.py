from pydantic import BaseModel
from uuid import UUID

from quiz_portal.enums import UserRole


class Caller(BaseModel):
    """Identity resolved by the authentication layer."""

    user_id: UUID
    role: UserRole

    model_config = {"from_attributes": True, "frozen": True}

    @property
    def is_student(self) -> bool:
        return self.role == UserRole.STUDENT

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
