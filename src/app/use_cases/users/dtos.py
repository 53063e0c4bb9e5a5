"""
User Use Case DTOs (Data Transfer Objects)
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from src.domain.entities import PLATFORM_ADMIN_ROLES, UserRole


class Actor(BaseModel):
    """Authenticated caller of a use case"""

    user_id: str
    email: str
    name: Optional[str] = None
    role: UserRole
    tenant_id: Optional[str] = None

    @property
    def is_platform_admin(self) -> bool:
        return self.role in PLATFORM_ADMIN_ROLES

    def role_in(self, tenant_id: str) -> Optional[UserRole]:
        """Platform role, only when the actor is bound to ``tenant_id``"""
        return self.role if self.tenant_id == tenant_id else None


class UserView(BaseModel):
    """User as returned to callers"""

    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    name: Optional[str] = None
    role: UserRole
    tenant_id: Optional[str] = None
    created_at: datetime
