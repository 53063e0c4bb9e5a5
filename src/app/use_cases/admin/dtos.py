"""
Admin Use Case DTOs (Data Transfer Objects)
"""

from pydantic import BaseModel


class HardDeleteTenantResponse(BaseModel):
    """Response for hard delete tenant use case"""

    tenant_id: str
    invitations_deleted: int
    employees_deleted: int
    users_detached: int
