"""
Audit Use Cases
"""

from .get_audit_events_use_case import (
    AuditEventsResponse,
    AuditEventView,
    GetAuditEventsUseCase,
)

__all__ = [
    "GetAuditEventsUseCase",
    "AuditEventView",
    "AuditEventsResponse",
]
