"""
Email sender port.

Notifications never decide the outcome of a use case: ``send_best_effort``
logs failures and returns False instead of raising.
"""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict

logger = logging.getLogger(__name__)


class EmailTemplate(str, Enum):
    invitation = "invitation"
    tenant_registered = "tenant_registered"
    tenant_approved = "tenant_approved"
    tenant_rejected = "tenant_rejected"


class IEmailSender(ABC):
    @abstractmethod
    async def send(self, to: str, template: EmailTemplate, data: Dict[str, Any]) -> bool:
        """Send one templated email; True on success"""
        pass


async def send_best_effort(
    sender: IEmailSender, to: str, template: EmailTemplate, data: Dict[str, Any]
) -> bool:
    try:
        sent = await sender.send(to, template, data)
    except Exception:
        logger.warning(f"Failed to send {template.value} email to {to}", exc_info=True)
        return False
    if not sent:
        logger.warning(f"Email {template.value} to {to} was not delivered")
    return sent
