"""
User Use Cases

Caller context and user representations.
"""

from .dtos import Actor, UserView
from .load_actor_use_case import LoadActorUseCase

__all__ = [
    "Actor",
    "UserView",
    "LoadActorUseCase",
]
