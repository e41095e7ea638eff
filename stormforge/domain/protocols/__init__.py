"""Domain protocols - abstract interfaces for infrastructure."""

from stormforge.domain.protocols.repositories import UserRepository

__all__ = ["UserRepository"]
