"""Domain entities - pure Python dataclasses representing business objects."""

from stormforge.domain.entities.user import User

__all__ = ["User"]
