"""Error kinds raised by skill-manager operations.

Underlying read/write/copy/rename/delete failures are not wrapped: they
propagate as the built-in ``OSError`` raised by the failing call.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from skills.types import SkillState


class SkillManagerError(Exception):
    """Base class for errors reported back to the caller."""

    pass


class ConfigurationError(SkillManagerError):
    """Raised when no agent root can be resolved (no project context)."""

    pass


class NotFoundError(SkillManagerError):
    """Raised when an expected skill or agent directory is missing."""

    pass


class ConflictError(SkillManagerError):
    """Raised when the destination of a copy is already occupied.

    Attributes:
        name: Name of the colliding skill
        location: Which root of the target agent holds the collision
    """

    def __init__(self, message: str, name: str, location: "SkillState"):
        super().__init__(message)
        self.name = name
        self.location = location


class InvalidStateError(SkillManagerError):
    """Raised when an operation does not apply to its input or the current agent kind."""

    pass


class LaunchError(SkillManagerError):
    """Raised when the relocated application could not be started."""

    pass
