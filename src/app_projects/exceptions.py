"""
Custom exceptions for projects, voorcalculatie and nacalculatie.

Principles:
- Explicit error handling
- One exception type per kind of failure
- Messages that can be shown to the user as-is
"""


class ProjectError(Exception):
    """Base exception for the projects module."""

    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ProjectNotFoundError(ProjectError):
    def __init__(self, project_id: int):
        super().__init__(
            message=f"Project met ID {project_id} niet gevonden",
            details={"project_id": project_id},
        )


class InvalidProjectError(ProjectError):
    """The project is not in a state that allows the operation."""

    def __init__(self, project_id: int, reason: str):
        super().__init__(
            message=f"Project {project_id}: {reason}",
            details={"project_id": project_id, "reason": reason},
        )


class VoorcalculatieNotFoundError(ProjectError):
    def __init__(self, project_id: int):
        super().__init__(
            message=f"Project {project_id} heeft nog geen voorcalculatie",
            details={"project_id": project_id},
        )


class NacalculatieNotFoundError(ProjectError):
    def __init__(self, project_id: int):
        super().__init__(
            message=f"Project {project_id} heeft nog geen opgeslagen nacalculatie",
            details={"project_id": project_id},
        )
