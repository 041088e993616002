"""
libforge exception types
"""


class LibforgeError(Exception):
    """Base exception for all libforge errors"""
    pass


class ConfigurationError(LibforgeError):
    """Workspace or project configuration is missing or malformed"""
    pass


class ProjectNotFoundError(ConfigurationError):
    """A project name is not part of the workspace graph"""
    def __init__(self, project: str):
        super().__init__(f"Cannot find project '{project}' in the workspace")
        self.project = project


class InvalidPackageNameError(ConfigurationError):
    """A package descriptor declares a name that cannot be published"""
    def __init__(self, name: str, reason: str):
        super().__init__(f"Invalid package name '{name}': {reason}")
        self.name = name
        self.reason = reason
