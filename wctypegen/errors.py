class TypeGenError(Exception):
    """Base class for errors raised while building component types."""


class FatalPrecondition(TypeGenError):
    """A required path is missing; the whole run aborts."""


class ComponentRootNotFound(FatalPrecondition):
    def __init__(self, path):
        self.path = path
        super().__init__(f"Path: {path} doesn't exist, exiting")


class ProjectConfigNotFound(FatalPrecondition):
    def __init__(self, path):
        self.path = path
        super().__init__(f"No project config found at {path}")


class ProjectConfigError(TypeGenError):
    """The project config exists but could not be read as JSON."""
