"""Service-level exceptions translated to HTTP status codes by the routers."""


class DependencyUnavailableError(RuntimeError):
    """The persistence layer is not configured or cannot be reached."""


class ConflictError(ValueError):
    """A unique field (tool name, category slug, discovery source URL) is already taken."""
