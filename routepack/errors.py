"""
routepack Errors

Every failure raised while compiling routes into deployable units.

All of these are fatal: the build is aborted and no routing document is
written. None of them describe a transient condition, so nothing here is
retried.
"""

from typing import Iterable, Optional


class RoutePackError(Exception):
    """Base class for all routepack build errors."""


class InvalidRuntime(RoutePackError):
    """A route resolved to a runtime outside the supported whitelist."""

    def __init__(self, route_id: str, runtime: str, valid_runtimes: Iterable[str]):
        self.route_id = route_id
        self.runtime = runtime
        self.valid_runtimes = list(valid_runtimes)
        super().__init__(
            f"Invalid runtime '{runtime}' for route {route_id}. "
            f"Valid runtimes are {', '.join(self.valid_runtimes)}"
        )


class ConfigConflict(RoutePackError):
    """Two routes share a URL pattern but resolve to different configs."""

    def __init__(self, route_id: str, existing_route_id: str, pattern: str):
        self.route_id = route_id
        self.existing_route_id = existing_route_id
        self.pattern = pattern
        super().__init__(
            f"The {route_id} and {existing_route_id} routes must be merged into a single "
            f"function that matches the {pattern} regex, but they have incompatible configs. "
            f"You must either rename one of the routes, or make their configs match."
        )


class UnresolvedDefaultRuntime(RoutePackError):
    """No runtime was configured and none could be inferred from the environment."""

    def __init__(self, version: Optional[str] = None):
        self.version = version
        found = f"Unsupported Node.js version: {version}." if version else "Could not detect a Node.js version."
        super().__init__(
            f"{found} Please use Node 16 or Node 18 to build your project, "
            f"or explicitly specify a runtime in your adapter configuration."
        )


class BuildArtifactFailure(RoutePackError):
    """The bundler could not produce the artifact for a group."""

    def __init__(self, group_name: str, returncode: Optional[int] = None, stderr: str = ""):
        self.group_name = group_name
        self.returncode = returncode
        self.stderr = stderr
        detail = f" (exit code {returncode})" if returncode is not None else ""
        message = f"Failed to bundle function {group_name}{detail}"
        if stderr:
            message += f":\n{stderr.strip()}"
        super().__init__(message)


class RemovedOptionError(RoutePackError):
    """An adapter option that no longer exists was passed."""


class UnsupportedBuilderError(RoutePackError):
    """The builder does not expose route information."""


class ManifestError(RoutePackError):
    """The build manifest could not be read or failed validation."""


__all__ = [
    "RoutePackError",
    "InvalidRuntime",
    "ConfigConflict",
    "UnresolvedDefaultRuntime",
    "BuildArtifactFailure",
    "RemovedOptionError",
    "UnsupportedBuilderError",
    "ManifestError",
]
