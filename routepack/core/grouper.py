"""
Route Grouping

Partitions the non-prerendered routes into the smallest number of
functions. Routes whose effective configs share a fingerprint end up in
the same group.
"""

import logging
from typing import Callable, Dict, Iterable, Optional, Sequence, Tuple

from routepack.config import Config
from routepack.core.fingerprint import fingerprint
from routepack.core.models import ConfigInput, DeployConfig, Group, RouteDefinition
from routepack.core.runtime import detect_default_runtime
from routepack.errors import ConfigConflict, InvalidRuntime, UnresolvedDefaultRuntime

logger = logging.getLogger(__name__)


class ConflictDetector:
    """
    Tracks the first fingerprint seen for every pattern string.

    Two routes with the same pattern are served by one function, so their
    configs have to agree.
    """

    def __init__(self):
        self._seen: Dict[str, Tuple[str, str]] = {}

    def check(self, route: RouteDefinition, route_fingerprint: str) -> None:
        """
        Record a route, or raise if its pattern is already bound to another config.

        Raises:
            ConfigConflict: Same pattern, different fingerprint
        """
        existing = self._seen.get(route.pattern)
        if existing is None:
            self._seen[route.pattern] = (route_fingerprint, route.id)
            return

        existing_fingerprint, existing_route_id = existing
        if existing_fingerprint != route_fingerprint:
            raise ConfigConflict(route.id, existing_route_id, route.pattern)


class GroupingResult:
    """Groups keyed by fingerprint, in first-seen order."""

    def __init__(self, groups: Dict[str, Group]):
        self.groups = groups

    @property
    def count(self) -> int:
        return len(self.groups)

    def __iter__(self):
        return iter(self.groups.values())

    def __len__(self) -> int:
        return self.count

    def by_index(self, index: int) -> Group:
        for group in self.groups.values():
            if group.index == index:
                return group
        raise KeyError(index)

    def functions(self) -> Dict[str, str]:
        """
        Map every member pattern to the name of its group's function.

        The first route with a pattern decides the mapping; the conflict
        check guarantees later ones agree.
        """
        mapping: Dict[str, str] = {}
        for group in self.groups.values():
            for route in group.routes:
                mapping.setdefault(route.pattern, group.name)
        return mapping


class RuntimeResolver:
    """
    Resolves a route's runtime against the adapter defaults.

    The inferred default is computed at most once, and only when a route
    has no explicit runtime and the adapter sets none either.
    """

    def __init__(
        self,
        default_runtime: Optional[str] = None,
        infer_runtime: Optional[Callable[[], str]] = None,
        valid_runtimes: Sequence[str] = tuple(Config.Internal.VALID_RUNTIMES)
    ):
        self.default_runtime = default_runtime
        self.infer_runtime = infer_runtime
        self.valid_runtimes = list(valid_runtimes)
        self._inferred: Optional[str] = None

    def _inferred_runtime(self) -> Optional[str]:
        if self._inferred is None and self.infer_runtime is not None:
            self._inferred = self.infer_runtime()
        return self._inferred

    def resolve(self, route: RouteDefinition) -> str:
        """
        Raises:
            InvalidRuntime: The resolved runtime is not supported
            UnresolvedDefaultRuntime: No runtime is configured and none can be inferred
        """
        runtime = route.config.runtime if route.config else None
        if runtime is None:
            runtime = self.default_runtime
        if runtime is None:
            runtime = self._inferred_runtime()
        if runtime is None:
            raise UnresolvedDefaultRuntime(None)

        if runtime not in self.valid_runtimes:
            raise InvalidRuntime(route.id, runtime, self.valid_runtimes)

        return runtime


def group_routes(
    routes: Iterable[RouteDefinition],
    defaults: ConfigInput = None,
    infer_runtime: Optional[Callable[[], str]] = detect_default_runtime,
    prefix: str = Config.Internal.FUNCTION_PREFIX
) -> GroupingResult:
    """
    Group routes by the fingerprint of their effective config.

    Args:
        routes: All routes of the build, in discovery order
        defaults: Adapter-level config applied under each route's own config
        infer_runtime: Called lazily when no runtime is configured anywhere
            (defaults to the local Node.js version)
        prefix: Function name prefix

    Returns:
        GroupingResult with sequentially numbered groups

    Raises:
        InvalidRuntime: A route resolves to an unsupported runtime
        ConfigConflict: Routes sharing a pattern have different configs
        UnresolvedDefaultRuntime: A route has no runtime and none can be inferred
    """
    defaults = DeployConfig.coerce(defaults)
    resolver = RuntimeResolver(defaults.runtime, infer_runtime)
    conflicts = ConflictDetector()
    groups: Dict[str, Group] = {}
    next_index = 0

    for route in routes:
        if route.prerender:
            continue

        runtime = resolver.resolve(route)
        config = DeployConfig(runtime=runtime).merged(defaults, route.config)
        route_fingerprint = fingerprint(config)

        # first, check there are no routes with incompatible configs that will be merged
        conflicts.check(route, route_fingerprint)

        group = groups.get(route_fingerprint)
        if group is None:
            group = Group(next_index, config, route_fingerprint, prefix=prefix)
            groups[route_fingerprint] = group
            next_index += 1
            logger.debug(f"Created group {group.name} for config {route_fingerprint!r}")

        group.routes.append(route)
        logger.debug(f"Assigned route {route.id} to {group.name}")

    return GroupingResult(groups)
