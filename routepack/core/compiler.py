"""
Route Compiler

Runs the pure part of a build: grouping, conflict detection and routing
document assembly. Nothing here touches the filesystem, so a failed
compile never leaves partial output behind.
"""

import logging
from typing import Callable, Iterable, List, Optional

from routepack.config import Config
from routepack.core.grouper import GroupingResult, group_routes
from routepack.core.models import (
    ConfigInput,
    Group,
    PrerenderedPage,
    PrerenderedRedirect,
    RouteDefinition,
    RoutingDocument,
)
from routepack.core.routing import dispatch_rules, static_routing_config
from routepack.core.runtime import detect_default_runtime

logger = logging.getLogger(__name__)


class CompileResult:
    """Groups and routing document produced by one compile."""

    def __init__(self, grouping: GroupingResult, document: RoutingDocument, dispatch: List[dict]):
        self.grouping = grouping
        self.document = document
        self.dispatch = dispatch

    @property
    def groups(self) -> List[Group]:
        return sorted(self.grouping, key=lambda group: group.index)


def compile_routes(
    routes: Iterable[RouteDefinition],
    pages: Iterable[PrerenderedPage] = (),
    redirects: Iterable[PrerenderedRedirect] = (),
    defaults: ConfigInput = None,
    infer_runtime: Optional[Callable[[], str]] = detect_default_runtime,
    app_path: str = '_app'
) -> CompileResult:
    """
    Compile routes into function groups and a routing document.

    Args:
        routes: Every route of the build, prerendered ones included
        pages: Prerendered pages
        redirects: Prerendered redirects
        defaults: Adapter-level config
        infer_runtime: Fallback used when no runtime is configured
            (defaults to the local Node.js version)
        app_path: Framework asset directory (e.g. ``_app``)

    Raises:
        InvalidRuntime, ConfigConflict, UnresolvedDefaultRuntime
    """
    routes = list(routes)
    grouping = group_routes(routes, defaults, infer_runtime, prefix=Config.Internal.FUNCTION_PREFIX)
    names = [group.name for group in sorted(grouping, key=lambda group: group.index)]
    functions = grouping.functions()

    document = static_routing_config(list(pages), list(redirects), app_path)
    dispatch = dispatch_rules(routes, functions, names)
    document.routes.extend(dispatch)

    logger.info(
        f"Compiled {len(routes)} routes into {grouping.count} "
        f"function{'s' if grouping.count != 1 else ''}"
    )
    return CompileResult(grouping, document, dispatch)
