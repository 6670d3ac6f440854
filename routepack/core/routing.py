"""
Routing Table Assembly

Builds the routing document read by the platform. Rules are matched top
to bottom and the first match wins, so the order below is significant:

1. Prerendered redirects
2. Trailing-slash canonicalization for prerendered pages
3. Immutable asset caching
4. The filesystem handle (static files are served from here on)
5. Function dispatch
"""

import logging
from typing import Any, Dict, Iterable, List, Mapping, Sequence, Tuple

from routepack.config import Config
from routepack.core.models import PrerenderedPage, PrerenderedRedirect, RouteDefinition, RoutingDocument
from routepack.core.patterns import rewrite_pattern

logger = logging.getLogger(__name__)

Rule = Dict[str, Any]


def redirect_rules(redirects: Iterable[PrerenderedRedirect]) -> List[Rule]:
    return [
        {
            'src': redirect.path,
            'headers': {'Location': redirect.location},
            'status': redirect.status,
        }
        for redirect in redirects
    ]


def page_rules(pages: Iterable[PrerenderedPage]) -> Tuple[List[Rule], Dict[str, Dict[str, str]]]:
    """
    Canonicalize prerendered pages on the path they were rendered at.

    The page path serves the content; its counterpart (the same path with
    the trailing slash added or removed) redirects to it with a 308.

    Returns:
        (rules, overrides)
    """
    rules: List[Rule] = []
    overrides: Dict[str, Dict[str, str]] = {}

    for page in pages:
        path = page.path
        overrides_path = path[1:]

        if path != '/':
            counterpart = path + '/'

            if path.endswith('/'):
                counterpart = path[:-1]
                overrides_path = path[1:-1]

            rules.append({'src': path, 'dest': counterpart})
            rules.append({'src': counterpart, 'status': 308, 'headers': {'Location': path}})

        overrides[page.file] = {'path': overrides_path}

    return rules, overrides


def static_routing_config(
    pages: Iterable[PrerenderedPage],
    redirects: Iterable[PrerenderedRedirect],
    app_path: str,
    version: int = Config.Internal.ROUTING_VERSION
) -> RoutingDocument:
    """
    Routing document for everything that does not involve a function.

    Args:
        pages: Prerendered pages in build order
        redirects: Prerendered redirects in build order
        app_path: Framework asset directory relative to the site root (e.g. ``_app``)
    """
    prerendered = redirect_rules(redirects)
    rules, overrides = page_rules(pages)
    prerendered.extend(rules)

    return RoutingDocument(
        version=version,
        routes=[
            *prerendered,
            {
                'src': f"/{app_path}/immutable/.+",
                'headers': {'cache-control': Config.Internal.IMMUTABLE_CACHE_CONTROL},
            },
            {'handle': 'filesystem'},
        ],
        overrides=overrides,
    )


def dispatch_rules(
    routes: Sequence[RouteDefinition],
    functions: Mapping[str, str],
    group_names: Sequence[str]
) -> List[Rule]:
    """
    Rules sending dynamic routes to their function.

    With a single function every path goes to it through one catch-all
    rule. Otherwise each pattern gets its own rule, in route order, and is
    emitted at most once. The two forms are never combined.

    Args:
        routes: All routes of the build, in discovery order
        functions: Pattern -> function name
        group_names: Function names in group index order
    """
    if len(group_names) == 1:
        return [{'src': Config.Internal.CATCH_ALL_SRC, 'dest': f"/{group_names[0]}"}]

    remaining = dict(functions)
    rules: List[Rule] = []

    for route in routes:
        if route.prerender:
            continue

        name = remaining.pop(route.pattern, None)
        if name:
            rules.append({'src': rewrite_pattern(route.pattern), 'dest': f"/{name}"})

    return rules


def assemble_routing_document(
    routes: Sequence[RouteDefinition],
    functions: Mapping[str, str],
    group_names: Sequence[str],
    pages: Iterable[PrerenderedPage] = (),
    redirects: Iterable[PrerenderedRedirect] = (),
    app_path: str = '_app'
) -> RoutingDocument:
    """Build the complete routing document for one build."""
    document = static_routing_config(pages, redirects, app_path)
    rules = dispatch_rules(routes, functions, group_names)
    document.routes.extend(rules)

    logger.debug(f"Routing document has {len(document.routes)} rules ({len(rules)} dispatch)")
    return document
