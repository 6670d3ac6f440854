"""
routepack Core Module
"""

from routepack.core.compiler import CompileResult, compile_routes
from routepack.core.fingerprint import fingerprint
from routepack.core.grouper import ConflictDetector, group_routes
from routepack.core.patterns import rewrite_pattern
from routepack.core.routing import assemble_routing_document, static_routing_config

__all__ = [
    "CompileResult",
    "compile_routes",
    "fingerprint",
    "ConflictDetector",
    "group_routes",
    "rewrite_pattern",
    "assemble_routing_document",
    "static_routing_config",
]
