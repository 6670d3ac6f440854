"""
routepack - Route grouping and deployment-config compiler

Compiles framework routes, each with an optional deployment config, into the
minimal set of deployable functions and the platform routing document that
dispatches paths to them.

Quick Start:
    from routepack import OpenRuntimesAdapter, ManifestBuilder

    builder = ManifestBuilder.from_file("build/manifest.json")
    OpenRuntimesAdapter({"runtime": "nodejs18.x"}).adapt_sync(builder)

Compile only (no bundling, no files written):
    from routepack import compile_routes, RouteDefinition

    result = compile_routes([RouteDefinition(id="/", pattern="^/$")], defaults={"runtime": "edge"})
    print(result.document.to_json())
"""

__version__ = "0.1.0"

from routepack.adapters import OpenRuntimesAdapter
from routepack.builder import Builder, ManifestBuilder
from routepack.bundler import BundleRequest, Bundler, EsbuildBundler
from routepack.config import Config
from routepack.core import compile_routes, fingerprint, rewrite_pattern
from routepack.core.models import (
    DeployConfig,
    IsrConfig,
    PrerenderedPage,
    PrerenderedRedirect,
    RouteDefinition,
    RoutingDocument,
)
from routepack.errors import (
    BuildArtifactFailure,
    ConfigConflict,
    InvalidRuntime,
    RoutePackError,
    UnresolvedDefaultRuntime,
)

__all__ = [
    # Adapter
    "OpenRuntimesAdapter",
    "Builder",
    "ManifestBuilder",
    "Bundler",
    "BundleRequest",
    "EsbuildBundler",
    "Config",
    # Compiler
    "compile_routes",
    "fingerprint",
    "rewrite_pattern",
    # Models
    "DeployConfig",
    "IsrConfig",
    "RouteDefinition",
    "PrerenderedPage",
    "PrerenderedRedirect",
    "RoutingDocument",
    # Errors
    "RoutePackError",
    "InvalidRuntime",
    "ConfigConflict",
    "UnresolvedDefaultRuntime",
    "BuildArtifactFailure",
]
