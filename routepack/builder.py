"""
Build Orchestrator Contract

The framework build hands routes, prerendered output and its directories
to the adapter through a Builder. ``ManifestBuilder`` implements the
contract on top of a JSON build manifest written by the framework.
"""

import json
import logging
from pathlib import Path
from typing import List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from routepack.core.models import PrerenderedPage, PrerenderedRedirect, RouteDefinition
from routepack.errors import ManifestError
from routepack.utils import PathLike, copy_tree, rimraf

logger = logging.getLogger(__name__)


class Builder:
    """
    Base class for build orchestrators.

    Subclasses provide the route list and the build directories; the file
    helpers have working defaults.
    """

    #: Routes of the build, or None for a framework that predates route configs
    routes: Optional[List[RouteDefinition]] = None
    prerendered_pages: Sequence[PrerenderedPage] = ()
    prerendered_redirects: Sequence[PrerenderedRedirect] = ()
    app_path: str = "_app"
    base_path: str = ""

    def get_build_directory(self, name: str) -> Path:
        raise NotImplementedError

    def get_server_directory(self) -> Path:
        raise NotImplementedError

    def generate_manifest(self, relative_path: str, routes: Sequence[RouteDefinition]) -> str:
        """
        JavaScript expression describing the routes a function serves.

        Args:
            relative_path: Server directory relative to the function's entry
            routes: Routes handled by the function
        """
        return json.dumps({
            "appPath": self.app_path,
            "relativePath": relative_path,
            "routes": [route.id for route in routes],
        }, indent=2)

    def write_client(self, destination: PathLike) -> None:
        raise NotImplementedError

    def write_prerendered(self, destination: PathLike) -> None:
        raise NotImplementedError

    def rimraf(self, path: PathLike) -> None:
        rimraf(path)

    def log_minor(self, message: str) -> None:
        logger.info(message)


class _Prerendered(BaseModel):
    pages: List[PrerenderedPage] = []
    redirects: List[PrerenderedRedirect] = []


class BuildManifest(BaseModel):
    """Schema of the JSON manifest read by ManifestBuilder."""

    model_config = ConfigDict(extra='ignore')

    routes: List[RouteDefinition]
    prerendered: _Prerendered = Field(default_factory=_Prerendered)
    app_path: str = "_app"
    base_path: str = ""
    client_dir: str = "client"
    prerendered_dir: str = "prerendered"
    server_dir: str = "server"
    build_dir: str = ".routepack"


class ManifestBuilder(Builder):
    """
    Builder backed by a JSON build manifest.

    Relative directories in the manifest are resolved against the
    manifest's own location.

    Usage:
        builder = ManifestBuilder.from_file("build/manifest.json")
        OpenRuntimesAdapter().adapt_sync(builder)
    """

    def __init__(self, manifest: BuildManifest, root: PathLike = "."):
        self.manifest = manifest
        self.root = Path(root)
        self.routes = list(manifest.routes)
        self.prerendered_pages = list(manifest.prerendered.pages)
        self.prerendered_redirects = list(manifest.prerendered.redirects)
        self.app_path = manifest.app_path
        self.base_path = manifest.base_path

    @classmethod
    def from_file(cls, path: PathLike) -> "ManifestBuilder":
        """
        Raises:
            ManifestError: The file is missing, not JSON, or fails validation
        """
        path = Path(path)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise ManifestError(f"Could not read build manifest {path}: {e}") from e

        try:
            manifest = BuildManifest.model_validate(data)
        except ValidationError as e:
            raise ManifestError(f"Invalid build manifest {path}:\n{e}") from e

        logger.info(f"Loaded {len(manifest.routes)} routes from {path}")
        return cls(manifest, root=path.parent)

    def _resolve(self, directory: str) -> Path:
        return self.root / directory

    def get_build_directory(self, name: str) -> Path:
        return self._resolve(self.manifest.build_dir) / name

    def get_server_directory(self) -> Path:
        return self._resolve(self.manifest.server_dir)

    def write_client(self, destination: PathLike) -> None:
        source = self._resolve(self.manifest.client_dir)
        if source.exists():
            copy_tree(source, destination)
        else:
            logger.warning(f"Client directory not found: {source}")

    def write_prerendered(self, destination: PathLike) -> None:
        source = self._resolve(self.manifest.prerendered_dir)
        if source.exists():
            copy_tree(source, destination)
        elif self.prerendered_pages:
            logger.warning(f"Prerendered directory not found: {source}")
