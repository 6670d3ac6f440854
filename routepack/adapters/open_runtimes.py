"""
Open Runtimes Adapter

Turns a framework build into an ``.open-runtimes`` deployment: one bundled
function per config group, the static client files, and ``config.json``.
"""

import asyncio
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional, Type

from routepack.builder import Builder
from routepack.bundler import Bundler, EsbuildBundler
from routepack.config import Config
from routepack.core.compiler import CompileResult, compile_routes
from routepack.core.emitter import UnitEmitter
from routepack.core.runtime import detect_default_runtime
from routepack.errors import RemovedOptionError, UnsupportedBuilderError
from routepack.utils import write

logger = logging.getLogger(__name__)


class OpenRuntimesAdapter:
    """
    Adapter producing an Open Runtimes deployment.

    This adapter:
    1. Groups routes by their deployment config
    2. Bundles one function per group
    3. Copies the static assets
    4. Writes the routing document

    Example:
        adapter = OpenRuntimesAdapter({"runtime": "edge", "external": ["sharp"]})
        adapter.adapt_sync(ManifestBuilder.from_file("build/manifest.json"))
    """

    name = "routepack-open-runtimes"

    def __init__(
        self,
        defaults: Optional[Mapping[str, Any]] = None,
        config: Optional[Type[Config]] = None,
        bundler: Optional[Bundler] = None,
        infer_runtime: Optional[Callable[[], str]] = None,
        output_dir: Optional[Path] = None
    ):
        """
        Initialize the adapter.

        Args:
            defaults: Config applied to every route (runtime, external, ...)
            config: routepack configuration class (defaults to Config)
            bundler: Bundler for the functions (defaults to esbuild)
            infer_runtime: Fallback runtime detection (defaults to Node.js version)
            output_dir: Deployment directory (defaults to ``.open-runtimes``)

        Raises:
            RemovedOptionError: ``edge`` was passed instead of ``runtime``
        """
        self.config = config or Config
        defaults = dict(defaults) if defaults is not None else self.config.defaults()

        if 'edge' in defaults:
            raise RemovedOptionError("{ edge: true } has been removed in favour of { runtime: 'edge' }")

        self.defaults: Dict[str, Any] = defaults
        self.bundler = bundler or EsbuildBundler(self.config.ESBUILD_BINARY)
        self.infer_runtime = infer_runtime or (
            lambda: detect_default_runtime(node_binary=self.config.NODE_BINARY)
        )
        self.output_dir = Path(output_dir) if output_dir else self.config.output_dir()

    def compile(self, builder: Builder) -> CompileResult:
        """
        Group the builder's routes and assemble the routing document.

        Raises:
            UnsupportedBuilderError: The builder exposes no routes
        """
        if builder.routes is None:
            raise UnsupportedBuilderError(
                f"{self.name} requires a builder that exposes route definitions. "
                "Either downgrade the adapter or upgrade the framework."
            )

        return compile_routes(
            builder.routes,
            pages=builder.prerendered_pages,
            redirects=builder.prerendered_redirects,
            defaults=self.defaults,
            infer_runtime=self.infer_runtime,
            app_path=builder.app_path,
        )

    async def adapt(self, builder: Builder) -> CompileResult:
        """
        Build the deployment.

        Nothing is written to ``config.json`` unless every step succeeds.
        """
        out = self.output_dir
        tmp = builder.get_build_directory(self.config.Internal.TMP_DIR_NAME)

        builder.rimraf(out)
        builder.rimraf(tmp)

        result = self.compile(builder)

        builder.log_minor("Generating serverless function...")

        emitter = UnitEmitter(builder, self.bundler, tmp_dir=tmp, functions_dir=out / "functions")
        await emitter.emit_all(result.groups)

        builder.log_minor("Copying assets...")

        static_dir = out / f"static{builder.base_path}"
        builder.write_client(static_dir)
        builder.write_prerendered(static_dir)

        builder.log_minor("Writing routes...")

        write(out / self.config.Internal.CONFIG_FILE_NAME, result.document.to_json())

        return result

    def adapt_sync(self, builder: Builder) -> CompileResult:
        """Run ``adapt`` for synchronous callers."""
        return asyncio.run(self.adapt(builder))
