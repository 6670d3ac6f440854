"""
Unit Emitter

Writes the entry and manifest files for every group and asks the bundler
to build one function per group. Groups are independent, so they are
bundled concurrently; any failure aborts the build.
"""

import asyncio
import logging
from pathlib import Path
from typing import Dict, Iterable, List

from routepack._template_loader import render
from routepack.builder import Builder
from routepack.bundler import BundleRequest, Bundler
from routepack.core.models import Group
from routepack.utils import posix_relative, write

logger = logging.getLogger(__name__)

ENTRY_FILE = 'entry.js'
MANIFEST_FILE = 'manifest.js'


class UnitEmitter:
    """
    Emits one bundled function per group.

    Args:
        builder: Build orchestrator (server directory, manifest generation)
        bundler: Bundler used for every group
        tmp_dir: Scratch directory for entry files
        functions_dir: Output directory; each group gets ``<name>/index.js``
    """

    def __init__(self, builder: Builder, bundler: Bundler, tmp_dir: Path, functions_dir: Path):
        self.builder = builder
        self.bundler = bundler
        self.tmp_dir = Path(tmp_dir)
        self.functions_dir = Path(functions_dir)

    def prepare(self, group: Group) -> BundleRequest:
        """Render the entry and manifest files for a group."""
        tmp = self.tmp_dir / group.name
        relative_path = posix_relative(tmp, self.builder.get_server_directory())

        write(tmp / ENTRY_FILE, render(
            'entry.js.j2',
            server=f"{relative_path}/index.js",
            manifest=f"./{MANIFEST_FILE}",
            name=group.name,
            route_count=len(group.routes),
        ))
        write(tmp / MANIFEST_FILE, render(
            'manifest.js.j2',
            manifest=self.builder.generate_manifest(relative_path, group.routes),
        ))

        return BundleRequest(
            name=group.name,
            entry=tmp / ENTRY_FILE,
            outfile=self.functions_dir / group.name / 'index.js',
            external=group.external,
        )

    async def emit(self, group: Group) -> Path:
        request = self.prepare(group)
        logger.info(f"Bundling {group.name} ({len(group.routes)} routes)")
        return await self.bundler.bundle(request)

    async def emit_all(self, groups: Iterable[Group]) -> Dict[str, Path]:
        """
        Bundle every group concurrently.

        Returns:
            Group name -> bundled artifact path

        Raises:
            BuildArtifactFailure: The first bundler failure, unchanged. Bundles
                still running at that point are cancelled.
        """
        groups: List[Group] = list(groups)
        tasks = [asyncio.ensure_future(self.emit(group)) for group in groups]

        try:
            artifacts = await asyncio.gather(*tasks)
        except BaseException:
            # Stop the remaining bundles so nothing is written after a failure
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        return {group.name: artifact for group, artifact in zip(groups, artifacts)}
