"""
Bundler Contract

The adapter hands each function's entry file to a bundler. The default
implementation shells out to the ``esbuild`` CLI.
"""

import asyncio
import logging
import shutil
from pathlib import Path
from typing import List, Optional

from routepack.config import Config
from routepack.errors import BuildArtifactFailure

logger = logging.getLogger(__name__)


class BundleRequest:
    """Everything a bundler needs to build one function."""

    def __init__(
        self,
        name: str,
        entry: Path,
        outfile: Path,
        external: Optional[List[str]] = None,
        target: str = Config.Internal.BUNDLE_TARGET,
        platform: str = Config.Internal.BUNDLE_PLATFORM,
        format: str = Config.Internal.BUNDLE_FORMAT,
        sourcemap: str = Config.Internal.BUNDLE_SOURCEMAP,
        banner: str = Config.Internal.BUNDLE_BANNER
    ):
        self.name = name
        self.entry = Path(entry)
        self.outfile = Path(outfile)
        self.external = list(external or [])
        self.target = target
        self.platform = platform
        self.format = format
        self.sourcemap = sourcemap
        self.banner = banner

    def __repr__(self) -> str:
        return f"BundleRequest(name={self.name!r}, entry={str(self.entry)!r}, outfile={str(self.outfile)!r})"


class Bundler:
    """
    Base class for bundlers.

    ``bundle`` must either produce ``request.outfile`` or raise
    BuildArtifactFailure.
    """

    async def bundle(self, request: BundleRequest) -> Path:
        raise NotImplementedError


class EsbuildBundler(Bundler):
    """Runs the esbuild CLI in a subprocess."""

    def __init__(self, binary: str = "esbuild"):
        self.binary = binary

    def command(self, request: BundleRequest) -> List[str]:
        args = [
            self.binary,
            str(request.entry),
            '--bundle',
            f'--outfile={request.outfile}',
            f'--target={request.target}',
            f'--platform={request.platform}',
            f'--format={request.format}',
            f'--sourcemap={request.sourcemap}',
            f'--banner:js={request.banner}',
        ]
        args.extend(f'--external:{module}' for module in request.external)
        return args

    async def bundle(self, request: BundleRequest) -> Path:
        if shutil.which(self.binary) is None:
            raise BuildArtifactFailure(request.name, stderr=f"esbuild binary not found: {self.binary}")

        request.outfile.parent.mkdir(parents=True, exist_ok=True)
        logger.debug(f"Running {' '.join(self.command(request))}")

        process = await asyncio.create_subprocess_exec(
            *self.command(request),
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE
        )
        try:
            _, stderr = await process.communicate()
        except asyncio.CancelledError:
            if process.returncode is None:
                process.kill()
            await process.wait()
            raise

        if process.returncode != 0:
            raise BuildArtifactFailure(
                request.name,
                returncode=process.returncode,
                stderr=stderr.decode(errors='replace')
            )

        logger.info(f"Bundled {request.name} -> {request.outfile}")
        return request.outfile
