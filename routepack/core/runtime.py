"""
Default Runtime Detection

When neither a route nor the adapter names a runtime, the runtime is
inferred from the Node.js version used for the build.
"""

import logging
import shutil
import subprocess
from typing import Optional

from routepack.config import Config
from routepack.errors import UnresolvedDefaultRuntime

logger = logging.getLogger(__name__)


def node_version(node_binary: str = "node") -> Optional[str]:
    """
    Return the local Node.js version (e.g. ``v18.16.0``), or None.
    """
    executable = shutil.which(node_binary)
    if executable is None:
        logger.debug(f"Node.js binary not found: {node_binary}")
        return None

    try:
        result = subprocess.run(
            [executable, '--version'],
            capture_output=True,
            text=True,
            timeout=10,
            check=True
        )
    except (OSError, subprocess.SubprocessError) as e:
        logger.warning(f"Could not read Node.js version: {e}")
        return None

    return result.stdout.strip() or None


def detect_default_runtime(version: Optional[str] = None, node_binary: str = "node") -> str:
    """
    Map the Node.js major version to a serverless runtime.

    Args:
        version: Version string such as ``v18.16.0``; read from ``node`` if None
        node_binary: Node.js executable to query

    Raises:
        UnresolvedDefaultRuntime: Unsupported or undetectable version
    """
    if version is None:
        version = node_version(node_binary)

    if not version:
        raise UnresolvedDefaultRuntime(None)

    major = version.lstrip('v').split('.')[0]
    runtime = Config.Internal.NODE_RUNTIMES.get(major)
    if runtime is None:
        raise UnresolvedDefaultRuntime(version)

    logger.debug(f"Inferred default runtime {runtime} from Node.js {version}")
    return runtime
