"""
routepack Adapters

Deployment adapters for hosting platforms.
"""

from routepack.adapters.open_runtimes import OpenRuntimesAdapter

__all__ = ["OpenRuntimesAdapter"]
