"""
Pytest Configuration for routepack Tests

Ensures proper import paths and provides fake collaborators so builds can
run without esbuild or Node.js.
"""

import sys
from pathlib import Path

import pytest

# Add the parent directory to sys.path to ensure proper imports
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from routepack.builder import Builder  # noqa: E402
from routepack.bundler import Bundler  # noqa: E402
from routepack.core.models import RouteDefinition  # noqa: E402
from routepack.errors import BuildArtifactFailure  # noqa: E402


class FakeBundler(Bundler):
    """Records requests and writes a stub artifact instead of running esbuild."""

    def __init__(self, fail_for=None):
        self.requests = []
        self.fail_for = set(fail_for or [])

    async def bundle(self, request):
        self.requests.append(request)
        if request.name in self.fail_for:
            raise BuildArtifactFailure(request.name, returncode=1, stderr="Could not resolve 'missing'")
        request.outfile.parent.mkdir(parents=True, exist_ok=True)
        request.outfile.write_text(f"// {request.name}\n")
        return request.outfile


class FakeBuilder(Builder):
    """In-memory builder rooted in a temporary directory."""

    def __init__(self, root, routes=None, pages=(), redirects=(), base_path=""):
        self.root = Path(root)
        self.routes = routes
        self.prerendered_pages = list(pages)
        self.prerendered_redirects = list(redirects)
        self.base_path = base_path
        self.messages = []
        (self.root / "server").mkdir(parents=True, exist_ok=True)

    def get_build_directory(self, name):
        return self.root / ".build" / name

    def get_server_directory(self):
        return self.root / "server"

    def write_client(self, destination):
        destination = Path(destination)
        destination.mkdir(parents=True, exist_ok=True)
        (destination / "favicon.png").write_text("png")

    def write_prerendered(self, destination):
        destination = Path(destination)
        destination.mkdir(parents=True, exist_ok=True)
        (destination / "about.html").write_text("<h1>About</h1>")

    def log_minor(self, message):
        self.messages.append(message)


def route(route_id, pattern=None, prerender=False, **config):
    """Shorthand for a RouteDefinition with an optional config."""
    return RouteDefinition(
        id=route_id,
        pattern=pattern or f"^{route_id}$",
        prerender=prerender,
        config=config or None,
    )


@pytest.fixture
def fake_bundler():
    return FakeBundler()


@pytest.fixture
def make_builder(tmp_path):
    def factory(routes=None, **kwargs):
        return FakeBuilder(tmp_path, routes=routes, **kwargs)
    return factory
