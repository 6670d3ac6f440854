"""
Unit tests for default runtime detection
"""

import pytest

from routepack.core import runtime as runtime_module
from routepack.core.runtime import detect_default_runtime
from routepack.errors import UnresolvedDefaultRuntime


@pytest.mark.parametrize("version,expected", [
    ("v16.20.0", "nodejs16.x"),
    ("v18.16.1", "nodejs18.x"),
    ("18.0.0", "nodejs18.x"),
])
def test_supported_versions(version, expected):
    assert detect_default_runtime(version) == expected


def test_unsupported_version():
    with pytest.raises(UnresolvedDefaultRuntime) as exc_info:
        detect_default_runtime("v20.5.0")
    assert exc_info.value.version == "v20.5.0"
    assert "Unsupported Node.js version: v20.5.0" in str(exc_info.value)
    assert "explicitly specify a runtime" in str(exc_info.value)


def test_missing_node_binary(monkeypatch):
    monkeypatch.setattr(runtime_module.shutil, "which", lambda name: None)
    with pytest.raises(UnresolvedDefaultRuntime) as exc_info:
        detect_default_runtime(node_binary="node-that-does-not-exist")
    assert exc_info.value.version is None


def test_reads_version_from_node(monkeypatch):
    monkeypatch.setattr(runtime_module, "node_version", lambda node_binary="node": "v16.3.0")
    assert detect_default_runtime() == "nodejs16.x"
