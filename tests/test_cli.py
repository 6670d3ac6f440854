"""
Tests for the routepack CLI
"""

import json
import os

import pytest
from click.testing import CliRunner

from conftest import FakeBundler
from routepack import __version__
from routepack.cli.main import cli


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    for key in list(os.environ):
        if key.startswith("ROUTEPACK_"):
            monkeypatch.delenv(key)


@pytest.fixture
def manifest(tmp_path):
    data = {
        "routes": [
            {"id": "/", "pattern": "^/$/"},
            {"id": "/api/[slug]", "pattern": "^\\/api\\/([^/]+?)\\/?$/", "config": {"runtime": "edge"}},
        ],
        "prerendered": {
            "pages": [{"path": "/about", "file": "about.html"}],
        },
    }
    (tmp_path / "server").mkdir()
    (tmp_path / "client").mkdir()
    (tmp_path / "client" / "favicon.png").write_text("png")
    path = tmp_path / "manifest.json"
    path.write_text(json.dumps(data))
    return path


def test_version():
    result = CliRunner().invoke(cli, ['--version'])
    assert result.exit_code == 0
    assert f"routepack v{__version__}" in result.output


def test_routes_json(manifest):
    result = CliRunner().invoke(cli, ['routes', str(manifest), '--runtime', 'nodejs18.x', '--json'])

    assert result.exit_code == 0, result.output
    document = json.loads(result.output)
    assert document["version"] == 3
    assert document["overrides"] == {"about.html": {"path": "about"}}
    assert document["routes"][-2:] == [
        {"src": "^/?(?:/__data.json)?$", "dest": "/fn-0"},
        {"src": "^/api/([^/]+?)/?(?:/__data.json)?$", "dest": "/fn-1"},
    ]


def test_routes_table(manifest):
    result = CliRunner().invoke(cli, ['routes', str(manifest), '--runtime', 'nodejs18.x'])

    assert result.exit_code == 0, result.output
    assert "fn-0" in result.output
    assert "fn-1" in result.output
    assert '{"handle": "filesystem"}' in result.output


def test_routes_runtime_from_env_file(manifest, tmp_path, monkeypatch):
    # Registered so monkeypatch removes what load_dotenv writes
    monkeypatch.setenv("ROUTEPACK_RUNTIME", "")
    env_file = tmp_path / ".env.build"
    env_file.write_text("ROUTEPACK_RUNTIME=edge\n")

    result = CliRunner().invoke(cli, ['routes', str(manifest), '--env-file', str(env_file), '--json'])

    assert result.exit_code == 0, result.output
    # Both routes resolve to edge, so there is a single catch-all function
    assert json.loads(result.output)["routes"][-1] == {"src": "/.*", "dest": "/fn-0"}


def test_invalid_manifest(tmp_path):
    path = tmp_path / "manifest.json"
    path.write_text('{"routes": [{"id": "/"}]}')

    result = CliRunner().invoke(cli, ['routes', str(path), '--runtime', 'edge'])

    assert result.exit_code == 1
    assert "Invalid build manifest" in result.output


def test_build_with_missing_esbuild(manifest, monkeypatch):
    monkeypatch.setenv("ROUTEPACK_ESBUILD_BINARY", "esbuild-binary-that-does-not-exist")

    result = CliRunner().invoke(cli, ['build', str(manifest), '--runtime', 'nodejs18.x'])

    assert result.exit_code == 1
    assert "esbuild binary not found" in result.output
    assert not (manifest.parent / ".open-runtimes" / "config.json").exists()


def test_build(manifest, monkeypatch, tmp_path):
    monkeypatch.setattr("routepack.adapters.open_runtimes.EsbuildBundler", lambda binary: FakeBundler())

    result = CliRunner().invoke(cli, ['build', str(manifest), '--runtime', 'nodejs18.x', '--out', 'dist'])

    assert result.exit_code == 0, result.output
    assert "Built 2 function(s)" in result.output
    assert (tmp_path / "dist" / "config.json").exists()
    assert (tmp_path / "dist" / "functions" / "fn-1" / "index.js").exists()
    assert (tmp_path / "dist" / "static" / "favicon.png").exists()


def test_init_writes_env_file(tmp_path):
    result = CliRunner().invoke(cli, [
        'init', '--runtime', 'edge', '--external', 'sharp,canvas', '--memory', '1024', '--yes'
    ])

    assert result.exit_code == 0, result.output
    content = (tmp_path / ".env").read_text()
    assert "ROUTEPACK_RUNTIME=edge\n" in content
    assert "ROUTEPACK_EXTERNAL=sharp,canvas\n" in content
    assert "ROUTEPACK_MEMORY=1024\n" in content
    assert "ROUTEPACK_REGIONS" not in content


def test_init_refuses_to_overwrite(tmp_path):
    (tmp_path / ".env").write_text("KEEP=1\n")

    result = CliRunner().invoke(cli, ['init', '--runtime', 'edge', '--yes'])

    assert result.exit_code == 1
    assert "already exists" in result.output
    assert (tmp_path / ".env").read_text() == "KEEP=1\n"


def test_init_force_overwrites(tmp_path):
    (tmp_path / ".env").write_text("KEEP=1\n")

    result = CliRunner().invoke(cli, ['init', '--runtime', 'nodejs16.x', '--yes', '--force'])

    assert result.exit_code == 0, result.output
    assert "ROUTEPACK_RUNTIME=nodejs16.x" in (tmp_path / ".env").read_text()
