"""
Tests for per-group function emission
"""

import asyncio
import sys
import time

import pytest

from conftest import FakeBundler, route
from routepack.adapters import OpenRuntimesAdapter
from routepack.bundler import EsbuildBundler, BundleRequest
from routepack.core.emitter import UnitEmitter
from routepack.core.grouper import group_routes
from routepack.errors import BuildArtifactFailure


@pytest.fixture
def groups():
    routes = [
        route("/", runtime="nodejs18.x", external=["sharp"]),
        route("/edge", runtime="edge"),
    ]
    return list(group_routes(routes))


def test_prepare_renders_entry_and_manifest(make_builder, fake_bundler, groups, tmp_path):
    builder = make_builder(routes=[])
    emitter = UnitEmitter(builder, fake_bundler, tmp_path / ".build" / "tmp", tmp_path / "out" / "functions")

    request = emitter.prepare(groups[0])

    entry = request.entry.read_text()
    assert 'import { Server } from "../../../server/index.js";' in entry
    assert 'import { manifest } from "./manifest.js";' in entry
    manifest = (request.entry.parent / "manifest.js").read_text()
    assert manifest.startswith("export const manifest = {")
    assert '"/"' in manifest

    assert request.name == "fn-0"
    assert request.outfile == tmp_path / "out" / "functions" / "fn-0" / "index.js"
    assert request.external == ["sharp"]
    assert request.target == "es2020"


@pytest.mark.asyncio
async def test_emit_all_bundles_each_group(make_builder, fake_bundler, groups, tmp_path):
    builder = make_builder(routes=[])
    emitter = UnitEmitter(builder, fake_bundler, tmp_path / "tmp", tmp_path / "functions")

    artifacts = await emitter.emit_all(groups)

    assert set(artifacts) == {"fn-0", "fn-1"}
    assert all(path.exists() for path in artifacts.values())
    assert sorted(r.name for r in fake_bundler.requests) == ["fn-0", "fn-1"]
    assert len({r.outfile for r in fake_bundler.requests}) == 2


@pytest.mark.asyncio
async def test_bundler_failure_propagates(make_builder, groups, tmp_path):
    bundler = FakeBundler(fail_for={"fn-1"})
    emitter = UnitEmitter(make_builder(routes=[]), bundler, tmp_path / "tmp", tmp_path / "functions")

    with pytest.raises(BuildArtifactFailure) as exc_info:
        await emitter.emit_all(groups)

    assert exc_info.value.group_name == "fn-1"
    assert "Could not resolve" in str(exc_info.value)


def test_esbuild_command(tmp_path):
    request = BundleRequest(
        name="fn-0",
        entry=tmp_path / "entry.js",
        outfile=tmp_path / "fn-0" / "index.js",
        external=["sharp", "canvas"],
    )
    command = EsbuildBundler("esbuild").command(request)

    assert command[:3] == ["esbuild", str(tmp_path / "entry.js"), "--bundle"]
    assert f"--outfile={tmp_path / 'fn-0' / 'index.js'}" in command
    assert "--format=esm" in command
    assert "--platform=browser" in command
    assert command[-2:] == ["--external:sharp", "--external:canvas"]


@pytest.mark.asyncio
async def test_esbuild_missing_binary(tmp_path):
    request = BundleRequest(name="fn-0", entry=tmp_path / "entry.js", outfile=tmp_path / "out.js")
    with pytest.raises(BuildArtifactFailure, match="esbuild binary not found"):
        await EsbuildBundler("esbuild-binary-that-does-not-exist").bundle(request)


class SlowBundler(FakeBundler):
    """Fails ``fn-0`` at once and takes a while for every other group."""

    def __init__(self):
        super().__init__(fail_for={"fn-0"})
        self.cancelled = []

    async def bundle(self, request):
        if request.name not in self.fail_for:
            try:
                await asyncio.sleep(5)
            except asyncio.CancelledError:
                self.cancelled.append(request.name)
                raise
        return await super().bundle(request)


@pytest.mark.asyncio
async def test_failure_cancels_pending_bundles(make_builder, groups, tmp_path):
    bundler = SlowBundler()
    emitter = UnitEmitter(make_builder(routes=[]), bundler, tmp_path / "tmp", tmp_path / "functions")

    with pytest.raises(BuildArtifactFailure):
        await emitter.emit_all(groups)

    assert bundler.cancelled == ["fn-1"]
    assert not (tmp_path / "functions" / "fn-1" / "index.js").exists()


FAKE_ESBUILD = """#!/bin/sh
for arg in "$@"; do
    case "$arg" in
        --outfile=*) outfile="${arg#--outfile=}" ;;
    esac
done
case "$outfile" in
    */fn-0/*) echo "Could not resolve 'missing'" >&2; exit 1 ;;
esac
sleep 1 >/dev/null 2>&1
echo built > "$outfile"
"""


@pytest.fixture
def fake_esbuild(tmp_path):
    script = tmp_path / "esbuild"
    script.write_text(FAKE_ESBUILD)
    script.chmod(0o755)
    return str(script)


@pytest.mark.skipif(sys.platform == "win32", reason="needs a POSIX shell")
@pytest.mark.asyncio
async def test_esbuild_process_killed_on_cancel(fake_esbuild, tmp_path):
    outfile = tmp_path / "out" / "fn-1" / "index.js"
    request = BundleRequest(name="fn-1", entry=tmp_path / "entry.js", outfile=outfile)

    task = asyncio.ensure_future(EsbuildBundler(fake_esbuild).bundle(request))
    await asyncio.sleep(0.3)
    task.cancel()

    with pytest.raises(asyncio.CancelledError):
        await task

    await asyncio.sleep(1.2)
    assert not outfile.exists()


@pytest.mark.skipif(sys.platform == "win32", reason="needs a POSIX shell")
def test_aborted_build_leaves_no_artifacts(fake_esbuild, make_builder, tmp_path):
    out = tmp_path / "deploy"
    adapter = OpenRuntimesAdapter(
        {"runtime": "nodejs18.x"},
        bundler=EsbuildBundler(fake_esbuild),
        output_dir=out,
    )
    builder = make_builder(routes=[route("/"), route("/edge", runtime="edge")])

    with pytest.raises(BuildArtifactFailure, match="Could not resolve"):
        adapter.adapt_sync(builder)

    time.sleep(1.2)
    assert not (out / "functions" / "fn-1" / "index.js").exists()
    assert not (out / "config.json").exists()
