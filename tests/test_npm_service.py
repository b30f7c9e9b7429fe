"""Tests for the npm process runner, using the Python interpreter as a stand-in."""

import sys

import pytest

from services.npm_service import CommandResult, NpmService


@pytest.mark.asyncio
async def test_run_collects_streams_in_cwd(tmp_path):
    service = NpmService(sys.executable)
    script = "import os, sys; print(os.getcwd()); print('warned', file=sys.stderr); sys.exit(3)"

    result = await service.run("-c", script, cwd=tmp_path)

    assert result.returncode == 3
    assert not result.ok
    assert result.stdout.strip() == str(tmp_path.resolve())
    assert result.stderr.strip() == "warned"


@pytest.mark.asyncio
async def test_missing_executable_is_reported_not_raised(tmp_path):
    service = NpmService("definitely-not-a-real-npm-binary")

    result = await service.run("outdated", "--json", cwd=tmp_path)

    assert result.returncode == -1
    assert "definitely-not-a-real-npm-binary" in result.diagnostic


@pytest.mark.asyncio
async def test_install_latest_builds_one_command(tmp_path, monkeypatch):
    seen = []

    async def fake_run(self, *args, cwd):
        seen.append((args, cwd))
        return CommandResult(0)

    monkeypatch.setattr(NpmService, "run", fake_run)

    await NpmService().install_latest(["pkg-a", "@scope/pkg-b"], tmp_path)
    await NpmService().outdated(tmp_path)

    assert seen == [
        (("install", "pkg-a@latest", "@scope/pkg-b@latest"), tmp_path),
        (("outdated", "--json"), tmp_path),
    ]


@pytest.mark.parametrize(
    ("result", "expected"),
    [
        (CommandResult(1, "out", "err\n"), "err"),
        (CommandResult(1, "out\n", "  "), "out"),
        (CommandResult(5), "exit code 5"),
    ],
)
def test_diagnostic_prefers_stderr(result, expected):
    assert result.diagnostic == expected
