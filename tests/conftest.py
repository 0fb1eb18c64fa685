from __future__ import annotations

import subprocess

import pytest

from mlbpick import cli


LISTING = (
    "Games for 2024-05-01\n"
    "#  Away @ Home  Time\n"
    "1. Red Sox (BOS) @ Yankees (NYY)  7:05pm\n"
    "2. DH-2 Cubs (CHC) @ Cardinals (STL) Final(10)\n"
)


class FakeProcs:
    """Stands in for subprocess.run; answers per executable and records calls."""

    def __init__(self) -> None:
        self.calls: list[list[str]] = []
        self.inputs: list[str | None] = []
        self.listing = subprocess.CompletedProcess([], 0, stdout=LISTING, stderr="")
        self.picks: list[subprocess.CompletedProcess] = []
        self.stream_code = 0

    def pick(self, out: str, code: int = 0) -> None:
        self.picks.append(subprocess.CompletedProcess([], code, stdout=out))

    def commands(self, name: str) -> list[list[str]]:
        return [c for c in self.calls if c[0] == name]

    def __call__(self, cmd, input=None, **kwargs):
        self.calls.append(list(cmd))
        self.inputs.append(input)
        if cmd[0] == cli.SELECTOR:
            return self.picks.pop(0)
        if kwargs.get("capture_output"):
            return self.listing
        return subprocess.CompletedProcess(cmd, self.stream_code)


@pytest.fixture
def procs(monkeypatch: pytest.MonkeyPatch) -> FakeProcs:
    fake = FakeProcs()
    monkeypatch.setattr(cli.subprocess, "run", fake)
    monkeypatch.setattr(cli.shutil, "which", lambda name: f"/usr/bin/{name}")
    return fake
