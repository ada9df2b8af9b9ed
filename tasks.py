"""Developer tasks for wdbridge, powered by Invoke."""

from __future__ import annotations

import pathlib
import subprocess
from typing import Iterable

from invoke import task

ROOT = pathlib.Path(__file__).parent.resolve()
RESULTS_DIR = ROOT / "results"


def _run(command: Iterable[str] | str) -> None:
    cmd = command if isinstance(command, str) else " ".join(command)
    subprocess.run(cmd, shell=True, check=True, cwd=ROOT)


@task
def tests(_context, keyword=""):
    """Run the unit test suite (optionally filtered with -k)."""
    args = ["uv", "run", "pytest", "tests/"]
    if keyword:
        args += ["-k", f'"{keyword}"']
    _run(args)


@task
def coverage(_context):
    """Run tests under coverage and write reports to results/."""
    RESULTS_DIR.mkdir(exist_ok=True)
    _run(["uv", "run", "coverage", "run", "--source=wdbridge", "-m", "pytest", "tests/"])
    _run(["uv", "run", "coverage", "report", "--show-missing"])
    _run(["uv", "run", "coverage", "xml", "-o", "results/coverage.xml"])


@task
def build(_context):
    """Build distribution artifacts."""
    _run(["uv", "build"])
