import subprocess
import sys

from doit.task import Task

SOURCES = ["src", "test", "dodo.py"]


def task_format() -> Task:
    """
    Run formatters.
    """
    return Task(
        "format",
        actions=[
            (_run, (["autoflake", "-r", "-i", *SOURCES],)),
            (_run, (["isort", *SOURCES],)),
            (_run, (["docformatter", "-r", "-i", *SOURCES], {0, 3})),
            (_run, (["black", *SOURCES],)),
            (_run, (["toml-sort", "-i", "pyproject.toml"],)),
        ],
        targets=[],
        file_dep=[],
    )


def task_test() -> Task:
    """
    Run tests.
    """
    return Task(
        "test",
        actions=[(_run, (["pytest"],))],
        targets=[],
        file_dep=[],
        verbosity=2,
    )


def _run(cmd: list[str], expect_rc: int | set[int] = 0):
    expect_rcs = expect_rc if isinstance(expect_rc, set) else {expect_rc}
    print(f"=== Running: {cmd[0]}")
    rc = subprocess.call(cmd)
    if rc not in expect_rcs:
        sys.exit(f"{cmd[0]} failed: rc={rc}, cmd={cmd}")
