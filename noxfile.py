"""Nox sessions for priceeval automation."""

from __future__ import annotations

import pathlib

import nox

REPO_ROOT = pathlib.Path(__file__).parent

nox.options.sessions = ["tests-3.11", "tests-3.12", "lint"]
nox.options.error_on_missing_interpreters = False


def _run_tests(session: nox.Session) -> None:
    session.install("-e", ".[test]")
    session.run(
        "pytest",
        "tests/unit/",
        "tests/property/",
        env={"PYTHONPATH": str(REPO_ROOT)},
    )


@nox.session(name="tests-3.11", python="3.11")
def tests_3_11(session: nox.Session) -> None:
    """Run the pytest suite under Python 3.11."""

    _run_tests(session)


@nox.session(name="tests-3.12", python="3.12")
def tests_3_12(session: nox.Session) -> None:
    """Run the pytest suite under Python 3.12."""

    _run_tests(session)


@nox.session
def lint(session: nox.Session) -> None:
    """Run linters via ruff and mypy."""

    session.install("-e", ".[dev]")
    session.run("ruff", "check", str(REPO_ROOT))
    session.run("mypy", "priceeval")
