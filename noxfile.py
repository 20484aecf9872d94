"""Nox sessions for mindtoon."""

import nox

PYTHON_VERSIONS = ["3.11", "3.12", "3.13"]
LOCATIONS = ["src", "tests", "noxfile.py"]

nox.options.sessions = ["lint", "unit", "doctest"]


@nox.session(python=PYTHON_VERSIONS[-1])
def lint(session: nox.Session) -> None:
    """Run ruff, basedpyright and codespell."""
    session.install("-e", ".[dev]")
    session.run("ruff", "check", *LOCATIONS)
    session.run("ruff", "format", "--check", *LOCATIONS)
    session.run("basedpyright")
    session.run("codespell", *LOCATIONS, "DESIGN.md")


@nox.session(python=PYTHON_VERSIONS)
def unit(session: nox.Session) -> None:
    """Run the test suite with branch coverage of the mindtoon package."""
    session.install(".[test]")
    session.run(
        "pytest",
        "--cov=mindtoon",
        "--cov-report=term-missing",
        *session.posargs,
    )


@nox.session(python=PYTHON_VERSIONS[-1])
def doctest(session: nox.Session) -> None:
    """Run the examples embedded in docstrings."""
    session.install(".[test]")
    session.run("pytest", "--doctest-modules", "--pyargs", "mindtoon", *session.posargs)


@nox.session(python=PYTHON_VERSIONS[-1])
def coverage(session: nox.Session) -> None:
    """Report coverage collected by the unit session (`nox -s coverage -- xml` for XML)."""
    session.install("coverage[toml]")
    if session.posargs and session.posargs[0] == "xml":
        session.run("coverage", "xml")
    else:
        session.run("coverage", "report", "--show-missing")
