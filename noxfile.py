"""Nox sessions."""

import os
import shutil
import sys
from pathlib import Path
from textwrap import dedent

try:
    import nox
    from nox import Session
    from nox import session
except ImportError:
    message = f"""\
    Nox failed to import.

    Please install it using the following command:

    {sys.executable} -m pip install nox[uv]"""
    raise SystemExit(dedent(message)) from None

package = "whizz"
python_versions = ["3.13", "3.12", "3.11"]
nox.needs_version = ">=2025.2.9"
nox.options.default_venv_backend = "uv|virtualenv"
nox.options.sessions = ("lint", "mypy", "tests", "xdoctest")

docs_requirements = ["autodoc-pydantic", "furo", "myst-parser", "sphinx", "sphinx-copybutton", "sphinx-typer"]


@session(python=python_versions[0])
def lint(session: Session) -> None:
    """Lint and check formatting with ruff."""
    session.install("ruff")
    session.run("ruff", "check", *(session.posargs or ["src", "tests", "noxfile.py"]))
    session.run("ruff", "format", "--check", "src", "tests", "noxfile.py")


@session(python=python_versions)
def mypy(session: Session) -> None:
    """Type-check the package."""
    session.install("-e", ".[test]", "mypy")
    session.run("mypy", *(session.posargs or ["src"]))


@session(python=python_versions)
def tests(session: Session) -> None:
    """Run the test suite under coverage."""
    session.install("-e", ".[test]")
    try:
        session.run("coverage", "run", "--parallel", "-m", "pytest", *session.posargs)
    finally:
        if session.interactive:
            session.notify("coverage", posargs=[])


@session(python=python_versions[0])
def coverage(session: Session) -> None:
    """Combine coverage data and report it."""
    session.install("coverage[toml]")
    if not session.posargs and any(Path().glob(".coverage.*")):
        session.run("coverage", "combine")
    session.run("coverage", *(session.posargs or ["report"]))


@session(python=python_versions[0])
def xdoctest(session: Session) -> None:
    """Run the docstring examples."""
    args = session.posargs or [f"--modname={package}", "--command=all"]
    if not session.posargs and "FORCE_COLOR" in os.environ:
        args.append("--colored=1")

    session.install("-e", ".", "xdoctest[colors]")
    session.run("python", "-m", "xdoctest", *args)


@session(name="docs-build", python=python_versions[0])
def docs_build(session: Session) -> None:
    """Build the documentation into docs/_build."""
    session.install("-e", ".", *docs_requirements)

    build_dir = Path("docs", "_build")
    if build_dir.exists():
        shutil.rmtree(build_dir)

    session.run("sphinx-build", *(session.posargs or ["docs", str(build_dir)]))
