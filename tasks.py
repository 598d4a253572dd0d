import os

from invoke import task, Context


IS_CI = os.getenv("GITHUB_ACTIONS") == "true"


@task
def doc(c: Context):
    """Generate documentation"""
    c.run("pdoc -o ./doc osmjson/", echo=True, pty=True)


@task
def fmt(c: Context):
    """Run code formatters"""
    c.run("isort osmjson test", echo=True, pty=True)
    c.run("ruff format osmjson test tasks.py", echo=True, pty=True)


@task
def install(c: Context):
    """Install all dependencies"""
    c.run("poetry lock --no-update", echo=True, pty=True)
    c.run("poetry install --all-extras", echo=True, pty=True)


@task
def lint(c: Context):
    """Run linter and type checker"""
    c.run("ruff check osmjson/", echo=True, warn=True, pty=True)
    c.run("mypy osmjson/", echo=True, warn=True, pty=True)
    c.run("slotscheck -m osmjson --require-subclass", echo=True, warn=True, pty=True)
    c.run("pyright osmjson/", echo=True, warn=True, pty=True)


@task
def test(c: Context):
    """Run all tests in parallel"""
    _pytest(c, cov=not IS_CI)


@task
def test_cov(c: Context):
    """Run all tests in parallel, with coverage report"""
    _pytest(c, cov=True)


@task
def test_f32(c: Context):
    """Run all tests with single precision coordinates"""
    c.run("poetry run pytest -vv", echo=True, pty=True, env={"OSMJSON_FLOAT_BITS": "32"})


def _pytest(c: Context, *, cov: bool):
    cmd = ["poetry", "run", "pytest", "-vv", "--numprocesses=auto", "--dist=loadgroup"]

    if cov:
        cmd.append("--cov=osmjson/")

    if cov and IS_CI:
        cmd.append("--cov-report=xml")

    c.run(" ".join(cmd), echo=True, pty=True)

    if cov and not IS_CI:
        c.run("rm .coverage*", echo=True, pty=True)


@task
def test_publish(c: Context):
    """Perform a dry run of publishing the package"""
    c.run("poetry publish --build --dry-run --no-interaction", echo=True, pty=True)


@task
def tree(c: Context):
    """Display the tree of dependencies"""
    c.run("poetry show --without=dev --tree", echo=True, pty=True)
