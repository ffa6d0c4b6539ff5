from invoke import task


@task
def lint(c):
    c.run("ruff check src tests scripts")


@task
def format_check(c):
    c.run("ruff format --check src tests scripts")


@task
def test(c):
    c.run("pytest")


@task
def simulate(c, teams=13, judges=8, rounds=5, seed=42):
    c.run(
        f"python scripts/simulate_tournament.py --teams {teams} --judges {judges} "
        f"--rounds {rounds} --seed {seed}"
    )


@task
def ci(c):
    lint(c)
    format_check(c)
    test(c)
