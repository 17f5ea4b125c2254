"""Build plan commands for graph-seeder CLI."""

from cyclopts import App

from graph_seeder.catalog import default_catalog, dump_catalog
from graph_seeder.plan import build_plan

plan_app = App(name="plan", help="Inspect what a seeding run creates, without contacting the tracker")


@plan_app.command
def order(catalog: str | None = None, project_count: int = 1, ignore_relations: bool = False) -> None:
    """Print every creation step in execution order, with the steps it requires."""
    from graph_seeder.cli import get_catalog

    graph = build_plan(get_catalog(catalog), project_count=project_count, ignore_relations=ignore_relations)
    steps = graph.order()

    print(f"{len(steps)} step(s):\n")
    for i, step in enumerate(steps, 1):
        requires = f"  <- {', '.join(step.requires)}" if step.requires else ""
        print(f"{i:3}. {step.name}{requires}")


@plan_app.command
def export() -> None:
    """Print the demo catalog as YAML, as a starting point for a custom catalog."""
    print(dump_catalog(default_catalog()), end="")
