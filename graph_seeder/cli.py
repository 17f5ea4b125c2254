"""CLI for graph-seeder."""

import sys
from typing import Annotated, Literal

import structlog
from cyclopts import App, Parameter

from graph_seeder.backends import GraphQLBackend
from graph_seeder.catalog import default_catalog, load_catalog
from graph_seeder.config import get_config, load_settings
from graph_seeder.config_commands import config_app
from graph_seeder.models import Catalog, SeedReport
from graph_seeder.plan_commands import plan_app
from graph_seeder.seeder import Seeder

logger = structlog.get_logger()

app = App(
    help="Graph Seeder - Seeds a component and issue tracker with demo data",
)

app.command(plan_app)
app.command(config_app)


def configure_logging(log_level: str) -> None:
    """Configure structlog with the specified log level, logging to stderr."""
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(min_level=log_level.lower()),
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
    )


def get_catalog(path: str | None = None) -> Catalog:
    """Load the catalog at path, or the demo catalog if no path is given."""
    if path:
        return load_catalog(path)
    return default_catalog()


def print_report(report: SeedReport) -> None:
    """Print a summary of a seeding run."""
    steps_ok = sum(1 for outcome in report.steps if outcome.ok)
    users_ok = sum(1 for outcome in report.users if outcome.ok)
    comments = sum(len(issue.comments) for issue in report.generation.issues)

    print(f"Users: {users_ok}/{len(report.users)}")
    print(f"Build steps: {steps_ok}/{len(report.steps)}")
    print(f"Labels: {sum(1 for outcome in report.labels if outcome.ok)}/{len(report.labels)}")
    print(f"Issues: {len(report.generation.issues)} ({comments} comments)")
    print(f"Issue relations: {len(report.generation.relations)}")

    failures = report.failures
    if failures:
        print(f"\n{len(failures)} failure(s):")
        for outcome in failures:
            print(f"  [{outcome.status}] {outcome.name}: {outcome.error}")


@app.command
def seed(
    token: str,
    issue_count: int | None = None,
    project_count: int | None = None,
    random_seed: int | None = None,
    ignore_relations: bool = False,
    catalog: str | None = None,
) -> None:
    """Seed the tracker with templates, components, projects, users and random issues.

    Args:
        token: API token used for every request
        issue_count: Issues created per component
        project_count: How many times components, relations and projects are created
        random_seed: Seed for issue generation; runs with the same seed generate the same data
        ignore_relations: Do not create relations between components
        catalog: YAML file replacing the demo catalog
    """
    settings = load_settings(
        get_config(),
        issue_count=issue_count,
        project_count=project_count,
        random_seed=random_seed,
        ignore_relations=True if ignore_relations else None,
        catalog=catalog,
    )
    seed_catalog = get_catalog(settings.catalog)

    with GraphQLBackend(settings.graphql_endpoint, settings.users_endpoint, token) as backend:
        report = Seeder(backend, seed_catalog, settings).run()

    print_report(report)
    if not report.ok:
        sys.exit(1)


app.default(seed)


@app.meta.default
def main(
    *tokens: Annotated[str, Parameter(show=False, allow_leading_hyphen=True)],
    log_level: Literal["debug", "info", "warning", "error", "critical"] = "info",
) -> None:
    """Main entry point with global options."""
    configure_logging(log_level)
    app(tokens)


if __name__ == "__main__":
    app.meta()
