"""Orchestration of a complete seeding run."""

import random

import structlog

from graph_seeder.backend import Backend
from graph_seeder.config import SeedSettings
from graph_seeder.errors import RemoteError
from graph_seeder.generator import IssueGenerator
from graph_seeder.models import Catalog, IssueTemplateRef, Outcome, SeedReport
from graph_seeder.plan import build_plan, issue_template_step
from graph_seeder.users import provision_users, resolved_user_ids

logger = structlog.get_logger()


class Seeder:
    """Runs users, the build graph, labels and issue generation against one backend."""

    def __init__(
        self,
        backend: Backend,
        catalog: Catalog,
        settings: SeedSettings | None = None,
        rng: random.Random | None = None,
    ) -> None:
        """Initialize seeder.

        Args:
            backend: Backend receiving every call
            catalog: Entities to create
            settings: Run settings (defaults if omitted)
            rng: Source of randomness; seeded from settings.random_seed if omitted
        """
        self.backend = backend
        self.catalog = catalog
        self.settings = settings or SeedSettings()
        self.rng = rng or random.Random(self.settings.random_seed)

    def create_labels(self, component_ids: list[str]) -> list[Outcome]:
        """Create every catalog label on the given components."""
        outcomes = []
        for spec in self.catalog.labels:
            try:
                label_id = self.backend.create_label(spec.name, spec.description, spec.color, component_ids)
            except RemoteError as e:
                logger.error("Failed to create label", name=spec.name, error=str(e))
                outcomes.append(Outcome(f"label:{spec.name}", "failed", error=str(e)))
                continue
            outcomes.append(Outcome(f"label:{spec.name}", "ok", value=label_id))
        return outcomes

    def run(self) -> SeedReport:
        """Seed the backend.

        Returns:
            SeedReport describing everything that was created or failed

        Raises:
            ValueError: If the settings are invalid
            GraphError: If the catalog references entries it does not define
        """
        if self.settings.issue_count < 0:
            raise ValueError(f"issue_count must not be negative, got {self.settings.issue_count}")
        graph = build_plan(
            self.catalog,
            project_count=self.settings.project_count,
            ignore_relations=self.settings.ignore_relations,
        )
        # raises GraphError before anything is created remotely
        graph.order()

        report = SeedReport()
        logger.info("Seeding started", steps=len(graph), random_seed=self.settings.random_seed)

        report.users = provision_users(self.backend, self.catalog.users)
        report.steps = graph.execute(self.backend)

        try:
            component_ids = self.backend.list_components()
        except RemoteError as e:
            logger.error("Failed to list components", error=str(e))
            report.errors.append(Outcome("list-components", "failed", error=str(e)))
            return report

        report.labels = self.create_labels(component_ids)

        template_step = issue_template_step(self.catalog.generation_template)
        template_outcome = next((outcome for outcome in report.steps if outcome.name == template_step), None)
        if template_outcome is None or not template_outcome.ok:
            logger.error("Issue template unresolved, skipping issue generation", step=template_step)
            report.errors.append(Outcome("generate-issues", "skipped", error=f"requires unresolved {template_step}"))
            return report

        template: IssueTemplateRef = template_outcome.value
        generator = IssueGenerator(
            self.backend,
            template,
            labels=[outcome.value for outcome in report.labels if outcome.ok],
            users=resolved_user_ids(report.users),
            rng=self.rng,
            issue_count=self.settings.issue_count,
        )
        report.generation = generator.generate(component_ids)

        logger.info(
            "Seeding finished",
            steps=len(report.steps),
            issues=len(report.generation.issues),
            issue_relations=len(report.generation.relations),
            failures=len(report.failures),
        )
        return report
