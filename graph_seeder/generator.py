"""Randomized generation of issues, labels, assignments, comments and issue relations."""

import random
from collections.abc import Callable
from typing import Any, TypeVar

import structlog

from graph_seeder.backend import Backend
from graph_seeder.catalog import ISSUE_BODY, LOREM_IPSUM
from graph_seeder.errors import RemoteError
from graph_seeder.models import (
    GeneratedComment,
    GeneratedIssue,
    GeneratedIssueRelation,
    GenerationReport,
    IssueTemplateRef,
    Outcome,
)

logger = structlog.get_logger()

T = TypeVar("T")


class IssueGenerator:
    """Generates random issues on components, then random relations between them.

    All randomness comes from the injected random.Random, so a seeded generator
    always produces the same sequence of calls.
    """

    def __init__(
        self,
        backend: Backend,
        issue_template: IssueTemplateRef,
        labels: list[str],
        users: list[str],
        rng: random.Random | None = None,
        issue_count: int = 10,
        max_title_number: int = 1000,
        max_comments: int = 10,
        label_probability: float = 0.4,
        assignment_probability: float = 0.5,
        answer_probability: float = 0.5,
        issue_body: str = ISSUE_BODY,
        comment_body: str = LOREM_IPSUM,
    ) -> None:
        """Initialize issue generator.

        Args:
            backend: Backend receiving the calls
            issue_template: Template the issues are created from; must offer states and types
            labels: IDs of labels that may be attached
            users: IDs of users that may be assigned
            rng: Source of randomness (a new unseeded one if omitted)
            issue_count: Issues created per component
            max_title_number: Upper bound of the number in generated titles
            max_comments: Upper bound of comments per issue
            label_probability: Chance each label is attached to an issue
            assignment_probability: Chance each user is assigned to an issue
            answer_probability: Chance a comment answers an earlier one, once there is one
            issue_body: Markdown body of every issue
            comment_body: Body of every comment
        """
        if not issue_template.issue_states:
            raise ValueError(f"Issue template {issue_template.id} has no issue states")
        if not issue_template.issue_types:
            raise ValueError(f"Issue template {issue_template.id} has no issue types")
        if issue_count < 0:
            raise ValueError(f"issue_count must not be negative, got {issue_count}")

        self.backend = backend
        self.issue_template = issue_template
        self.labels = labels
        self.users = users
        self.rng = rng or random.Random()
        self.issue_count = issue_count
        self.max_title_number = max_title_number
        self.max_comments = max_comments
        self.label_probability = label_probability
        self.assignment_probability = assignment_probability
        self.answer_probability = answer_probability
        self.issue_body = issue_body
        self.comment_body = comment_body

    def _chance(self, probability: float) -> bool:
        """Draw once and succeed with the given probability."""
        return self.rng.random() > 1 - probability

    def _pick(self, values: list[T]) -> T | None:
        return self.rng.choice(values) if values else None

    def _attempt(self, name: str, report: GenerationReport, call: Callable[[], Any]) -> Any:
        """Run one remote call, recording a failure instead of raising."""
        try:
            return call()
        except RemoteError as e:
            logger.error("Generation call failed", call=name, error=str(e))
            report.failures.append(Outcome(name, "failed", error=str(e)))
            return None

    def generate(self, component_ids: list[str]) -> GenerationReport:
        """Create issues on every component, then relations between the created issues."""
        report = GenerationReport()
        self.generate_issues(component_ids, report)
        self.generate_relations(report)
        logger.info(
            "Generation finished",
            issues=len(report.issues),
            relations=len(report.relations),
            failures=len(report.failures),
        )
        return report

    def generate_issues(self, component_ids: list[str], report: GenerationReport) -> None:
        """Create `issue_count` issues on each component."""
        for component_id in component_ids:
            logger.info("Generating issues", component_id=component_id, count=self.issue_count)
            for _ in range(self.issue_count):
                issue = self.create_issue(component_id, report)
                if issue is not None:
                    report.issues.append(issue)

    def create_issue(self, component_id: str, report: GenerationReport) -> GeneratedIssue | None:
        """Create one random issue with labels, assignments and comments.

        Returns:
            The generated issue, or None if the issue itself could not be created
        """
        template = self.issue_template
        title = f"Test Issue {self.rng.randint(1, self.max_title_number)}"
        state_id = self.rng.choice(template.issue_states)
        type_id = self.rng.choice(template.issue_types)

        issue_id = self._attempt(
            f"issue:{component_id}",
            report,
            lambda: self.backend.create_issue(
                title=title,
                body=self.issue_body,
                template_id=template.id,
                state_id=state_id,
                type_id=type_id,
                trackable_id=component_id,
            ),
        )
        if issue_id is None:
            return None

        issue = GeneratedIssue(
            id=issue_id, component_id=component_id, title=title, state_id=state_id, type_id=type_id
        )
        self._add_labels(issue, report)
        self._add_assignments(issue, report)
        self._add_comments(issue, report)
        return issue

    def _add_labels(self, issue: GeneratedIssue, report: GenerationReport) -> None:
        for label_id in self.labels:
            if not self._chance(self.label_probability):
                continue

            def add_label() -> str:
                self.backend.add_label_to_issue(issue.id, label_id)
                return label_id

            if self._attempt(f"label:{issue.id}:{label_id}", report, add_label) is not None:
                issue.labels.append(label_id)

    def _add_assignments(self, issue: GeneratedIssue, report: GenerationReport) -> None:
        for user_id in self.users:
            if not self._chance(self.assignment_probability):
                continue
            assignment_type = self._pick(self.issue_template.assignment_types)
            assignment_id = self._attempt(
                f"assignment:{issue.id}:{user_id}",
                report,
                lambda: self.backend.create_assignment(issue.id, user_id, assignment_type),
            )
            if assignment_id is not None:
                issue.assignments.append(user_id)

    def _add_comments(self, issue: GeneratedIssue, report: GenerationReport) -> None:
        comment_count = self.rng.randint(0, self.max_comments)
        for _ in range(comment_count):
            answers = None
            # only comments of this issue that were actually created can be answered
            if issue.comments and self._chance(self.answer_probability):
                answers = self.rng.choice(issue.comments).id
            comment_id = self._attempt(
                f"comment:{issue.id}",
                report,
                lambda: self.backend.create_issue_comment(issue.id, self.comment_body, answers),
            )
            if comment_id is not None:
                issue.comments.append(GeneratedComment(id=comment_id, answers=answers))

    def generate_relations(self, report: GenerationReport) -> None:
        """Create one relation per generated issue between two randomly drawn issues.

        Both ends are drawn with replacement, so an issue may be related to itself.
        """
        issue_ids = [issue.id for issue in report.issues]
        if not issue_ids:
            return

        logger.info("Generating issue relations", count=len(issue_ids))
        for _ in range(len(issue_ids)):
            issue_id = self.rng.choice(issue_ids)
            related_issue_id = self.rng.choice(issue_ids)
            relation_type = self._pick(self.issue_template.relation_types)
            relation_id = self._attempt(
                f"issue-relation:{issue_id}->{related_issue_id}",
                report,
                lambda: self.backend.create_issue_relation(issue_id, related_issue_id, relation_type),
            )
            if relation_id is not None:
                report.relations.append(
                    GeneratedIssueRelation(
                        id=relation_id,
                        issue_id=issue_id,
                        related_issue_id=related_issue_id,
                        relation_type_id=relation_type,
                    )
                )
