"""Shared fixtures for graph-seeder tests."""

import threading
from collections.abc import Iterator
from typing import Any

import pytest
import structlog

from graph_seeder.backend import Backend
from graph_seeder.cli import configure_logging
from graph_seeder.errors import RemoteError
from graph_seeder.models import (
    ComponentRef,
    IssuePrioritySpec,
    IssueStateSpec,
    IssueTemplateRef,
    IssueTypeSpec,
    InterfaceSpecificationRef,
    NamedSpec,
)


class MockBackend(Backend):
    """In-memory backend recording every call.

    Methods named in `failing` raise RemoteError; `failing_users` makes
    create_user fail for specific usernames.
    """

    def __init__(self, failing: set[str] | None = None, failing_users: set[str] | None = None) -> None:
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.failing = failing or set()
        self.failing_users = failing_users or set()
        self.components: list[str] = []
        self._counters: dict[str, int] = {}
        self._lock = threading.Lock()

    def _next_id(self, kind: str) -> str:
        with self._lock:
            self._counters[kind] = self._counters.get(kind, 0) + 1
            return f"{kind}-{self._counters[kind]}"

    def _record(self, method: str, **kwargs: Any) -> None:
        with self._lock:
            self.calls.append((method, kwargs))
        if method in self.failing:
            raise RemoteError(method, "mock failure")

    def calls_to(self, method: str) -> list[dict[str, Any]]:
        """Return the arguments of every call to a method."""
        return [kwargs for name, kwargs in self.calls if name == method]

    def create_user(self, username: str, display_name: str, email: str, is_admin: bool = False) -> str:
        self._record("create_user", username=username, display_name=display_name, email=email, is_admin=is_admin)
        if username in self.failing_users:
            raise RemoteError("createUser", f"cannot create {username}", status_code=500)
        return f"user-{username}"

    def create_component_template(
        self,
        name: str,
        description: str,
        version_template_name: str,
        version_template_description: str,
        shape_type: str,
    ) -> str:
        self._record("create_component_template", name=name, shape_type=shape_type)
        return self._next_id("component-template")

    def create_interface_specification_template(
        self, name: str, description: str, component_templates: list[str]
    ) -> str:
        self._record("create_interface_specification_template", name=name, component_templates=component_templates)
        return self._next_id("interface-template")

    def create_relation_template(self, name: str, description: str, from_ids: list[str], to_ids: list[str]) -> str:
        self._record("create_relation_template", name=name, from_ids=from_ids, to_ids=to_ids)
        return self._next_id("relation-template")

    def create_issue_template(
        self,
        name: str,
        description: str,
        issue_types: list[IssueTypeSpec],
        issue_states: list[IssueStateSpec],
        issue_priorities: list[IssuePrioritySpec],
        relation_types: list[NamedSpec],
        assignment_types: list[NamedSpec],
    ) -> IssueTemplateRef:
        self._record("create_issue_template", name=name)
        template_id = self._next_id("issue-template")
        return IssueTemplateRef(
            id=template_id,
            issue_types=[f"{template_id}/type-{i}" for i in range(len(issue_types))],
            issue_states=[f"{template_id}/state-{i}" for i in range(len(issue_states))],
            issue_priorities=[f"{template_id}/priority-{i}" for i in range(len(issue_priorities))],
            relation_types=[f"{template_id}/relation-type-{i}" for i in range(len(relation_types))],
            assignment_types=[f"{template_id}/assignment-type-{i}" for i in range(len(assignment_types))],
        )

    def create_component(
        self,
        name: str,
        description: str,
        template_id: str,
        version: str,
        version_name: str,
        version_description: str,
    ) -> ComponentRef:
        self._record("create_component", name=name, template_id=template_id, version=version)
        component_id = self._next_id("component")
        self.components.append(component_id)
        return ComponentRef(component_id=component_id, version_ids=[f"{component_id}/version-1"])

    def create_interface_specification(
        self,
        component_id: str,
        template_id: str,
        name: str,
        description: str,
        versions: list[tuple[str, list[str]]],
    ) -> InterfaceSpecificationRef:
        self._record(
            "create_interface_specification", component_id=component_id, template_id=template_id, versions=versions
        )
        specification_id = self._next_id("interface-specification")
        return InterfaceSpecificationRef(
            id=specification_id, version_ids=[f"{specification_id}/{version}" for version, _ in versions]
        )

    def add_interface(self, component_version_id: str, interface_specification_version_id: str) -> None:
        self._record(
            "add_interface",
            component_version_id=component_version_id,
            interface_specification_version_id=interface_specification_version_id,
        )

    def create_relation(self, start_id: str, end_id: str, template_id: str) -> str:
        self._record("create_relation", start_id=start_id, end_id=end_id, template_id=template_id)
        return self._next_id("relation")

    def create_project(self, name: str, description: str, repository_url: str) -> str:
        self._record("create_project", name=name, repository_url=repository_url)
        return self._next_id("project")

    def add_component_version_to_project(self, project_id: str, component_version_id: str) -> None:
        self._record("add_component_version_to_project", project_id=project_id, component_version_id=component_version_id)

    def list_components(self) -> list[str]:
        self._record("list_components")
        return list(self.components)

    def create_label(self, name: str, description: str, color: str, trackables: list[str]) -> str:
        self._record("create_label", name=name, color=color, trackables=trackables)
        return self._next_id("label")

    def create_issue(
        self,
        title: str,
        body: str,
        template_id: str,
        state_id: str,
        type_id: str,
        trackable_id: str,
    ) -> str:
        self._record(
            "create_issue",
            title=title,
            template_id=template_id,
            state_id=state_id,
            type_id=type_id,
            trackable_id=trackable_id,
        )
        return self._next_id("issue")

    def add_label_to_issue(self, issue_id: str, label_id: str) -> None:
        self._record("add_label_to_issue", issue_id=issue_id, label_id=label_id)

    def create_assignment(self, issue_id: str, user_id: str, assignment_type_id: str | None = None) -> str:
        self._record("create_assignment", issue_id=issue_id, user_id=user_id, assignment_type_id=assignment_type_id)
        return self._next_id("assignment")

    def create_issue_comment(self, issue_id: str, body: str, answers: str | None = None) -> str:
        self._record("create_issue_comment", issue_id=issue_id, answers=answers)
        return self._next_id("comment")

    def create_issue_relation(
        self, issue_id: str, related_issue_id: str, relation_type_id: str | None = None
    ) -> str:
        self._record(
            "create_issue_relation",
            issue_id=issue_id,
            related_issue_id=related_issue_id,
            relation_type_id=relation_type_id,
        )
        return self._next_id("issue-relation")


@pytest.fixture
def mock_backend() -> MockBackend:
    """Create an in-memory backend."""
    return MockBackend()


@pytest.fixture
def issue_template() -> IssueTemplateRef:
    """Create an issue template with 3 states, 3 types, 3 priorities, 2 relation and 3 assignment types."""
    return IssueTemplateRef(
        id="template-1",
        issue_types=["type-bug", "type-feature", "type-unclassified"],
        issue_states=["state-open", "state-closed", "state-not-planned"],
        issue_priorities=["priority-low", "priority-medium", "priority-high"],
        relation_types=["relation-depends-on", "relation-duplicates"],
        assignment_types=["assignment-reviewer", "assignment-assignee", "assignment-tester"],
    )


@pytest.fixture(autouse=True)
def stderr_logging() -> Iterator[None]:
    """Log to stderr, as the CLI does, so stdout only holds command output."""
    configure_logging("info")
    yield
    structlog.reset_defaults()
