"""Tests for complete seeding runs."""

import random

import pytest
from conftest import MockBackend

from graph_seeder.catalog import default_catalog
from graph_seeder.config import SeedSettings
from graph_seeder.errors import GraphError
from graph_seeder.models import RelationSpec
from graph_seeder.seeder import Seeder


def test_demo_run(mock_backend: MockBackend) -> None:
    """Test that 7 components with 10 issues each give 70 issues and 70 issue relations."""
    report = Seeder(mock_backend, default_catalog(), SeedSettings(random_seed=1)).run()

    assert report.ok
    assert len(report.users) == 5
    assert len(report.labels) == 4
    assert len(mock_backend.calls_to("create_issue")) == 70
    assert len(report.generation.issues) == 70
    assert len(report.generation.relations) == 70
    assert len(mock_backend.calls_to("create_issue_relation")) == 70


def test_issues_use_default_template(mock_backend: MockBackend) -> None:
    """Test that generated issues use the default issue template, not the secondary or empty one."""
    report = Seeder(mock_backend, default_catalog(), SeedSettings(issue_count=2)).run()

    default = next(outcome.value for outcome in report.steps if outcome.name == "issue-template:default")
    assert {call["template_id"] for call in mock_backend.calls_to("create_issue")} == {default.id}


def test_labels_are_created_on_all_components(mock_backend: MockBackend) -> None:
    """Test that labels list every component as trackable."""
    Seeder(mock_backend, default_catalog(), SeedSettings(issue_count=0)).run()

    calls = mock_backend.calls_to("create_label")
    assert [call["name"] for call in calls] == ["bug", "documentation", "duplicate", "enhancement"]
    assert all(call["trackables"] == mock_backend.components for call in calls)


def test_failed_user_is_never_assigned() -> None:
    """Test that an unresolved user does not become an assignment target."""
    backend = MockBackend(failing_users={"LuckyDuckling91"})
    report = Seeder(backend, default_catalog(), SeedSettings(random_seed=3)).run()

    assigned = {call["user_id"] for call in backend.calls_to("create_assignment")}
    assert assigned
    assert "user-LuckyDuckling91" not in assigned
    assert None not in assigned
    assert [outcome.name for outcome in report.failures] == ["LuckyDuckling91"]
    assert not report.ok


def test_project_count_multiplies_issues(mock_backend: MockBackend) -> None:
    """Test that components listed from every project receive issues."""
    report = Seeder(mock_backend, default_catalog(), SeedSettings(issue_count=1, project_count=2)).run()

    assert len(mock_backend.calls_to("create_project")) == 2
    assert len(report.generation.issues) == 14


def test_ignore_relations(mock_backend: MockBackend) -> None:
    """Test that no component relations are created when disabled."""
    Seeder(mock_backend, default_catalog(), SeedSettings(issue_count=0, ignore_relations=True)).run()
    assert mock_backend.calls_to("create_relation") == []


def test_same_seed_same_run() -> None:
    """Test that two runs with the same seed make the same calls."""
    first, second = MockBackend(), MockBackend()
    Seeder(first, default_catalog(), SeedSettings(issue_count=3, random_seed=99)).run()
    Seeder(second, default_catalog(), rng=random.Random(99), settings=SeedSettings(issue_count=3)).run()

    def sequential(backend: MockBackend) -> list:
        # user creation order depends on thread scheduling
        return [call for call in backend.calls if call[0] != "create_user"]

    assert sequential(first) == sequential(second)


def test_list_components_failure_stops_generation() -> None:
    """Test that generation is skipped when components cannot be listed."""
    backend = MockBackend(failing={"list_components"})
    report = Seeder(backend, default_catalog()).run()

    assert [outcome.name for outcome in report.failures] == ["list-components"]
    assert backend.calls_to("create_label") == []
    assert backend.calls_to("create_issue") == []


def test_unresolved_issue_template_skips_generation() -> None:
    """Test that no issue is created without its template."""
    backend = MockBackend(failing={"create_issue_template"})
    report = Seeder(backend, default_catalog()).run()

    assert backend.calls_to("create_issue") == []
    assert "generate-issues" in [outcome.name for outcome in report.failures]
    assert len(backend.calls_to("create_label")) == 4


def test_invalid_catalog_creates_nothing(mock_backend: MockBackend) -> None:
    """Test that a dangling reference is reported before any remote call."""
    catalog = default_catalog()
    catalog.relations.append(RelationSpec("order-service", "nonexistent", "includes"))

    with pytest.raises(GraphError, match="unknown step component:nonexistent"):
        Seeder(mock_backend, catalog).run()
    assert mock_backend.calls == []


@pytest.mark.parametrize(
    "settings",
    [SeedSettings(project_count=0), SeedSettings(issue_count=-1)],
    ids=["no-projects", "negative-issue-count"],
)
def test_invalid_settings_create_nothing(mock_backend: MockBackend, settings: SeedSettings) -> None:
    """Test that invalid settings are rejected before any user is created."""
    with pytest.raises(ValueError):
        Seeder(mock_backend, default_catalog(), settings).run()
    assert mock_backend.calls_to("create_user") == []
