"""Tests for the build graph."""

from collections.abc import Mapping
from typing import Any

import pytest
from conftest import MockBackend

from graph_seeder.backend import Backend
from graph_seeder.errors import GraphError, RemoteError
from graph_seeder.graph import BuildGraph


def constant(value: Any):
    """Create an action returning a fixed value."""

    def action(backend: Backend, deps: Mapping[str, Any]) -> Any:
        return value

    return action


def failing(backend: Backend, deps: Mapping[str, Any]) -> Any:
    raise RemoteError("createThing", "rejected")


def test_order_keeps_insertion_order_of_ready_steps() -> None:
    """Test that independent steps run in the order they were added."""
    graph = BuildGraph()
    graph.add("c", constant(3))
    graph.add("a", constant(1))
    graph.add("b", constant(2))
    assert [step.name for step in graph.order()] == ["c", "a", "b"]


def test_order_puts_requirements_first() -> None:
    """Test that a step added before its requirement still runs after it."""
    graph = BuildGraph()
    graph.add("relation", constant("r"), requires=["start", "end"])
    graph.add("start", constant("s"))
    graph.add("end", constant("e"))

    names = [step.name for step in graph.order()]
    assert names.index("relation") > names.index("start")
    assert names.index("relation") > names.index("end")


def test_unknown_requirement() -> None:
    """Test that requiring a missing step is rejected."""
    graph = BuildGraph()
    graph.add("component", constant("c"), requires=["template"])
    with pytest.raises(GraphError, match="unknown step template"):
        graph.order()


def test_cycle() -> None:
    """Test that cycles are rejected."""
    graph = BuildGraph()
    graph.add("a", constant(1), requires=["b"])
    graph.add("b", constant(2), requires=["a"])
    with pytest.raises(GraphError, match="Cycle"):
        graph.order()


def test_duplicate_step() -> None:
    """Test that step names are unique."""
    graph = BuildGraph()
    graph.add("a", constant(1))
    with pytest.raises(GraphError, match="Duplicate step"):
        graph.add("a", constant(2))


def test_execute_passes_requirement_values(mock_backend: MockBackend) -> None:
    """Test that actions receive the backend and their requirements' outputs."""
    received: dict[str, Any] = {}

    def action(backend: Backend, deps: Mapping[str, Any]) -> str:
        received["backend"] = backend
        received["deps"] = dict(deps)
        return "done"

    graph = BuildGraph()
    graph.add("template", constant("template-1"))
    graph.add("unrelated", constant("x"))
    graph.add("component", action, requires=["template"])

    outcomes = graph.execute(mock_backend)

    assert received["backend"] is mock_backend
    assert received["deps"] == {"template": "template-1"}
    assert [outcome.value for outcome in outcomes] == ["template-1", "x", "done"]
    assert all(outcome.ok for outcome in outcomes)


def test_execute_skips_dependents_of_failed_steps(mock_backend: MockBackend) -> None:
    """Test that failures propagate as skips through the graph and nowhere else."""
    called: list[str] = []

    def record(name: str):
        def action(backend: Backend, deps: Mapping[str, Any]) -> str:
            called.append(name)
            return name

        return action

    graph = BuildGraph()
    graph.add("template", failing)
    graph.add("other-template", record("other-template"))
    graph.add("component", record("component"), requires=["template"])
    graph.add("relation", record("relation"), requires=["component", "other-template"])
    graph.add("project", record("project"), requires=["other-template"])

    outcomes = {outcome.name: outcome for outcome in graph.execute(mock_backend)}

    assert outcomes["template"].status == "failed"
    assert "rejected" in outcomes["template"].error
    assert outcomes["component"].status == "skipped"
    assert outcomes["relation"].status == "skipped"
    assert outcomes["relation"].error == "requires unresolved component"
    assert outcomes["project"].ok
    assert called == ["other-template", "project"]


def test_execute_propagates_programming_errors(mock_backend: MockBackend) -> None:
    """Test that exceptions other than RemoteError are not swallowed."""

    def broken(backend: Backend, deps: Mapping[str, Any]) -> Any:
        raise KeyError("id")

    graph = BuildGraph()
    graph.add("broken", broken)
    with pytest.raises(KeyError):
        graph.execute(mock_backend)
