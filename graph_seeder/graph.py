"""Declarative build graph: creation steps and the steps whose output they require."""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

import structlog

from graph_seeder.backend import Backend
from graph_seeder.errors import GraphError, RemoteError
from graph_seeder.models import Outcome

logger = structlog.get_logger()

StepAction = Callable[[Backend, Mapping[str, Any]], Any]


@dataclass
class Step:
    """One creation step.

    The action receives the backend and a mapping from each required step's
    name to the value that step produced.
    """

    name: str
    action: StepAction
    requires: tuple[str, ...] = field(default_factory=tuple)


class BuildGraph:
    """A set of steps connected by "requires output of" edges."""

    def __init__(self) -> None:
        self._steps: dict[str, Step] = {}

    def __len__(self) -> int:
        return len(self._steps)

    def __contains__(self, name: object) -> bool:
        return name in self._steps

    def add(self, name: str, action: StepAction, requires: tuple[str, ...] | list[str] = ()) -> Step:
        """Add a step to the graph.

        Raises:
            GraphError: If a step with the same name already exists
        """
        if name in self._steps:
            raise GraphError(f"Duplicate step: {name}")
        step = Step(name=name, action=action, requires=tuple(requires))
        self._steps[name] = step
        logger.debug("Added step", step=name, requires=step.requires)
        return step

    def get(self, name: str) -> Step:
        return self._steps[name]

    def order(self) -> list[Step]:
        """Return the steps in dependency order.

        Among steps that are ready at the same time, the one added first comes
        first, so a graph built in a sensible order runs in that order.

        Raises:
            GraphError: If a step requires an unknown step or the graph has a cycle
        """
        for step in self._steps.values():
            for requirement in step.requires:
                if requirement not in self._steps:
                    raise GraphError(f"Step {step.name} requires unknown step {requirement}")

        remaining = {name: set(step.requires) for name, step in self._steps.items()}
        ordered: list[Step] = []
        while remaining:
            ready = next((name for name, requires in remaining.items() if not requires), None)
            if ready is None:
                raise GraphError(f"Cycle between steps: {sorted(remaining)}")
            ordered.append(self._steps[ready])
            del remaining[ready]
            for requires in remaining.values():
                requires.discard(ready)
        return ordered

    def execute(self, backend: Backend) -> list[Outcome]:
        """Run every step in dependency order.

        A step whose action raises RemoteError fails; every step requiring a
        failed or skipped step is skipped without running. Any other exception
        propagates.

        Returns:
            One Outcome per step, in execution order
        """
        ordered = self.order()
        logger.info("Executing build graph", steps=len(ordered))

        values: dict[str, Any] = {}
        outcomes: list[Outcome] = []
        unresolved: set[str] = set()
        for step in ordered:
            missing = [requirement for requirement in step.requires if requirement in unresolved]
            if missing:
                logger.warning("Skipping step", step=step.name, missing=missing)
                unresolved.add(step.name)
                outcomes.append(Outcome(step.name, "skipped", error=f"requires unresolved {', '.join(missing)}"))
                continue

            try:
                value = step.action(backend, {requirement: values[requirement] for requirement in step.requires})
            except RemoteError as e:
                logger.error("Step failed", step=step.name, error=str(e))
                unresolved.add(step.name)
                outcomes.append(Outcome(step.name, "failed", error=str(e)))
                continue

            values[step.name] = value
            outcomes.append(Outcome(step.name, "ok", value=value))

        failed = sum(1 for outcome in outcomes if not outcome.ok)
        logger.info("Build graph executed", steps=len(outcomes), unresolved=failed)
        return outcomes
