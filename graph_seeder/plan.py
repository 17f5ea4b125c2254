"""Turn a catalog into a build graph.

Templates are created once per run. Components, their interface
specifications, relations and the project are created once per project.
"""

from collections.abc import Mapping
from typing import Any

import structlog

from graph_seeder.backend import Backend
from graph_seeder.graph import BuildGraph, StepAction
from graph_seeder.models import (
    Catalog,
    ComponentRef,
    ComponentSpec,
    ComponentTemplateSpec,
    InterfaceSpec,
    InterfaceSpecificationRef,
    InterfaceTemplateSpec,
    IssueTemplateSpec,
    ProjectSpec,
    RelationSpec,
    RelationTemplateSpec,
)

logger = structlog.get_logger()


def component_template_step(key: str) -> str:
    return f"component-template:{key}"


def interface_template_step(key: str) -> str:
    return f"interface-template:{key}"


def relation_template_step(key: str) -> str:
    return f"relation-template:{key}"


def issue_template_step(key: str) -> str:
    return f"issue-template:{key}"


def component_step(key: str, prefix: str = "") -> str:
    return f"{prefix}component:{key}"


def _component_template_action(spec: ComponentTemplateSpec) -> StepAction:
    def action(backend: Backend, deps: Mapping[str, Any]) -> str:
        return backend.create_component_template(
            name=spec.name,
            description=spec.description,
            version_template_name=spec.version_template_name,
            version_template_description=spec.version_template_description,
            shape_type=spec.shape_type,
        )

    return action


def _interface_template_action(spec: InterfaceTemplateSpec) -> StepAction:
    def action(backend: Backend, deps: Mapping[str, Any]) -> str:
        component_templates = [deps[component_template_step(key)] for key in spec.component_templates]
        return backend.create_interface_specification_template(spec.name, spec.description, component_templates)

    return action


def _relation_template_action(spec: RelationTemplateSpec) -> StepAction:
    def action(backend: Backend, deps: Mapping[str, Any]) -> str:
        return backend.create_relation_template(
            name=spec.name,
            description=spec.description,
            from_ids=[deps[component_template_step(spec.from_template)]],
            to_ids=[deps[component_template_step(spec.to_template)]],
        )

    return action


def _issue_template_action(spec: IssueTemplateSpec) -> StepAction:
    def action(backend: Backend, deps: Mapping[str, Any]) -> Any:
        return backend.create_issue_template(
            name=spec.name,
            description=spec.description,
            issue_types=spec.issue_types,
            issue_states=spec.issue_states,
            issue_priorities=spec.issue_priorities,
            relation_types=spec.relation_types,
            assignment_types=spec.assignment_types,
        )

    return action


def _component_action(spec: ComponentSpec) -> StepAction:
    def action(backend: Backend, deps: Mapping[str, Any]) -> ComponentRef:
        return backend.create_component(
            name=spec.name,
            description=spec.description,
            template_id=deps[component_template_step(spec.template)],
            version=spec.version,
            version_name=spec.version_name,
            version_description=spec.version_description,
        )

    return action


def _interface_action(spec: InterfaceSpec, component: str) -> StepAction:
    def action(backend: Backend, deps: Mapping[str, Any]) -> InterfaceSpecificationRef:
        ref: ComponentRef = deps[component]
        return backend.create_interface_specification(
            component_id=ref.component_id,
            template_id=deps[interface_template_step(spec.template)],
            name=spec.name,
            description=spec.description,
            versions=[(version, list(spec.parts)) for version in spec.versions],
        )

    return action


def _interface_link_action(interface: str, component: str, index: int) -> StepAction:
    def action(backend: Backend, deps: Mapping[str, Any]) -> str:
        version_id = deps[interface].version_ids[index]
        backend.add_interface(deps[component].version_id, version_id)
        return version_id

    return action


def _relation_action(spec: RelationSpec, start: str, end: str) -> StepAction:
    def action(backend: Backend, deps: Mapping[str, Any]) -> str:
        return backend.create_relation(
            start_id=deps[start].version_id,
            end_id=deps[end].version_id,
            template_id=deps[relation_template_step(spec.template)],
        )

    return action


def _project_action(spec: ProjectSpec) -> StepAction:
    def action(backend: Backend, deps: Mapping[str, Any]) -> str:
        return backend.create_project(spec.name, spec.description, spec.repository_url)

    return action


def _project_version_action(project: str, component: str) -> StepAction:
    def action(backend: Backend, deps: Mapping[str, Any]) -> str:
        version_id = deps[component].version_id
        backend.add_component_version_to_project(deps[project], version_id)
        return version_id

    return action


def add_template_steps(graph: BuildGraph, catalog: Catalog) -> None:
    """Add component, interface, relation and issue template steps."""
    for spec in catalog.component_templates:
        graph.add(component_template_step(spec.key), _component_template_action(spec))

    for spec in catalog.interface_templates:
        graph.add(
            interface_template_step(spec.key),
            _interface_template_action(spec),
            requires=[component_template_step(key) for key in spec.component_templates],
        )

    for spec in catalog.relation_templates:
        requires = [component_template_step(spec.from_template)]
        if spec.to_template != spec.from_template:
            requires.append(component_template_step(spec.to_template))
        graph.add(relation_template_step(spec.key), _relation_template_action(spec), requires=requires)

    for spec in catalog.issue_templates:
        graph.add(issue_template_step(spec.key), _issue_template_action(spec))


def add_component_steps(graph: BuildGraph, catalog: Catalog, prefix: str = "") -> None:
    """Add a step per component and per interface specification attached to it.

    Every interface version is linked to the component version in its own step.
    """
    for spec in catalog.components:
        name = component_step(spec.key, prefix)
        graph.add(name, _component_action(spec), requires=[component_template_step(spec.template)])
        for interface in spec.interfaces:
            interface_name = f"{prefix}interface:{spec.key}:{interface.name}"
            graph.add(
                interface_name,
                _interface_action(interface, name),
                requires=[name, interface_template_step(interface.template)],
            )
            for index, version in enumerate(interface.versions):
                graph.add(
                    f"{prefix}interface-link:{spec.key}:{interface.name}:{version}",
                    _interface_link_action(interface_name, name, index),
                    requires=[interface_name, name],
                )


def add_relation_steps(graph: BuildGraph, catalog: Catalog, prefix: str = "") -> None:
    """Add a step per relation between two components."""
    for spec in catalog.relations:
        start = component_step(spec.start, prefix)
        end = component_step(spec.end, prefix)
        graph.add(
            f"{prefix}relation:{spec.start}->{spec.end}",
            _relation_action(spec, start, end),
            requires=[start, end, relation_template_step(spec.template)],
        )


def add_project_steps(graph: BuildGraph, catalog: Catalog, prefix: str = "") -> None:
    """Add a step per project and one per component version added to it."""
    for spec in catalog.projects:
        project = f"{prefix}project:{spec.name}"
        graph.add(project, _project_action(spec))
        for component in catalog.components:
            name = component_step(component.key, prefix)
            graph.add(
                f"{prefix}project-version:{spec.name}:{component.key}",
                _project_version_action(project, name),
                requires=[project, name],
            )


def build_plan(catalog: Catalog, project_count: int = 1, ignore_relations: bool = False) -> BuildGraph:
    """Build the graph of every creation step for a catalog.

    Args:
        catalog: Entities to create
        project_count: How many times components, relations and projects are created
        ignore_relations: If True, no relations between components are created

    Returns:
        BuildGraph ready to execute
    """
    if project_count < 1:
        raise ValueError(f"project_count must be at least 1, got {project_count}")

    graph = BuildGraph()
    add_template_steps(graph, catalog)
    for index in range(project_count):
        prefix = f"run-{index + 1}/" if project_count > 1 else ""
        add_component_steps(graph, catalog, prefix)
        if not ignore_relations:
            add_relation_steps(graph, catalog, prefix)
        add_project_steps(graph, catalog, prefix)

    logger.debug("Build plan created", steps=len(graph), project_count=project_count, ignore_relations=ignore_relations)
    return graph
