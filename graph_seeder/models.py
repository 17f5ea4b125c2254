"""Data models for graph-seeder."""

from dataclasses import dataclass, field
from typing import Any, Literal

from pydantic import ConfigDict
from pydantic.dataclasses import dataclass as pydantic_dataclass

OutcomeStatus = Literal["ok", "failed", "skipped"]

# Catalog entries are validated when built, from code or from a catalog file.
catalog_entry = pydantic_dataclass(config=ConfigDict(extra="forbid"))


@catalog_entry
class NamedSpec:
    """A name/description pair, used for relation and assignment types."""

    name: str
    description: str = ""


@catalog_entry
class IssueTypeSpec:
    """An issue type offered by an issue template."""

    name: str
    description: str = ""
    icon_path: str = ""


@catalog_entry
class IssueStateSpec:
    """An issue state offered by an issue template."""

    name: str
    description: str = ""
    is_open: bool = False


@catalog_entry
class IssuePrioritySpec:
    """An issue priority offered by an issue template."""

    name: str
    description: str = ""
    value: int = 0


@catalog_entry
class ComponentTemplateSpec:
    """A component template together with its version template."""

    key: str
    name: str
    description: str
    version_template_name: str
    version_template_description: str
    shape_type: str = "RECT"


@catalog_entry
class InterfaceTemplateSpec:
    """An interface specification template, visible on the given component templates."""

    key: str
    name: str
    description: str
    component_templates: list[str] = field(default_factory=list)


@catalog_entry
class RelationTemplateSpec:
    """A relation template allowing relations from one component template to another."""

    key: str
    name: str
    description: str
    from_template: str
    to_template: str


@catalog_entry
class IssueTemplateSpec:
    """An issue template and the option sets it defines."""

    key: str
    name: str
    description: str
    issue_types: list[IssueTypeSpec] = field(default_factory=list)
    issue_states: list[IssueStateSpec] = field(default_factory=list)
    issue_priorities: list[IssuePrioritySpec] = field(default_factory=list)
    relation_types: list[NamedSpec] = field(default_factory=list)
    assignment_types: list[NamedSpec] = field(default_factory=list)


@catalog_entry
class InterfaceSpec:
    """An interface specification attached to a component, with its versions and parts."""

    template: str
    name: str
    description: str = ""
    versions: list[str] = field(default_factory=list)
    parts: list[str] = field(default_factory=list)


@catalog_entry
class ComponentSpec:
    """A concrete component and the single version it is created with."""

    key: str
    name: str
    description: str
    template: str
    version: str
    version_name: str
    version_description: str
    interfaces: list[InterfaceSpec] = field(default_factory=list)


@catalog_entry
class RelationSpec:
    """A directed relation between two components."""

    start: str
    end: str
    template: str


@catalog_entry
class ProjectSpec:
    """A project that receives every component version."""

    name: str
    description: str
    repository_url: str


@catalog_entry
class LabelSpec:
    """A label that can be attached to issues."""

    name: str
    description: str
    color: str


@catalog_entry
class Catalog:
    """The complete set of demo entities a seeding run creates."""

    component_templates: list[ComponentTemplateSpec] = field(default_factory=list)
    interface_templates: list[InterfaceTemplateSpec] = field(default_factory=list)
    relation_templates: list[RelationTemplateSpec] = field(default_factory=list)
    issue_templates: list[IssueTemplateSpec] = field(default_factory=list)
    components: list[ComponentSpec] = field(default_factory=list)
    relations: list[RelationSpec] = field(default_factory=list)
    projects: list[ProjectSpec] = field(default_factory=list)
    labels: list[LabelSpec] = field(default_factory=list)
    users: list[str] = field(default_factory=list)
    generation_template: str = "default"


@dataclass
class ComponentRef:
    """IDs returned when a component is created."""

    component_id: str
    version_ids: list[str] = field(default_factory=list)

    @property
    def version_id(self) -> str:
        """The ID of the version the component was created with."""
        return self.version_ids[0]


@dataclass
class InterfaceSpecificationRef:
    """IDs returned when an interface specification is created."""

    id: str
    version_ids: list[str] = field(default_factory=list)


@dataclass
class IssueTemplateRef:
    """IDs of an issue template and of every option it generated."""

    id: str
    issue_types: list[str] = field(default_factory=list)
    issue_states: list[str] = field(default_factory=list)
    issue_priorities: list[str] = field(default_factory=list)
    relation_types: list[str] = field(default_factory=list)
    assignment_types: list[str] = field(default_factory=list)


@dataclass
class Outcome:
    """Result of one unit of work: a value on success, a reason otherwise."""

    name: str
    status: OutcomeStatus = "ok"
    value: Any = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == "ok"


@dataclass
class GeneratedComment:
    """A created issue comment and the comment it answers, if any."""

    id: str
    answers: str | None = None


@dataclass
class GeneratedIssue:
    """A created issue and everything attached to it."""

    id: str
    component_id: str
    title: str
    state_id: str
    type_id: str
    labels: list[str] = field(default_factory=list)
    assignments: list[str] = field(default_factory=list)
    comments: list[GeneratedComment] = field(default_factory=list)


@dataclass
class GeneratedIssueRelation:
    """A created relation between two issues."""

    id: str
    issue_id: str
    related_issue_id: str
    relation_type_id: str | None = None


@dataclass
class GenerationReport:
    """Everything the issue generator created, and what failed."""

    issues: list[GeneratedIssue] = field(default_factory=list)
    relations: list[GeneratedIssueRelation] = field(default_factory=list)
    failures: list[Outcome] = field(default_factory=list)


@dataclass
class SeedReport:
    """Summary of one seeding run."""

    users: list[Outcome] = field(default_factory=list)
    steps: list[Outcome] = field(default_factory=list)
    labels: list[Outcome] = field(default_factory=list)
    generation: GenerationReport = field(default_factory=GenerationReport)
    errors: list[Outcome] = field(default_factory=list)

    @property
    def failures(self) -> list[Outcome]:
        """Every outcome of the run that did not succeed."""
        outcomes = self.users + self.steps + self.labels + self.generation.failures + self.errors
        return [outcome for outcome in outcomes if not outcome.ok]

    @property
    def ok(self) -> bool:
        return not self.failures
