"""Backend interface for the component/issue tracking API."""

from abc import ABC, abstractmethod

from graph_seeder.models import (
    ComponentRef,
    IssuePrioritySpec,
    IssueStateSpec,
    IssueTemplateRef,
    IssueTypeSpec,
    InterfaceSpecificationRef,
    NamedSpec,
)


class Backend(ABC):
    """Abstract base class for seeding backends.

    Every method wraps exactly one remote operation. Implementations return the
    IDs the remote system assigned and raise RemoteError when the call fails.
    """

    @abstractmethod
    def create_user(self, username: str, display_name: str, email: str, is_admin: bool = False) -> str:
        """Create a user account and return its ID."""
        pass

    @abstractmethod
    def create_component_template(
        self,
        name: str,
        description: str,
        version_template_name: str,
        version_template_description: str,
        shape_type: str,
    ) -> str:
        """Create a component template and return its ID."""
        pass

    @abstractmethod
    def create_interface_specification_template(
        self, name: str, description: str, component_templates: list[str]
    ) -> str:
        """Create an interface specification template visible on the given component templates."""
        pass

    @abstractmethod
    def create_relation_template(self, name: str, description: str, from_ids: list[str], to_ids: list[str]) -> str:
        """Create a relation template and return its ID."""
        pass

    @abstractmethod
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
        """Create an issue template and return the IDs of it and of every option it defines."""
        pass

    @abstractmethod
    def create_component(
        self,
        name: str,
        description: str,
        template_id: str,
        version: str,
        version_name: str,
        version_description: str,
    ) -> ComponentRef:
        """Create a component with a single version."""
        pass

    @abstractmethod
    def create_interface_specification(
        self,
        component_id: str,
        template_id: str,
        name: str,
        description: str,
        versions: list[tuple[str, list[str]]],
    ) -> InterfaceSpecificationRef:
        """Create an interface specification with the given (version, parts) pairs."""
        pass

    @abstractmethod
    def add_interface(self, component_version_id: str, interface_specification_version_id: str) -> None:
        """Make an interface specification version visible on a component version."""
        pass

    @abstractmethod
    def create_relation(self, start_id: str, end_id: str, template_id: str) -> str:
        """Create a directed relation between two component versions."""
        pass

    @abstractmethod
    def create_project(self, name: str, description: str, repository_url: str) -> str:
        """Create a project and return its ID."""
        pass

    @abstractmethod
    def add_component_version_to_project(self, project_id: str, component_version_id: str) -> None:
        """Add a component version to a project."""
        pass

    @abstractmethod
    def list_components(self) -> list[str]:
        """Return the IDs of every component known to the remote system."""
        pass

    @abstractmethod
    def create_label(self, name: str, description: str, color: str, trackables: list[str]) -> str:
        """Create a label on the given trackables and return its ID."""
        pass

    @abstractmethod
    def create_issue(
        self,
        title: str,
        body: str,
        template_id: str,
        state_id: str,
        type_id: str,
        trackable_id: str,
    ) -> str:
        """Create an issue on a trackable and return its ID."""
        pass

    @abstractmethod
    def add_label_to_issue(self, issue_id: str, label_id: str) -> None:
        """Attach a label to an issue."""
        pass

    @abstractmethod
    def create_assignment(self, issue_id: str, user_id: str, assignment_type_id: str | None = None) -> str:
        """Assign a user to an issue and return the assignment ID."""
        pass

    @abstractmethod
    def create_issue_comment(self, issue_id: str, body: str, answers: str | None = None) -> str:
        """Comment on an issue, optionally answering an earlier comment."""
        pass

    @abstractmethod
    def create_issue_relation(
        self, issue_id: str, related_issue_id: str, relation_type_id: str | None = None
    ) -> str:
        """Create a directed relation between two issues."""
        pass
