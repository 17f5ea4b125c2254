"""GraphQL backend implementation using httpx."""

from typing import Any

import structlog
from httpx import Client, HTTPError, HTTPStatusError

from graph_seeder.backend import Backend
from graph_seeder.backends import operations
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

logger = structlog.get_logger()


def _node_ids(connection: dict[str, Any]) -> list[str]:
    """Extract the IDs from a `{nodes: [{id}]}` connection."""
    return [node["id"] for node in connection["nodes"]]


class GraphQLBackend(Backend):
    """Backend talking to the tracker's GraphQL endpoint and its user REST endpoint."""

    def __init__(
        self,
        graphql_endpoint: str,
        users_endpoint: str,
        token: str,
        timeout: float | None = None,
    ) -> None:
        """Initialize GraphQL backend.

        Args:
            graphql_endpoint: URL of the GraphQL endpoint
            users_endpoint: URL of the REST endpoint creating user accounts
            token: API token, sent with every request
            timeout: Request timeout in seconds (None waits indefinitely)
        """
        self.graphql_endpoint = graphql_endpoint
        self.users_endpoint = users_endpoint
        self.token = token
        if not self.token:
            raise ValueError("API token required")

        logger.debug("Initializing GraphQL backend", graphql_endpoint=graphql_endpoint, users_endpoint=users_endpoint)
        self.client = Client(timeout=timeout)
        logger.info("GraphQL backend initialized", graphql_endpoint=graphql_endpoint)

    def __enter__(self) -> "GraphQLBackend":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self.client.close()

    def _post(self, operation: str, url: str, payload: dict[str, Any], authorization: str) -> Any:
        """POST a JSON payload and return the decoded response body."""
        try:
            response = self.client.post(url, json=payload, headers={"Authorization": authorization})
            response.raise_for_status()
        except HTTPStatusError as e:
            logger.error("Request rejected", operation=operation, status_code=e.response.status_code)
            raise RemoteError(operation, str(e), status_code=e.response.status_code) from e
        except HTTPError as e:
            logger.error("Request failed", operation=operation, error=str(e))
            raise RemoteError(operation, str(e)) from e

        try:
            return response.json()
        except ValueError as e:
            logger.error("Response is not JSON", operation=operation, error=str(e))
            raise RemoteError(operation, f"invalid JSON response: {e}") from e

    def _request(self, operation: str, document: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
        """Run a GraphQL operation and return its `data` object.

        Raises:
            RemoteError: On transport failures, non-2xx responses or GraphQL errors
        """
        logger.debug("Running GraphQL operation", operation=operation)
        body = self._post(
            operation,
            self.graphql_endpoint,
            {"query": document, "variables": variables or {}},
            self.token,
        )
        errors = body.get("errors")
        if errors:
            messages = "; ".join(error.get("message", str(error)) for error in errors)
            logger.error("GraphQL operation returned errors", operation=operation, errors=messages)
            raise RemoteError(operation, messages)
        return body["data"]

    def create_user(self, username: str, display_name: str, email: str, is_admin: bool = False) -> str:
        """Create a user through the REST endpoint."""
        logger.info("Creating user", username=username)
        body = self._post(
            "createUser",
            self.users_endpoint,
            {"username": username, "displayName": display_name, "email": email, "isAdmin": is_admin},
            f"Bearer {self.token}",
        )
        user_id = body["id"]
        logger.info("User created", username=username, user_id=user_id)
        return user_id

    def create_component_template(
        self,
        name: str,
        description: str,
        version_template_name: str,
        version_template_description: str,
        shape_type: str,
    ) -> str:
        data = self._request(
            "createComponentTemplate",
            operations.CREATE_COMPONENT_TEMPLATE,
            {
                "name": name,
                "description": description,
                "versionTemplateName": version_template_name,
                "versionTemplateDescription": version_template_description,
                "shapeType": shape_type,
            },
        )
        template_id = data["createComponentTemplate"]["componentTemplate"]["id"]
        logger.info("Created component template", name=name, template_id=template_id)
        return template_id

    def create_interface_specification_template(
        self, name: str, description: str, component_templates: list[str]
    ) -> str:
        data = self._request(
            "createInterfaceSpecificationTemplate",
            operations.CREATE_INTERFACE_SPECIFICATION_TEMPLATE,
            {"name": name, "description": description, "componentTemplates": component_templates},
        )
        template_id = data["createInterfaceSpecificationTemplate"]["interfaceSpecificationTemplate"]["id"]
        logger.info("Created interface specification template", name=name, template_id=template_id)
        return template_id

    def create_relation_template(self, name: str, description: str, from_ids: list[str], to_ids: list[str]) -> str:
        data = self._request(
            "createRelationTemplate",
            operations.CREATE_RELATION_TEMPLATE,
            {"name": name, "description": description, "fromId": from_ids, "toId": to_ids},
        )
        template_id = data["createRelationTemplate"]["relationTemplate"]["id"]
        logger.info("Created relation template", name=name, template_id=template_id)
        return template_id

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
        data = self._request(
            "createIssueTemplate",
            operations.CREATE_ISSUE_TEMPLATE,
            {
                "name": name,
                "description": description,
                "issueTypes": [
                    {"name": t.name, "description": t.description, "iconPath": t.icon_path} for t in issue_types
                ],
                "issueStates": [
                    {"name": s.name, "description": s.description, "isOpen": s.is_open} for s in issue_states
                ],
                "issuePriorities": [
                    {"name": p.name, "description": p.description, "value": p.value} for p in issue_priorities
                ],
                "relationTypes": [{"name": r.name, "description": r.description} for r in relation_types],
                "assignmentTypes": [{"name": a.name, "description": a.description} for a in assignment_types],
            },
        )
        template = data["createIssueTemplate"]["issueTemplate"]
        ref = IssueTemplateRef(
            id=template["id"],
            issue_types=_node_ids(template["issueTypes"]),
            issue_states=_node_ids(template["issueStates"]),
            issue_priorities=_node_ids(template["issuePriorities"]),
            relation_types=_node_ids(template["relationTypes"]),
            assignment_types=_node_ids(template["assignmentTypes"]),
        )
        logger.info("Created issue template", name=name, template_id=ref.id)
        return ref

    def create_component(
        self,
        name: str,
        description: str,
        template_id: str,
        version: str,
        version_name: str,
        version_description: str,
    ) -> ComponentRef:
        data = self._request(
            "createComponent",
            operations.CREATE_COMPONENT,
            {
                "name": name,
                "description": description,
                "templateId": template_id,
                "version": version,
                "versionName": version_name,
                "versionDescription": version_description,
            },
        )
        component = data["createComponent"]["component"]
        if not component["versions"]["nodes"]:
            raise RemoteError("createComponent", f"component {component['id']} was created without a version")
        ref = ComponentRef(component_id=component["id"], version_ids=_node_ids(component["versions"]))
        logger.info("Created component", name=name, component_id=ref.component_id, version_id=ref.version_id)
        return ref

    def create_interface_specification(
        self,
        component_id: str,
        template_id: str,
        name: str,
        description: str,
        versions: list[tuple[str, list[str]]],
    ) -> InterfaceSpecificationRef:
        data = self._request(
            "createInterfaceSpecification",
            operations.CREATE_INTERFACE_SPECIFICATION,
            {
                "component": component_id,
                "template": template_id,
                "name": name,
                "description": description,
                "versions": [
                    {
                        "version": version,
                        "description": "",
                        "name": f"{name}-{version}",
                        "templatedFields": [],
                        "parts": [{"name": part, "description": "", "templatedFields": []} for part in parts],
                    }
                    for version, parts in versions
                ],
            },
        )
        specification = data["createInterfaceSpecification"]["interfaceSpecification"]
        ref = InterfaceSpecificationRef(id=specification["id"], version_ids=_node_ids(specification["versions"]))
        if len(ref.version_ids) != len(versions):
            raise RemoteError(
                "createInterfaceSpecification",
                f"expected {len(versions)} versions of {name}, got {len(ref.version_ids)}",
            )
        logger.info(
            "Created interface specification",
            name=name,
            component_id=component_id,
            specification_id=ref.id,
            version_count=len(ref.version_ids),
        )
        return ref

    def add_interface(self, component_version_id: str, interface_specification_version_id: str) -> None:
        self._request(
            "addInterfaceSpecificationVersionToComponentVersion",
            operations.ADD_INTERFACE,
            {"component": component_version_id, "interface": interface_specification_version_id},
        )
        logger.info(
            "Added interface to component version",
            component_version_id=component_version_id,
            interface_specification_version_id=interface_specification_version_id,
        )

    def create_relation(self, start_id: str, end_id: str, template_id: str) -> str:
        data = self._request(
            "createRelation",
            operations.CREATE_RELATION,
            {"startId": start_id, "endId": end_id, "templateId": template_id},
        )
        relation_id = data["createRelation"]["relation"]["id"]
        logger.info("Created relation", start_id=start_id, end_id=end_id, relation_id=relation_id)
        return relation_id

    def create_project(self, name: str, description: str, repository_url: str) -> str:
        data = self._request(
            "createProject",
            operations.CREATE_PROJECT,
            {"name": name, "description": description, "repositoryURL": repository_url},
        )
        project_id = data["createProject"]["project"]["id"]
        logger.info("Created project", name=name, project_id=project_id)
        return project_id

    def add_component_version_to_project(self, project_id: str, component_version_id: str) -> None:
        self._request(
            "addComponentVersionToProject",
            operations.ADD_COMPONENT_VERSION_TO_PROJECT,
            {"projectId": project_id, "componentVersionId": component_version_id},
        )
        logger.info("Added component version to project", project_id=project_id, component_version_id=component_version_id)

    def list_components(self) -> list[str]:
        data = self._request("getComponents", operations.GET_COMPONENTS)
        component_ids = _node_ids(data["components"])
        logger.info("Listed components", count=len(component_ids))
        return component_ids

    def create_label(self, name: str, description: str, color: str, trackables: list[str]) -> str:
        data = self._request(
            "createLabel",
            operations.CREATE_LABEL,
            {"name": name, "description": description, "color": color, "trackables": trackables},
        )
        label_id = data["createLabel"]["label"]["id"]
        logger.info("Created label", name=name, label_id=label_id)
        return label_id

    def create_issue(
        self,
        title: str,
        body: str,
        template_id: str,
        state_id: str,
        type_id: str,
        trackable_id: str,
    ) -> str:
        data = self._request(
            "createIssue",
            operations.CREATE_ISSUE,
            {
                "title": title,
                "body": body,
                "template": template_id,
                "state": state_id,
                "type": type_id,
                "trackable": trackable_id,
            },
        )
        issue_id = data["createIssue"]["issue"]["id"]
        logger.info("Created issue", title=title, issue_id=issue_id)
        return issue_id

    def add_label_to_issue(self, issue_id: str, label_id: str) -> None:
        self._request("addLabelToIssue", operations.ADD_LABEL_TO_ISSUE, {"issue": issue_id, "label": label_id})
        logger.debug("Added label to issue", issue_id=issue_id, label_id=label_id)

    def create_assignment(self, issue_id: str, user_id: str, assignment_type_id: str | None = None) -> str:
        data = self._request(
            "createAssignment",
            operations.CREATE_ASSIGNMENT,
            {"issue": issue_id, "user": user_id, "assignmentType": assignment_type_id},
        )
        assignment_id = data["createAssignment"]["assignment"]["id"]
        logger.debug("Created assignment", issue_id=issue_id, user_id=user_id, assignment_id=assignment_id)
        return assignment_id

    def create_issue_comment(self, issue_id: str, body: str, answers: str | None = None) -> str:
        data = self._request(
            "createIssueComment",
            operations.CREATE_ISSUE_COMMENT,
            {"issue": issue_id, "body": body, "answers": answers},
        )
        comment_id = data["createIssueComment"]["issueComment"]["id"]
        logger.debug("Created issue comment", issue_id=issue_id, comment_id=comment_id, answers=answers)
        return comment_id

    def create_issue_relation(
        self, issue_id: str, related_issue_id: str, relation_type_id: str | None = None
    ) -> str:
        data = self._request(
            "createIssueRelation",
            operations.CREATE_ISSUE_RELATION,
            {"issue": issue_id, "relatedIssue": related_issue_id, "issueRelationType": relation_type_id},
        )
        relation_id = data["createIssueRelation"]["issueRelation"]["id"]
        logger.info(
            "Created issue relation", issue_id=issue_id, related_issue_id=related_issue_id, relation_id=relation_id
        )
        return relation_id
