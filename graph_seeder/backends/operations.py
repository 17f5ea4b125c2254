"""GraphQL documents sent by the GraphQL backend."""

CREATE_COMPONENT_TEMPLATE = """
mutation CreateComponentTemplate(
  $name: String!
  $description: String!
  $versionTemplateName: String!
  $versionTemplateDescription: String!
  $shapeType: ShapeType!
) {
  createComponentTemplate(
    input: {
      name: $name
      description: $description
      componentVersionTemplate: { name: $versionTemplateName, description: $versionTemplateDescription }
      shapeType: $shapeType
      stroke: {}
    }
  ) {
    componentTemplate {
      id
    }
  }
}
"""

CREATE_INTERFACE_SPECIFICATION_TEMPLATE = """
mutation CreateInterfaceSpecificationTemplate($name: String!, $description: String!, $componentTemplates: [ID!]!) {
  createInterfaceSpecificationTemplate(
    input: {
      name: $name
      description: $description
      canBeVisibleOnComponents: $componentTemplates
      canBeInvisibleOnComponents: $componentTemplates
      interfaceTemplate: { name: $name, description: $description }
      interfacePartTemplate: { name: $name, description: $description }
      interfaceSpecificationVersionTemplate: { name: $name, description: $description }
      interfaceDefinitionTemplate: { name: $name, description: $description }
      shapeType: CIRCLE
      stroke: {}
    }
  ) {
    interfaceSpecificationTemplate {
      id
    }
  }
}
"""

CREATE_RELATION_TEMPLATE = """
mutation CreateRelationTemplate($name: String!, $description: String!, $fromId: [ID!]!, $toId: [ID!]!) {
  createRelationTemplate(
    input: {
      relationConditions: [{ from: $fromId, to: $toId, interfaceSpecificationDerivationConditions: [] }]
      description: $description
      name: $name
      markerType: ARROW
    }
  ) {
    relationTemplate {
      id
    }
  }
}
"""

CREATE_ISSUE_TEMPLATE = """
mutation CreateIssueTemplate(
  $name: String!
  $description: String!
  $issueTypes: [IssueTypeInput!]!
  $issueStates: [IssueStateInput!]!
  $issuePriorities: [IssuePriorityInput!]!
  $relationTypes: [IssueRelationTypeInput!]!
  $assignmentTypes: [AssignmentTypeInput!]!
) {
  createIssueTemplate(
    input: {
      name: $name
      description: $description
      issueTypes: $issueTypes
      issueStates: $issueStates
      issuePriorities: $issuePriorities
      relationTypes: $relationTypes
      assignmentTypes: $assignmentTypes
    }
  ) {
    issueTemplate {
      id
      issueTypes { nodes { id } }
      issueStates { nodes { id } }
      issuePriorities { nodes { id } }
      relationTypes { nodes { id } }
      assignmentTypes { nodes { id } }
    }
  }
}
"""

CREATE_COMPONENT = """
mutation CreateComponent(
  $name: String!
  $description: String!
  $templateId: ID!
  $version: String!
  $versionName: String!
  $versionDescription: String!
) {
  createComponent(
    input: {
      name: $name
      description: $description
      template: $templateId
      versions: [
        { version: $version, name: $versionName, description: $versionDescription, templatedFields: [] }
      ]
      templatedFields: []
    }
  ) {
    component {
      id
      versions { nodes { id } }
    }
  }
}
"""

CREATE_INTERFACE_SPECIFICATION = """
mutation CreateInterfaceSpecification(
  $component: ID!
  $template: ID!
  $name: String!
  $description: String!
  $versions: [InterfaceSpecificationVersionInput!]!
) {
  createInterfaceSpecification(
    input: {
      component: $component
      template: $template
      name: $name
      description: $description
      versions: $versions
      templatedFields: []
    }
  ) {
    interfaceSpecification {
      id
      versions { nodes { id } }
    }
  }
}
"""

ADD_INTERFACE = """
mutation AddInterface($component: ID!, $interface: ID!) {
  addInterfaceSpecificationVersionToComponentVersion(
    input: { componentVersion: $component, interfaceSpecificationVersion: $interface, visible: true, invisible: false }
  ) {
    componentVersion {
      id
    }
  }
}
"""

CREATE_RELATION = """
mutation CreateRelation($startId: ID!, $endId: ID!, $templateId: ID!) {
  createRelation(input: { start: $startId, end: $endId, template: $templateId, templatedFields: [] }) {
    relation {
      id
    }
  }
}
"""

CREATE_PROJECT = """
mutation CreateProject($name: String!, $description: String!, $repositoryURL: URL!) {
  createProject(input: { name: $name, description: $description, repositoryURL: $repositoryURL }) {
    project {
      id
    }
  }
}
"""

ADD_COMPONENT_VERSION_TO_PROJECT = """
mutation AddComponentVersionToProject($projectId: ID!, $componentVersionId: ID!) {
  addComponentVersionToProject(input: { project: $projectId, componentVersion: $componentVersionId }) {
    project {
      id
    }
  }
}
"""

GET_COMPONENTS = """
query GetComponents {
  components {
    nodes {
      id
    }
  }
}
"""

CREATE_LABEL = """
mutation CreateLabel($trackables: [ID!]!, $color: String!, $name: String!, $description: String!) {
  createLabel(input: { trackables: $trackables, color: $color, name: $name, description: $description }) {
    label {
      id
    }
  }
}
"""

ADD_LABEL_TO_ISSUE = """
mutation AddLabelToIssue($issue: ID!, $label: ID!) {
  addLabelToIssue(input: { issue: $issue, label: $label }) {
    addedLabelEvent {
      id
    }
  }
}
"""

CREATE_ISSUE = """
mutation CreateIssue($state: ID!, $template: ID!, $title: String!, $body: String!, $type: ID!, $trackable: ID!) {
  createIssue(
    input: {
      state: $state
      template: $template
      title: $title
      body: $body
      type: $type
      templatedFields: []
      trackables: [$trackable]
    }
  ) {
    issue {
      id
    }
  }
}
"""

CREATE_ASSIGNMENT = """
mutation CreateAssignment($user: ID!, $issue: ID!, $assignmentType: ID) {
  createAssignment(input: { assignmentType: $assignmentType, user: $user, issue: $issue }) {
    assignment {
      id
    }
  }
}
"""

CREATE_ISSUE_COMMENT = """
mutation CreateIssueComment($body: String!, $issue: ID!, $answers: ID) {
  createIssueComment(input: { body: $body, issue: $issue, answers: $answers }) {
    issueComment {
      id
    }
  }
}
"""

CREATE_ISSUE_RELATION = """
mutation CreateIssueRelation($issue: ID!, $relatedIssue: ID!, $issueRelationType: ID) {
  createIssueRelation(input: { issue: $issue, relatedIssue: $relatedIssue, issueRelationType: $issueRelationType }) {
    issueRelation {
      id
    }
  }
}
"""
