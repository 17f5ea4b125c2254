"""Tests for the demo catalog and catalog files."""

from pathlib import Path

import pytest
import yaml

from graph_seeder.catalog import catalog_from_dict, catalog_to_dict, default_catalog, dump_catalog, load_catalog
from graph_seeder.errors import CatalogError
from graph_seeder.models import ComponentSpec, IssueTypeSpec


def test_default_catalog_contents() -> None:
    """Test the size of the demo data set."""
    catalog = default_catalog()

    assert [t.shape_type for t in catalog.component_templates] == ["RECT", "ELLIPSE", "HEXAGON"]
    assert len(catalog.interface_templates) == 1
    assert len(catalog.relation_templates) == 3
    assert [t.key for t in catalog.issue_templates] == ["default", "secondary", "empty"]
    assert len(catalog.components) == 7
    assert len(catalog.relations) == 8
    assert len(catalog.labels) == 4
    assert len(catalog.users) == 5


def test_default_issue_template_options() -> None:
    """Test the option sets of the default issue template."""
    template = default_catalog().issue_templates[0]

    assert len(template.issue_types) == 3
    assert [s.is_open for s in template.issue_states] == [True, False, False]
    assert [p.value for p in template.issue_priorities] == [1, 2, 3]
    assert len(template.relation_types) == 2
    assert len(template.assignment_types) == 3
    assert all(t.icon_path for t in template.issue_types)


def test_empty_issue_template_has_no_options() -> None:
    """Test the template used to exercise empty option sets."""
    empty = default_catalog().issue_templates[2]
    assert empty.issue_types == empty.issue_states == empty.assignment_types == []


def test_catalog_from_dict_builds_nested_entries() -> None:
    """Test parsing nested specs from plain data."""
    catalog = catalog_from_dict(
        {
            "components": [
                {
                    "key": "api",
                    "name": "Api",
                    "description": "",
                    "template": "microservice",
                    "version": "1",
                    "version_name": "api-v1",
                    "version_description": "",
                    "interfaces": [{"template": "rest", "name": "REST", "versions": ["1.0"]}],
                }
            ],
            "issue_templates": [
                {"key": "default", "name": "Default", "description": "", "issue_types": [{"name": "Bug"}]}
            ],
        }
    )

    assert isinstance(catalog.components[0], ComponentSpec)
    assert catalog.components[0].interfaces[0].versions == ["1.0"]
    assert catalog.issue_templates[0].issue_types == [IssueTypeSpec("Bug")]
    assert catalog.relations == []


def test_exported_catalog_loads_back(tmp_path: Path) -> None:
    """Test that the exported demo catalog is a valid catalog file."""
    path = tmp_path / "catalog.yaml"
    path.write_text(dump_catalog(default_catalog()))

    assert load_catalog(path) == default_catalog()


def test_unknown_key() -> None:
    """Test that typos in catalog files are reported."""
    with pytest.raises(CatalogError, match=r"catalog\.labels\[0\]\.colour: "):
        catalog_from_dict({"labels": [{"name": "bug", "description": "", "colour": "#fff"}]})


def test_missing_field() -> None:
    """Test that required fields are enforced."""
    with pytest.raises(CatalogError, match=r"catalog\.projects\[0\]"):
        catalog_from_dict({"projects": [{"name": "p"}]})


def test_section_must_be_a_list() -> None:
    """Test that list sections are validated."""
    with pytest.raises(CatalogError, match=r"catalog\.components: .*list"):
        catalog_from_dict({"components": {"key": "api"}})


def test_scalar_is_not_a_list() -> None:
    """Test that a single version is not accepted in place of a list of versions."""
    component = {
        "key": "api",
        "name": "Api",
        "description": "",
        "template": "microservice",
        "version": "1",
        "version_name": "api-v1",
        "version_description": "",
        "interfaces": [{"template": "rest", "name": "REST", "versions": "2.0", "parts": ["GET"]}],
    }
    with pytest.raises(CatalogError, match=r"catalog\.components\[0\]\.interfaces\[0\]\.versions: "):
        catalog_from_dict({"components": [component]})


def test_wrong_value_type() -> None:
    """Test that field types are checked."""
    with pytest.raises(CatalogError, match=r"catalog\.issue_templates\[0\]\.issue_states\[0\]\.is_open"):
        catalog_from_dict(
            {
                "issue_templates": [
                    {"key": "t", "name": "T", "description": "", "issue_states": [{"name": "Open", "is_open": "maybe"}]}
                ]
            }
        )


def test_invalid_yaml(tmp_path: Path) -> None:
    """Test that unreadable files raise CatalogError."""
    path = tmp_path / "catalog.yaml"
    path.write_text("components: [unclosed")
    with pytest.raises(CatalogError, match="Failed to load catalog"):
        load_catalog(path)


def test_missing_file(tmp_path: Path) -> None:
    """Test that a missing file raises CatalogError."""
    with pytest.raises(CatalogError):
        load_catalog(tmp_path / "missing.yaml")


def test_catalog_to_dict_is_plain_data() -> None:
    """Test that converted catalogs only contain YAML-safe values."""
    data = catalog_to_dict(default_catalog())
    assert yaml.safe_load(yaml.safe_dump(data)) == data
