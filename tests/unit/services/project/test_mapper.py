from unittest import mock

import pytest

from adoprovider.api import InvalidParameterValueException, ResourceNotFoundException
from adoprovider.api.core import Process, TeamProject
from adoprovider.services.project.mapper import (
    ProjectDescriptor,
    ProjectProperties,
    ReferenceNotFoundException,
    deserialize_project,
    expand_project,
    flatten_project,
    serialize_project,
)

TEMPLATE_ID = "T1"

TEST_PROPERTIES = ProjectProperties(
    project_name="Proj1",
    description="d",
    visibility="private",
    version_control="Git",
    work_item_template="Agile",
)


def create_core_client(processes: list[Process]) -> mock.Mock:
    """Returns a core client mock which knows the given processes."""
    catalog = {process["id"]: process for process in processes}

    def get_process_by_id(process_id):
        if process_id not in catalog:
            raise ResourceNotFoundException(f"The process {process_id} does not exist")
        return catalog[process_id]

    core = mock.Mock()
    core.get_processes.return_value = processes
    core.get_process_by_id.side_effect = get_process_by_id
    return core


@pytest.fixture
def core():
    return create_core_client([Process(id=TEMPLATE_ID, name="Agile")])


class TestExpandProject:
    def test_packs_capabilities(self, core):
        descriptor = expand_project(TEST_PROPERTIES, core)

        assert descriptor == ProjectDescriptor(
            name="Proj1",
            description="d",
            visibility="private",
            version_control="Git",
            process_template_id=TEMPLATE_ID,
        )
        assert serialize_project(descriptor) == {
            "name": "Proj1",
            "description": "d",
            "visibility": "private",
            "capabilities": {
                "processTemplate": {"templateTypeId": TEMPLATE_ID},
                "versioncontrol": {"sourceControlType": "Git"},
            },
        }
        core.get_processes.assert_called_once_with()

    def test_resolves_template_among_many(self):
        core = create_core_client(
            [
                Process(id="T0", name="Basic"),
                Process(id="T1", name="Agile"),
                Process(id="T2", name="Scrum"),
            ]
        )
        properties = ProjectProperties(
            project_name="Proj1", visibility="public", version_control="Tfvc", work_item_template="Scrum"
        )

        assert expand_project(properties, core).process_template_id == "T2"

    @pytest.mark.parametrize("template", ["Agile2", "agile", "AGILE", ""])
    def test_unknown_template_is_not_found(self, core, template):
        properties = ProjectProperties(
            project_name="Proj1", visibility="private", version_control="Git", work_item_template=template
        )

        with pytest.raises(ReferenceNotFoundException) as e:
            expand_project(properties, core)

        assert e.value.code == "ReferenceNotFound"
        assert e.value.value == template
        assert f"'{template}'" in e.value.message

    @pytest.mark.parametrize(
        "visibility,version_control",
        [("Private", "Git"), ("internal", "Git"), (None, "Git"), ("private", "git"), ("private", None)],
    )
    def test_rejects_unsupported_values(self, core, visibility, version_control):
        properties = ProjectProperties(
            project_name="Proj1",
            visibility=visibility,
            version_control=version_control,
            work_item_template="Agile",
        )

        with pytest.raises(InvalidParameterValueException):
            expand_project(properties, core)
        core.get_processes.assert_not_called()


class TestFlattenProject:
    def test_resolves_template_name(self, core):
        descriptor = ProjectDescriptor(
            id="P1",
            name="Proj1",
            description="d",
            visibility="public",
            version_control="Tfvc",
            process_template_id=TEMPLATE_ID,
        )

        assert flatten_project(descriptor, core) == ProjectProperties(
            project_name="Proj1",
            description="d",
            visibility="public",
            version_control="Tfvc",
            work_item_template="Agile",
        )
        core.get_process_by_id.assert_called_once_with(TEMPLATE_ID)

    def test_unknown_template_id_is_not_found(self, core):
        descriptor = ProjectDescriptor(name="Proj1", process_template_id="T9")

        with pytest.raises(ReferenceNotFoundException) as e:
            flatten_project(descriptor, core)

        assert e.value.value == "T9"
        assert isinstance(e.value.__cause__, ResourceNotFoundException)

    def test_missing_template_id_is_not_found(self, core):
        with pytest.raises(ReferenceNotFoundException):
            flatten_project(ProjectDescriptor(name="Proj1"), core)
        core.get_process_by_id.assert_not_called()


class TestRoundTrip:
    def test_flatten_expand(self, core):
        assert flatten_project(expand_project(TEST_PROPERTIES, core), core) == TEST_PROPERTIES

    def test_flatten_expand_through_wire(self, core):
        project = serialize_project(expand_project(TEST_PROPERTIES, core))
        assert flatten_project(deserialize_project(project), core) == TEST_PROPERTIES

    def test_wire_project_survives_flatten_and_expand(self, core):
        project = TeamProject(
            id="9d8f0fa5-7b4c-4c5e-a0b6-2ad0ac1ac3a4",
            name="Name",
            description="Description",
            visibility="public",
            capabilities={
                "versioncontrol": {"sourceControlType": "Git"},
                "processTemplate": {"templateTypeId": TEMPLATE_ID},
            },
        )

        properties = flatten_project(deserialize_project(project), core)
        descriptor = expand_project(properties, core)
        descriptor.id = project["id"]

        assert serialize_project(descriptor) == project

    def test_without_description(self, core):
        properties = ProjectProperties(
            project_name="Proj1", visibility="private", version_control="Git", work_item_template="Agile"
        )
        assert flatten_project(expand_project(properties, core), core) == properties


class TestDeserializeProject:
    def test_ignores_derived_fields(self):
        descriptor = deserialize_project(
            TeamProject(
                id="P1",
                name="Proj1",
                visibility="private",
                state="wellFormed",
                revision=12,
                url="https://dev.azure.com/org/_apis/projects/P1",
                capabilities={
                    "versioncontrol": {"sourceControlType": "Git", "gitEnabled": "True"},
                    "processTemplate": {"templateName": "Agile", "templateTypeId": TEMPLATE_ID},
                },
            )
        )

        assert descriptor == ProjectDescriptor(
            id="P1",
            name="Proj1",
            visibility="private",
            version_control="Git",
            process_template_id=TEMPLATE_ID,
        )

    def test_missing_capabilities(self):
        descriptor = deserialize_project(TeamProject(id="P1", name="Proj1"))

        assert descriptor.version_control is None
        assert descriptor.process_template_id is None
