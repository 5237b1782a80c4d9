import sys
from datetime import datetime
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from plotline import create_app
from plotline.config import TestConfig
from plotline.extensions import db
from plotline.models import PlotStructure, PlotStructureSection, PlotStructureTemplate, Project, User
from plotline.services.errors import InvalidInputError, NotFoundError
from plotline.services.materializer import instantiate
from plotline.services.plot_structures import (
    delete_plot_structure,
    list_plot_structures,
    update_plot_structure,
)
from plotline.services.section_content import get_section, list_sections, update_section

LONG_AGO = datetime(2000, 1, 1)


@pytest.fixture
def app_ctx():
    app = create_app(TestConfig)
    ctx = app.app_context()
    ctx.push()
    yield app
    db.session.remove()
    db.drop_all()
    ctx.pop()


@pytest.fixture
def project(app_ctx):
    user = User(email="editor@example.com", display_name="Editor")
    user.set_password("password123")
    project = Project(title="Salt Roads", owner=user)
    db.session.add_all([user, project])
    db.session.commit()
    return project


@pytest.fixture
def structure(project):
    template = PlotStructureTemplate.query.filter_by(template_type="hero_journey").one()
    return instantiate(project.id, template.id)


def test_content_update_leaves_title_and_order_alone(structure):
    section = list_sections(structure.id)[3]
    title, order = section.title, section.order
    section.updated_at = LONG_AGO
    db.session.commit()

    updated = update_section(section.id, {"content": "She meets the old cartographer."})

    assert updated.content == "She meets the old cartographer."
    assert updated.title == title
    assert updated.order == order
    assert updated.updated_at > LONG_AGO


def test_empty_update_still_advances_updated_at(structure):
    section = list_sections(structure.id)[0]
    section.updated_at = LONG_AGO
    db.session.commit()

    updated = update_section(section.id, {})

    assert updated.updated_at > LONG_AGO


def test_title_and_order_can_be_edited(structure):
    section = list_sections(structure.id)[0]

    updated = update_section(section.id, {"title": "  Harbor Life  ", "order": 20})

    assert updated.title == "Harbor Life"
    assert updated.order == 20
    assert updated.section_key == "ordinary_world"
    assert list_sections(structure.id)[-1].id == section.id


def test_null_content_is_stored_as_empty_text(structure):
    section = list_sections(structure.id)[0]
    update_section(section.id, {"content": "draft"})

    updated = update_section(section.id, {"content": None})

    assert updated.content == ""


def test_last_write_wins(structure):
    section = list_sections(structure.id)[0]

    update_section(section.id, {"content": "typed later, saved first"})
    update_section(section.id, {"content": "typed first, saved last"})

    assert get_section(section.id).content == "typed first, saved last"


def test_section_update_touches_structure_unless_suppressed(structure):
    section = list_sections(structure.id)[0]
    structure.updated_at = LONG_AGO
    db.session.commit()

    update_section(section.id, {"content": "autosaved"}, suppress_refresh=True)
    assert db.session.get(PlotStructure, structure.id).updated_at == LONG_AGO

    update_section(section.id, {"content": "saved by hand"})
    assert db.session.get(PlotStructure, structure.id).updated_at > LONG_AGO


def test_section_update_rejects_blank_title_and_unknown_fields(structure):
    section = list_sections(structure.id)[0]

    with pytest.raises(InvalidInputError) as excinfo:
        update_section(section.id, {"title": "   "})
    assert "title" in excinfo.value.errors

    with pytest.raises(InvalidInputError) as excinfo:
        update_section(section.id, {"section_key": "renamed"})
    assert "section_key" in excinfo.value.errors


def test_missing_section_and_structure_are_not_found(app_ctx):
    with pytest.raises(NotFoundError):
        update_section(999, {"content": "x"})
    with pytest.raises(NotFoundError):
        list_sections(999)


def test_delete_cascades_to_sections(structure):
    structure_id = structure.id
    assert PlotStructureSection.query.filter_by(plot_structure_id=structure_id).count() == 12

    assert delete_plot_structure(structure_id) is True

    assert PlotStructureSection.query.filter_by(plot_structure_id=structure_id).count() == 0
    assert db.session.get(PlotStructure, structure_id) is None
    with pytest.raises(NotFoundError):
        list_sections(structure_id)


def test_delete_missing_structure_returns_false(app_ctx):
    assert delete_plot_structure(404) is False


def test_deleting_parent_promotes_children(project, structure):
    template = PlotStructureTemplate.query.filter_by(template_type="seven_point").one()
    child = instantiate(project.id, template.id, parent_id=structure.id)
    child_id = child.id

    delete_plot_structure(structure.id)

    promoted = db.session.get(PlotStructure, child_id)
    assert promoted.parent_id is None
    assert len(list_sections(child_id)) == 7


def test_list_plot_structures_is_ordered(project, structure):
    template = PlotStructureTemplate.query.filter_by(template_type="freeform").one()
    later = instantiate(project.id, template.id)
    update_plot_structure(later.id, {"order": 0})

    assert [item.id for item in list_plot_structures(project.id)] == [later.id, structure.id]
    assert list_plot_structures(project.id + 100) == []


def test_update_renames_and_keeps_template(structure):
    template_id = structure.template_id

    updated = update_plot_structure(
        structure.id,
        {"name": "Return to Salt Roads", "description": "Second draft", "template_id": template_id},
    )

    assert updated.name == "Return to Salt Roads"
    assert updated.description == "Second draft"
    assert updated.template_id == template_id


def test_update_cannot_switch_template(structure):
    other = PlotStructureTemplate.query.filter_by(template_type="three_act").one()

    with pytest.raises(InvalidInputError) as excinfo:
        update_plot_structure(structure.id, {"template_id": other.id})

    assert "template_id" in excinfo.value.errors
    assert db.session.get(PlotStructure, structure.id).template_id != other.id


def test_parent_rules(project, structure):
    template = PlotStructureTemplate.query.filter_by(template_type="freeform").one()
    child = instantiate(project.id, template.id, parent_id=structure.id)
    grandchild = instantiate(project.id, template.id, parent_id=child.id)

    with pytest.raises(InvalidInputError):
        update_plot_structure(structure.id, {"parent_id": structure.id})
    with pytest.raises(InvalidInputError):
        update_plot_structure(structure.id, {"parent_id": grandchild.id})
    with pytest.raises(InvalidInputError):
        update_plot_structure(structure.id, {"parent_id": 9999})

    moved = update_plot_structure(grandchild.id, {"parent_id": None})
    assert moved.parent_id is None
