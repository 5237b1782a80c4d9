import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from plotline import create_app
from plotline.config import TestConfig
from plotline.extensions import db
from plotline.models import (
    PlotStructure,
    PlotStructureSection,
    PlotStructureTemplate,
    Project,
    TemplateSection,
    User,
)
from plotline.services import materializer
from plotline.services.errors import InvalidInputError, InvalidTemplateError, NotFoundError
from plotline.services.section_content import list_sections, update_section
from plotline.services.template_catalog import create_template, list_templates


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
    user = User(email="writer@example.com", display_name="Writer")
    user.set_password("password123")
    project = Project(id=42, title="Lighthouse Keepers", owner=user)
    db.session.add_all([user, project])
    db.session.commit()
    return project


def _template_named(name):
    return PlotStructureTemplate.query.filter_by(name=name).one()


def test_every_builtin_template_materializes_completely(project):
    for template in list_templates():
        structure = materializer.instantiate(project.id, template.id)
        sections = list_sections(structure.id)

        assert len(sections) == len(template.sections)
        assert {section.section_key for section in sections} == {row.key for row in template.sections}
        assert [(s.section_key, s.order) for s in sections] == [(row.key, row.order) for row in template.sections]
        assert all(section.content == "" for section in sections)


def test_three_act_scenario(project):
    three_act = _template_named("Three Act Structure")

    structure = materializer.instantiate(42, three_act.id)

    assert structure.template_id == three_act.id
    assert structure.project_id == 42
    assert structure.name == "Three Act Structure"

    sections = list_sections(structure.id)
    assert len(sections) == 9
    assert [section.order for section in sections] == list(range(1, 10))
    assert all(section.content == "" for section in sections)

    setup = next(section for section in sections if section.section_key == "act1_setup")
    update_section(setup.id, {"content": "Opening scene."})

    refreshed = {section.section_key: section.content for section in list_sections(structure.id)}
    assert refreshed.pop("act1_setup") == "Opening scene."
    assert set(refreshed.values()) == {""}


def test_failure_part_way_through_leaves_no_rows(monkeypatch, project):
    template = create_template(
        "test_three",
        "Three Beats",
        [
            {"key": "one", "title": "One", "order": 1},
            {"key": "two", "title": "Two", "order": 2},
            {"key": "three", "title": "Three", "order": 3},
        ],
    )
    original_build = materializer._build_section
    calls = []

    def failing_build(structure, definition):
        calls.append(definition.key)
        if len(calls) == 2:
            raise RuntimeError("store went away")
        return original_build(structure, definition)

    monkeypatch.setattr(materializer, "_build_section", failing_build)

    with pytest.raises(RuntimeError):
        materializer.instantiate(project.id, template.id)

    assert calls == ["one", "two"]
    assert PlotStructure.query.count() == 0
    assert PlotStructureSection.query.count() == 0


def test_zero_section_template_creates_empty_structure(project):
    template = create_template("blank", "Blank Page", [])

    structure = materializer.instantiate(project.id, template.id)

    assert structure.id is not None
    assert list_sections(structure.id) == []


def test_custom_name_and_description(project):
    template = _template_named("Fichtean Curve")

    structure = materializer.instantiate(
        project.id,
        template.id,
        name="  Book Two crises  ",
        description="Escalation plan",
    )

    assert structure.name == "Book Two crises"
    assert structure.description == "Escalation plan"


def test_order_is_next_available_among_siblings(project):
    freytag = _template_named("Freytag's Pyramid")
    circle = _template_named("Dan Harmon's Story Circle")

    first = materializer.instantiate(project.id, freytag.id)
    second = materializer.instantiate(project.id, circle.id)
    child = materializer.instantiate(project.id, circle.id, parent_id=first.id)
    second_child = materializer.instantiate(project.id, freytag.id, parent_id=first.id)

    assert (first.order, second.order) == (1, 2)
    assert (child.order, second_child.order) == (1, 2)
    assert child.parent_id == first.id


def test_unknown_template_is_not_found(project):
    with pytest.raises(NotFoundError):
        materializer.instantiate(project.id, 12345)
    assert PlotStructure.query.count() == 0


def test_parent_from_another_project_is_rejected(project):
    other = Project(title="Elsewhere", owner=project.owner)
    db.session.add(other)
    db.session.commit()
    template = _template_named("Seven-Point Story Structure")
    foreign_parent = materializer.instantiate(other.id, template.id)

    with pytest.raises(InvalidInputError) as excinfo:
        materializer.instantiate(project.id, template.id, parent_id=foreign_parent.id)

    assert "parent_id" in excinfo.value.errors
    assert PlotStructure.query.filter_by(project_id=project.id).count() == 0


def test_missing_parent_is_a_field_error(project):
    template = _template_named("Freeform Structure")

    with pytest.raises(InvalidInputError) as excinfo:
        materializer.instantiate(project.id, template.id, parent_id=9999)

    assert "parent_id" in excinfo.value.errors
    assert PlotStructure.query.count() == 0


def test_incomplete_template_row_is_invalid(project):
    template = PlotStructureTemplate(template_type="legacy", name="Legacy")
    template.sections = [
        TemplateSection(key="start", title="Start", order=1),
        TemplateSection(key="middle", title="", order=2),
    ]
    db.session.add(template)
    db.session.commit()

    with pytest.raises(InvalidTemplateError):
        materializer.instantiate(project.id, template.id)
    assert PlotStructure.query.count() == 0
