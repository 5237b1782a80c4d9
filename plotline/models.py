from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

from flask_login import UserMixin
from werkzeug.security import check_password_hash, generate_password_hash

from .extensions import db, login_manager


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _isoformat(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


class User(UserMixin, db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    display_name = db.Column(db.String(120), nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)

    projects = db.relationship("Project", backref="owner", lazy=True, cascade="all, delete-orphan")

    def set_password(self, password: str) -> None:
        self.password_hash = generate_password_hash(password)

    def check_password(self, password: str) -> bool:
        return check_password_hash(self.password_hash, password)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "email": self.email,
            "display_name": self.display_name,
            "created_at": _isoformat(self.created_at),
        }

    def __repr__(self) -> str:  # pragma: no cover - repr for debugging
        return f"<User {self.email}>"


@login_manager.user_loader
def load_user(user_id: str) -> Optional["User"]:
    return db.session.get(User, int(user_id))


class Project(db.Model):
    __tablename__ = "projects"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(150), nullable=False)
    description = db.Column(db.Text, nullable=True)
    is_archived = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    owner_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)

    chapters = db.relationship(
        "Chapter",
        backref="project",
        lazy=True,
        cascade="all, delete-orphan",
        order_by="Chapter.order",
    )
    bible_entries = db.relationship(
        "StoryBibleEntry",
        backref="project",
        lazy=True,
        cascade="all, delete-orphan",
        order_by="StoryBibleEntry.title",
    )
    plot_structures = db.relationship(
        "PlotStructure",
        backref="project",
        lazy=True,
        cascade="all, delete-orphan",
        order_by="PlotStructure.order",
    )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "is_archived": self.is_archived,
            "owner_id": self.owner_id,
            "created_at": _isoformat(self.created_at),
            "updated_at": _isoformat(self.updated_at),
        }

    def __repr__(self) -> str:  # pragma: no cover
        return f"<Project {self.title}>"


class Chapter(db.Model):
    __tablename__ = "chapters"

    id = db.Column(db.Integer, primary_key=True)
    project_id = db.Column(db.Integer, db.ForeignKey("projects.id"), nullable=False, index=True)
    title = db.Column(db.String(150), nullable=False)
    content = db.Column(db.Text, nullable=False, default="")
    order = db.Column(db.Integer, nullable=False, default=1)
    is_draft = db.Column(db.Boolean, nullable=False, default=True)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "project_id": self.project_id,
            "title": self.title,
            "content": self.content or "",
            "order": self.order,
            "is_draft": self.is_draft,
            "created_at": _isoformat(self.created_at),
            "updated_at": _isoformat(self.updated_at),
        }

    def __repr__(self) -> str:  # pragma: no cover
        return f"<Chapter {self.order}: {self.title}>"


class StoryBibleEntry(db.Model):
    __tablename__ = "story_bible_entries"

    id = db.Column(db.Integer, primary_key=True)
    project_id = db.Column(db.Integer, db.ForeignKey("projects.id"), nullable=False, index=True)
    entry_type = db.Column(db.String(50), nullable=False, index=True)
    title = db.Column(db.String(150), nullable=False)
    content = db.Column(db.Text, nullable=False, default="")
    category = db.Column(db.String(120), nullable=True)
    tags = db.Column(db.JSON, nullable=False, default=list)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "project_id": self.project_id,
            "entry_type": self.entry_type,
            "title": self.title,
            "content": self.content or "",
            "category": self.category,
            "tags": list(self.tags or []),
            "created_at": _isoformat(self.created_at),
            "updated_at": _isoformat(self.updated_at),
        }

    def __repr__(self) -> str:  # pragma: no cover
        return f"<StoryBibleEntry {self.entry_type}: {self.title}>"


class PlotStructureTemplate(db.Model):
    __tablename__ = "plot_structure_templates"

    id = db.Column(db.Integer, primary_key=True)
    template_type = db.Column(db.String(50), nullable=False, index=True)
    name = db.Column(db.String(150), nullable=False)
    description = db.Column(db.Text, nullable=True)
    is_default = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    sections = db.relationship(
        "TemplateSection",
        backref="template",
        lazy=True,
        cascade="all, delete-orphan",
        order_by="TemplateSection.order",
    )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "template_type": self.template_type,
            "name": self.name,
            "description": self.description,
            "is_default": self.is_default,
            "sections": [section.to_dict() for section in self.sections],
            "created_at": _isoformat(self.created_at),
            "updated_at": _isoformat(self.updated_at),
        }

    def __repr__(self) -> str:  # pragma: no cover
        return f"<PlotStructureTemplate {self.template_type}>"


class TemplateSection(db.Model):
    __tablename__ = "template_sections"

    id = db.Column(db.Integer, primary_key=True)
    template_id = db.Column(
        db.Integer, db.ForeignKey("plot_structure_templates.id"), nullable=False, index=True
    )
    key = db.Column(db.String(100), nullable=False)
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=True)
    order = db.Column(db.Integer, nullable=False)

    __table_args__ = (
        db.UniqueConstraint("template_id", "key", name="uq_template_section_key"),
    )

    def to_dict(self) -> dict[str, Any]:
        return {
            "key": self.key,
            "title": self.title,
            "description": self.description or "",
            "order": self.order,
        }

    def __repr__(self) -> str:  # pragma: no cover
        return f"<TemplateSection {self.key} ({self.order})>"


class PlotStructure(db.Model):
    __tablename__ = "plot_structures"

    id = db.Column(db.Integer, primary_key=True)
    project_id = db.Column(db.Integer, db.ForeignKey("projects.id"), nullable=False, index=True)
    template_id = db.Column(
        db.Integer, db.ForeignKey("plot_structure_templates.id"), nullable=False, index=True
    )
    name = db.Column(db.String(150), nullable=False)
    description = db.Column(db.Text, nullable=True)
    parent_id = db.Column(db.Integer, db.ForeignKey("plot_structures.id"), nullable=True, index=True)
    order = db.Column(db.Integer, nullable=False, default=0)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    template = db.relationship("PlotStructureTemplate", lazy=True)
    parent = db.relationship(
        "PlotStructure",
        remote_side=[id],
        backref=db.backref("children", lazy=True, order_by="PlotStructure.order"),
    )
    sections = db.relationship(
        "PlotStructureSection",
        backref="plot_structure",
        lazy=True,
        cascade="all, delete-orphan",
        order_by="PlotStructureSection.order",
    )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "project_id": self.project_id,
            "template_id": self.template_id,
            "name": self.name,
            "description": self.description,
            "parent_id": self.parent_id,
            "order": self.order,
            "created_at": _isoformat(self.created_at),
            "updated_at": _isoformat(self.updated_at),
        }

    def __repr__(self) -> str:  # pragma: no cover
        return f"<PlotStructure {self.name} (project {self.project_id})>"


class PlotStructureSection(db.Model):
    __tablename__ = "plot_structure_sections"

    id = db.Column(db.Integer, primary_key=True)
    plot_structure_id = db.Column(
        db.Integer, db.ForeignKey("plot_structures.id"), nullable=False, index=True
    )
    section_key = db.Column(db.String(100), nullable=False)
    title = db.Column(db.String(200), nullable=False)
    content = db.Column(db.Text, nullable=False, default="")
    order = db.Column(db.Integer, nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    __table_args__ = (
        db.UniqueConstraint("plot_structure_id", "section_key", name="uq_plot_structure_section_key"),
    )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "plot_structure_id": self.plot_structure_id,
            "section_key": self.section_key,
            "title": self.title,
            "content": self.content or "",
            "order": self.order,
            "created_at": _isoformat(self.created_at),
            "updated_at": _isoformat(self.updated_at),
        }

    def __repr__(self) -> str:  # pragma: no cover
        return f"<PlotStructureSection {self.section_key} (structure {self.plot_structure_id})>"
