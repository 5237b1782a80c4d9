from wtforms import BooleanField, IntegerField, StringField, TextAreaField
from wtforms.validators import InputRequired, Length, NumberRange, Optional, ValidationError

from ..api import JsonForm


def _not_blank(field: StringField, label: str) -> None:
    if not (field.data or "").strip():
        raise ValidationError(f"{label} cannot be blank.")


class ProjectForm(JsonForm):
    title = StringField("Project title", validators=[InputRequired(), Length(max=150)])
    description = TextAreaField("Short description", validators=[Optional(), Length(max=500)])
    is_archived = BooleanField("Archived")

    def validate_title(self, field: StringField) -> None:
        _not_blank(field, "Title")


class ChapterForm(JsonForm):
    title = StringField("Chapter title", validators=[InputRequired(), Length(max=150)])
    content = TextAreaField("Chapter text", validators=[Optional()])
    order = IntegerField("Position", validators=[Optional(), NumberRange(min=0)])
    is_draft = BooleanField("Draft", default=True)

    def validate_title(self, field: StringField) -> None:
        _not_blank(field, "Title")


class StoryBibleEntryForm(JsonForm):
    entry_type = StringField("Entry type", validators=[InputRequired(), Length(max=50)])
    title = StringField("Title", validators=[InputRequired(), Length(max=150)])
    content = TextAreaField("Notes", validators=[Optional()])
    category = StringField("Category", validators=[Optional(), Length(max=120)])

    def validate_entry_type(self, field: StringField) -> None:
        _not_blank(field, "Entry type")

    def validate_title(self, field: StringField) -> None:
        _not_blank(field, "Title")
