from wtforms import IntegerField, StringField, TextAreaField
from wtforms.validators import InputRequired, Length, NumberRange, Optional, ValidationError

from ..api import JsonForm


class ApplyTemplateForm(JsonForm):
    project_id = IntegerField("Project", validators=[InputRequired()])
    template_id = IntegerField("Template", validators=[InputRequired()])
    name = StringField("Name", validators=[Optional(), Length(max=150)])
    description = TextAreaField("Description", validators=[Optional()])
    parent_id = IntegerField("Parent plot structure", validators=[Optional()])


class PlotStructureUpdateForm(JsonForm):
    name = StringField("Name", validators=[Length(max=150)])
    description = TextAreaField("Description", validators=[Optional()])
    order = IntegerField("Position", validators=[Optional(), NumberRange(min=0)])
    parent_id = IntegerField("Parent plot structure", validators=[Optional()])
    template_id = IntegerField("Template", validators=[Optional()])

    def validate_name(self, field: StringField) -> None:
        if field.raw_data and not (field.data or "").strip():
            raise ValidationError("Name cannot be blank.")


class SectionUpdateForm(JsonForm):
    title = StringField("Title", validators=[Length(max=200)])
    content = TextAreaField("Content")
    order = IntegerField("Position", validators=[Optional(), NumberRange(min=0)])

    def validate_title(self, field: StringField) -> None:
        if field.raw_data and not (field.data or "").strip():
            raise ValidationError("Title cannot be blank.")
