from wtforms import StringField
from wtforms.validators import DataRequired

from inkwell.utils.validators import ApiForm, strip_value


class SnippetForm(ApiForm):
    name = StringField(filters=[strip_value], validators=[DataRequired(message='Name is required')])
    description = StringField(filters=[strip_value])
    icon = StringField(filters=[strip_value])
    content = StringField(validators=[DataRequired(message='Content is required')])
