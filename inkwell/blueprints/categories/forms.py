from wtforms import StringField
from wtforms.validators import DataRequired

from inkwell.utils.validators import ApiForm, strip_value


class CategoryForm(ApiForm):
    name = StringField(filters=[strip_value], validators=[DataRequired(message='Name is required')])
    description = StringField(filters=[strip_value], validators=[DataRequired(message='Description is required')])
    imageUrl = StringField(filters=[strip_value])
