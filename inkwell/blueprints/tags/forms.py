from wtforms import StringField
from wtforms.validators import DataRequired

from inkwell.utils.validators import ApiForm, strip_value


class TagForm(ApiForm):
    name = StringField(filters=[strip_value], validators=[DataRequired(message='Tag name is required')])
