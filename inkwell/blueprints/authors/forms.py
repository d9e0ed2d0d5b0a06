from wtforms import StringField
from wtforms.validators import DataRequired

from inkwell.utils.validators import ApiForm, NonNegative, OptionalIntegerField, strip_value


class AuthorForm(ApiForm):
    """作者表单"""
    name = StringField(filters=[strip_value], validators=[DataRequired(message='Name is required')])
    bio = StringField(filters=[strip_value], validators=[DataRequired(message='Bio is required')])
    avatarUrl = StringField(filters=[strip_value])
    followers = OptionalIntegerField(validators=[NonNegative('Followers must be a non-negative integer')])
