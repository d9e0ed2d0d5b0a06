from wtforms import StringField, BooleanField
from wtforms.validators import Email, Length

from inkwell.utils.validators import ApiForm, JSON_FALSE_VALUES, strip_value


class UserForm(ApiForm):
    """管理员编辑用户"""
    name = StringField(filters=[strip_value],
                       validators=[Length(min=2, message='Name must be at least 2 characters')])
    email = StringField(filters=[strip_value], validators=[Email(message='Valid email required')])
    isVerified = BooleanField(false_values=JSON_FALSE_VALUES)
    isAdmin = BooleanField(false_values=JSON_FALSE_VALUES)
