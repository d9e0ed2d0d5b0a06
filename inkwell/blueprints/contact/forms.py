from wtforms import StringField
from wtforms.validators import DataRequired, Email, Length

from inkwell.utils.validators import ApiForm, strip_value


class ContactForm(ApiForm):
    """联系表单"""
    name = StringField(filters=[strip_value], validators=[DataRequired(message='Name is required')])
    email = StringField(filters=[strip_value], validators=[Email(message='Valid email required')])
    message = StringField(filters=[strip_value],
                          validators=[Length(min=10, message='Message must be at least 10 characters')])
