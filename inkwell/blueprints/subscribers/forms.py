from wtforms import StringField
from wtforms.validators import Email

from inkwell.utils.validators import ApiForm, strip_value


class SubscribeForm(ApiForm):
    email = StringField(filters=[strip_value], validators=[Email(message='Valid email required')])
