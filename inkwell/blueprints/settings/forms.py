from wtforms import StringField
from wtforms.validators import DataRequired

from inkwell.utils.validators import ApiForm, strip_value


class SettingsForm(ApiForm):
    title = StringField(filters=[strip_value], validators=[DataRequired(message='Title is required')])
    description = StringField(filters=[strip_value], validators=[DataRequired(message='Description is required')])
    logoLightUrl = StringField(filters=[strip_value])
    logoDarkUrl = StringField(filters=[strip_value])
    twitterUrl = StringField(filters=[strip_value])
    githubUrl = StringField(filters=[strip_value])
