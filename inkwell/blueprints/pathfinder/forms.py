from wtforms import StringField
from wtforms.validators import DataRequired, Length

from inkwell.utils.validators import ApiForm, strip_value


class PathfinderForm(ApiForm):
    topic = StringField(filters=[strip_value],
                        validators=[DataRequired(message='Topic is required'),
                                    Length(max=200, message='Topic must be at most 200 characters')])
