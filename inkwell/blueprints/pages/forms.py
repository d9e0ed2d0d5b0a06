from wtforms import StringField
from wtforms.validators import DataRequired

from inkwell.utils.validators import ApiForm, strip_value


class PageForm(ApiForm):
    """静态页面表单，slug 可选 (缺省时由标题生成)"""
    title = StringField(filters=[strip_value], validators=[DataRequired(message='Title is required')])
    content = StringField(filters=[strip_value], validators=[DataRequired(message='Content is required')])
    slug = StringField(filters=[strip_value])
