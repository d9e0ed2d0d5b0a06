from wtforms import StringField
from wtforms.validators import DataRequired, AnyOf

from inkwell.models import Comment
from inkwell.utils.validators import ApiForm, IsUUID, strip_value


class CommentForm(ApiForm):
    """读者评论表单 (无需登录)"""
    postId = StringField(validators=[IsUUID('Valid post ID required')])
    authorName = StringField(filters=[strip_value], validators=[DataRequired(message='Author name is required')])
    authorAvatarUrl = StringField(filters=[strip_value])
    text = StringField(filters=[strip_value], validators=[DataRequired(message='Comment text is required')])


class CommentStatusForm(ApiForm):
    status = StringField(validators=[AnyOf(Comment.STATUSES, message='Invalid status')])
