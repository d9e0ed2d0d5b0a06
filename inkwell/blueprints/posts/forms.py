from wtforms import StringField, BooleanField
from wtforms.validators import DataRequired, AnyOf

from inkwell.models import Post
from inkwell.utils.validators import (
    JSON_FALSE_VALUES, ApiForm, IdListField, IsUUID, NonNegative, OptionalIntegerField, UUIDList,
    parse_iso_datetime, strip_value, validate_iso_date,
)


class PostForm(ApiForm):
    """文章更新表单 (作者不可修改)"""
    title = StringField(filters=[strip_value], validators=[DataRequired(message='Title is required')])
    content = StringField(filters=[strip_value], validators=[DataRequired(message='Content is required')])
    excerpt = StringField(filters=[strip_value])
    imageUrl = StringField(filters=[strip_value])
    categoryId = StringField(validators=[IsUUID('Valid category ID required')])
    tags = IdListField(validators=[UUIDList('Valid tag IDs required')])
    readingTime = OptionalIntegerField(validators=[NonNegative('Reading time must be a non-negative integer')])
    featured = BooleanField(false_values=JSON_FALSE_VALUES)
    status = StringField(default=Post.STATUS_DRAFT,
                         validators=[AnyOf(Post.STATUSES, message='Invalid status')])
    publishedDate = StringField(validators=[validate_iso_date])

    def to_data(self):
        """表单 -> 服务层字段 (snake_case)"""
        return {
            'title': self.title.data,
            'content': self.content.data,
            'excerpt': self.excerpt.data or None,
            'image_url': self.imageUrl.data or None,
            'category_id': self.categoryId.data,
            'tag_ids': self.tags.data,
            'reading_time': self.readingTime.data,
            'featured': self.featured.data,
            'status': self.status.data,
            'published_date': parse_iso_datetime(self.publishedDate.data) if self.publishedDate.data else None,
        }


class PostCreateForm(PostForm):
    """文章创建表单"""
    authorId = StringField(validators=[IsUUID('Valid author ID required')])

    def to_data(self):
        data = super().to_data()
        data['author_id'] = self.authorId.data
        return data
