"""
表单验证器
JSON 请求体同样交给 Flask-WTF 表单解析，校验失败统一转换为字段级错误列表
"""
import uuid
from datetime import datetime, timezone

from flask_wtf import FlaskForm
from wtforms import Field, IntegerField
from wtforms.validators import ValidationError as FieldValidationError

from inkwell.exceptions import ValidationError


class ApiForm(FlaskForm):
    """API 表单基类：Bearer Token 鉴权，无需 CSRF"""
    class Meta:
        csrf = False

    def validate_or_raise(self):
        if not self.validate():
            raise ValidationError(form_errors(self))
        return self


def form_errors(form):
    """{field: [msg]} -> [{field, msg}]，保持字段声明顺序"""
    errors = []
    for name, messages in form.errors.items():
        for msg in messages:
            errors.append({'field': name, 'msg': msg})
    return errors


def as_text(value):
    return None if value is None else str(value)


def strip_value(value):
    """JSON 中的非字符串值按字符串处理"""
    if value is None:
        return None
    return str(value).strip()


class IdListField(Field):
    """ID 列表字段，兼容 ["id", ...] 与 [{"id": ...}, ...] 两种写法"""

    def process_formdata(self, valuelist):
        ids = []
        for value in valuelist:
            if isinstance(value, dict):
                value = value.get('id')
            if value:
                ids.append(value)
        self.data = ids

    def _value(self):
        return ','.join(self.data or [])


def is_uuid(value):
    if not isinstance(value, str):
        return False
    try:
        uuid.UUID(value)
    except ValueError:
        return False
    return True


class UUIDList:
    """列表中的每个元素都必须是 UUID"""
    def __init__(self, message=None):
        self.message = message or 'Valid IDs required'

    def __call__(self, form, field):
        if any(not is_uuid(v) for v in field.data or []):
            raise FieldValidationError(self.message)


def parse_iso_datetime(value):
    """
    解析 ISO-8601 日期 (统一转换为 UTC naive datetime)
    无法解析时抛出 ValueError
    """
    if isinstance(value, datetime):
        parsed = value
    else:
        text = str(value).strip()
        if text.endswith('Z'):
            text = text[:-1] + '+00:00'
        parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def validate_iso_date(form, field):
    """验证 ISO 日期格式"""
    if field.data:
        try:
            parse_iso_datetime(field.data)
        except (TypeError, ValueError):
            raise FieldValidationError('Valid ISO date required')


class IsUUID:
    """单个外键字段必须是 UUID"""
    def __init__(self, message=None):
        self.message = message or 'Valid ID required'

    def __call__(self, form, field):
        if not is_uuid(field.data):
            raise FieldValidationError(self.message)


class OptionalIntegerField(IntegerField):
    """JSON 中的 null 与缺省等价"""

    def process_formdata(self, valuelist):
        valuelist = [v for v in valuelist if v not in (None, '')]
        if valuelist:
            super().process_formdata(valuelist)


class NonNegative:
    def __init__(self, message=None):
        self.message = message or 'Must be a non-negative integer'

    def __call__(self, form, field):
        if field.data is not None and field.data < 0:
            raise FieldValidationError(self.message)


# JSON 中的 false / null / 0 都视为假值
JSON_FALSE_VALUES = (False, 'false', '', None, 0, '0')
