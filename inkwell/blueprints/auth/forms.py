from wtforms import StringField, PasswordField
from wtforms.validators import DataRequired, Email, Length

from inkwell.utils.validators import ApiForm, as_text, strip_value


class RegisterForm(ApiForm):
    """注册表单"""
    name = StringField(filters=[strip_value],
                       validators=[Length(min=2, message='Name must be at least 2 characters')])
    email = StringField(filters=[strip_value],
                        validators=[Email(message='Valid email required')])
    password = PasswordField(filters=[as_text], validators=[Length(min=6, message='Password must be at least 6 characters')])


class LoginForm(ApiForm):
    """登录表单"""
    email = StringField(filters=[strip_value],
                        validators=[Email(message='Valid email required')])
    password = PasswordField(filters=[as_text], validators=[DataRequired(message='Password required')])


class VerifyEmailForm(ApiForm):
    code = StringField(filters=[strip_value],
                       validators=[DataRequired(message='Verification code is required')])
