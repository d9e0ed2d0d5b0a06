from urllib.parse import quote

from flask_login import UserMixin
from werkzeug.security import generate_password_hash, check_password_hash

from inkwell.extensions import db
from .base import BaseModel


def default_avatar(name):
    """根据名称生成默认头像 URL"""
    return f"https://ui-avatars.com/api/?name={quote(name or '')}&background=6366f1&color=fff"


class User(UserMixin, BaseModel):
    """用户"""
    __tablename__ = 'users'

    name = db.Column(db.String(128), nullable=False)
    email = db.Column(db.String(255), unique=True, index=True, nullable=False)
    # OAuth 用户没有密码
    password_hash = db.Column(db.String(256), nullable=True)
    avatar_url = db.Column(db.String(512))

    is_verified = db.Column(db.Boolean, default=False, nullable=False)
    is_admin = db.Column(db.Boolean, default=False, nullable=False)

    oauth_provider = db.Column(db.String(32))
    oauth_id = db.Column(db.String(128))

    @property
    def password(self):
        raise AttributeError('password is not readable')

    @password.setter
    def password(self, password):
        self.password_hash = generate_password_hash(password) if password else None

    @property
    def has_password(self):
        return bool(self.password_hash)

    def verify_password(self, password):
        if not self.password_hash:
            return False
        return check_password_hash(self.password_hash, password)

    def __repr__(self):
        return f'<User {self.email}>'
