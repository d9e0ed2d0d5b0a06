from flask import g
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_login import LoginManager
from flask_caching import Cache

from inkwell.utils.security import RateLimiter

# 初始化扩展对象 (暂不绑定 app)
db = SQLAlchemy()
migrate = Migrate()
cache = Cache()
login_manager = LoginManager()
limiter = RateLimiter()

# API 使用 Bearer Token 鉴权，不依赖会话
login_manager.session_protection = None


@login_manager.request_loader
def load_user_from_request(request):
    """Flask-Login 请求加载回调：从 Authorization 头解析 JWT"""
    header = request.headers.get('Authorization', '')
    if not header.startswith('Bearer '):
        return None

    from inkwell.exceptions import AuthError
    from inkwell.services.auth_service import AuthService
    try:
        return AuthService.user_from_token(header[len('Bearer '):].strip())
    except AuthError as e:
        # 记录失败原因，交给 unauthorized 回调返回
        g.auth_error = e.message
        return None


@login_manager.unauthorized_handler
def unauthorized():
    from inkwell.exceptions import AuthError
    raise AuthError(g.get('auth_error', 'Access token required'))
