from functools import wraps
from flask_login import current_user, login_required

from inkwell.exceptions import PermissionDenied


def admin_required(f):
    """
    检查用户是否是管理员
    未登录返回 401，非管理员返回 403
    """
    @wraps(f)
    @login_required
    def decorated_function(*args, **kwargs):
        if not current_user.is_admin:
            raise PermissionDenied('Admin access required')
        return f(*args, **kwargs)
    return decorated_function
