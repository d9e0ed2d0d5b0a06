from flask import Blueprint

# 注意：url_prefix 在 inkwell/__init__.py 注册时设置，这里不重复设置
subscribers_bp = Blueprint('subscribers', __name__)

from . import routes
