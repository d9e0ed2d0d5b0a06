from flask import Blueprint

# 注意：url_prefix 在 inkwell/__init__.py 注册时设置，这里不重复设置
pathfinder_bp = Blueprint('pathfinder', __name__)

from . import routes
