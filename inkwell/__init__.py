import logging
import colorlog
from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from config import config
from inkwell.extensions import db, migrate, login_manager, cache, limiter
from inkwell.exceptions import InkwellError
from inkwell.utils.cloud_storage import init_cloud_storage
from inkwell.utils.security import apply_cors, apply_security_headers

from inkwell import commands

API_PREFIX = '/api'


def create_app(config_name='default'):
    """Inkwell 应用工厂函数"""
    app = Flask(__name__)

    # 1. 加载配置
    app.config.from_object(config[config_name])
    config[config_name].init_app(app)
    app.url_map.strict_slashes = False

    # 2. 配置日志
    configure_logging(app)

    # 3. 初始化扩展
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    cache.init_app(app)
    limiter.init_app(app)
    init_cloud_storage(app)

    # 4. 注册蓝图 (Blueprints)
    register_blueprints(app)

    # 5. 注册全局错误处理
    register_error_handlers(app)

    # 6. 跨域与安全响应头
    register_response_hooks(app)

    # 7. 注册 CLI 命令
    register_commands(app)

    return app


def register_blueprints(app):
    """注册所有 API 蓝图，统一挂载在 /api 下"""
    from inkwell.blueprints.main import main_bp
    app.register_blueprint(main_bp, url_prefix=API_PREFIX)

    # 认证
    from inkwell.blueprints.auth import auth_bp
    app.register_blueprint(auth_bp, url_prefix=f'{API_PREFIX}/auth')

    # 内容
    from inkwell.blueprints.posts import posts_bp
    app.register_blueprint(posts_bp, url_prefix=f'{API_PREFIX}/posts')

    from inkwell.blueprints.authors import authors_bp
    app.register_blueprint(authors_bp, url_prefix=f'{API_PREFIX}/authors')

    from inkwell.blueprints.categories import categories_bp
    app.register_blueprint(categories_bp, url_prefix=f'{API_PREFIX}/categories')

    from inkwell.blueprints.tags import tags_bp
    app.register_blueprint(tags_bp, url_prefix=f'{API_PREFIX}/tags')

    from inkwell.blueprints.comments import comments_bp
    app.register_blueprint(comments_bp, url_prefix=f'{API_PREFIX}/comments')

    from inkwell.blueprints.pages import pages_bp
    app.register_blueprint(pages_bp, url_prefix=f'{API_PREFIX}/pages')

    from inkwell.blueprints.snippets import snippets_bp
    app.register_blueprint(snippets_bp, url_prefix=f'{API_PREFIX}/snippets')

    # 读者互动
    from inkwell.blueprints.subscribers import subscribers_bp
    app.register_blueprint(subscribers_bp, url_prefix=f'{API_PREFIX}/subscribers')

    from inkwell.blueprints.contact import contact_bp
    app.register_blueprint(contact_bp, url_prefix=f'{API_PREFIX}/contact')

    from inkwell.blueprints.reader import reader_bp
    app.register_blueprint(reader_bp, url_prefix=f'{API_PREFIX}/me')

    from inkwell.blueprints.pathfinder import pathfinder_bp
    app.register_blueprint(pathfinder_bp, url_prefix=f'{API_PREFIX}/pathfinder')

    # 站点管理
    from inkwell.blueprints.users import users_bp
    app.register_blueprint(users_bp, url_prefix=f'{API_PREFIX}/users')

    from inkwell.blueprints.settings import settings_bp
    app.register_blueprint(settings_bp, url_prefix=f'{API_PREFIX}/settings')

    from inkwell.blueprints.upload import upload_bp
    app.register_blueprint(upload_bp, url_prefix=f'{API_PREFIX}/upload')


def register_error_handlers(app):
    """所有错误统一返回 JSON"""

    @app.errorhandler(InkwellError)
    def handle_inkwell_error(e):
        return jsonify(e.to_dict()), e.code

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        if e.code == 404:
            return jsonify({'error': 'Route not found'}), 404
        return jsonify({'error': e.description}), e.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(e):
        app.logger.exception(f'❌ 未处理异常: {request.method} {request.path}')
        payload = {'error': 'Server error'}
        if app.debug:
            payload['detail'] = str(e)
        return jsonify(payload), 500


def register_response_hooks(app):
    @app.after_request
    def add_headers(response):
        apply_cors(response, app.config['CORS_ORIGINS'])
        return apply_security_headers(response)


def register_commands(app):
    """注册 Flask CLI 命令"""
    app.cli.add_command(commands.seed)
    app.cli.add_command(commands.forge)
    app.cli.add_command(commands.status)
    app.cli.add_command(commands.make_admin)


def configure_logging(app):
    """配置彩色控制台日志"""
    # 多次创建应用 (如测试) 时 logger 共享，避免重复挂载
    if any(isinstance(h.formatter, colorlog.ColoredFormatter) for h in app.logger.handlers):
        app.logger.setLevel(app.config.get('LOG_LEVEL', 'INFO'))
        return

    handler = logging.StreamHandler()
    handler.setLevel(app.config.get('LOG_LEVEL', 'INFO'))

    formatter = colorlog.ColoredFormatter(
        "%(log_color)s[%(asctime)s] %(levelname)-8s%(reset)s %(blue)s%(message)s",
        datefmt="%H:%M:%S",
        reset=True,
        log_colors={
            'DEBUG':    'cyan',
            'INFO':     'green',
            'WARNING':  'yellow',
            'ERROR':    'red',
            'CRITICAL': 'red,bg_white',
        },
        style='%'
    )
    handler.setFormatter(formatter)
    app.logger.addHandler(handler)
    app.logger.setLevel(app.config.get('LOG_LEVEL', 'INFO'))
