import os
from dotenv import load_dotenv

# 加载 .env 环境变量
load_dotenv()
basedir = os.path.abspath(os.path.dirname(__file__))


def _env_bool(name, default):
    return os.environ.get(name, default).lower() in ('1', 'true', 'yes')


class Config:
    """基础配置类"""
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'hard-to-guess-string'

    # 数据库配置
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # JWT 配置 (有效期单位：秒)
    JWT_SECRET = os.environ.get('JWT_SECRET') or SECRET_KEY
    JWT_ALGORITHM = 'HS256'
    JWT_EXPIRES_IN = int(os.environ.get('JWT_EXPIRES_IN', 7 * 24 * 3600))

    # 演示环境的邮箱验证码
    EMAIL_VERIFICATION_CODE = os.environ.get('EMAIL_VERIFICATION_CODE', '324534')

    # 前端与 OAuth 身份服务
    FRONTEND_URL = os.environ.get('FRONTEND_URL', 'http://localhost:5174')
    SUPABASE_URL = os.environ.get('SUPABASE_URL', '')
    SUPABASE_ANON_KEY = os.environ.get('SUPABASE_ANON_KEY', '')
    OAUTH_TIMEOUT = 10.0

    # 跨域白名单，逗号分隔
    CORS_ORIGINS = [o.strip() for o in os.environ.get(
        'CORS_ORIGINS',
        'http://localhost:3000,http://localhost:5173,http://localhost:5174'
    ).split(',') if o.strip()]

    # 速率限制：每个 IP 在窗口内的最大请求数
    RATELIMIT_ENABLED = True
    RATELIMIT_MAX = int(os.environ.get('RATELIMIT_MAX', 100))
    RATELIMIT_WINDOW = int(os.environ.get('RATELIMIT_WINDOW', 15 * 60))

    # DeepSeek / AI 配置
    DEEPSEEK_API_KEY = os.environ.get('DEEPSEEK_API_KEY', 'sk-placeholder')
    DEEPSEEK_BASE_URL = os.environ.get('DEEPSEEK_BASE_URL', 'https://api.deepseek.com')
    # 如果未配置外部 AI Key，使用本地检索生成阅读路径
    AI_FALLBACK = _env_bool('AI_FALLBACK', 'true')

    # 文件上传配置
    UPLOAD_FOLDER = os.environ.get('UPLOAD_FOLDER') or os.path.join(basedir, 'inkwell', 'static', 'uploads')
    MAX_FILE_SIZE = int(os.environ.get('MAX_FILE_SIZE', 5 * 1024 * 1024))
    MAX_CONTENT_LENGTH = 16 * 1024 * 1024  # 整个请求体上限 16MB
    ALLOWED_FILE_TYPES = os.environ.get(
        'ALLOWED_FILE_TYPES', 'image/jpeg,image/png,image/gif,image/webp'
    ).split(',')

    # 云存储 (Cloudinary)
    CLOUDINARY_URL = os.environ.get('CLOUDINARY_URL')
    CLOUDINARY_CLOUD_NAME = os.environ.get('CLOUDINARY_CLOUD_NAME')
    CLOUDINARY_API_KEY = os.environ.get('CLOUDINARY_API_KEY')
    CLOUDINARY_API_SECRET = os.environ.get('CLOUDINARY_API_SECRET')
    USE_CLOUD_STORAGE = os.environ.get('USE_CLOUD_STORAGE', 'auto')

    # 缓存配置 (默认使用 SimpleCache，生产环境可改 Redis)
    CACHE_TYPE = os.environ.get('CACHE_TYPE', 'SimpleCache')
    CACHE_DEFAULT_TIMEOUT = 300

    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

    @staticmethod
    def init_app(app):
        # 确保上传目录与 SQLite 所在目录存在
        os.makedirs(app.config['UPLOAD_FOLDER'], exist_ok=True)
        os.makedirs(os.path.join(basedir, 'instance'), exist_ok=True)


class DevelopmentConfig(Config):
    """开发环境配置"""
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or \
        'sqlite:///' + os.path.join(basedir, 'instance', 'inkwell.db')


class ProductionConfig(Config):
    """生产环境配置"""
    DEBUG = False

    DATABASE_URL = os.environ.get('DATABASE_URL') or \
        'sqlite:///' + os.path.join(basedir, 'instance', 'inkwell_prod.db')
    # PostgreSQL URL 修正（托管平台常用 postgres://）
    if DATABASE_URL and DATABASE_URL.startswith('postgres://'):
        DATABASE_URL = DATABASE_URL.replace('postgres://', 'postgresql://', 1)

    SQLALCHEMY_DATABASE_URI = DATABASE_URL

    @classmethod
    def init_app(cls, app):
        Config.init_app(app)


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    JWT_SECRET = 'test-secret'
    CACHE_TYPE = 'NullCache'
    RATELIMIT_ENABLED = False
    DEEPSEEK_API_KEY = 'sk-placeholder'
    AI_FALLBACK = True
    USE_CLOUD_STORAGE = 'false'
    FRONTEND_URL = 'http://frontend.test'
    SUPABASE_URL = 'http://auth.test'


config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
