"""
云存储工具模块
文章配图上传到 Cloudinary；未配置或被禁用时由调用方回退到本地上传目录
"""
import cloudinary
import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError
from flask import current_app

CLOUD_FOLDER = 'inkwell/uploads'
EXTENSION_KEY = 'inkwell.cloudinary'


def _cloudinary_options(config):
    """从应用配置中提取 Cloudinary 参数，未配置返回 None"""
    if config.get('CLOUDINARY_URL'):
        return {'cloudinary_url': config['CLOUDINARY_URL']}

    keys = ('CLOUDINARY_CLOUD_NAME', 'CLOUDINARY_API_KEY', 'CLOUDINARY_API_SECRET')
    if all(config.get(k) for k in keys):
        return {
            'cloud_name': config['CLOUDINARY_CLOUD_NAME'],
            'api_key': config['CLOUDINARY_API_KEY'],
            'api_secret': config['CLOUDINARY_API_SECRET'],
            'secure': True,
        }
    return None


def init_cloud_storage(app):
    """在 app.extensions 中记录云存储是否可用"""
    app.extensions[EXTENSION_KEY] = False

    if app.config.get('USE_CLOUD_STORAGE') in ('false', '0'):
        app.logger.info('ℹ️ 已关闭云存储，图片保存到本地上传目录')
        return

    options = _cloudinary_options(app.config)
    if options is None:
        app.logger.info('ℹ️ 缺少 Cloudinary 凭证，图片保存到本地上传目录')
        return

    cloudinary.config(**options)
    app.extensions[EXTENSION_KEY] = True
    app.logger.info('✅ 图片将上传到 Cloudinary')


def is_cloud_storage_enabled():
    return current_app.extensions.get(EXTENSION_KEY, False)


def upload_to_cloud(file, public_id, folder=CLOUD_FOLDER):
    """
    上传图片

    Args:
        file: werkzeug FileStorage 或其 stream
        public_id: 不含目录的文件标识

    Returns:
        dict: {'url': HTTPS URL, 'public_id': 云存储ID}；失败返回 None
    """
    try:
        uploaded = cloudinary.uploader.upload(
            file,
            folder=folder,
            public_id=public_id,
            resource_type='image',
            overwrite=False,
        )
    except CloudinaryError as e:
        current_app.logger.error(f'❌ Cloudinary 上传失败 ({public_id}): {e}')
        return None

    url = uploaded.get('secure_url') or uploaded.get('url')
    current_app.logger.info(f'✅ 图片已上传: {url}')
    return {'url': url, 'public_id': uploaded.get('public_id')}


def delete_from_cloud(public_id, folder=CLOUD_FOLDER):
    """删除图片，返回是否成功"""
    try:
        outcome = cloudinary.uploader.destroy(f'{folder}/{public_id}', resource_type='image')
    except CloudinaryError as e:
        current_app.logger.error(f'❌ Cloudinary 删除失败 ({public_id}): {e}')
        return False

    if outcome.get('result') != 'ok':
        current_app.logger.warning(f'⚠️ Cloudinary 未删除图片: {public_id} ({outcome.get("result")})')
        return False

    current_app.logger.info(f'图片已从 Cloudinary 删除: {public_id}')
    return True
