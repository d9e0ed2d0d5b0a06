import os
import uuid

from PIL import Image, UnidentifiedImageError
from flask import current_app
from werkzeug.utils import secure_filename

# MIME -> 扩展名
IMAGE_EXTENSIONS = {
    'image/jpeg': '.jpg',
    'image/png': '.png',
    'image/gif': '.gif',
    'image/webp': '.webp',
}

# Pillow 识别出的格式必须与声明的 MIME 一致
PIL_FORMATS = {
    'image/jpeg': 'JPEG',
    'image/png': 'PNG',
    'image/gif': 'GIF',
    'image/webp': 'WEBP',
}


def allowed_mimetype(mimetype):
    """检查 MIME 是否在白名单内"""
    return mimetype in current_app.config['ALLOWED_FILE_TYPES']


def get_file_extension(filename, mimetype):
    """优先使用原始文件名的扩展名，无法识别时按 MIME 推断"""
    safe_name = secure_filename(filename or '')
    if '.' in safe_name:
        ext = '.' + safe_name.rsplit('.', 1)[1].lower()
        if ext in IMAGE_EXTENSIONS.values() or ext == '.jpeg':
            return ext
    return IMAGE_EXTENSIONS.get(mimetype, '')


def get_file_size(file):
    """读取上传流的字节数，不消耗流"""
    stream = file.stream
    stream.seek(0, os.SEEK_END)
    size = stream.tell()
    stream.seek(0)
    return size


def is_valid_image(file):
    """用 Pillow 校验文件内容确实是声明类型的图片"""
    try:
        with Image.open(file.stream) as img:
            fmt = img.format
            img.verify()
    except (UnidentifiedImageError, OSError, SyntaxError):
        return False
    finally:
        file.stream.seek(0)
    return fmt == PIL_FORMATS.get(file.mimetype)


def new_filename(ext):
    """生成唯一文件名防止覆盖"""
    return f'{uuid.uuid4()}{ext}'


def save_file(file, filename):
    """保存到本地上传目录，返回保存路径"""
    upload_folder = current_app.config['UPLOAD_FOLDER']
    os.makedirs(upload_folder, exist_ok=True)

    save_path = os.path.join(upload_folder, filename)
    file.save(save_path)
    current_app.logger.info(f'save_file: 文件保存成功 {save_path}')
    return save_path


def delete_file(filename):
    """删除本地上传文件；文件名经过 secure_filename 处理，防止路径穿越"""
    safe_name = secure_filename(filename or '')
    if not safe_name:
        return False

    full_path = os.path.join(current_app.config['UPLOAD_FOLDER'], safe_name)
    if not os.path.exists(full_path):
        return False
    os.remove(full_path)
    return True
