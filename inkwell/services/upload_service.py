"""
图片上传服务
校验 (MIME 白名单、大小、Pillow 内容检查) 后存入 Cloudinary 或本地上传目录
"""
import os

from flask import current_app, url_for

from inkwell.exceptions import BadRequest, InkwellError, ResourceNotFound, StoreError
from inkwell.utils import cloud_storage, file_helper


class UploadService:
    @staticmethod
    def validate_image(file):
        if file is None or not file.filename:
            raise BadRequest('No file uploaded')

        if not file_helper.allowed_mimetype(file.mimetype):
            raise BadRequest('Invalid file type')

        max_size = current_app.config['MAX_FILE_SIZE']
        if file_helper.get_file_size(file) > max_size:
            raise InkwellError(f'File too large (max {max_size // (1024 * 1024)}MB)', code=413)

        if not file_helper.is_valid_image(file):
            raise BadRequest('Invalid file type')

    @staticmethod
    def store_image(file):
        """
        Returns:
            dict: {'url': 公开URL, 'filename': <uuid><ext>}
        """
        UploadService.validate_image(file)

        filename = file_helper.new_filename(
            file_helper.get_file_extension(file.filename, file.mimetype))

        if cloud_storage.is_cloud_storage_enabled():
            stem = os.path.splitext(filename)[0]
            result = cloud_storage.upload_to_cloud(file.stream, stem)
            if result is None:
                raise StoreError('Failed to upload image')
            return {'url': result['url'], 'filename': filename}

        try:
            file_helper.save_file(file, filename)
        except OSError as e:
            current_app.logger.error(f'❌ 本地保存失败: {e}')
            raise StoreError('Failed to upload image')

        url = url_for('upload.uploaded_file', filename=filename, _external=True)
        return {'url': url, 'filename': filename}

    @staticmethod
    def delete_image(filename):
        if cloud_storage.is_cloud_storage_enabled():
            stem = os.path.splitext(filename)[0]
            if not cloud_storage.delete_from_cloud(stem):
                raise StoreError('Failed to delete image')
            return

        try:
            deleted = file_helper.delete_file(filename)
        except OSError as e:
            current_app.logger.error(f'❌ 本地删除失败: {e}')
            raise StoreError('Failed to delete image')
        if not deleted:
            raise ResourceNotFound('Image not found')
