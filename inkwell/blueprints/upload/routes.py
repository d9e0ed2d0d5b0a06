from flask import current_app, jsonify, request, send_from_directory

from inkwell.blueprints.upload import upload_bp
from inkwell.services.upload_service import UploadService
from inkwell.utils.decorators import admin_required


@upload_bp.route('/image', methods=['POST'])
@admin_required
def upload_image():
    """上传图片 (multipart 字段 image)"""
    result = UploadService.store_image(request.files.get('image'))
    return jsonify({'message': 'Image uploaded successfully', **result})


@upload_bp.route('/image/<filename>', methods=['DELETE'])
@admin_required
def delete_image(filename):
    UploadService.delete_image(filename)
    return jsonify({'message': 'Image deleted successfully'})


@upload_bp.route('/files/<filename>')
def uploaded_file(filename):
    """本地存储模式下提供已上传图片"""
    return send_from_directory(current_app.config['UPLOAD_FOLDER'], filename)
