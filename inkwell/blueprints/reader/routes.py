from flask import jsonify
from flask_login import current_user, login_required

from inkwell.blueprints.reader import reader_bp
from inkwell.schemas import to_api
from inkwell.services.reader_service import ReaderService


@reader_bp.before_request
@login_required
def require_login():
    """阅读清单与点赞都需要登录"""
    return None


@reader_bp.route('/bookmarks')
def list_bookmarks():
    return jsonify(to_api(ReaderService.list_bookmarks(current_user)))


@reader_bp.route('/bookmarks/<post_id>', methods=['PUT'])
def add_bookmark(post_id):
    created = ReaderService.add_bookmark(current_user, post_id)
    return jsonify({'message': 'Post bookmarked', 'postId': post_id}), 201 if created else 200


@reader_bp.route('/bookmarks/<post_id>', methods=['DELETE'])
def remove_bookmark(post_id):
    ReaderService.remove_bookmark(current_user, post_id)
    return jsonify({'message': 'Bookmark removed', 'postId': post_id})


@reader_bp.route('/bookmarks', methods=['DELETE'])
def clear_bookmarks():
    removed = ReaderService.clear_bookmarks(current_user)
    return jsonify({'message': 'All bookmarks cleared', 'removed': removed})


@reader_bp.route('/likes')
def list_likes():
    return jsonify({'postIds': ReaderService.liked_post_ids(current_user)})


@reader_bp.route('/likes/<post_id>', methods=['POST'])
def toggle_like(post_id):
    liked, likes = ReaderService.toggle_like(current_user, post_id)
    return jsonify({'postId': post_id, 'liked': liked, 'likes': likes})
