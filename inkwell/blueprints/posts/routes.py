from flask import jsonify, request

from inkwell.blueprints.posts import posts_bp
from inkwell.blueprints.posts.forms import PostForm, PostCreateForm
from inkwell.models import Post
from inkwell.schemas import PostRecord, to_api
from inkwell.services.discovery_service import DEFAULT_RELATED_LIMIT, SEARCH_PREVIEW_LIMIT
from inkwell.services.post_service import PostService, TRENDING_LIMIT
from inkwell.utils.decorators import admin_required


@posts_bp.route('/')
def list_posts():
    """文章列表 (按发布时间倒序)"""
    posts = PostService.list_posts(
        status=request.args.get('status', Post.STATUS_PUBLISHED),
        category=request.args.get('category'),
        author=request.args.get('author'),
        featured=request.args.get('featured') == 'true',
        search=request.args.get('search'),
        limit=request.args.get('limit', 10, type=int),
        offset=request.args.get('offset', 0, type=int),
    )
    return jsonify(to_api(posts))


@posts_bp.route('/search')
def search_posts():
    """全文检索已发布文章"""
    limit = request.args.get('limit', SEARCH_PREVIEW_LIMIT, type=int)
    return jsonify(to_api(PostService.search(request.args.get('q', ''), limit)))


@posts_bp.route('/trending')
def trending_posts():
    limit = request.args.get('limit', TRENDING_LIMIT, type=int)
    return jsonify(to_api(PostService.trending(limit)))


@posts_bp.route('/<key>')
def get_post(key):
    """按 ID 或 slug 获取文章，包含内容历史"""
    post = PostService.get_post(key)
    return jsonify(to_api(PostRecord.from_model(post, with_history=True)))


@posts_bp.route('/<key>/related')
def related_posts(key):
    limit = request.args.get('limit', DEFAULT_RELATED_LIMIT, type=int)
    return jsonify(to_api(PostService.related(key, limit)))


@posts_bp.route('/', methods=['POST'])
@admin_required
def create_post():
    form = PostCreateForm().validate_or_raise()
    post = PostService.create_post(form.to_data())
    return jsonify({'message': 'Post created successfully', 'id': post.id, 'slug': post.slug}), 201


@posts_bp.route('/<id>', methods=['PUT'])
@admin_required
def update_post(id):
    post = PostService.get_post(id)
    form = PostForm().validate_or_raise()
    post = PostService.update_post(post, form.to_data())
    return jsonify({'message': 'Post updated successfully', 'id': post.id, 'slug': post.slug})


@posts_bp.route('/<id>', methods=['DELETE'])
@admin_required
def delete_post(id):
    PostService.delete_post(PostService.get_post(id))
    return jsonify({'message': 'Post deleted successfully'})


@posts_bp.route('/<id>/like', methods=['POST'])
def like_post(id):
    likes = PostService.like_post(id)
    return jsonify({'message': 'Post liked successfully', 'likes': likes})
