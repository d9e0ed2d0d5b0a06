from flask import jsonify, request

from inkwell.blueprints.comments import comments_bp
from inkwell.blueprints.comments.forms import CommentForm, CommentStatusForm
from inkwell.extensions import db
from inkwell.exceptions import ResourceNotFound
from inkwell.models import Comment, Post
from inkwell.models.auth import default_avatar
from inkwell.schemas import CommentRecord, to_api
from inkwell.utils.decorators import admin_required


@comments_bp.route('/post/<post_id>')
def post_comments(post_id):
    """某篇文章的评论，默认只返回已审核的"""
    status = request.args.get('status', 'approved')
    comments = (Comment.query
                .filter_by(post_id=post_id, status=status)
                .order_by(Comment.timestamp.desc())
                .all())
    return jsonify(to_api([CommentRecord.from_model(c) for c in comments]))


@comments_bp.route('/')
@admin_required
def list_comments():
    query = Comment.query
    status = request.args.get('status')
    if status:
        query = query.filter_by(status=status)
    comments = query.order_by(Comment.timestamp.desc()).all()
    return jsonify(to_api([CommentRecord.from_model(c) for c in comments]))


@comments_bp.route('/', methods=['POST'])
def create_comment():
    form = CommentForm().validate_or_raise()
    if db.session.get(Post, form.postId.data) is None:
        raise ResourceNotFound('Post not found')

    comment = Comment(
        post_id=form.postId.data,
        author_name=form.authorName.data,
        author_avatar_url=form.authorAvatarUrl.data or default_avatar(form.authorName.data),
        text=form.text.data,
        status='pending',
    )
    comment.save('Failed to create comment')
    return jsonify({
        'message': 'Comment submitted for moderation',
        'comment': to_api(CommentRecord.from_model(comment)),
    }), 201


@comments_bp.route('/<id>/status', methods=['PUT'])
@admin_required
def update_comment_status(id):
    comment = Comment.get_or_raise(id, 'Comment not found')
    form = CommentStatusForm().validate_or_raise()
    comment.status = form.status.data
    comment.save('Failed to update comment status')
    return jsonify({'message': 'Comment status updated successfully'})


@comments_bp.route('/<id>', methods=['DELETE'])
@admin_required
def delete_comment(id):
    Comment.get_or_raise(id, 'Comment not found').delete('Failed to delete comment')
    return jsonify({'message': 'Comment deleted successfully'})
