from flask import jsonify

from inkwell.blueprints.authors import authors_bp
from inkwell.blueprints.authors.forms import AuthorForm
from inkwell.exceptions import DependencyError
from inkwell.models import Author, Post
from inkwell.models.auth import default_avatar
from inkwell.schemas import AuthorRecord, to_api
from inkwell.services.post_service import PostService
from inkwell.utils.decorators import admin_required


def _author_payload(author, counts=None):
    counts = PostService.published_counts(Post.author_id) if counts is None else counts
    return to_api(AuthorRecord.from_model(author, post_count=counts.get(author.id, 0)))


@authors_bp.route('/')
def list_authors():
    counts = PostService.published_counts(Post.author_id)
    authors = Author.query.order_by(Author.name).all()
    return jsonify([_author_payload(a, counts) for a in authors])


@authors_bp.route('/<id>')
def get_author(id):
    author = Author.get_or_raise(id, 'Author not found')
    return jsonify(_author_payload(author))


@authors_bp.route('/', methods=['POST'])
@admin_required
def create_author():
    form = AuthorForm().validate_or_raise()
    author = Author(
        name=form.name.data,
        bio=form.bio.data,
        avatar_url=form.avatarUrl.data or default_avatar(form.name.data),
        followers=form.followers.data or 0,
    )
    author.save('Failed to create author')
    return jsonify({'message': 'Author created successfully', 'author': _author_payload(author)}), 201


@authors_bp.route('/<id>', methods=['PUT'])
@admin_required
def update_author(id):
    author = Author.get_or_raise(id, 'Author not found')
    form = AuthorForm().validate_or_raise()

    author.name = form.name.data
    author.bio = form.bio.data
    author.avatar_url = form.avatarUrl.data or author.avatar_url
    if form.followers.data is not None:
        author.followers = form.followers.data
    author.save('Failed to update author')
    return jsonify({'message': 'Author updated successfully', 'author': _author_payload(author)})


@authors_bp.route('/<id>', methods=['DELETE'])
@admin_required
def delete_author(id):
    author = Author.get_or_raise(id, 'Author not found')

    # 存在文章时拒绝删除，不做级联
    if PostService.has_posts(author_id=author.id):
        raise DependencyError(
            'Cannot delete author. This author has published posts. '
            'Please delete all posts by this author first.',
            'AUTHOR_HAS_POSTS'
        )

    author.delete('Failed to delete author')
    return jsonify({'message': 'Author deleted successfully'})
