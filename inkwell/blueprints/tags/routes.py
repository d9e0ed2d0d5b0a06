from flask import jsonify

from inkwell.blueprints.tags import tags_bp
from inkwell.blueprints.tags.forms import TagForm
from inkwell.exceptions import BadRequest
from inkwell.extensions import db
from inkwell.models import Tag, post_tags
from inkwell.schemas import TagRecord, to_api
from inkwell.utils.decorators import admin_required


@tags_bp.route('/')
def list_tags():
    tags = Tag.query.order_by(Tag.name).all()
    return jsonify(to_api([TagRecord.from_model(t) for t in tags]))


@tags_bp.route('/<id>')
def get_tag(id):
    return jsonify(to_api(TagRecord.from_model(Tag.get_or_raise(id, 'Tag not found'))))


@tags_bp.route('/', methods=['POST'])
@admin_required
def create_tag():
    form = TagForm().validate_or_raise()
    if Tag.query.filter_by(name=form.name.data).first():
        raise BadRequest('Tag already exists')

    tag = Tag(name=form.name.data).save('Failed to create tag')
    return jsonify({'message': 'Tag created successfully', 'tag': to_api(TagRecord.from_model(tag))}), 201


@tags_bp.route('/<id>', methods=['DELETE'])
@admin_required
def delete_tag(id):
    tag = Tag.get_or_raise(id, 'Tag not found')
    db.session.execute(post_tags.delete().where(post_tags.c.tag_id == tag.id))
    tag.delete('Failed to delete tag')
    return jsonify({'message': 'Tag deleted successfully'})
