from flask import jsonify

from inkwell.blueprints.pages import pages_bp
from inkwell.blueprints.pages.forms import PageForm
from inkwell.exceptions import BadRequest, ResourceNotFound
from inkwell.models import Page
from inkwell.models.base import generate_uuid
from inkwell.schemas import PageRecord, to_api
from inkwell.services.post_service import unique_slug
from inkwell.utils.decorators import admin_required


@pages_bp.route('/')
def list_pages():
    pages = Page.query.order_by(Page.title).all()
    return jsonify(to_api([PageRecord.from_model(p) for p in pages]))


@pages_bp.route('/<slug>')
def get_page(slug):
    page = Page.query.filter_by(slug=slug).first()
    if page is None:
        raise ResourceNotFound('Page not found')
    return jsonify(to_api(PageRecord.from_model(page)))


@pages_bp.route('/', methods=['POST'])
@admin_required
def create_page():
    form = PageForm().validate_or_raise()
    page = Page(id=generate_uuid(), title=form.title.data, content=form.content.data)
    page.slug = unique_slug(Page, form.slug.data or form.title.data, page.id)
    page.save('Failed to create page')
    return jsonify({'message': 'Page created successfully', 'page': to_api(PageRecord.from_model(page))}), 201


@pages_bp.route('/<id>', methods=['PUT'])
@admin_required
def update_page(id):
    page = Page.get_or_raise(id, 'Page not found')
    form = PageForm().validate_or_raise()

    page.title = form.title.data
    page.content = form.content.data
    if form.slug.data:
        page.slug = unique_slug(Page, form.slug.data, page.id, exclude_id=page.id)
    page.save('Failed to update page')
    return jsonify({'message': 'Page updated successfully', 'page': to_api(PageRecord.from_model(page))})


@pages_bp.route('/<id>', methods=['DELETE'])
@admin_required
def delete_page(id):
    page = Page.get_or_raise(id, 'Page not found')
    if not page.is_deletable:
        raise BadRequest('This page cannot be deleted')

    page.delete('Failed to delete page')
    return jsonify({'message': 'Page deleted successfully'})
