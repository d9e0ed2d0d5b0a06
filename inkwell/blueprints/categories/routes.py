from flask import jsonify

from inkwell.blueprints.categories import categories_bp
from inkwell.blueprints.categories.forms import CategoryForm
from inkwell.exceptions import DependencyError
from inkwell.models import Category
from inkwell.schemas import CategoryRecord, to_api
from inkwell.services.post_service import PostService
from inkwell.utils.decorators import admin_required


@categories_bp.route('/')
def list_categories():
    categories = Category.query.order_by(Category.name).all()
    return jsonify(to_api([CategoryRecord.from_model(c) for c in categories]))


@categories_bp.route('/<id>')
def get_category(id):
    category = Category.get_or_raise(id, 'Category not found')
    return jsonify(to_api(CategoryRecord.from_model(category)))


@categories_bp.route('/', methods=['POST'])
@admin_required
def create_category():
    form = CategoryForm().validate_or_raise()
    category = Category(
        name=form.name.data,
        description=form.description.data,
        image_url=form.imageUrl.data or None,
    )
    category.save('Failed to create category')
    return jsonify({
        'message': 'Category created successfully',
        'category': to_api(CategoryRecord.from_model(category)),
    }), 201


@categories_bp.route('/<id>', methods=['PUT'])
@admin_required
def update_category(id):
    category = Category.get_or_raise(id, 'Category not found')
    form = CategoryForm().validate_or_raise()

    category.name = form.name.data
    category.description = form.description.data
    category.image_url = form.imageUrl.data or None
    category.save('Failed to update category')
    return jsonify({
        'message': 'Category updated successfully',
        'category': to_api(CategoryRecord.from_model(category)),
    })


@categories_bp.route('/<id>', methods=['DELETE'])
@admin_required
def delete_category(id):
    category = Category.get_or_raise(id, 'Category not found')

    if PostService.has_posts(category_id=category.id):
        raise DependencyError(
            'Cannot delete category. This category has posts assigned to it. '
            'Please move or delete all posts in this category first.',
            'CATEGORY_HAS_POSTS'
        )

    category.delete('Failed to delete category')
    return jsonify({'message': 'Category deleted successfully'})
