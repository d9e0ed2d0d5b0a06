from flask import jsonify
from flask_login import current_user

from inkwell.blueprints.users import users_bp
from inkwell.blueprints.users.forms import UserForm
from inkwell.exceptions import BadRequest
from inkwell.models import Bookmark, PostLike, User
from inkwell.schemas import UserRecord, to_api
from inkwell.services.auth_service import normalize_email
from inkwell.utils.decorators import admin_required


@users_bp.route('/')
@admin_required
def list_users():
    users = User.query.order_by(User.created_at.desc()).all()
    return jsonify(to_api([UserRecord.from_model(u) for u in users]))


@users_bp.route('/<id>', methods=['PUT'])
@admin_required
def update_user(id):
    user = User.get_or_raise(id, 'User not found')
    form = UserForm().validate_or_raise()

    email = normalize_email(form.email.data)
    if User.query.filter(User.email == email, User.id != user.id).first():
        raise BadRequest('User already exists')

    user.name = form.name.data
    user.email = email
    user.is_verified = form.isVerified.data
    user.is_admin = form.isAdmin.data
    user.save('Failed to update user')
    return jsonify({'message': 'User updated successfully', 'user': to_api(UserRecord.from_model(user))})


@users_bp.route('/<id>', methods=['DELETE'])
@admin_required
def delete_user(id):
    if id == current_user.id:
        raise BadRequest('Cannot delete your own account')

    user = User.get_or_raise(id, 'User not found')
    Bookmark.query.filter_by(user_id=user.id).delete(synchronize_session=False)
    PostLike.query.filter_by(user_id=user.id).delete(synchronize_session=False)
    user.delete('Failed to delete user')
    return jsonify({'message': 'User deleted successfully'})
