from flask import jsonify

from inkwell.blueprints.subscribers import subscribers_bp
from inkwell.blueprints.subscribers.forms import SubscribeForm
from inkwell.exceptions import BadRequest
from inkwell.models import Subscriber
from inkwell.models.base import commit
from inkwell.schemas import SubscriberRecord, to_api
from inkwell.services.auth_service import normalize_email
from inkwell.utils.decorators import admin_required


@subscribers_bp.route('/')
@admin_required
def list_subscribers():
    subscribers = Subscriber.query.order_by(Subscriber.subscribed_at.desc()).all()
    return jsonify(to_api([SubscriberRecord.from_model(s) for s in subscribers]))


@subscribers_bp.route('/subscribe', methods=['POST'])
def subscribe():
    form = SubscribeForm().validate_or_raise()
    email = normalize_email(form.email.data)
    if Subscriber.query.filter_by(email=email).first():
        raise BadRequest('Email already subscribed')

    Subscriber(email=email).save('Failed to subscribe')
    return jsonify({'message': 'Successfully subscribed to newsletter'}), 201


@subscribers_bp.route('/unsubscribe', methods=['POST'])
def unsubscribe():
    """退订 (邮箱不存在时同样返回成功)"""
    form = SubscribeForm().validate_or_raise()
    Subscriber.query.filter_by(email=normalize_email(form.email.data)).delete(synchronize_session=False)
    commit('Failed to unsubscribe')
    return jsonify({'message': 'Successfully unsubscribed from newsletter'})


@subscribers_bp.route('/<id>', methods=['DELETE'])
@admin_required
def delete_subscriber(id):
    Subscriber.get_or_raise(id, 'Subscriber not found').delete('Failed to delete subscriber')
    return jsonify({'message': 'Subscriber deleted successfully'})
