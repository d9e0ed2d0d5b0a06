from flask import current_app, jsonify

from inkwell.blueprints.contact import contact_bp
from inkwell.blueprints.contact.forms import ContactForm
from inkwell.models import ContactMessage
from inkwell.schemas import ContactMessageRecord, to_api
from inkwell.utils.decorators import admin_required


@contact_bp.route('/')
@admin_required
def list_messages():
    messages = ContactMessage.query.order_by(ContactMessage.timestamp.desc()).all()
    return jsonify(to_api([ContactMessageRecord.from_model(m) for m in messages]))


@contact_bp.route('/', methods=['POST'])
def submit_message():
    form = ContactForm().validate_or_raise()
    ContactMessage(
        name=form.name.data,
        email=form.email.data,
        message=form.message.data,
    ).save('Failed to submit contact form')
    current_app.logger.info(f'📮 新留言: {form.email.data}')
    return jsonify({'message': 'Contact form submitted successfully'}), 201


@contact_bp.route('/<id>', methods=['DELETE'])
@admin_required
def delete_message(id):
    ContactMessage.get_or_raise(id, 'Contact message not found').delete('Failed to delete contact message')
    return jsonify({'message': 'Contact message deleted successfully'})
