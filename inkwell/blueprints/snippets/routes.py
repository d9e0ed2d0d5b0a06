from flask import jsonify

from inkwell.blueprints.snippets import snippets_bp
from inkwell.blueprints.snippets.forms import SnippetForm
from inkwell.models import Snippet
from inkwell.schemas import SnippetRecord, to_api
from inkwell.services.snippet_service import SnippetService
from inkwell.utils.decorators import admin_required

DEFAULT_ICON = 'PenSquareIcon'


@snippets_bp.route('/')
def list_snippets():
    return jsonify(to_api([SnippetRecord.from_model(s) for s in SnippetService.list_snippets()]))


@snippets_bp.route('/', methods=['POST'])
@admin_required
def create_snippet():
    form = SnippetForm().validate_or_raise()
    snippet = Snippet(
        name=form.name.data,
        description=form.description.data or '',
        icon=form.icon.data or DEFAULT_ICON,
        content=form.content.data,
    ).save('Failed to create snippet')
    return jsonify({'message': 'Snippet created successfully', 'snippet': to_api(SnippetRecord.from_model(snippet))}), 201


@snippets_bp.route('/<id>', methods=['PUT'])
@admin_required
def update_snippet(id):
    snippet = Snippet.get_or_raise(id, 'Snippet not found')
    form = SnippetForm().validate_or_raise()

    snippet.name = form.name.data
    snippet.description = form.description.data or ''
    snippet.icon = form.icon.data or snippet.icon
    snippet.content = form.content.data
    snippet.save('Failed to update snippet')
    return jsonify({'message': 'Snippet updated successfully', 'snippet': to_api(SnippetRecord.from_model(snippet))})


@snippets_bp.route('/<id>', methods=['DELETE'])
@admin_required
def delete_snippet(id):
    Snippet.get_or_raise(id, 'Snippet not found').delete('Failed to delete snippet')
    return jsonify({'message': 'Snippet deleted successfully'})
