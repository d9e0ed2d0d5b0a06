from flask import jsonify

from inkwell.blueprints.pathfinder import pathfinder_bp
from inkwell.blueprints.pathfinder.forms import PathfinderForm
from inkwell.schemas import to_api
from inkwell.services.pathfinder_service import pathfinder_service


@pathfinder_bp.route('/', methods=['POST'])
def build_reading_path():
    """根据主题生成阅读路径"""
    form = PathfinderForm().validate_or_raise()
    return jsonify(to_api(pathfinder_service.build_path(form.topic.data)))
