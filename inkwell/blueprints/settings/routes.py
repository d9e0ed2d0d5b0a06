from flask import jsonify

from inkwell.blueprints.settings import settings_bp
from inkwell.blueprints.settings.forms import SettingsForm
from inkwell.services.settings_service import SettingsService
from inkwell.utils.decorators import admin_required


@settings_bp.route('/')
def get_settings():
    """站点设置；未保存过时返回默认值"""
    return jsonify(SettingsService.get_settings())


@settings_bp.route('/', methods=['PUT'])
@admin_required
def update_settings():
    form = SettingsForm().validate_or_raise()
    settings = SettingsService.save_settings(
        title=form.title.data,
        description=form.description.data,
        logo_light_url=form.logoLightUrl.data,
        logo_dark_url=form.logoDarkUrl.data,
        twitter_url=form.twitterUrl.data,
        github_url=form.githubUrl.data,
    )
    return jsonify(settings)
