"""
站点设置服务
单行表；无记录时返回默认值，读取结果走 Flask-Caching
"""
from inkwell.extensions import cache
from inkwell.models import SiteSettings
from inkwell.schemas import SettingsRecord, to_api

SETTINGS_CACHE_KEY = 'site_settings'

DEFAULT_SETTINGS = SettingsRecord(
    title='Inkwell',
    description='A modern blogging platform for creators and readers',
    logo_light_url='',
    logo_dark_url='',
    twitter_url='https://twitter.com',
    github_url='https://github.com',
)


class SettingsService:
    @staticmethod
    def get_settings():
        """返回 camelCase 字典"""
        cached = cache.get(SETTINGS_CACHE_KEY)
        if cached is not None:
            return cached

        row = SiteSettings.query.first()
        record = SettingsRecord.from_model(row) if row else DEFAULT_SETTINGS
        payload = to_api(record)
        cache.set(SETTINGS_CACHE_KEY, payload)
        return payload

    @staticmethod
    def save_settings(title, description, logo_light_url='', logo_dark_url='',
                      twitter_url='', github_url=''):
        """存在则更新，否则插入"""
        row = SiteSettings.query.first() or SiteSettings()
        row.title = title
        row.description = description
        row.logo_light_url = logo_light_url or ''
        row.logo_dark_url = logo_dark_url or ''
        row.twitter_url = twitter_url or ''
        row.github_url = github_url or ''
        row.save('Failed to save settings')

        cache.delete(SETTINGS_CACHE_KEY)
        return to_api(SettingsRecord.from_model(row))
