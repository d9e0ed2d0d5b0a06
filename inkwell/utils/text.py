"""
文本处理工具
slug 生成、HTML 转纯文本、阅读时长估算
"""
import math
import re

from bs4 import BeautifulSoup

WORDS_PER_MINUTE = 200

_INVALID_SLUG_CHARS = re.compile(r'[^a-z0-9 -]')
_WHITESPACE = re.compile(r'\s+')
_HYPHENS = re.compile(r'-+')


def slugify(title):
    """
    将标题转换为 URL 安全的 slug

    只保留小写字母、数字和连字符，例如：
        "Hello, World!  Foo" -> "hello-world-foo"
    可能返回空字符串，由调用方决定回退方案。
    """
    if not title:
        return ''
    slug = _INVALID_SLUG_CHARS.sub('', title.lower())
    slug = _WHITESPACE.sub('-', slug)
    slug = _HYPHENS.sub('-', slug)
    return slug.strip('-')


def html_to_text(html):
    """解析 HTML 并拼接所有文本节点"""
    if not html:
        return ''
    soup = BeautifulSoup(html, 'html.parser')
    for tag in soup(['script', 'style']):
        tag.decompose()
    return soup.get_text()


def estimate_reading_time(html):
    """按每分钟 200 词估算阅读时长（分钟）"""
    words = len(html_to_text(html).split())
    if words == 0:
        return 0
    return max(1, math.ceil(words / WORDS_PER_MINUTE))
