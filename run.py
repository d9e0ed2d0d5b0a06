import os
from inkwell import create_app, db
from inkwell.models import (
    User, Author, Category, Tag, Post, PostRevision, Comment,
    Page, SiteSettings, Subscriber, ContactMessage, Snippet,
    Bookmark, PostLike,
)

# 从环境变量获取配置模式
# 支持 FLASK_ENV 或 FLASK_CONFIG
config_name = os.getenv('FLASK_ENV') or os.getenv('FLASK_CONFIG') or 'default'
if config_name == 'dev':
    config_name = 'development'

app = create_app(config_name)


@app.shell_context_processor
def make_shell_context():
    """
    配置 Flask Shell 上下文。
    允许在命令行中使用 'flask shell' 时自动导入 db 和模型。
    """
    return dict(
        db=db,
        app=app,
        User=User,
        Author=Author,
        Category=Category,
        Tag=Tag,
        Post=Post,
        PostRevision=PostRevision,
        Comment=Comment,
        Page=Page,
        SiteSettings=SiteSettings,
        Subscriber=Subscriber,
        ContactMessage=ContactMessage,
        Snippet=Snippet,
        Bookmark=Bookmark,
        PostLike=PostLike,
    )


if __name__ == '__main__':
    port = int(os.getenv('PORT', 5000))
    print("-------------------------------------------------------")
    print(f"   Inkwell API listening on 0.0.0.0:{port}")
    print("-------------------------------------------------------")
    app.run(host='0.0.0.0', port=port)
