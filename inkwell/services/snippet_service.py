"""
内容片段服务
编辑器可插入的 HTML 片段，存储于 snippets 表；默认片段由 `flask seed` 写入
"""
from flask import current_app

from inkwell.extensions import db
from inkwell.models import Snippet
from inkwell.models.base import commit

DEFAULT_SNIPPETS = [
    {
        'name': 'Call to Action',
        'description': 'Engaging CTA button with modern styling',
        'icon': 'MousePointerClickIcon',
        'content': (
            '<div style="text-align: center; margin: 2rem 0; padding: 2rem; '
            'background: linear-gradient(135deg, #667eea 0%, #764ba2 100%); border-radius: 12px; color: white;">'
            '<h3 style="margin: 0 0 1rem 0;">Ready to Get Started?</h3>'
            '<p style="margin: 0 0 1.5rem 0;">Join thousands of users who are already transforming their workflow.</p>'
            '<a href="#" style="display: inline-block; background: white; color: #667eea; padding: 12px 24px; '
            'border-radius: 8px; text-decoration: none; font-weight: 600;">Get Started Today</a></div>'
        ),
    },
    {
        'name': 'Info Box',
        'description': 'Highlighted information box with icon',
        'icon': 'InfoIcon',
        'content': (
            '<div style="background: #f0f9ff; border-left: 4px solid #0ea5e9; padding: 1.5rem; margin: 1.5rem 0;">'
            '<h4 style="margin: 0 0 8px 0; color: #0c4a6e;">Pro Tip</h4>'
            '<p style="margin: 0; color: #075985;">This is important information that your readers should pay '
            'attention to. Use this for tips, warnings, or key insights.</p></div>'
        ),
    },
    {
        'name': 'Quote Block',
        'description': 'Stylized quote with author attribution',
        'icon': 'QuoteIcon',
        'content': (
            '<div style="background: #fafafa; border-radius: 12px; padding: 2rem; margin: 2rem 0;">'
            '<blockquote style="margin: 0; font-size: 1.25rem; font-style: italic; color: #374151;">'
            '"The best way to predict the future is to create it."</blockquote>'
            '<cite style="display: block; margin-top: 1.5rem; font-weight: 600; color: #6b7280;">Peter Drucker</cite></div>'
        ),
    },
    {
        'name': 'Feature Grid',
        'description': '3-column feature showcase grid',
        'icon': 'GridIcon',
        'content': (
            '<div style="display: grid; grid-template-columns: repeat(auto-fit, minmax(250px, 1fr)); gap: 2rem; margin: 2rem 0;">'
            '<div style="text-align: center; padding: 1.5rem;"><h3>Fast Performance</h3>'
            '<p>Lightning-fast loading times and optimized performance.</p></div>'
            '<div style="text-align: center; padding: 1.5rem;"><h3>Secure</h3>'
            '<p>Enterprise-grade security with end-to-end encryption.</p></div>'
            '<div style="text-align: center; padding: 1.5rem;"><h3>Targeted</h3>'
            '<p>Precise targeting and analytics for better results.</p></div></div>'
        ),
    },
    {
        'name': 'Code Snippet',
        'description': 'Syntax-highlighted code block',
        'icon': 'Code2Icon',
        'content': (
            '<div style="background: #1e293b; border-radius: 8px; padding: 1.5rem; margin: 1.5rem 0; overflow-x: auto;">'
            '<pre style="margin: 0; color: #e2e8f0; font-family: monospace;"><code>function createAwesomeContent() {\n'
            '  const ideas = generateIdeas();\n'
            '  return ideas.map(writeEngagingPost).filter(post =&gt; post.isAwesome);\n'
            '}</code></pre></div>'
        ),
    },
    {
        'name': 'Newsletter Signup',
        'description': 'Email subscription form with gradient background',
        'icon': 'MailIcon',
        'content': (
            '<div style="background: linear-gradient(135deg, #667eea 0%, #764ba2 100%); border-radius: 16px; '
            'padding: 3rem 2rem; margin: 3rem 0; text-align: center; color: white;">'
            '<h3 style="margin: 0 0 1rem 0;">Stay Updated</h3>'
            '<p style="margin: 0 0 2rem 0;">Get the latest insights and updates delivered straight to your inbox.</p>'
            '<input type="email" placeholder="Enter your email" style="padding: 12px 16px; border: none; border-radius: 8px;">'
            '<button style="padding: 12px 24px; border-radius: 8px; font-weight: 600;">Subscribe</button></div>'
        ),
    },
    {
        'name': 'Warning Alert',
        'description': 'Important warning or caution message',
        'icon': 'AlertTriangleIcon',
        'content': (
            '<div style="background: #fef3cd; border: 1px solid #f6cc47; border-radius: 8px; padding: 1.5rem; margin: 1.5rem 0;">'
            '<h4 style="margin: 0 0 8px 0; color: #92400e;">Important Warning</h4>'
            '<p style="margin: 0; color: #a16207;">Please read this carefully before proceeding. '
            'This action cannot be undone and may have significant consequences.</p></div>'
        ),
    },
    {
        'name': 'Success Message',
        'description': 'Positive confirmation or success alert',
        'icon': 'CheckCircleIcon',
        'content': (
            '<div style="background: #d1fae5; border: 1px solid #6ee7b7; border-radius: 8px; padding: 1.5rem; margin: 1.5rem 0;">'
            '<h4 style="margin: 0 0 8px 0; color: #065f46;">Success!</h4>'
            '<p style="margin: 0; color: #047857;">Your action has been completed successfully. '
            'Everything is working as expected.</p></div>'
        ),
    },
    {
        'name': 'Image Gallery',
        'description': '2x2 responsive image grid layout',
        'icon': 'ImageIcon',
        'content': (
            '<div style="display: grid; grid-template-columns: repeat(auto-fit, minmax(200px, 1fr)); gap: 1rem; margin: 2rem 0;">'
            '<div style="aspect-ratio: 1; background: #f3f4f6; border-radius: 8px;"></div>'
            '<div style="aspect-ratio: 1; background: #e5e7eb; border-radius: 8px;"></div>'
            '<div style="aspect-ratio: 1; background: #d1d5db; border-radius: 8px;"></div>'
            '<div style="aspect-ratio: 1; background: #9ca3af; border-radius: 8px;"></div></div>'
        ),
    },
    {
        'name': 'Pricing Card',
        'description': 'Professional pricing plan card',
        'icon': 'CreditCardIcon',
        'content': (
            '<div style="background: white; border: 2px solid #e5e7eb; border-radius: 16px; padding: 2rem; '
            'margin: 2rem auto; text-align: center; max-width: 300px;">'
            '<span style="background: #3b82f6; color: white; padding: 0.5rem 1rem; border-radius: 20px;">POPULAR</span>'
            '<h3>Pro Plan</h3><p><strong style="font-size: 3rem;">$29</strong>/month</p>'
            '<ul style="list-style: none; padding: 0; text-align: left;">'
            '<li>Unlimited projects</li><li>Priority support</li><li>Advanced analytics</li><li>Team collaboration</li></ul>'
            '<button style="background: #3b82f6; color: white; border: none; padding: 12px 24px; '
            'border-radius: 8px; width: 100%;">Choose Plan</button></div>'
        ),
    },
]


class SnippetService:
    @staticmethod
    def list_snippets():
        return Snippet.query.order_by(Snippet.created_at).all()

    @staticmethod
    def seed_defaults():
        """
        写入默认片段 (按名称去重，可重复执行)

        Returns:
            int: 新增条数
        """
        existing = {name for (name,) in db.session.query(Snippet.name).all()}
        created = 0
        for item in DEFAULT_SNIPPETS:
            if item['name'] in existing:
                continue
            db.session.add(Snippet(**item))
            created += 1

        if created:
            commit('Failed to seed snippets')
            current_app.logger.info(f'✅ 已写入 {created} 个默认片段')
        return created
