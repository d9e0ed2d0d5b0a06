from faker import Faker
from faker.providers import BaseProvider


class BlogProvider(BaseProvider):
    """
    Inkwell 演示数据生成器
    生成博客风格的分类、标签与文章标题
    """

    categories = [
        ('Technology', 'Software, gadgets and the people who build them.'),
        ('Design', 'Interfaces, typography and visual thinking.'),
        ('Productivity', 'Habits, tools and workflows for getting things done.'),
        ('Science', 'Discoveries and explanations from the natural world.'),
        ('Culture', 'Books, film, music and the ideas behind them.'),
        ('Travel', 'Places worth visiting and how to get there.'),
    ]

    tags = [
        'python', 'javascript', 'react', 'ai', 'ux', 'career', 'writing',
        'remote-work', 'open-source', 'databases', 'security', 'minimalism',
    ]

    title_templates = [
        'A Beginner\'s Guide to {topic}',
        'Why {topic} Matters More Than Ever',
        '{n} Lessons I Learned About {topic}',
        'Advanced {topic}: Beyond the Basics',
        'The Hidden Cost of Ignoring {topic}',
        'How We Rebuilt Our Approach to {topic}',
    ]

    def blog_categories(self):
        return list(self.categories)

    def blog_tag_names(self):
        return list(self.tags)

    def blog_title(self):
        topic = self.generator.word().capitalize() + ' ' + self.generator.word().capitalize()
        template = self.random_element(self.title_templates)
        return template.format(topic=topic, n=self.random_int(3, 12))

    def blog_html(self, paragraphs=5):
        """生成带小标题的 HTML 正文"""
        parts = [f'<p>{self.generator.paragraph(nb_sentences=6)}</p>']
        for _ in range(paragraphs - 1):
            parts.append(f'<h2>{self.generator.sentence(nb_words=4).rstrip(".")}</h2>')
            parts.append(f'<p>{self.generator.paragraph(nb_sentences=8)}</p>')
        return ''.join(parts)


# 初始化 Faker 并添加自定义 Provider
fake = Faker('en_US')
fake.add_provider(BlogProvider)
