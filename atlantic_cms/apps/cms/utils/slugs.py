"""
Slug generation for pages and blog posts
"""
import re


def generate_slug(title: str) -> str:
    """
    "Podcast Studio 2.0!" -> "podcast-studio-2-0"
    """
    slug = re.sub(r'[^a-z0-9]+', '-', (title or "").lower())
    return slug.strip('-')
