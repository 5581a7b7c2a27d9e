"""
Blog publish state
"""
from datetime import datetime
from typing import Optional

from atlantic_cms.apps.blog.models import BlogPost


def apply_publish_state(post: BlogPost, is_published: bool, now: Optional[datetime] = None) -> BlogPost:
    """
    Set is_published on a post.

    published_at is stamped only when a draft becomes published; unpublishing
    leaves it as it was.
    """
    if is_published and not post.is_published:
        post.published_at = now or datetime.now()
    post.is_published = is_published
    return post
