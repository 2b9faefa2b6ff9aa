from .common import iso, timestamps
from .user import normalize_author


def normalize_category(category):
    return {
        "id": category.id,
        "name": category.name,
        "slug": category.slug,
        "description": category.description or "",
        **timestamps(category),
    }


def normalize_post(post):
    return {
        "id": post.id,
        "title": post.title,
        "slug": post.slug,
        "excerpt": post.excerpt or "",
        "content": post.content or "",
        "featured_image": post.featured_image or "",
        "status": post.status,
        "published_at": iso(post.published_at),
        "author_id": post.author_id,
        "author": normalize_author(post.author) if post.author else None,
        "categories": [normalize_category(c) for c in post.categories],
        **timestamps(post),
    }
