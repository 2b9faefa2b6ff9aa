from .common import iso, timestamps


def normalize_page(page, admin=True):
    data = {
        "id": page.id,
        "slug": page.slug,
        "title": page.title,
        "status": page.status,
        "blocks": [block.to_dict() for block in page.blocks],
        "meta": page.meta or {},
        "published_at": iso(page.published_at),
        **timestamps(page),
    }
    if admin:
        data["tenant_id"] = page.tenant_id
    return data
