from .common import timestamps


def normalize_author(user):
    return {"id": user.id, "name": user.name}


def normalize_user(user):
    # password_hash is never exposed
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "role": user.role,
        **timestamps(user),
    }
