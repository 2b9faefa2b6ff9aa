def iso(value):
    return value.isoformat() if value is not None else None


def timestamps(entity):
    return {
        "created_at": iso(entity.created_at),
        "updated_at": iso(entity.updated_at),
    }
