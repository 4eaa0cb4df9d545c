from bson import ObjectId


def to_object_id(value) -> ObjectId:
    """
    Converts a path token into the store's native identifier.
    Raises bson.errors.InvalidId for malformed tokens.
    """
    if isinstance(value, ObjectId):
        return value
    return ObjectId(value)


def serialize_document(value):
    """Recursively replaces ObjectId values with their hex strings."""
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, dict):
        return {key: serialize_document(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [serialize_document(item) for item in value]
    return value
