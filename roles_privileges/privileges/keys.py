"""Privilege key codec."""


def generate_privilege_key(resource_slug: str, operation: str) -> str:
    """
    Derive the stable privilege key for a resource operation.

    Keys are persisted in role documents, so the format must never depend on
    process state.

    Example:
        >>> generate_privilege_key("posts", "readVersions")
        'posts-readVersions'
    """
    return f"{resource_slug}-{operation}"


# Short alias used by callers that think of keys as an encoding
encode = generate_privilege_key
