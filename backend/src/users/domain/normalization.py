def normalize(value: str) -> str:
    """Canonical form of a username or email: trimmed and lower-cased."""
    return value.strip().lower()
