import hashlib

DIGEST_LENGTH = 64


def digest(text: str) -> str:
    """Compute the SHA-256 content hash of a string (64 lowercase hex characters)."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def looks_like_digest(text: str) -> bool:
    """Check whether a string has the shape of a content hash."""
    return len(text) == DIGEST_LENGTH and all(c in "0123456789abcdef" for c in text.lower())
