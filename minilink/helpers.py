import secrets
import string

URL_SAFE_CHARS = string.ascii_lowercase + string.ascii_uppercase + string.digits
BASE = len(URL_SAFE_CHARS)
DEFAULT_LENGTH = 6


def generate_code(length: int = DEFAULT_LENGTH) -> str:
    """Generate a random short code of `length` base62 characters."""

    return "".join(secrets.choice(URL_SAFE_CHARS) for _ in range(length))


def build_short_url(base_url: str, code: str) -> str:
    """Join a base URL and a short code into a fully-qualified link."""

    return f"{base_url.rstrip('/')}/{code}"
