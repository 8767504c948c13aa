import logging
import os

from minilink.helpers import generate_code
from minilink.models import URLMapping
from minilink.repository import URLStore

logger = logging.getLogger(__name__)

MAX_GENERATION_ATTEMPTS = int(os.getenv("MAX_GENERATION_ATTEMPTS", 5))

# Paths served by fixed routes; a stored mapping under these would never redirect.
RESERVED_CODES = frozenset({"health", "shorten"})


class RecordNotFound(Exception):
    def __init__(self, record_type: str, identifier: str):
        self.record_type = record_type
        self.identifier = identifier
        self.message = f"{record_type} not found for identifier: {identifier}"
        super().__init__(self.message)


class CodeGenerationFailed(Exception):
    def __init__(self, attempts: int):
        self.attempts = attempts
        self.message = (
            f"Could not generate an unused short code after {attempts} attempts"
        )
        super().__init__(self.message)


def generateCode(store: URLStore, original_url: str) -> URLMapping:
    for attempt in range(1, MAX_GENERATION_ATTEMPTS + 1):
        code = generate_code()
        if code not in RESERVED_CODES and store.put_if_absent(code, original_url):
            logger.info(f"URL shortened: {original_url} -> {code}")
            return URLMapping(code=code, original_url=original_url)

        logger.warning(
            f"Short code collision on {code} "
            f"(attempt {attempt}/{MAX_GENERATION_ATTEMPTS})"
        )

    logger.error(f"Exhausted short code attempts for url: {original_url}")
    raise CodeGenerationFailed(MAX_GENERATION_ATTEMPTS)


def findMatchingURL(store: URLStore, code: str) -> str:
    original_url = store.get(code)
    if original_url is None:
        logger.error(f"Cannot find matching URL for code: {code}")
        raise RecordNotFound("Original URL", code)

    logger.info(f"Redirecting: {code} -> {original_url}")
    return original_url
