from unittest.mock import patch

import pytest

from minilink.helpers import DEFAULT_LENGTH
from minilink.repository import URLStore
from minilink.services import (
    MAX_GENERATION_ATTEMPTS,
    CodeGenerationFailed,
    RecordNotFound,
    findMatchingURL,
    generateCode,
)

TEST_CODE = "abc123"
OTHER_CODE = "xyz789"
TEST_URL = "https://example.com"
EXISTING_URL = "https://example.org"


# Fixtures
@pytest.fixture
def store():
    return URLStore()


# Tests generateCode
def test_generate_code_success(store):
    result = generateCode(store, TEST_URL)

    assert result.original_url == TEST_URL
    assert len(result.code) == DEFAULT_LENGTH
    assert store.get(result.code) == TEST_URL


@patch("minilink.services.generate_code")
def test_generate_code_retries_on_collision(mock_generate_code, store):
    store.put(TEST_CODE, EXISTING_URL)
    mock_generate_code.side_effect = [TEST_CODE, OTHER_CODE]

    result = generateCode(store, TEST_URL)

    assert result.code == OTHER_CODE
    assert store.get(TEST_CODE) == EXISTING_URL
    assert store.get(OTHER_CODE) == TEST_URL
    assert mock_generate_code.call_count == 2


@patch("minilink.services.generate_code")
def test_generate_code_skips_reserved_codes(mock_generate_code, store):
    mock_generate_code.side_effect = ["health", TEST_CODE]

    result = generateCode(store, TEST_URL)

    assert result.code == TEST_CODE
    assert store.get("health") is None
    assert len(store) == 1


@patch("minilink.services.generate_code")
def test_generate_code_exhausts_attempts(mock_generate_code, store):
    store.put(TEST_CODE, EXISTING_URL)
    mock_generate_code.return_value = TEST_CODE

    with pytest.raises(CodeGenerationFailed) as exc_info:
        generateCode(store, TEST_URL)

    assert exc_info.value.attempts == MAX_GENERATION_ATTEMPTS
    assert mock_generate_code.call_count == MAX_GENERATION_ATTEMPTS
    assert store.get(TEST_CODE) == EXISTING_URL
    assert len(store) == 1


# Tests findMatchingURL
def test_find_matching_url_hit(store):
    store.put(TEST_CODE, TEST_URL)
    assert findMatchingURL(store, TEST_CODE) == TEST_URL


def test_find_matching_url_not_found(store):
    with pytest.raises(RecordNotFound) as exc_info:
        findMatchingURL(store, TEST_CODE)

    assert exc_info.value.identifier == TEST_CODE
    assert "Original URL not found for identifier: abc123" in str(exc_info.value)


def test_round_trip(store):
    mapping = generateCode(store, TEST_URL)
    assert findMatchingURL(store, mapping.code) == TEST_URL
