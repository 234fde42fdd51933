"""Tests for post route helpers: id parsing and storage failure mapping."""

import pytest

from posts_api.api.routes.post_helpers import parse_post_id, storage_errors
from posts_api.core.errors import DatabaseError, StorageError


@pytest.mark.parametrize("raw, expected", [
    ("1", 1),
    ("42", 42),
    ("007", 7),
    ("0", None),
    ("-3", None),
    ("abc", None),
    ("1e3", None),
    ("", None),
    ("2147483647", 2147483647),
    ("2147483648", None),
    ("9" * 20, None),
    ("9" * 5000, None),
    ("١٢", None),  # non-ASCII digits
])
def test_parse_post_id(raw, expected):
    assert parse_post_id(raw) == expected


def test_storage_errors_maps_database_error():
    with pytest.raises(StorageError) as exc_info:
        with storage_errors("The post could not be removed.", "7"):
            raise DatabaseError("boom", "remove")
    assert exc_info.value.to_response() == {"error": "The post could not be removed."}
    assert exc_info.value.context.post_id == "7"
    assert isinstance(exc_info.value.__cause__, DatabaseError)


def test_storage_errors_passes_through_on_success():
    with storage_errors("unused"):
        value = 1
    assert value == 1
