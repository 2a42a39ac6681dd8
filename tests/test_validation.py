from __future__ import annotations

import pytest

from core.domain.errors import InvalidFormat
from core.domain.validation import ensure_postal_code


def test_eight_characters_are_accepted_unchanged():
    assert ensure_postal_code("01001000") == "01001000"


def test_only_length_is_checked():
    assert ensure_postal_code("abcdefgh") == "abcdefgh"


@pytest.mark.parametrize("code", ["", "0100100", "010010000", "01001-000"])
def test_wrong_length_is_invalid_format(code):
    with pytest.raises(InvalidFormat) as excinfo:
        ensure_postal_code(code)
    assert excinfo.value.status_code == 422
    assert excinfo.value.message == "invalid zipcode"
