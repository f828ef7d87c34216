"""Unit tests for shared helpers."""

from __future__ import annotations

import pytest

from gmail_fixture_builder.utils import extract_email, fix_encoding


class TestExtractEmail:
    """Test suite for address extraction."""

    @pytest.mark.parametrize(
        "raw",
        [
            "carol@enron.com",
            "Carol Smith <Carol@Enron.com>",
            "carol@enron.com (Carol Smith)",
            "'carol@enron.com'",
            '"Smith, Carol" <carol@enron.com>',
            "  CAROL@ENRON.COM  ",
        ],
    )
    def test_address_forms_reduce_to_one_key(self, raw: str) -> None:
        assert extract_email(raw) == "carol@enron.com"

    def test_name_without_address_is_empty(self) -> None:
        assert extract_email("Vince J Kaminski") == ""
        assert extract_email("") == ""


class TestFixEncoding:
    """Test suite for encoding artefact repair."""

    def test_escaped_entity_is_decoded_once(self) -> None:
        assert fix_encoding("&amp;lt;tag&amp;gt;") == "&lt;tag&gt;"

    def test_soft_encodings_and_entities(self) -> None:
        assert fix_encoding("a=20b =3D c &amp; &lt;d&gt;") == "a b = c & <d>"
