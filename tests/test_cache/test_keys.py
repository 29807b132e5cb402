"""Tests for content hashing."""

from remder.cache.keys import content_hash, page_file_name


class TestContentHash:
    def test_empty_string(self):
        assert content_hash("") == 0

    def test_known_value(self):
        assert content_hash("hello") == 99162322

    def test_wraps_to_negative(self):
        assert content_hash("polygenelubricants") == -2147483648

    def test_counts_utf16_code_units(self):
        # U+1F600 is a surrogate pair: 0xD83D 0xDE00
        assert content_hash("\U0001F600") == 0xD83D * 31 + 0xDE00

    def test_deterministic(self):
        assert content_hash("A->B\n") == content_hash("A->B\n")

    def test_different_text_differs(self):
        assert content_hash("A->B\n") != content_hash("B->A\n")

    def test_within_signed_32_bit_range(self):
        for text in ["x" * 1000, "@startuml\nA->B\n@enduml", "été"]:
            h = content_hash(text)
            assert -(2**31) <= h < 2**31


class TestPageFileName:
    def test_format(self):
        assert page_file_name("hello") == "remder-99162322.html"

    def test_negative_hash_keeps_sign(self):
        assert page_file_name("polygenelubricants") == "remder--2147483648.html"
