import json

import pytest

from sentix.errors import IngestionError, UnsupportedFormatError
from sentix.ingestion import detect_format, extract_texts


class TestDetectFormat:
    """Test format detection from file name and content type"""

    @pytest.mark.parametrize("filename,expected", [
        ("reviews.csv", "csv"),
        ("REVIEWS.CSV", "csv"),
        ("data.json", "json"),
        ("notes.txt", "txt"),
    ])
    def test_extension(self, filename, expected):
        assert detect_format(filename) == expected

    def test_content_type_when_extension_unknown(self):
        assert detect_format("upload", "application/json") == "json"
        assert detect_format("upload.dat", "text/plain; charset=utf-8") == "txt"

    def test_unsupported(self):
        assert detect_format("slides.pdf", "application/pdf") is None
        assert detect_format(None, None) is None


class TestCsv:

    def test_single_line_is_kept(self):
        """The only line is never dropped as a header"""
        assert extract_texts(b"just one review", "csv") == ["just one review"]

    def test_two_lines_drop_the_first(self):
        assert extract_texts(b"text\nloved it", "csv") == ["loved it"]

    def test_blank_lines_and_whitespace(self):
        data = b"review\r\n\r\n  great stuff  \r\n\nmeh\n"
        assert extract_texts(data, "csv") == ["great stuff", "meh"]

    def test_lines_are_not_split_on_commas(self):
        assert extract_texts(b"header\nfine, but slow", "csv") == ["fine, but slow"]


class TestJson:

    def test_list_of_strings(self):
        data = json.dumps(["a", "b"]).encode()
        assert extract_texts(data, "json") == ["a", "b"]

    def test_list_elements_are_coerced(self):
        data = json.dumps([{"text": "from field"}, {"body": "x"}, 3, None]).encode()
        assert extract_texts(data, "json") == ["from field", '{"body": "x"}', "3", "null"]

    def test_object_with_text_field(self):
        assert extract_texts(b'{"text": "hello", "id": 1}', "json") == ["hello"]

    def test_object_without_text_field_is_serialized(self):
        assert extract_texts(b'{"body": "hello"}', "json") == ['{"body": "hello"}']

    @pytest.mark.parametrize("data,expected", [
        (b'{"text": null, "body": "x"}', ['{"text": null, "body": "x"}']),
        (b'{"text": ""}', ['{"text": ""}']),
        (b'[{"text": null}, {"text": "kept"}]', ['{"text": null}', "kept"]),
    ])
    def test_empty_text_field_falls_back_to_serialized_object(self, data, expected):
        assert extract_texts(data, "json") == expected

    def test_invalid_json_raises(self):
        with pytest.raises(IngestionError):
            extract_texts(b"[not json", "json")


class TestPlainText:

    def test_paragraphs(self):
        data = b"First paragraph\nstill first.\n\nSecond.\n\n\n\nThird.\r\n\r\nFourth."
        assert extract_texts(data, "txt") == [
            "First paragraph\nstill first.",
            "Second.",
            "Third.",
            "Fourth.",
        ]

    def test_whitespace_only_blank_lines(self):
        assert extract_texts(b"one\n   \ntwo", "txt") == ["one", "two"]

    def test_empty_file(self):
        assert extract_texts(b"", "txt") == []


class TestLimits:

    def test_capped_at_fifty(self):
        data = "\n\n".join(f"paragraph {i}" for i in range(80)).encode()
        texts = extract_texts(data, "txt")
        assert len(texts) == 50
        assert texts[-1] == "paragraph 49"

    def test_utf8_bom_is_stripped(self):
        assert extract_texts("\ufeff[\"é\"]".encode("utf-8"), "json") == ["é"]

    def test_undecodable_bytes_raise(self):
        with pytest.raises(IngestionError):
            extract_texts(b"\xff\xfe\xfa", "txt")

    def test_unknown_format(self):
        with pytest.raises(UnsupportedFormatError):
            extract_texts(b"x", "xml")
