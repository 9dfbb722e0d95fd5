"""Unit tests for the message decoder."""

import base64

from lead_inbox.core.decoder import decode_body_data, decode_message, header_value


def b64url(text: str) -> str:
    return base64.urlsafe_b64encode(text.encode("utf-8")).decode("ascii")


class TestHeaders:
    """Tests for header extraction."""

    def test_extracts_subject_from_to(self, raw_message):
        message = decode_message(
            raw_message("m1", subject="Partnership", sender="Bo <bo@example.com>", recipient="me@example.org")
        )

        assert message.id == "m1"
        assert message.thread_id == "thread-m1"
        assert message.subject == "Partnership"
        assert message.sender == "Bo <bo@example.com>"
        assert message.recipient == "me@example.org"

    def test_header_match_is_case_sensitive(self):
        headers = [{"name": "subject", "value": "lowercase"}]
        assert header_value(headers, "Subject") == ""

    def test_first_matching_header_wins(self):
        headers = [{"name": "To", "value": "first"}, {"name": "To", "value": "second"}]
        assert header_value(headers, "To") == "first"

    def test_missing_headers_default_to_empty(self):
        message = decode_message({"id": "m1", "payload": {"body": {"data": b64url("hi")}}})

        assert message.subject == ""
        assert message.sender == ""
        assert message.recipient == ""
        assert message.body == "hi"


class TestBody:
    """Tests for body extraction policy."""

    def test_inline_body_is_preferred(self):
        raw = {
            "id": "m1",
            "payload": {
                "body": {"data": b64url("inline body")},
                "parts": [{"mimeType": "text/plain", "body": {"data": b64url("part body")}}],
            },
        }
        assert decode_message(raw).body == "inline body"

    def test_first_plain_text_part(self):
        raw = {
            "id": "m1",
            "payload": {
                "mimeType": "multipart/alternative",
                "body": {"size": 0},
                "parts": [
                    {"mimeType": "text/html", "body": {"data": b64url("<p>html</p>")}},
                    {"mimeType": "text/plain", "body": {"data": b64url("plain one")}},
                    {"mimeType": "text/plain", "body": {"data": b64url("plain two")}},
                ],
            },
        }
        assert decode_message(raw).body == "plain one"

    def test_html_only_gives_empty_body(self):
        raw = {
            "id": "m1",
            "payload": {"parts": [{"mimeType": "text/html", "body": {"data": b64url("<p>hi</p>")}}]},
        }
        assert decode_message(raw).body == ""

    def test_nested_multipart_is_not_searched(self):
        raw = {
            "id": "m1",
            "payload": {
                "parts": [
                    {
                        "mimeType": "multipart/alternative",
                        "parts": [{"mimeType": "text/plain", "body": {"data": b64url("deep")}}],
                    }
                ]
            },
        }
        assert decode_message(raw).body == ""

    def test_content_type_must_match_exactly(self):
        raw = {
            "id": "m1",
            "payload": {
                "parts": [{"mimeType": "text/plain; charset=utf-8", "body": {"data": b64url("x")}}]
            },
        }
        assert decode_message(raw).body == ""

    def test_unpadded_base64url_with_url_safe_chars(self):
        text = "Prices?>>> ok ~~~"
        data = base64.urlsafe_b64encode(text.encode("utf-8")).decode("ascii").rstrip("=")
        assert decode_body_data(data) == text

    def test_standard_base64_alphabet_is_accepted(self):
        text = "Prices?>>> ok ~~~"
        data = base64.b64encode(text.encode("utf-8")).decode("ascii")
        assert decode_body_data(data) == text

    def test_non_utf8_bytes_do_not_raise(self):
        data = base64.urlsafe_b64encode(b"caf\xe9").decode("ascii")
        assert decode_body_data(data).startswith("caf")


class TestMalformed:
    """Decoding never raises."""

    def test_empty_resource(self):
        message = decode_message({})

        assert message.id == ""
        assert message.thread_id == ""
        assert message.subject == ""
        assert message.body == ""

    def test_non_dict_resource(self):
        assert decode_message(None).body == ""

    def test_wrong_types_everywhere(self):
        raw = {"id": "m1", "payload": {"headers": "nope", "body": "nope", "parts": "nope"}}
        message = decode_message(raw)

        assert message.subject == ""
        assert message.body == ""

    def test_non_string_body_data(self):
        assert decode_body_data(12345) == ""
        assert decode_body_data(None) == ""
