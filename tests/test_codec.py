"""Unit tests for the record decoder."""

import threading

import pytest

from dualfetch.codec import decode_records, encode_records
from dualfetch.errors import DecodeFailedError, FetchCancelledError
from dualfetch.models import Record


class TestDecodeRecords:
    def test_decodes_wire_fields(self):
        records = decode_records(b'[{"id":1,"user":"Ted","text":"hi"}]', source_id="primary")

        assert records == [Record(id=1, author="Ted", body="hi")]

    def test_ignores_unknown_keys(self):
        records = decode_records(b'[{"id":1,"user":"Ted","text":"hi","extra":true}]', source_id="primary")

        assert records[0].author == "Ted"

    def test_empty_array(self):
        assert decode_records(b"[]", source_id="primary") == []

    def test_utf8_payload(self):
        records = decode_records('[{"id":7,"user":"Zoë","text":"¡hola!"}]'.encode("utf-8"), source_id="primary")

        assert records[0].author == "Zoë"
        assert records[0].body == "¡hola!"

    def test_invalid_json(self):
        with pytest.raises(DecodeFailedError) as exc_info:
            decode_records(b"<html>oops</html>", source_id="secondary")

        assert exc_info.value.source_id == "secondary"
        assert exc_info.value.index is None
        assert exc_info.value.cause is not None

    def test_invalid_utf8(self):
        with pytest.raises(DecodeFailedError):
            decode_records(b'["\xff"]', source_id="primary")

    def test_object_instead_of_array(self):
        with pytest.raises(DecodeFailedError, match="Expected a JSON array"):
            decode_records(b'{"id":1,"user":"Ted","text":"hi"}', source_id="primary")

    @pytest.mark.parametrize(
        "item",
        [
            b'{"id":"1","user":"Ted","text":"hi"}',
            b'{"id":1.5,"user":"Ted","text":"hi"}',
            b'{"id":true,"user":"Ted","text":"hi"}',
            b'{"id":1,"user":42,"text":"hi"}',
            b'{"id":1,"text":"hi"}',
            b'"just a string"',
            b'{"id":1,"author":"Ted","body":"hi"}',
        ],
    )
    def test_schema_mismatch_reports_index(self, item):
        payload = b'[{"id":1,"user":"Ted","text":"hi"},' + item + b"]"

        with pytest.raises(DecodeFailedError) as exc_info:
            decode_records(payload, source_id="primary")

        assert exc_info.value.index == 1

    def test_deeply_nested_payload(self):
        payload = b"[" * 200000 + b"]" * 200000

        with pytest.raises(DecodeFailedError) as exc_info:
            decode_records(payload, source_id="primary")

        assert isinstance(exc_info.value.cause, RecursionError)

    def test_cancel_between_items(self):
        cancel = threading.Event()
        cancel.set()

        with pytest.raises(FetchCancelledError):
            decode_records(b'[{"id":1,"user":"Ted","text":"hi"}]', source_id="primary", cancel_event=cancel)


class TestEncodeRecords:
    def test_round_trip(self):
        records = [
            Record(id=1, author="Ted", body="hi"),
            Record(id=2, author="Roy", body="bye"),
            Record(id=3, author="Zoë", body=""),
        ]

        assert decode_records(encode_records(records), source_id="primary") == records

    def test_encodes_wire_names(self):
        assert encode_records([Record(id=1, author="Ted", body="hi")]) == b'[{"id": 1, "user": "Ted", "text": "hi"}]'
