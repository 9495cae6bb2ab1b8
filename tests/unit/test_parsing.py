"""Tests for LLM extraction response parsing."""
import pytest

from ehl.errors import ExtractionError
from ehl.extraction.parsing import parse_entities_json
from ehl.extraction.types import Entity


class TestParseEntitiesJson:

    def test_bare_array(self):
        response = '[{"text": "Ada", "category": "PERSON", "confidence": 0.9}]'
        assert parse_entities_json(response) == [Entity("Ada", "PERSON", 0.9)]

    def test_fenced_array(self):
        response = (
            "```json\n"
            '[{"text": "London", "category": "LOCATION", "confidence": 0.8}]\n'
            "```"
        )
        assert parse_entities_json(response) == [Entity("London", "LOCATION", 0.8)]

    def test_array_in_prose(self):
        response = (
            "Here are the entities:\n"
            '[{"text": "Ada", "category": "PERSON", "confidence": 1}]\n'
            "Let me know if you need more."
        )
        assert parse_entities_json(response) == [Entity("Ada", "PERSON", 1.0)]

    def test_entities_object(self):
        response = '{"entities": [{"text": "Ada", "category": "PERSON", "confidence": 0.7}]}'
        assert parse_entities_json(response) == [Entity("Ada", "PERSON", 0.7)]

    def test_order_preserved(self):
        response = (
            '[{"text": "B", "category": "X", "confidence": 0.1},'
            ' {"text": "A", "category": "Y", "confidence": 0.2}]'
        )
        assert [e.text for e in parse_entities_json(response)] == ["B", "A"]

    def test_empty_array(self):
        assert parse_entities_json("[]") == []

    @pytest.mark.parametrize("response", ["", "   ", "no entities here", "{not json}"])
    def test_no_payload(self, response):
        with pytest.raises(ExtractionError):
            parse_entities_json(response)

    def test_missing_field_rejects_response(self):
        response = (
            '[{"text": "Ada", "category": "PERSON", "confidence": 0.9},'
            ' {"text": "London", "confidence": 0.9}]'
        )
        with pytest.raises(ExtractionError, match="Malformed"):
            parse_entities_json(response)

    def test_confidence_out_of_range(self):
        with pytest.raises(ExtractionError):
            parse_entities_json('[{"text": "Ada", "category": "PERSON", "confidence": 95}]')

    def test_bracketed_prose_before_array(self):
        response = (
            "Found [1] entity:\n"
            '[{"text": "Ada", "category": "PERSON", "confidence": 0.9}]'
        )
        assert parse_entities_json(response) == [Entity("Ada", "PERSON", 0.9)]

    def test_bracketed_prose_after_array(self):
        response = (
            '[{"text": "Ada", "category": "PERSON", "confidence": 0.9}]\n'
            "Note: see [docs]."
        )
        assert parse_entities_json(response) == [Entity("Ada", "PERSON", 0.9)]

    def test_entities_object_in_prose(self):
        response = (
            'Result {draft}: {"entities": [{"text": "Ada", "category": "PERSON", '
            '"confidence": 0.6}]} done'
        )
        assert parse_entities_json(response) == [Entity("Ada", "PERSON", 0.6)]
