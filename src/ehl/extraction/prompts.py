"""Prompt template for LLM named-entity extraction."""

EXTRACT_ENTITIES_PROMPT = """\
You are an expert Named Entity Recognition (NER) system. Given a text, you will \
identify and categorize named entities within it. The categories should be \
standard NER categories such as PERSON, LOCATION, ORGANIZATION, DATE, EVENT, \
PRODUCT, etc.

RULES:
1. Copy each entity EXACTLY as it appears in the text (same spelling, same case)
2. Give each entity a confidence score between 0.0 and 1.0
3. List an entity once even if it appears several times
4. Return an empty array if no entities are found

TEXT:
{text}

Output only a JSON array:
[{{"text": "entity text", "category": "CATEGORY", "confidence": 0.95}}, ...]
"""
