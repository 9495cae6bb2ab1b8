"""Entity Highlighter: LLM entity extraction rendered as colour-coded text."""

__version__ = "0.1.0"
