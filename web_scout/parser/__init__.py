# web_scout/parser/__init__.py
"""web_scout.parser: HTML content extraction."""
