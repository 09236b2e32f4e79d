# appbuilder/llm/__init__.py
"""
LLM module - live (Gemini) and mock spec generators.
"""
from .generator import GeminiGenerator
from .mock_generator import MockGenerator, generate_mock_spec

__all__ = ["GeminiGenerator", "MockGenerator", "generate_mock_spec"]
