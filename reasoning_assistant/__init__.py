"""Data Reasoning Assistant: evaluates assumptions against data with an LLM."""

__version__ = "1.0.0"
