"""Cooked Court: an AI-judged "am I cooked?" roast feed."""
