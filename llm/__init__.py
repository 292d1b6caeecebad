"""KI-Anbindung: Client, Antwort-Parsing und Prompt-Vorlagen."""

from .client import LLMClient, LLMError, LLMResponseError, OpenAIClient, parse_json_object
from .prompts import load_template, render, render_template

__all__ = [
    "LLMClient",
    "LLMError",
    "LLMResponseError",
    "OpenAIClient",
    "parse_json_object",
    "load_template",
    "render",
    "render_template",
]
