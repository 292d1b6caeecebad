"""Anbindung an das Sprachmodell (OpenAI Chat Completions).

Jeder Aufruf ist eine einzelne Anfrage/Antwort mit System- und
Nutzer-Prompt; die Antwort muss ein einzelnes JSON-Objekt sein.
"""

import json
import logging
import re
from abc import ABC, abstractmethod

import openai
from openai import OpenAI

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL)


class LLMError(Exception):
    """Transportfehler: Netzwerk, Authentifizierung, Limit oder leere Antwort."""


class LLMResponseError(LLMError):
    """Antwort ist kein gültiges JSON-Objekt."""


def parse_json_object(text: str) -> dict:
    """Parst die Antwort der KI als JSON-Objekt.

    Toleriert Markdown-Codeblöcke (```json ... ```) um das Objekt.
    """
    if not isinstance(text, str) or not text.strip():
        raise LLMResponseError("Leere Antwort der KI.")
    stripped = text.strip()
    match = _FENCE_RE.match(stripped)
    if match:
        stripped = match.group(1)
    try:
        data = json.loads(stripped)
    except json.JSONDecodeError as e:
        raise LLMResponseError(f"Antwort ist kein gültiges JSON: {e}") from e
    if not isinstance(data, dict):
        raise LLMResponseError(
            f"Antwort ist kein JSON-Objekt, sondern {type(data).__name__}.")
    return data


class LLMClient(ABC):
    """Basisklasse. Unterklassen liefern den rohen Antworttext."""

    def __init__(self, api_key: str = ""):
        self.api_key = (api_key or "").strip()

    def has_credentials(self) -> bool:
        return bool(self.api_key)

    @abstractmethod
    def complete_json(
        self,
        system_prompt: str,
        user_prompt: str,
        *,
        temperature: float,
        max_tokens: int,
    ) -> str:
        ...


class OpenAIClient(LLMClient):
    """LLMClient über das offizielle openai-SDK."""

    def __init__(self, api_key: str, model: str = "gpt-4o"):
        super().__init__(api_key)
        self.model = model
        self._client = OpenAI(api_key=self.api_key) if self.api_key else None

    def complete_json(
        self,
        system_prompt: str,
        user_prompt: str,
        *,
        temperature: float,
        max_tokens: int,
    ) -> str:
        if self._client is None:
            raise LLMError("Kein API-Key konfiguriert.")

        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": user_prompt})

        logger.info(f"KI-Anfrage an {self.model} ({len(user_prompt)} Zeichen)")
        try:
            response = self._client.chat.completions.create(
                model=self.model,
                messages=messages,
                temperature=temperature,
                max_tokens=max_tokens,
                response_format={"type": "json_object"},
            )
        except openai.AuthenticationError as e:
            raise LLMError("Ungültiger API-Key. Bitte überprüfe deinen OpenAI API-Key.") from e
        except openai.RateLimitError as e:
            raise LLMError(
                "API-Limit erreicht. Bitte überprüfe dein OpenAI-Guthaben "
                "oder versuche es später erneut."
            ) from e
        except openai.APIConnectionError as e:
            raise LLMError(f"Keine Verbindung zur OpenAI-API: {e}") from e
        except openai.APIError as e:
            raise LLMError(f"Fehler der OpenAI-API: {e}") from e

        if not response.choices or not response.choices[0].message.content:
            raise LLMError("Keine Antwort von der KI erhalten.")
        content = response.choices[0].message.content
        logger.debug(f"KI-Antwort: {len(content)} Zeichen")
        return content
