"""
LLM client for an OpenAI-compatible chat-completion endpoint.

Every call sends a system prompt and a user message and returns the reply text
stripped of surrounding whitespace. The reply is free text: callers that expect
JSON repair and validate it themselves (see ideas.models.result).
"""

import logging
from typing import Optional

import requests

from ideas.config import (
    LLM_BASE_URL,
    LLM_API_KEY,
    LLM_MODEL,
    LLM_TITLE_MODEL,
    TITLE_TIMEOUT,
    COMPLETION_TIMEOUT,
    AUGMENT_TIMEOUT,
)
from ideas.errors import UpstreamError
from ideas.models.language import Language
from ideas.services.prompts import (
    TITLE_PROMPT,
    POLISH_PROMPT,
    POLISH_RETRY_SUFFIX,
    SLUG_PROMPT,
    AUGMENT_PROMPT,
    TRANSLATE_PROMPT,
    build_idea_message,
)

logger = logging.getLogger(__name__)


class LLMClient:
    """Chat-completion client used by the pipeline."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        title_model: Optional[str] = None,
        title_timeout: float = None,
        completion_timeout: float = None,
        augment_timeout: float = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url if base_url is not None else LLM_BASE_URL
        self.api_key = api_key if api_key is not None else LLM_API_KEY
        self.model = model or LLM_MODEL
        self.title_model = title_model or LLM_TITLE_MODEL
        self.title_timeout = title_timeout or TITLE_TIMEOUT
        self.completion_timeout = completion_timeout or COMPLETION_TIMEOUT
        self.augment_timeout = augment_timeout or AUGMENT_TIMEOUT
        self._session = session

    @property
    def completions_url(self) -> str:
        return self.base_url.rstrip("/") + "/chat/completions"

    def is_available(self) -> bool:
        """Check if the client is configured (base URL and API key)."""
        return bool(self.base_url and self.api_key)

    # =========================================================================
    # Pipeline Operations
    # =========================================================================

    def generate_title(self, content: str) -> str:
        """Short title for an idea, in the idea's language."""
        title = self.complete(
            self.title_model, TITLE_PROMPT, content,
            timeout=self.title_timeout, stage="title",
        )
        return title.strip().strip("\"'“”「」").strip()

    def polish_and_translate(self, title: str, content: str, lang: Language, strict: bool = False) -> str:
        """
        Ask for the combined polish + translation JSON object.

        Returns the raw reply; it may need repair before it parses.

        Args:
            strict: Append a reminder about JSON escaping (used on retry after a
                malformed reply).
        """
        system = POLISH_PROMPT.format(
            source=lang.display_name,
            target=lang.other.display_name,
            lang=lang.value,
        )
        if strict:
            system += POLISH_RETRY_SUFFIX
        return self.complete(
            self.model, system, build_idea_message(title, content),
            timeout=self.completion_timeout, stage="polish",
        )

    def generate_slug(self, title: str) -> str:
        """Slug suggestion for a title; callers sanitize the reply."""
        return self.complete(
            self.title_model, SLUG_PROMPT, title,
            timeout=self.title_timeout, stage="slug",
        )

    def augment(self, title: str, content: str, lang: Language) -> str:
        """Context / Key Insights / Open Questions block in `lang`."""
        system = AUGMENT_PROMPT.format(language=lang.display_name)
        return self.complete(
            self.model, system, build_idea_message(title, content),
            timeout=self.augment_timeout, stage="augment",
        )

    def translate(self, text: str, source: Language, target: Language) -> str:
        """Translate Markdown text between the two languages."""
        system = TRANSLATE_PROMPT.format(
            source=source.display_name,
            target=target.display_name,
        )
        return self.complete(
            self.model, system, text,
            timeout=self.augment_timeout, stage="translate",
        )

    # =========================================================================
    # Transport
    # =========================================================================

    def complete(self, model: str, system: str, user: str, timeout: float, stage: str = "llm") -> str:
        """
        Send one chat-completion request and return the reply text.

        Raises:
            UpstreamError: On transport errors and timeouts, non-200 status,
                an error payload, or an empty choices list.
        """
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        payload = {
            "model": model,
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
        }

        post = self._session.post if self._session is not None else requests.post
        logger.debug("LLM %s request: model=%s timeout=%ss", stage, model, timeout)

        try:
            response = post(
                self.completions_url,
                headers=headers,
                json=payload,
                timeout=timeout,
            )
        except requests.Timeout:
            raise UpstreamError(f"LLM request timed out after {timeout}s", stage=stage)
        except requests.RequestException as e:
            raise UpstreamError(f"LLM request failed: {e}", stage=stage)

        if response.status_code != 200:
            raise UpstreamError(
                f"LLM API returned {response.status_code}: {response.text[:500]}",
                stage=stage,
                status=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise UpstreamError(f"LLM API returned invalid JSON: {e}", stage=stage, status=200)

        error = data.get("error") if isinstance(data, dict) else None
        if error:
            message = error.get("message", "unknown error") if isinstance(error, dict) else str(error)
            raise UpstreamError(f"LLM API error: {message}", stage=stage, status=200)

        choices = data.get("choices") if isinstance(data, dict) else None
        if not choices:
            raise UpstreamError("empty response from LLM API", stage=stage, status=200)

        try:
            content = choices[0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            raise UpstreamError("LLM API response has no message content", stage=stage, status=200)

        if not isinstance(content, str):
            raise UpstreamError("LLM API message content is not text", stage=stage, status=200)

        return content.strip()


# Singleton instance
_client: Optional[LLMClient] = None


def get_llm_client() -> LLMClient:
    """Get the singleton LLM client configured from the environment."""
    global _client
    if _client is None:
        _client = LLMClient()
    return _client
