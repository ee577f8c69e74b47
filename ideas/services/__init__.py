"""
Services module.

Contains external service integrations like the LLM chat-completion client.
"""

from ideas.services.llm_client import LLMClient, get_llm_client

__all__ = [
    "LLMClient",
    "get_llm_client",
]
