"""
Configuration module.

Handles environment variables, API keys, and application settings.
"""

from ideas.config.config import (
    APP_ENV,
    DEBUG,
    LLM_BASE_URL,
    LLM_API_KEY,
    LLM_MODEL,
    LLM_TITLE_MODEL,
    GIT_TOKEN,
    GIT_REPO,
    GIT_COMMITTER_NAME,
    GIT_COMMITTER_EMAIL,
    CONTENT_DIR,
    IDEAS_ADDR,
    IDEAS_URL,
    IDEAS_TOKEN,
    LOGIN_VERIFY_URL,
    TITLE_TIMEOUT,
    COMPLETION_TIMEOUT,
    AUGMENT_TIMEOUT,
    WRITE_TIMEOUT,
    MALFORMED_RETRIES,
    SLUG_MAX_ATTEMPTS,
    AUGMENT_ENABLED,
    is_production,
    is_development,
    parse_repo,
    validate_config,
    print_config_summary,
)

__all__ = [
    "APP_ENV",
    "DEBUG",
    "LLM_BASE_URL",
    "LLM_API_KEY",
    "LLM_MODEL",
    "LLM_TITLE_MODEL",
    "GIT_TOKEN",
    "GIT_REPO",
    "GIT_COMMITTER_NAME",
    "GIT_COMMITTER_EMAIL",
    "CONTENT_DIR",
    "IDEAS_ADDR",
    "IDEAS_URL",
    "IDEAS_TOKEN",
    "LOGIN_VERIFY_URL",
    "TITLE_TIMEOUT",
    "COMPLETION_TIMEOUT",
    "AUGMENT_TIMEOUT",
    "WRITE_TIMEOUT",
    "MALFORMED_RETRIES",
    "SLUG_MAX_ATTEMPTS",
    "AUGMENT_ENABLED",
    "is_production",
    "is_development",
    "parse_repo",
    "validate_config",
    "print_config_summary",
]
