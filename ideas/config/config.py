"""
Configuration module for Ideas.

Loads environment variables from .env file and exposes them as typed configuration values.
Uses python-dotenv for loading and provides safe defaults where appropriate.

The pipeline never reads these constants directly: entry points turn them into an
immutable PipelineConfig (see ideas.pipeline) and hand that to the orchestrator.
"""

import os
from pathlib import Path
from typing import Tuple

from dotenv import load_dotenv

# Load .env file from project root
_project_root = Path(__file__).parent.parent.parent
_env_path = _project_root / ".env"
load_dotenv(_env_path)


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


# =============================================================================
# Application Environment
# =============================================================================

# Application environment: "development", "staging", or "production"
APP_ENV: str = os.getenv("APP_ENV", "development")

# Enable debug logging
DEBUG: bool = _env_bool("DEBUG", "false")


# =============================================================================
# LLM Configuration
# =============================================================================

# Base URL of an OpenAI-compatible chat-completion API (".../chat/completions" is appended)
LLM_BASE_URL: str = os.getenv("LLM_BASE_URL", "")

# Bearer token for the LLM API
LLM_API_KEY: str = os.getenv("LLM_API_KEY", "")

# Model used for polish/translate, augmentation and augmentation translation
LLM_MODEL: str = os.getenv("LLM_MODEL", "anthropic/claude-sonnet-4-5-20250929")

# Lightweight model used for titles and slugs
LLM_TITLE_MODEL: str = os.getenv("LLM_TITLE_MODEL", "anthropic/claude-haiku-4-5-20251001")


# =============================================================================
# GitHub Configuration
# =============================================================================

# Personal access token with contents:write on GIT_REPO
GIT_TOKEN: str = os.getenv("GIT_TOKEN", "")

# Target repository in owner/repo format
GIT_REPO: str = os.getenv("GIT_REPO", "changkun/blog")

GIT_COMMITTER_NAME: str = os.getenv("GIT_COMMITTER_NAME", "Ideas API Server")
GIT_COMMITTER_EMAIL: str = os.getenv("GIT_COMMITTER_EMAIL", "ideas@example.com")

# Directory inside the repository holding idea posts; documents land in {CONTENT_DIR}/{lang}/{slug}.md
CONTENT_DIR: str = os.getenv("CONTENT_DIR", "content/ideas")


# =============================================================================
# Server / Client Configuration
# =============================================================================

# Listen address of the HTTP server (host:port)
IDEAS_ADDR: str = os.getenv("IDEAS_ADDR", "0.0.0.0:80")

# Base URL used by the CLI in --remote mode
IDEAS_URL: str = os.getenv("IDEAS_URL", "https://api.changkun.de")

# Bearer token the CLI sends in --remote mode
IDEAS_TOKEN: str = os.getenv("IDEAS_TOKEN", "")

# Login service endpoint verifying bearer tokens (empty disables verification)
LOGIN_VERIFY_URL: str = os.getenv("LOGIN_VERIFY_URL", "")


# =============================================================================
# Timeouts and Retry Budget
# =============================================================================

# Title and slug generation (seconds)
TITLE_TIMEOUT: float = float(os.getenv("TITLE_TIMEOUT", "30"))

# Combined polish + translate call (seconds)
COMPLETION_TIMEOUT: float = float(os.getenv("COMPLETION_TIMEOUT", "90"))

# Augmentation and augmentation translation (seconds)
AUGMENT_TIMEOUT: float = float(os.getenv("AUGMENT_TIMEOUT", "90"))

# GitHub contents API write (seconds)
WRITE_TIMEOUT: float = float(os.getenv("WRITE_TIMEOUT", "30"))

# Extra polish attempts after a response that cannot be repaired into valid JSON
MALFORMED_RETRIES: int = int(os.getenv("MALFORMED_RETRIES", "1"))

# Slug candidates tried (base slug, then -2, -3, ...) before giving up on collisions
SLUG_MAX_ATTEMPTS: int = int(os.getenv("SLUG_MAX_ATTEMPTS", "5"))

# Ask the LLM for an augmentation block when the caller did not provide one
AUGMENT_ENABLED: bool = _env_bool("AUGMENT_ENABLED", "true")


# =============================================================================
# Helper Functions
# =============================================================================

def is_production() -> bool:
    """Check if running in production environment."""
    return APP_ENV == "production"


def is_development() -> bool:
    """Check if running in development environment."""
    return APP_ENV == "development"


def parse_repo(repo: str = None) -> Tuple[str, str]:
    """
    Split an owner/repo string.

    Raises:
        ValueError: If the value is not in owner/repo format.
    """
    repo = GIT_REPO if repo is None else repo
    parts = repo.split("/", 1)
    if len(parts) != 2 or not parts[0] or not parts[1]:
        raise ValueError(f"GIT_REPO must be in owner/repo format, got: {repo}")
    return parts[0], parts[1]


def validate_config() -> list[str]:
    """
    Validate that required configuration is present.

    Returns:
        List of missing or invalid configuration keys (empty if all valid).
    """
    errors = []

    if not LLM_BASE_URL:
        errors.append("LLM_BASE_URL is required")
    if not LLM_API_KEY:
        errors.append("LLM_API_KEY is required")
    if not GIT_TOKEN:
        errors.append("GIT_TOKEN is required")

    try:
        parse_repo()
    except ValueError as e:
        errors.append(str(e))

    for name, value in (
        ("TITLE_TIMEOUT", TITLE_TIMEOUT),
        ("COMPLETION_TIMEOUT", COMPLETION_TIMEOUT),
        ("AUGMENT_TIMEOUT", AUGMENT_TIMEOUT),
        ("WRITE_TIMEOUT", WRITE_TIMEOUT),
    ):
        if value <= 0:
            errors.append(f"{name} must be positive")

    if MALFORMED_RETRIES < 0:
        errors.append("MALFORMED_RETRIES cannot be negative")

    if SLUG_MAX_ATTEMPTS < 1:
        errors.append("SLUG_MAX_ATTEMPTS must be at least 1")

    return errors


def print_config_summary() -> None:
    """Print a summary of current configuration (safe for logs, no secrets)."""
    print(f"  APP_ENV: {APP_ENV}")
    print(f"  DEBUG: {DEBUG}")
    print(f"  LLM_BASE_URL: {LLM_BASE_URL or '(not set)'}")
    print(f"  LLM_API_KEY: {'***' if LLM_API_KEY else '(not set)'}")
    print(f"  LLM_MODEL: {LLM_MODEL}")
    print(f"  LLM_TITLE_MODEL: {LLM_TITLE_MODEL}")
    print(f"  GIT_TOKEN: {'***' if GIT_TOKEN else '(not set)'}")
    print(f"  GIT_REPO: {GIT_REPO}")
    print(f"  GIT_COMMITTER: {GIT_COMMITTER_NAME} <{GIT_COMMITTER_EMAIL}>")
    print(f"  CONTENT_DIR: {CONTENT_DIR}")
    print(f"  LOGIN_VERIFY_URL: {LOGIN_VERIFY_URL or '(disabled)'}")
    print(f"  TIMEOUTS: title={TITLE_TIMEOUT}s completion={COMPLETION_TIMEOUT}s "
          f"augment={AUGMENT_TIMEOUT}s write={WRITE_TIMEOUT}s")
    print(f"  MALFORMED_RETRIES: {MALFORMED_RETRIES}")
    print(f"  SLUG_MAX_ATTEMPTS: {SLUG_MAX_ATTEMPTS}")
    print(f"  AUGMENT_ENABLED: {AUGMENT_ENABLED}")
