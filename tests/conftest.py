"""
Pytest Configuration and Fixtures

This module provides:
- Project root on sys.path
- Shared fixtures for all tests (sample LLM replies, fake LLM client, stores)
- Test category markers
"""

import json
import sys
from pathlib import Path
from unittest.mock import Mock

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from ideas.models.idea import IdeaSubmission
from ideas.models.language import Language
from ideas.pipeline import PipelineConfig
from ideas.services.llm_client import LLMClient
from ideas.storage.memory import MemoryContentStore
from tests.sample_data import (
    AUGMENTED_EN,
    AUGMENTED_ZH,
    SUBMITTED_AT,
    ZH_RESULT,
    EN_RESULT,
    reply_with_raw_newlines,
)


# =============================================================================
# SHARED FIXTURES
# =============================================================================

@pytest.fixture
def submitted_at():
    return SUBMITTED_AT


@pytest.fixture
def en_submission():
    """An English idea without title."""
    return IdeaSubmission(
        content="every note i write should exist in two languages. this makes it reachable",
        submitted_at=SUBMITTED_AT,
    )


@pytest.fixture
def zh_submission():
    """A Chinese idea with a title."""
    return IdeaSubmission(
        content="缓存失效是计算机科学中最难的问题之一",
        title="缓存",
        submitted_at=SUBMITTED_AT,
    )


@pytest.fixture
def en_reply():
    """Polish reply for the English idea, with unescaped newlines."""
    return reply_with_raw_newlines(EN_RESULT)


@pytest.fixture
def zh_reply():
    """Polish reply for the Chinese idea, valid JSON."""
    return json.dumps(ZH_RESULT, ensure_ascii=False)


@pytest.fixture
def mock_llm(en_reply):
    """A fake LLM client answering every pipeline call."""
    llm = Mock(spec=LLMClient)
    llm.generate_title.return_value = "Bilingual notes"
    llm.polish_and_translate.return_value = en_reply
    llm.generate_slug.return_value = "bilingual-notes"
    llm.augment.return_value = AUGMENTED_EN
    llm.translate.return_value = AUGMENTED_ZH
    return llm


@pytest.fixture
def memory_store():
    """An empty in-memory content store."""
    return MemoryContentStore()


@pytest.fixture
def pipeline_config():
    """Pipeline config that never touches the environment's credentials."""
    return PipelineConfig(
        llm_base_url="https://llm.example.com",
        llm_api_key="test-key",
        git_token="",
        git_repo="owner/blog",
        content_dir="content/ideas",
        malformed_retries=1,
        slug_max_attempts=3,
        augment_enabled=True,
    )


@pytest.fixture
def mock_http_response():
    """Factory for requests-like response mocks."""
    def _make(status_code=200, json_data=None, text=""):
        response = Mock()
        response.status_code = status_code
        response.text = text or (json.dumps(json_data) if json_data is not None else "")
        if json_data is None:
            response.json.side_effect = ValueError("no JSON")
        else:
            response.json.return_value = json_data
        return response
    return _make


@pytest.fixture
def en():
    return Language.EN


@pytest.fixture
def zh():
    return Language.ZH


# =============================================================================
# MARKERS FOR TEST CATEGORIES
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "repair: JSON repair of LLM replies"
    )
    config.addinivalue_line(
        "markers", "pipeline_orchestration: Pipeline stage order and failure policy"
    )
    config.addinivalue_line(
        "markers", "partial_commit: One-of-two document commit handling"
    )
