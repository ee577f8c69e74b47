"""
GitHub content store for Ideas.

Creates files through the GitHub REST contents API:
PUT https://api.github.com/repos/{owner}/{repo}/contents/{path}

API Documentation: https://docs.github.com/en/rest/repos/contents#create-or-update-file-contents

Each successful call is one commit. The request carries no "sha", so GitHub
refuses to touch a path that already exists. That refusal (409, or 422 whose
message names the missing "sha") is reported as WriteResult.CONFLICT; any
other 422 is a validation error and raises UpstreamError.
"""

import base64
import logging
import re
from typing import Dict, Optional
from urllib.parse import quote

import requests

from ideas.config import (
    GIT_TOKEN,
    GIT_REPO,
    GIT_COMMITTER_NAME,
    GIT_COMMITTER_EMAIL,
    WRITE_TIMEOUT,
    parse_repo,
)
from ideas.errors import UpstreamError
from ideas.storage.base import ContentStore, WriteResult
from ideas.text.slug import sanitize_commit_message

logger = logging.getLogger(__name__)


class GitHubContentStore(ContentStore):
    """
    GitHub-backed append-only content store.

    Configuration is pulled from environment variables via ideas.config:
    - GIT_TOKEN: token with contents write access
    - GIT_REPO: target repository, owner/repo
    - GIT_COMMITTER_NAME / GIT_COMMITTER_EMAIL: committer identity
    """

    API_BASE = "https://api.github.com"
    API_VERSION = "2022-11-28"

    # GitHub answers 422 for every validation failure; only this one means the path exists
    _MISSING_SHA = re.compile(r"\bsha\b", re.IGNORECASE)

    def __init__(
        self,
        token: str = None,
        repo: str = None,
        committer_name: str = None,
        committer_email: str = None,
        timeout: float = None,
        session: Optional[requests.Session] = None,
    ):
        self.token = token if token is not None else GIT_TOKEN
        self.owner, self.repo = parse_repo(repo if repo is not None else GIT_REPO)
        self.committer_name = committer_name or GIT_COMMITTER_NAME
        self.committer_email = committer_email or GIT_COMMITTER_EMAIL
        self.timeout = timeout or WRITE_TIMEOUT
        self._session = session

    @property
    def name(self) -> str:
        return "github"

    @property
    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.token}",
            "Content-Type": "application/json",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": self.API_VERSION,
        }

    def contents_url(self, path: str) -> str:
        return (
            f"{self.API_BASE}/repos/{self.owner}/{self.repo}/contents/"
            f"{quote(path.lstrip('/'))}"
        )

    @staticmethod
    def build_payload(content: str, message: str, name: str, email: str) -> Dict:
        """Request body for a create-file call."""
        return {
            "message": sanitize_commit_message(message),
            "content": base64.b64encode(content.encode("utf-8")).decode("ascii"),
            "committer": {
                "name": name,
                "email": email,
            },
        }

    def _validate_config(self) -> None:
        if not self.token:
            raise UpstreamError("GIT_TOKEN is not configured", stage="commit")

    @classmethod
    def _is_existing_path(cls, response) -> bool:
        """True for the refusals GitHub gives when the path exists and no sha was sent."""
        if response.status_code == 409:
            return True
        if response.status_code != 422:
            return False
        try:
            data = response.json()
        except ValueError:
            data = None
        message = data.get("message", "") if isinstance(data, dict) else response.text
        return bool(cls._MISSING_SHA.search(message or ""))

    def exists(self, path: str) -> bool:
        self._validate_config()

        get = self._session.get if self._session is not None else requests.get

        try:
            response = get(
                self.contents_url(path),
                headers=self._headers,
                timeout=self.timeout,
            )
        except requests.Timeout:
            raise UpstreamError(f"GitHub lookup of {path} timed out after {self.timeout}s", stage="commit")
        except requests.RequestException as e:
            raise UpstreamError(f"GitHub lookup of {path} failed: {e}", stage="commit")

        if response.status_code == 200:
            return True
        if response.status_code == 404:
            return False

        raise UpstreamError(
            f"GitHub API returned {response.status_code} looking up {path}: {response.text[:500]}",
            stage="commit",
            status=response.status_code,
        )

    def create_file(self, path: str, content: str, message: str) -> WriteResult:
        self._validate_config()

        payload = self.build_payload(content, message, self.committer_name, self.committer_email)
        put = self._session.put if self._session is not None else requests.put

        try:
            response = put(
                self.contents_url(path),
                headers=self._headers,
                json=payload,
                timeout=self.timeout,
            )
        except requests.Timeout:
            raise UpstreamError(f"GitHub request for {path} timed out after {self.timeout}s", stage="commit")
        except requests.RequestException as e:
            raise UpstreamError(f"GitHub request for {path} failed: {e}", stage="commit")

        if response.status_code == 201:
            logger.info("Created %s in %s/%s", path, self.owner, self.repo)
            return WriteResult.CREATED

        if self._is_existing_path(response):
            logger.info("Path %s already exists in %s/%s", path, self.owner, self.repo)
            return WriteResult.CONFLICT

        raise UpstreamError(
            f"GitHub API returned {response.status_code} for {path}: {response.text[:500]}",
            stage="commit",
            status=response.status_code,
        )
