from __future__ import annotations

import base64
from typing import Optional
from urllib.parse import quote

import requests

from ..config import AppConfig, get_config
from ..errors import ConcurrentWriteError, DocumentStoreError
from ..logging import get_logger
from .interface import StoredDocument


class GitHubContentsStore:
    """Reads and writes one file of a GitHub repository through the contents API.

    The blob `sha` returned by a read is the concurrency token: a write carrying
    a stale sha is refused by GitHub with 409, which surfaces as
    ConcurrentWriteError.
    """

    def __init__(
        self,
        owner: str,
        repo: str,
        token: str,
        branch: str = "main",
        api_url: str = "https://api.github.com",
        session: Optional[requests.Session] = None,
        timeout: float = 30.0,
    ) -> None:
        self.owner = owner
        self.repo = repo
        self.branch = branch
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.logger = get_logger(__name__)
        self._session = session or requests.Session()
        self._session.headers.update({
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {token}",
        })

    @classmethod
    def from_config(cls, config: Optional[AppConfig] = None) -> "GitHubContentsStore":
        config = config or get_config()
        if not config.github_configured:
            raise DocumentStoreError("Missing GitHub configuration values.")
        return cls(
            owner=config.github_owner,
            repo=config.github_repo,
            token=config.github_token,
            branch=config.github_branch,
            api_url=config.github_api_url,
            timeout=config.request_timeout_seconds,
        )

    def _contents_url(self, path: str) -> str:
        return (
            f"{self.api_url}/repos/{quote(self.owner, safe='')}/{quote(self.repo, safe='')}"
            f"/contents/{quote(path, safe='/')}"
        )

    def read(self, path: str) -> StoredDocument:
        try:
            resp = self._session.get(self._contents_url(path), params={"ref": self.branch}, timeout=self.timeout)
        except requests.RequestException as exc:
            raise DocumentStoreError(f"GitHub GET failed: {exc}") from exc

        if resp.status_code == 404:
            self.logger.warning(f"{path} not found on {self.branch}, starting a new document")
            return StoredDocument(content=None, sha=None)
        if not resp.ok:
            raise DocumentStoreError(f"GitHub GET failed: {resp.status_code} {resp.text}")

        try:
            payload = resp.json()
            content = base64.b64decode(payload.get("content") or "").decode("utf-8")
        except (ValueError, AttributeError) as exc:
            raise DocumentStoreError(f"GitHub GET returned an unreadable file: {exc}") from exc
        return StoredDocument(content=content, sha=payload.get("sha"))

    def write(self, path: str, content: str, sha: Optional[str], message: str) -> None:
        body = {
            "message": message,
            "content": base64.b64encode(content.encode("utf-8")).decode("ascii"),
            "branch": self.branch,
        }
        if sha:
            body["sha"] = sha

        try:
            resp = self._session.put(self._contents_url(path), json=body, timeout=self.timeout)
        except requests.RequestException as exc:
            raise DocumentStoreError(f"GitHub PUT failed: {exc}") from exc

        # 409: sha is stale. 422 without a sha: the file was created meanwhile.
        if resp.status_code == 409 or (resp.status_code == 422 and not sha):
            raise ConcurrentWriteError(f"GitHub PUT conflict: {resp.status_code} {resp.text}")
        if not resp.ok:
            raise DocumentStoreError(f"GitHub PUT failed: {resp.status_code} {resp.text}")
        self.logger.debug(f"Wrote {path} on {self.branch}: {message}")
