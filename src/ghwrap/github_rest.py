from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

import requests

from .project import GITHUB_HOST, Project

DEFAULT_API_URL = "https://api.github.com"
HTTP_ERROR_STATUS = 400
REQUEST_TIMEOUT = 30


def user_agent() -> str:
    from . import __version__  # noqa: PLC0415

    return f"ghwrap/{__version__}"


def api_url_for(host: str) -> str:
    """``api.github.com`` for the public host, ``/api/v3`` on Enterprise."""
    if host.lower() == GITHUB_HOST:
        return DEFAULT_API_URL
    return f"https://{host}/api/v3"


class GitHubAPIError(RuntimeError):
    """Raised when the GitHub REST API returns an error."""

    def __init__(
        self,
        message: str,
        *,
        status: int | None = None,
        response_text: str | None = None,
    ):
        super().__init__(message)
        self.status = status
        self.response_text = response_text


@dataclass
class GitHubRestClient:
    """Just the issue endpoints the ``issue`` command needs."""

    token: str | None
    base_url: str = DEFAULT_API_URL
    session: requests.Session | None = None
    _session: requests.Session = field(init=False, repr=False)

    def __post_init__(self) -> None:  # pragma: no cover - simple wiring
        self._session = self.session or requests.Session()
        if self.token:
            self._session.headers.setdefault("Authorization", f"token {self.token}")
        self._session.headers.setdefault("Accept", "application/vnd.github+json")
        self._session.headers.setdefault("User-Agent", user_agent())

    @classmethod
    def for_host(
        cls, host: str, token: str | None, session: requests.Session | None = None
    ) -> GitHubRestClient:
        return cls(token=token, base_url=api_url_for(host), session=session)

    # ---- REST helpers -------------------------------------------------
    def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json_body: Any | None = None,
    ) -> Any:
        url = (
            path
            if path.startswith("http")
            else f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"
        )
        try:
            response = self._session.request(
                method,
                url,
                params=params,
                json=json_body,
                headers=self._session.headers,
                timeout=REQUEST_TIMEOUT,
            )
        except requests.RequestException as exc:
            raise GitHubAPIError(f"GitHub API {method} {url} failed: {exc}") from exc
        if response.status_code >= HTTP_ERROR_STATUS:
            raise GitHubAPIError(
                f"GitHub API {method} {url} failed with {response.status_code}",
                status=response.status_code,
                response_text=response.text,
            )
        if response.text:
            try:
                return response.json()
            except ValueError:
                return response.text
        return None

    def _paginate(
        self, path: str, *, params: dict[str, Any] | None = None
    ) -> list[Any]:
        params = dict(params or {})
        per_page = params.setdefault("per_page", 100)
        params.setdefault("page", 1)
        results: list[Any] = []
        while True:
            data = self._request("GET", path, params=params)
            if not isinstance(data, list):
                break
            results.extend(data)
            if len(data) < per_page:
                break
            params["page"] = params.get("page", 1) + 1
        return results

    # ---- Issue operations --------------------------------------------
    def list_issues(self, project: Project, *, state: str = "open") -> list[dict[str, Any]]:
        params = {"state": state, "per_page": 100, "page": 1}
        data = self._paginate(f"/repos/{project.owner}/{project.name}/issues", params=params)
        return [entry for entry in data if isinstance(entry, dict)]

    def create_issue(
        self,
        project: Project,
        *,
        title: str,
        body: str,
        labels: Iterable[str] | None = None,
    ) -> dict[str, Any]:
        payload: dict[str, Any] = {"title": title, "body": body}
        label_list = list(labels or [])
        if label_list:
            payload["labels"] = label_list
        data = self._request(
            "POST", f"/repos/{project.owner}/{project.name}/issues", json_body=payload
        )
        if not isinstance(data, dict):
            raise GitHubAPIError("GitHub API returned an unexpected issue payload")
        return data


__all__ = ["GitHubAPIError", "GitHubRestClient", "api_url_for"]
