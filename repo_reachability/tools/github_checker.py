"""GitHub API client for checking repository reachability and tokens."""

import asyncio
import logging
from typing import Dict, Optional
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from repo_reachability.config import get_settings
from repo_reachability.errors import FailureKind, describe_failure, failure_for_status
from repo_reachability.models import RepositoryMetadata, ValidationResult
from repo_reachability.validators import parse_github_url

logger = logging.getLogger(__name__)


class GitHubRepoChecker:
    """
    Checks whether GitHub repositories and access tokens are usable.

    Every call issues exactly one request and reports expected failures
    (bad URL, 4xx/5xx, timeout, network) through ValidationResult instead
    of raising. Nothing is cached between calls.
    """

    ACCEPT = "application/vnd.github.v3+json"

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        base_url: Optional[str] = None,
        user_agent: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        """
        Initialize the checker.

        Args:
            client: HTTP client to use. When omitted the checker creates one
                    on first use and closes it in close().
            base_url: Hosting API base URL, defaults to settings
            user_agent: User-Agent header value, defaults to settings
            timeout: Total request timeout in seconds, defaults to settings
        """
        settings = get_settings()
        self.base_url = (base_url or settings.api_url).rstrip("/")
        self.user_agent = user_agent or settings.user_agent
        self.timeout = timeout if timeout is not None else settings.timeout
        self._client = client
        self._owns_client = client is None

    async def _get_client(self) -> httpx.AsyncClient:
        """Gets or creates the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                follow_redirects=True,
            )
        return self._client

    async def close(self) -> None:
        """Closes the HTTP client if this checker created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "GitHubRepoChecker":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    def _headers(self, access_token: Optional[str] = None) -> Dict[str, str]:
        headers = {
            "Accept": self.ACCEPT,
            "User-Agent": self.user_agent,
        }
        if access_token:
            headers["Authorization"] = f"token {access_token}"
        return headers

    @staticmethod
    def _path_segment(value: str) -> str:
        """Percent-encodes one path segment; dot segments are escaped so they are not resolved."""
        if value in (".", ".."):
            return "%2E" * len(value)
        return quote(value, safe="")

    async def _get(self, url: str, access_token: Optional[str] = None) -> httpx.Response:
        """Issues one GET bounded by the total timeout."""
        client = await self._get_client()
        # Header encoding happens here; non-ASCII tokens raise UnicodeEncodeError
        request = client.build_request(
            "GET", url, headers=self._headers(access_token), timeout=self.timeout
        )
        return await asyncio.wait_for(client.send(request), timeout=self.timeout)

    async def check_repository(self, repo_url: str, access_token: Optional[str] = None) -> ValidationResult:
        """
        Checks that a repository URL is well formed and reachable.

        Args:
            repo_url: Repository URL in any accepted form
            access_token: Optional token, sent as "Authorization: token ..."

        Returns:
            ValidationResult with metadata on success, or a failure kind and
            message otherwise
        """
        reference = parse_github_url(repo_url)
        if reference is None:
            logger.info("Rejected repository URL with unrecognized format")
            kind = FailureKind.INVALID_FORMAT
            return ValidationResult.failed(kind, describe_failure(kind), is_valid_format=False)

        url = f"{self.base_url}/repos/{self._path_segment(reference.owner)}/{self._path_segment(reference.repo)}"

        try:
            response = await self._get(url, access_token)
        except (httpx.TimeoutException, asyncio.TimeoutError):
            logger.warning(f"Timed out after {self.timeout}s checking {reference.full_name}")
            kind = FailureKind.TIMEOUT
            return ValidationResult.failed(kind, describe_failure(kind))
        except (httpx.RequestError, UnicodeEncodeError) as e:
            logger.warning(f"Network error checking {reference.full_name}: {type(e).__name__}")
            kind = FailureKind.NETWORK
            return ValidationResult.failed(kind, describe_failure(kind, detail=str(e)), is_valid_format=False)

        if response.is_error:
            status = response.status_code
            kind = failure_for_status(status)
            logger.warning(f"GitHub API returned {status} for {reference.full_name}")
            return ValidationResult.failed(kind, describe_failure(kind, code=status))

        if response.status_code != 200:
            kind = FailureKind.UNEXPECTED_STATUS
            logger.warning(f"Unexpected status {response.status_code} for {reference.full_name}")
            return ValidationResult.failed(kind, describe_failure(kind, code=response.status_code))

        try:
            metadata = RepositoryMetadata.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            logger.warning(f"Unusable repository payload for {reference.full_name}: {e}")
            kind = FailureKind.INVALID_RESPONSE
            return ValidationResult.failed(kind, describe_failure(kind))

        logger.info(f"Repository {metadata.full_name} is accessible (private={metadata.is_private})")
        return ValidationResult.accessible(metadata)

    async def get_public_repo_info(self, repo_url: str) -> ValidationResult:
        """Checks a repository without credentials."""
        return await self.check_repository(repo_url)

    async def validate_token(self, access_token: str) -> bool:
        """
        Checks whether GitHub currently accepts an access token.

        Any outcome other than a 200 from the identity endpoint, including
        transport failures, yields False.
        """
        try:
            response = await self._get(f"{self.base_url}/user", access_token)
        except (httpx.HTTPError, asyncio.TimeoutError, UnicodeEncodeError) as e:
            logger.warning(f"Token validation request failed: {type(e).__name__}")
            return False

        if response.status_code != 200:
            logger.info(f"Token rejected by GitHub (status {response.status_code})")
            return False
        return True
