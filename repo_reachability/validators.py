"""URL parsing for hosted GitHub repository references."""

import re
from typing import Optional, Pattern, Tuple

from pydantic import BaseModel, ConfigDict, Field

# Tried in order; the first match wins. The repo group is lazy so a trailing
# ".git" is left to the suffix group.
URL_PATTERNS: Tuple[Pattern[str], ...] = (
    re.compile(r"^https://github\.com/([^/]+)/([^/]+?)(?:\.git)?/?$"),
    re.compile(r"^git@github\.com:([^/]+)/([^/]+?)(?:\.git)?$"),
    re.compile(r"^https://www\.github\.com/([^/]+)/([^/]+?)(?:\.git)?/?$"),
)


class RepositoryReference(BaseModel):
    """The owner/repo pair identifying a GitHub repository."""

    model_config = ConfigDict(frozen=True)

    owner: str = Field(..., min_length=1, pattern=r"^[^/]+$")
    repo: str = Field(..., min_length=1, pattern=r"^[^/]+$")

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"


def parse_github_url(url: str) -> Optional[RepositoryReference]:
    """
    Extracts owner and repo from a GitHub repository URL.

    Accepts https://github.com/{owner}/{repo}, git@github.com:{owner}/{repo}
    and https://www.github.com/{owner}/{repo}, each with an optional ".git"
    suffix (and, for the https forms, an optional trailing slash).

    Args:
        url: Repository URL, surrounding whitespace allowed

    Returns:
        RepositoryReference, or None if the string is not a recognized URL
    """
    if not isinstance(url, str):
        return None

    candidate = url.strip()
    for pattern in URL_PATTERNS:
        match = pattern.match(candidate)
        if match:
            return RepositoryReference(owner=match.group(1), repo=match.group(2))

    return None
