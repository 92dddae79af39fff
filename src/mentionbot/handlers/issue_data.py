"""Bot-owned section of an issue description.

Handlers keep per-issue state in a block at the top of the issue body: some
visible text plus a JSON payload hidden in an HTML comment. The block is
rewritten in place on every update and never touches the rest of the body.

    <!-- MENTIONBOT_ASSIGN_START -->
    This issue has been assigned to @carol via [this comment](...).
    <!-- MENTIONBOT_ASSIGN_DATA_START$${"user": "carol"}$$MENTIONBOT_ASSIGN_DATA_END -->
    <!-- MENTIONBOT_ASSIGN_END -->
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional, Tuple

from ..core.models import Issue
from ..github import GitHubManager

LOGGER = logging.getLogger(__name__)


class IssueBodySection:
    def __init__(self, issue: Issue, key: str) -> None:
        self.issue = issue
        self.key = key
        self._start = f"<!-- MENTIONBOT_{key}_START -->"
        self._end = f"<!-- MENTIONBOT_{key}_END -->"
        self._data_start = f"<!-- MENTIONBOT_{key}_DATA_START$$"
        self._data_end = f"$$MENTIONBOT_{key}_DATA_END -->"

    def current_data(self) -> Optional[Dict[str, Any]]:
        """Return the stored payload, or ``None`` when there is none."""
        bounds = self._bounds()
        if bounds is None:
            return None
        section = self.issue.body[bounds[0] : bounds[1]]
        start = section.find(self._data_start)
        end = section.find(self._data_end, start)
        if start == -1 or end == -1:
            return None
        raw = section[start + len(self._data_start) : end]
        try:
            data = json.loads(raw)
        except ValueError:
            LOGGER.warning(
                "Ignoring malformed %s data in %s#%s", self.key, self.issue.repo, self.issue.number
            )
            return None
        return data if isinstance(data, dict) else None

    def render(self, text: str, data: Dict[str, Any]) -> str:
        """Return the issue body with this section replaced by ``text`` and ``data``."""
        section = (
            f"{self._start}\n"
            f"{text}\n"
            f"{self._data_start}{json.dumps(data)}{self._data_end}\n"
            f"{self._end}"
        )
        body = self.issue.body
        bounds = self._bounds()
        if bounds is not None:
            return body[: bounds[0]] + section + body[bounds[1] :]
        if not body:
            return section
        return f"{section}\n\n{body}"

    async def apply(self, github: GitHubManager, text: str, data: Dict[str, Any]) -> None:
        await github.edit_issue_body(self.issue, self.render(text, data))

    def _bounds(self) -> Optional[Tuple[int, int]]:
        body = self.issue.body
        start = body.find(self._start)
        if start == -1:
            return None
        end = body.find(self._end, start)
        if end == -1:
            return None
        return start, end + len(self._end)
