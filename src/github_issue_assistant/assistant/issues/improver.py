"""Optional AI rewrite of an issue draft."""

from __future__ import annotations

import json
import logging

from pydantic import ValidationError

from github_issue_assistant.assistant.errors import ImprovementError
from github_issue_assistant.assistant.issues.models import IssueDraft, IssueImprovement
from github_issue_assistant.assistant.issues.parsing import parse_json_object
from github_issue_assistant.llm.provider import LLMProvider

logger = logging.getLogger(__name__)

IMPROVEMENT_SYSTEM_PROMPT = (
    "You are a helpful assistant that helps people write clear, actionable GitHub issues. "
    "You reply with a single JSON object and nothing else."
)

IMPROVEMENT_INSTRUCTIONS = """\
Improve the following GitHub issue draft. Keep its meaning; make the title
concise and specific, and structure the description in markdown (summary,
details, expected outcome, acceptance criteria where relevant).

Draft:
{draft}

Reply with exactly one JSON object with these keys:
{
  "improvedTitle": "...",
  "improvedDescription": "markdown ...",
  "suggestedLabels": ["label", ...],
  "changes": "one line summarising what you changed"
}
"""

IMPROVEMENT_TEMPERATURE = 0.2


class IssueImprover:
    """Suggest an improved title, description and label set for a draft."""

    def __init__(self, *, llm: LLMProvider, temperature: float = IMPROVEMENT_TEMPERATURE) -> None:
        self._llm = llm
        self._temperature = temperature

    def request_improvement(self, draft: IssueDraft) -> IssueImprovement:
        """Ask the model for an improvement.

        Raises:
            ImprovementError: If the completion fails or the reply is not a valid improvement.
        """

        draft_json = json.dumps(
            {
                "type": draft.type.value,
                "title": draft.title,
                "description": draft.description,
                "labels": draft.labels,
            },
            indent=2,
            ensure_ascii=False,
        )
        messages = [
            {"role": "system", "content": IMPROVEMENT_SYSTEM_PROMPT},
            {"role": "user", "content": IMPROVEMENT_INSTRUCTIONS.replace("{draft}", draft_json)},
        ]
        try:
            reply = self._llm.chat(messages, temperature=self._temperature)
        except Exception as e:
            raise ImprovementError(str(e)) from e

        try:
            return IssueImprovement.model_validate(parse_json_object(reply))
        except (ValueError, ValidationError) as e:
            raise ImprovementError(f"Model reply was not a valid improvement: {e}") from e

    def improve(self, draft: IssueDraft) -> IssueImprovement | None:
        """Return a suggested improvement, or None when it could not be produced.

        The draft itself is never modified; applying the suggestion is up to the caller.
        """

        try:
            improvement = self.request_improvement(draft)
        except ImprovementError as e:
            logger.warning("Issue improvement failed; keeping draft", extra={"error": str(e)})
            return None

        logger.info("Issue improvement suggested", extra={"changes": improvement.changes})
        return improvement
