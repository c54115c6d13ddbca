"""Issue-intent analysis.

Asks the model whether a chat message describes something specific enough to
become a GitHub issue. The decision is left entirely to the model; this module
only parses the reply and falls back to "no issue" on any failure.
"""

from __future__ import annotations

import logging

from pydantic import ValidationError

from github_issue_assistant.assistant.errors import AnalysisError
from github_issue_assistant.assistant.issues.models import IssueAnalysis
from github_issue_assistant.assistant.issues.parsing import parse_json_object
from github_issue_assistant.llm.provider import LLMProvider

logger = logging.getLogger(__name__)

ANALYSIS_SYSTEM_PROMPT = (
    "You are an assistant that triages messages into GitHub issues. "
    "You reply with a single JSON object and nothing else."
)

ANALYSIS_INSTRUCTIONS = """\
Decide whether the following message describes a concrete bug, feature request,
task or documentation change that should become a GitHub issue.

Only set "shouldCreateIssue" to true when the message is specific: it names a
behaviour, a component or a desired outcome. Greetings, questions about you,
and vague complaints ("it doesn't work") are NOT issues.

Reply with exactly one JSON object with these keys:
{
  "shouldCreateIssue": true or false,
  "type": "bug" | "feature" | "task" | "documentation" | "general",
  "title": "short imperative issue title",
  "description": "markdown issue body (steps, expected vs actual behaviour, context)",
  "labels": ["label", ...],
  "reasoning": "one sentence explaining the decision"
}

Message:
\"\"\"
{message}
\"\"\"
"""

ANALYSIS_TEMPERATURE = 0.2


class IssueAnalyzer:
    """Turn a user message into an :class:`IssueAnalysis`."""

    def __init__(self, *, llm: LLMProvider, temperature: float = ANALYSIS_TEMPERATURE) -> None:
        self._llm = llm
        self._temperature = temperature

    def request_analysis(self, message: str) -> IssueAnalysis:
        """Ask the model for an analysis.

        Raises:
            AnalysisError: If the completion fails or the reply is not a valid analysis.
        """

        messages = [
            {"role": "system", "content": ANALYSIS_SYSTEM_PROMPT},
            {"role": "user", "content": ANALYSIS_INSTRUCTIONS.replace("{message}", message)},
        ]
        try:
            reply = self._llm.chat(messages, temperature=self._temperature)
        except Exception as e:
            raise AnalysisError(str(e)) from e

        try:
            return IssueAnalysis.model_validate(parse_json_object(reply))
        except (ValueError, ValidationError) as e:
            logger.debug("Unparseable analysis reply", extra={"reply": reply[:500]})
            raise AnalysisError(f"Model reply was not a valid analysis: {e}") from e

    def analyze(self, message: str) -> IssueAnalysis:
        """Analyse `message`; never raises.

        On any failure the result is the safe default (`should_create_issue=False`)
        with `error` describing what went wrong.
        """

        if not message.strip():
            return IssueAnalysis.safe_default("Empty message")

        try:
            analysis = self.request_analysis(message)
        except AnalysisError as e:
            logger.warning("Issue analysis failed; assuming no issue", extra={"error": str(e)})
            return IssueAnalysis.safe_default(str(e))

        logger.info(
            "Message analysed",
            extra={
                "should_create_issue": analysis.should_create_issue,
                "type": analysis.type.value,
            },
        )
        return analysis
