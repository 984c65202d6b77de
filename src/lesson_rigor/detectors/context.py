"""
ContextDetector -- classifies the lesson topic and flags teaching-versus-practice
contradictions.

The detector reads behavior *patterns* from the shared Lexicon rather than a
BehaviorReport, so it never depends on another detector's output.
"""

import logging

from ..lexicon import DEFAULT_LEXICON, Lexicon, find_snippets, matching_names
from ..models import ContextReport, Contradiction

logger = logging.getLogger(__name__)

BULLYING_TOPIC = "bullying"

BASELINE_HYPOCRISY_SCORE = 90
CONTRADICTION_HYPOCRISY_SCORE = 20
PRACTICE_ONLY_HYPOCRISY_SCORE = 55

CONTRADICTION_DESCRIPTIONS: dict[str, str] = {
    "sarcasm": "Using sarcasm while teaching about bullying undermines the lesson's message",
    "public_shame": "Publicly exposing a student during a bullying lesson demonstrates the problem being taught against",
    "exclusion": "Excluding students during an anti-bullying lesson contradicts its goal",
    "aggression": "Aggressive language while teaching about bullying is pedagogically unacceptable",
    "disengagement": "Ignoring disengaged students during a bullying lesson leaves the message unpracticed",
}

CONTRADICTION_RECOMMENDATION = (
    "Critical: the lesson addresses bullying while bullying-adjacent behavior was observed. "
    "Review tone and language before teaching this topic again."
)
PRACTICE_ONLY_RECOMMENDATION = (
    "Bullying-adjacent behavior observed. Align classroom conduct with respectful communication."
)
NO_ISSUE_RECOMMENDATION = "No pedagogical contradiction detected. Lesson conduct is consistent with its topic."


class ContextDetector:
    """Topic classification plus the hypocrisy cross-check.

    Usage:
        report = ContextDetector().analyze("Hoje vamos falar sobre bullying. Só isso?")
        # report.teaching_about_bullying and report.practicing_bullying -> hypocrisy_score 20
    """

    def __init__(self, lexicon: Lexicon | None = None, evidence_limit: int = 2):
        self._lexicon = lexicon or DEFAULT_LEXICON
        self._evidence_limit = evidence_limit

    def detect_topics(self, transcript: str | None) -> list[str]:
        """Sorted tags of every topic with at least one keyword hit."""
        return sorted(matching_names(transcript or "", self._lexicon.topics))

    def practiced_behaviors(self, transcript: str | None) -> dict[str, list[str]]:
        """Bullying-adjacent behavior families present in the text, with evidence."""
        text = transcript or ""
        practiced = {}
        for family in self._lexicon.bullying_practice_families:
            snippets = find_snippets(text, self._lexicon.behavior(family), self._evidence_limit)
            if snippets:
                practiced[family] = snippets
        return practiced

    def analyze(self, transcript: str | None) -> ContextReport:
        topics = self.detect_topics(transcript)
        practiced = self.practiced_behaviors(transcript)

        teaching = BULLYING_TOPIC in topics
        practicing = bool(practiced)

        contradictions: list[Contradiction] = []
        if teaching and practicing:
            contradictions = [
                Contradiction(
                    topic=BULLYING_TOPIC,
                    behavior=family,
                    description=CONTRADICTION_DESCRIPTIONS.get(
                        family, f"{family} observed during a lesson about bullying"
                    ),
                    evidence=snippets,
                )
                for family, snippets in practiced.items()
            ]

        if contradictions:
            score, recommendation = CONTRADICTION_HYPOCRISY_SCORE, CONTRADICTION_RECOMMENDATION
        elif practicing:
            score, recommendation = PRACTICE_ONLY_HYPOCRISY_SCORE, PRACTICE_ONLY_RECOMMENDATION
        else:
            score, recommendation = BASELINE_HYPOCRISY_SCORE, NO_ISSUE_RECOMMENDATION

        if contradictions:
            logger.debug(
                f"[ContextDetector] {len(contradictions)} contradictions "
                f"(topics={topics})"
            )

        return ContextReport(
            detected_topics=topics,
            teaching_about_bullying=teaching,
            practicing_bullying=practicing,
            contradictions=contradictions,
            hypocrisy_score=score,
            recommendation=recommendation,
        )
