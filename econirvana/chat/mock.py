"""Deterministic offline replies for EcoBot.

Used when the live model is bypassed (offline mode) or has failed under
permissive fallback. Rules are checked in the order of ``RULES`` and the
first match wins, so a prompt like "hi, where do I recycle?" is a greeting.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from econirvana.chat.quiz import QuizQuestion, dump_quiz

logger = logging.getLogger(__name__)

QUIZ_QUESTIONS: tuple[QuizQuestion, ...] = (
    QuizQuestion(
        question="What makes e-waste particularly harmful to the environment?",
        options=(
            "It takes up more space in landfills than other waste",
            "It contains toxic materials like lead, mercury, and cadmium",
            "It produces more methane when decomposing",
            "It's harder to collect than regular waste",
        ),
        correct_answer="It contains toxic materials like lead, mercury, and cadmium",
        explanation=(
            "Electronic waste contains various toxic materials including lead, mercury, "
            "cadmium, and flame retardants that can leach into soil and groundwater when "
            "improperly disposed of in landfills."
        ),
    ),
    QuizQuestion(
        question="What percentage of e-waste materials can typically be recycled or recovered?",
        options=("Around 20-30%", "Around 40-50%", "Around 70-80%", "Over 90%"),
        correct_answer="Over 90%",
        explanation=(
            "More than 90% of the materials in electronic devices can be recovered and "
            "reused, including valuable metals like gold, silver, copper, and rare earth "
            "elements."
        ),
    ),
    QuizQuestion(
        question="Which of the following is NOT a component commonly found in e-waste?",
        options=("Lead", "Mercury", "Uranium", "Cadmium"),
        correct_answer="Uranium",
        explanation=(
            "While lead, mercury, and cadmium are commonly found in electronic waste, "
            "uranium is not a standard component in consumer electronics."
        ),
    ),
    QuizQuestion(
        question=(
            "What is the primary reason for proper data destruction when recycling "
            "electronic devices?"
        ),
        options=(
            "To make the recycling process faster",
            "To prevent personal information theft",
            "To recover more valuable materials",
            "To reduce the weight for transportation",
        ),
        correct_answer="To prevent personal information theft",
        explanation=(
            "Proper data destruction ensures that personal and sensitive information "
            "stored on devices cannot be accessed by unauthorized individuals, preventing "
            "identity theft and data breaches."
        ),
    ),
    QuizQuestion(
        question="Which approach to e-waste management is considered most environmentally friendly?",
        options=(
            "Landfilling with proper containment",
            "Incineration with energy recovery",
            "Recycling and resource recovery",
            "Exporting to developing countries",
        ),
        correct_answer="Recycling and resource recovery",
        explanation=(
            "Recycling and resource recovery allows valuable materials to be reused, "
            "reduces the need for raw material extraction, and prevents toxic substances "
            "from entering the environment."
        ),
    ),
)

GREETING_REPLY = "Hello! I'm EcoBot. How can I help you with e-waste recycling today?"

RECYCLING_REPLY = (
    "E-waste recycling is important for our environment. At EcoNirvana, we offer several "
    "recycling options including drop-off locations, doorstep pickup, and community "
    "events. We ensure all electronics are properly recycled with zero landfill commitment."
)

PICKUP_REPLY = (
    "Our doorstep collection service makes recycling convenient! We'll come to your "
    "location to pick up your e-waste. You can schedule a pickup through our website or "
    "mobile app."
)

DATA_SECURITY_REPLY = (
    "Data security is our priority. All devices undergo secure data wiping that meets DoD "
    "5220.22-M standards, or physical destruction for storage devices that cannot be "
    "wiped. We provide certificates of destruction for your peace of mind."
)

LOCATIONS_REPLY = (
    "We have multiple drop-off locations across the city including our Main Facility, "
    "Downtown Drop-off Center, Westside Collection Point, Northside Recycling Hub, "
    "Eastside Collection Center, and Southside Drop-off Point. You can find the nearest "
    "location using our website's map feature."
)

DEFAULT_REPLY = (
    "I'm here to help with all your e-waste recycling questions. You can ask about our "
    "services, locations, data security measures, or environmental impact."
)


def _contains_any(*keywords: str) -> Callable[[str], bool]:
    return lambda text: any(k in text for k in keywords)


def _contains_all(*keywords: str) -> Callable[[str], bool]:
    return lambda text: all(k in text for k in keywords)


@dataclass(frozen=True)
class MockRule:
    """A named (predicate, reply) pair. Predicates see the lowercased prompt."""

    name: str
    matches: Callable[[str], bool]
    reply: str


RULES: tuple[MockRule, ...] = (
    MockRule(
        "quiz",
        _contains_all("quiz questions", "e-waste recycling"),
        dump_quiz(QUIZ_QUESTIONS),
    ),
    MockRule("greeting", _contains_any("hello", "hi"), GREETING_REPLY),
    MockRule("recycling", _contains_any("recycle", "e-waste"), RECYCLING_REPLY),
    MockRule("pickup", _contains_any("pickup", "collection"), PICKUP_REPLY),
    MockRule("data_security", _contains_any("data", "security"), DATA_SECURITY_REPLY),
    MockRule("locations", _contains_any("location", "where"), LOCATIONS_REPLY),
)


def match_rule(prompt: str) -> MockRule | None:
    """Return the first rule matching *prompt*, or None."""
    text = prompt.lower()
    for rule in RULES:
        if rule.matches(text):
            return rule
    return None


def resolve(prompt: str) -> str:
    """Map a prompt to a canned reply. Falls back to ``DEFAULT_REPLY``."""
    rule = match_rule(prompt)
    if rule is None:
        logger.debug("Mock reply: default")
        return DEFAULT_REPLY
    logger.debug("Mock reply: %s", rule.name)
    return rule.reply
