"""E-waste quiz: question model, reply parsing and generation."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

if TYPE_CHECKING:
    from econirvana.chat.session import ChatSession

logger = logging.getLogger(__name__)

QUIZ_SIZE = 5
OPTIONS_PER_QUESTION = 4

QUIZ_PROMPT = (
    f"Generate {QUIZ_SIZE} multiple-choice quiz questions about e-waste recycling. "
    f"Each question must have exactly {OPTIONS_PER_QUESTION} options, one correct answer "
    "and a short explanation. Reply with a JSON array only, where each item has the keys "
    '"question", "options", "correctAnswer" and "explanation".'
)


class QuizFormatError(ValueError):
    """Raised when a quiz reply cannot be turned into valid questions."""


class QuizQuestion(BaseModel):
    """One multiple-choice question. Serialized with the ``correctAnswer`` key."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    question: str = Field(min_length=1)
    options: tuple[str, ...]
    correct_answer: str = Field(alias="correctAnswer")
    explanation: str = ""

    @field_validator("options")
    @classmethod
    def _four_distinct_options(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if len(value) != OPTIONS_PER_QUESTION:
            msg = f"expected {OPTIONS_PER_QUESTION} options, got {len(value)}"
            raise ValueError(msg)
        if len(set(value)) != len(value):
            msg = "options must be distinct"
            raise ValueError(msg)
        return value

    @model_validator(mode="after")
    def _answer_among_options(self) -> QuizQuestion:
        if self.correct_answer not in self.options:
            msg = f"correctAnswer {self.correct_answer!r} is not one of the options"
            raise ValueError(msg)
        return self

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")


def dump_quiz(questions: list[QuizQuestion] | tuple[QuizQuestion, ...]) -> str:
    """Serialize questions to the JSON array format the quiz page consumes."""
    return json.dumps([q.to_payload() for q in questions], indent=2)


def parse_quiz(text: str) -> list[QuizQuestion]:
    """Extract and validate a JSON array of questions from a model reply.

    Models often wrap JSON in prose or code fences, so everything outside the
    outermost ``[...]`` is ignored.

    Raises:
        QuizFormatError: No array found, invalid JSON, or an invalid record.
    """
    start = text.find("[")
    end = text.rfind("]")
    if start == -1 or end <= start:
        msg = "Quiz reply does not contain a JSON array"
        raise QuizFormatError(msg)

    try:
        raw = json.loads(text[start : end + 1])
    except json.JSONDecodeError as exc:
        msg = f"Quiz reply is not valid JSON: {exc}"
        raise QuizFormatError(msg) from exc

    if not isinstance(raw, list) or not raw:
        msg = "Quiz reply must be a non-empty JSON array"
        raise QuizFormatError(msg)

    questions: list[QuizQuestion] = []
    for index, item in enumerate(raw):
        try:
            questions.append(QuizQuestion.model_validate(item))
        except ValidationError as exc:
            msg = f"Quiz question {index + 1} is invalid: {exc.errors()[0]['msg']}"
            raise QuizFormatError(msg) from exc
    return questions


async def generate_quiz(chat: ChatSession) -> list[QuizQuestion]:
    """Ask the assistant for a fresh quiz and validate the reply.

    Uses a throwaway turn: the quiz exchange is removed from the session
    history afterwards so it does not leak into the user's conversation.
    """
    reply = await chat.send_message(QUIZ_PROMPT, remember=False)
    questions = parse_quiz(reply)
    if len(questions) != QUIZ_SIZE:
        msg = f"Expected {QUIZ_SIZE} quiz questions, got {len(questions)}"
        raise QuizFormatError(msg)
    logger.info("Generated quiz with %d questions", len(questions))
    return questions
