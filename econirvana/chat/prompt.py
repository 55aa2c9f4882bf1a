"""System prompt assembly from the static knowledge snapshot."""

import logging
from functools import cache
from pathlib import Path

logger = logging.getLogger(__name__)

PROMPTS_DIR = Path(__file__).resolve().parent / "prompts"


def _read_prompt(filename: str) -> str:
    """Read a prompt markdown file, returning empty string if missing."""
    path = PROMPTS_DIR / filename
    if path.exists():
        return path.read_text(encoding="utf-8").strip()
    logger.warning("Prompt file missing: %s", path)
    return ""


@cache
def load_knowledge() -> str:
    """Return the knowledge snapshot (services, locations, points, standards)."""
    return _read_prompt("KNOWLEDGE.md")


@cache
def load_persona() -> str:
    """Return EcoBot's behavioural instructions."""
    return _read_prompt("PERSONA.md")


def build_system_prompt() -> str:
    """Assemble the single system message sent ahead of the conversation.

    The persona comes first, followed by the knowledge snapshot under a
    heading the model is told to ground its answers in.
    """
    sections = []
    persona = load_persona()
    if persona:
        sections.append(persona)

    knowledge = load_knowledge()
    if knowledge:
        sections.append(
            "Here is information about our services that you should use to "
            f"answer questions:\n\n{knowledge}"
        )

    return "\n\n---\n\n".join(sections)
