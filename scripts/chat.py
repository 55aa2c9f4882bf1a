#!/usr/bin/env python3
"""Talk to EcoBot from the terminal.

Usage examples:
    # Interactive session with the configured backend
    uv run python scripts/chat.py

    # One question, offline mock replies, no simulated delay
    uv run python scripts/chat.py --mock -m "Where can I drop off a laptop?"

    # Print a freshly generated quiz
    uv run python scripts/chat.py --quiz
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Allow running from project root
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from econirvana.chat.backends import MockBackend, select_backend
from econirvana.chat.client import ChatBackendError
from econirvana.chat.quiz import QuizFormatError, generate_quiz
from econirvana.chat.session import ChatSession
from econirvana.config import settings


def _make_session(use_mock: bool) -> ChatSession:
    backend = MockBackend(delay=0) if use_mock else select_backend()
    return ChatSession(backend=backend, fallback_backend=MockBackend(delay=0))


async def _ask(chat: ChatSession, text: str) -> int:
    try:
        print(await chat.send_message(text))
    except ChatBackendError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1
    return 0


async def _quiz(chat: ChatSession) -> int:
    try:
        questions = await generate_quiz(chat)
    except (ChatBackendError, QuizFormatError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1
    for number, q in enumerate(questions, start=1):
        print(f"{number}. {q.question}")
        for letter, option in zip("abcd", q.options, strict=True):
            marker = "*" if option == q.correct_answer else " "
            print(f"   {marker} {letter}) {option}")
        print(f"   {q.explanation}\n")
    return 0


async def _repl(chat: ChatSession) -> int:
    print(f"EcoBot ({chat.backend.name} backend). Ctrl-D to quit, /reset to clear history.")
    while True:
        try:
            text = input("> ").strip()
        except EOFError:
            print()
            return 0
        if not text:
            continue
        if text == "/reset":
            print(f"Cleared {chat.reset()} messages.")
            continue
        await _ask(chat, text)


def main() -> None:
    parser = argparse.ArgumentParser(description="Chat with EcoBot")
    parser.add_argument("--message", "-m", help="Send a single message and exit")
    parser.add_argument("--quiz", action="store_true", help="Generate and print a quiz")
    parser.add_argument(
        "--mock",
        action="store_true",
        help=f"Force offline mock replies (configured: offline_mode={settings.offline_mode})",
    )
    args = parser.parse_args()

    chat = _make_session(args.mock)
    if args.quiz:
        sys.exit(asyncio.run(_quiz(chat)))
    if args.message:
        sys.exit(asyncio.run(_ask(chat, args.message)))
    sys.exit(asyncio.run(_repl(chat)))


if __name__ == "__main__":
    main()
