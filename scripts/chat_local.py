#!/usr/bin/env python3
"""
Interactive local chat harness (no HTTP).

Usage:
  python3 scripts/chat_local.py ["Website Development"]

What it does:
- Keeps the full transcript for the session and replays it on every turn,
  exactly like the /api/v1/chat/turn endpoint
- Prints the next question with its chips, or the proposal once everything is collected
"""

from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from dotenv import load_dotenv

load_dotenv()

from app.application.exceptions import UnknownServiceError
from app.domain.entities.message import ChatTurn
from app.domain.entities.reply import TurnReply
from app.infrastructure.transport.tag_codec import strip_tags
from app.wiring.dependencies import get_chat_turn_use_case


def _print_header(service: str) -> None:
    print("\nLocal Chat Harness")
    print("-" * 60)
    print(f"service: {service}")
    print("Type your message and press Enter.")
    print("Commands: /new, /service <name>, /services, /state, /history, /quit, /help")
    print("-" * 60)


def _print_reply(reply: TurnReply) -> None:
    print(f"\n(assistant) {strip_tags(reply.text)}")
    if reply.suggestions:
        kind = "multi-select" if reply.multi_select else "options"
        print(f"  [{kind}] " + " | ".join(reply.suggestions))
    if reply.proposal:
        print("\n--- Proposal ---")
        print(reply.proposal)
    print("-" * 60)


def main() -> None:
    use_case = get_chat_turn_use_case()
    service = sys.argv[1] if len(sys.argv) > 1 else "Website Development"
    history: list[ChatTurn] = []
    last: TurnReply | None = None

    def start() -> None:
        nonlocal last
        history.clear()
        last = use_case.opening(service)
        history.append(ChatTurn(role="assistant", content=last.text, question_key=last.question_key))
        _print_reply(last)

    _print_header(service)
    try:
        start()
    except UnknownServiceError as e:
        print(f"ERROR: {e}")
        return

    while True:
        try:
            user_text = input("\n> ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nBye!")
            return

        if not user_text:
            continue

        cmd = user_text.lower()
        if cmd in ("/quit", "/exit"):
            print("Bye!")
            return
        if cmd == "/help":
            print("Commands:")
            print("  /new -> restart the current service")
            print("  /service <name> -> switch service and restart")
            print("  /services -> list known services")
            print("  /state -> show collected answers and what is still missing")
            print("  /history -> show the last 10 turns")
            print("  /quit -> exit")
            continue
        if cmd == "/services":
            for name in use_case.list_services():
                print(f"  - {name}")
            continue
        if cmd == "/new":
            start()
            continue
        if cmd.startswith("/service "):
            candidate = user_text.split(" ", 1)[1].strip()
            try:
                use_case.resolve(candidate)
            except UnknownServiceError as e:
                print(f"ERROR: {e}")
                continue
            service = candidate
            _print_header(service)
            start()
            continue
        if cmd == "/state":
            if last is not None:
                for key, value in last.collected_data.items():
                    print(f"  {key}: {value}")
                print(f"  missing: {', '.join(last.missing_required) or '-'}")
            continue
        if cmd == "/history":
            print("\n--- History (last 10) ---")
            for turn in history[-10:]:
                print(f"{turn.role}: {strip_tags(turn.content)}")
            continue

        history.append(ChatTurn(role="user", content=user_text))
        last = use_case.execute(service, history)
        history.append(ChatTurn(role="assistant", content=last.text, question_key=last.question_key))
        _print_reply(last)


if __name__ == "__main__":
    main()
