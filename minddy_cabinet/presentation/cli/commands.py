"""Command-line front end for the psychologist cabinet."""

import argparse
import asyncio
import json
import sys
from typing import Any, Dict

import structlog

from ...config import Container, get_settings
from ...domain.exceptions import CabinetException, ValidationError
from ...domain.value_objects import TelegramAuthData
from ...monitoring import bind_command_context, setup_logging
from ..cabinet import CabinetApp, Tab, View, TAB_LABELS
from .console_notifier import ConsoleNotifier

log = structlog.get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="minddy-cabinet",
        description="Manage your Minddy AI twin from the terminal"
    )
    parser.add_argument("--yes", "-y", action="store_true",
                        help="Answer yes to confirmation prompts")
    sub = parser.add_subparsers(dest="command", required=True)
    
    sub.add_parser("status", help="Show profile, AI twin and publishing state")
    
    login = sub.add_parser("login", help="Log in with a Telegram widget payload")
    login.add_argument("--auth-file", default="-",
                       help="JSON file with the widget payload, '-' for stdin (default)")
    login.add_argument("--dev", action="store_true",
                       help="Use the development stub assertion (MINDDY_DEBUG only)")
    
    sub.add_parser("logout", help="Forget the stored session")
    
    profile = sub.add_parser("profile", help="Edit profile details")
    for name in ("display-name", "bio", "education", "specializations", "experience"):
        profile.add_argument(f"--{name}")
    
    twin = sub.add_parser("twin", help="Edit AI twin greeting and system prompt")
    twin.add_argument("--greeting")
    twin.add_argument("--system-prompt")
    twin.add_argument("--suggest", choices=["greeting", "system_prompt", "questions"],
                      help="Replace the field with a generated suggestion before saving")
    
    questions = sub.add_parser("questions", help="Replace the ordered first questions")
    questions.add_argument("questions", nargs="*")
    
    sub.add_parser("publish", help="Publish the AI twin and print its link")
    sub.add_parser("unpublish", help="Withdraw the AI twin")
    
    sub.add_parser("chats", help="List preview chats")
    sub.add_parser("chat-new", help="Create a preview chat")
    
    chat_delete = sub.add_parser("chat-delete", help="Delete a preview chat")
    chat_delete.add_argument("chat_id")
    
    chat_messages = sub.add_parser("chat-messages", help="Show preview chat messages")
    chat_messages.add_argument("chat_id")
    
    chat_send = sub.add_parser("chat-send", help="Send a message to the AI twin")
    chat_send.add_argument("chat_id")
    chat_send.add_argument("text")
    
    return parser


def _read_auth_payload(path: str) -> Dict[str, Any]:
    try:
        if path == "-":
            return json.load(sys.stdin)
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except (OSError, ValueError) as e:
        raise ValidationError("auth_file", path, str(e))


async def _login_through_channel(app: CabinetApp, auth_data: TelegramAuthData) -> View:
    """Play the widget: wait on the login view, then deliver one assertion."""
    
    waiting = asyncio.create_task(app.wait_for_login())
    # let the login view subscribe before the widget fires
    await asyncio.sleep(0)
    if not waiting.done():
        app.login_channel.emit(auth_data)
    return await waiting


def _print_status(app: CabinetApp) -> None:
    profile = app.profile
    print(f"👤 {app.header_name}")
    
    if profile.profile:
        details = profile.profile
        for label, value in (
            ("Отображаемое имя", details.display_name),
            ("О себе", details.bio),
            ("Образование", details.education),
            ("Специализации", details.specializations),
            ("Опыт работы", details.experience),
        ):
            if value:
                print(f"  {label}: {value}")
    
    print(f"\n🤖 {TAB_LABELS[Tab.AI_TWIN]}")
    twin = profile.ai_twin
    print(f"  Приветствие: {twin.greeting if twin and twin.greeting else '—'}")
    print(f"  Системный промпт: {twin.system_prompt if twin and twin.system_prompt else '—'}")
    for index, question in enumerate(profile.question_texts, start=1):
        print(f"  {index}. {question}")
    
    panel = app.select_tab(Tab.PUBLISH)
    print(f"\n📢 {'Опубликовано' if panel.is_published else 'Не опубликовано'}")
    if panel.is_published and panel.current_share_url:
        print(f"  {panel.current_share_url}")
    for item in panel.checklist():
        mark = "✅" if item.checked else ("▫️" if item.optional else "❌")
        print(f"  {mark} {item.label}")


async def run_command(args: argparse.Namespace, container: Container) -> int:
    """Execute one command against the cabinet; returns the exit code."""
    
    settings = container.settings
    app = container.app
    
    if await app.start() != View.CABINET and args.command not in ("login", "logout"):
        print("Not logged in. Run `minddy-cabinet login` first.", file=sys.stderr)
        return 1
    
    if args.command == "login":
        if args.dev:
            if not settings.debug:
                print("--dev requires MINDDY_DEBUG=1", file=sys.stderr)
                return 1
            auth_data = TelegramAuthData.dev_stub()
        else:
            auth_data = TelegramAuthData.from_widget(_read_auth_payload(args.auth_file))
        
        view = await _login_through_channel(app, auth_data)
        if view != View.CABINET:
            print(f"❌ {app.error or 'Login failed'}", file=sys.stderr)
            return 1
        print(f"✅ Logged in as {app.header_name}")
        return 0
    
    if args.command == "logout":
        app.logout()
        print("Logged out")
        return 0
    
    if args.command == "status":
        _print_status(app)
        return 0
    
    if args.command == "profile":
        editor = app.select_tab(Tab.PROFILE)
        for field in ("display_name", "bio", "education", "specializations", "experience"):
            value = getattr(args, field)
            if value is not None:
                setattr(editor, field, value)
        return 0 if await editor.save() else 1
    
    if args.command == "twin":
        editor = app.select_tab(Tab.AI_TWIN)
        if args.greeting is not None:
            editor.greeting = args.greeting
        if args.system_prompt is not None:
            editor.system_prompt = args.system_prompt
        if args.suggest and not await editor.suggest(args.suggest):
            return 1
        ok = await editor.save()
        if ok:
            print(f"Приветствие: {editor.greeting}\nСистемный промпт: {editor.system_prompt}")
        return 0 if ok else 1
    
    if args.command == "questions":
        editor = app.select_tab(Tab.AI_TWIN)
        editor.questions = list(args.questions) or [""]
        return 0 if await editor.save() else 1
    
    if args.command == "publish":
        panel = app.select_tab(Tab.PUBLISH)
        if not await panel.publish():
            return 1
        print(f"✅ {panel.current_share_url}")
        return 0
    
    if args.command == "unpublish":
        panel = app.select_tab(Tab.PUBLISH)
        return 0 if await panel.unpublish() else 1
    
    preview = app.select_tab(Tab.PREVIEW)
    
    if args.command == "chats":
        await preview.load_chats()
        for chat in preview.chats:
            print(f"{chat.id}\t{chat.title}\t{chat.updated_at}")
        return 0
    
    if args.command == "chat-new":
        chat = await preview.create_chat()
        if chat is None:
            return 1
        print(chat.id)
        return 0
    
    await preview.load_chats()
    chat = next((c for c in preview.chats if c.id == args.chat_id), None)
    if chat is None:
        print(f"Chat {args.chat_id} not found", file=sys.stderr)
        return 1
    
    if args.command == "chat-delete":
        return 0 if await preview.delete_chat(chat.id) else 1
    
    await preview.select_chat(chat)
    
    if args.command == "chat-send":
        if not await preview.send_message(args.text):
            return 1
        print(preview.messages[-1].content)
        return 0
    
    for message in preview.messages:
        author = "Вы" if message.is_user_message else "AI"
        print(f"[{author}] {message.content}")
    return 0


async def _main(args: argparse.Namespace) -> int:
    settings = get_settings()
    container = Container(settings, notifier=ConsoleNotifier(assume_yes=args.yes))
    container.initialize()
    bind_command_context(args.command, settings.api_url)
    try:
        code = await run_command(args, container)
        log.debug("command_finished", exit_code=code)
        return code
    finally:
        await container.close()


def main() -> None:
    parser = build_parser()
    args = parser.parse_args()
    
    settings = get_settings()
    setup_logging(settings.log_level, json_format=settings.log_json)
    
    try:
        sys.exit(asyncio.run(_main(args)))
    except KeyboardInterrupt:
        print("\n\n❌ Interrupted by user")
        sys.exit(1)
    except CabinetException as e:
        print(f"\n❌ Error: {e.message}", file=sys.stderr)
        sys.exit(1)
