"""
Studex identity - command-line driver for the session, password recovery
and ID verification flows.

Uses the identity provider selected by IDENTITY_BACKEND (simulated by
default) and persists the session where SESSION_STORAGE_PATH points.
"""

import argparse
import asyncio
import mimetypes
import sys
from pathlib import Path

from rich.prompt import Prompt

from core.display import (
    console,
    print_recovery_report,
    print_recovery_status,
    print_session,
    print_verification,
)
from modules.auth.models import ProfileFields
from modules.auth.provider import get_identity_provider
from modules.auth.service import get_session_manager
from modules.recovery.controller import PasswordRecoveryController
from modules.recovery.extractor import describe_recovery_url
from modules.recovery.models import RecoveryState
from modules.verification.machine import create_verification_machine
from modules.verification.models import SelectedFile
from shared.exceptions import StudexError


async def login(email: str) -> int:
    """Log in and show the resulting session."""
    password = Prompt.ask("Password", password=True)
    try:
        session = await get_session_manager().login(email, password)
    except StudexError as e:
        console.print(f"[red]Error:[/red] {e.message}")
        return 1
    print_session(session)
    return 0


async def signup(args: argparse.Namespace) -> int:
    """Create an account from command-line profile fields."""
    password = Prompt.ask("Password", password=True)
    profile = ProfileFields(
        name=args.name,
        email=args.email,
        institution=args.institution,
        field_of_study=args.field_of_study,
        year=args.year,
        bio=args.bio,
    )
    try:
        session = await get_session_manager().signup(profile, password)
    except StudexError as e:
        console.print(f"[red]Error:[/red] {e.message}")
        return 1
    print_session(session)
    return 0


async def forgot_password(email: str) -> int:
    """Send a password reset link."""
    try:
        await get_session_manager().request_password_reset(email)
    except StudexError as e:
        console.print(f"[red]Error:[/red] {e.message}")
        return 1
    console.print("[green]We've sent a password reset link to your email.[/green]")
    return 0


async def reset_password(url: str) -> int:
    """Walk through the reset-password page for a reset link."""
    controller = PasswordRecoveryController(provider=get_identity_provider(), url=url)
    print_recovery_status(controller.status)

    status = await controller.start()
    if status.state != RecoveryState.READY:
        print_recovery_status(status)
        return 1

    while controller.state == RecoveryState.READY:
        password = Prompt.ask("New password", password=True)
        confirm = Prompt.ask("Confirm new password", password=True)
        await controller.submit(password, confirm)
        print_recovery_status(controller.status)
    return 0


async def verify_id(path: Path, media_type: str | None) -> int:
    """Run the ID verification flow on an image file."""
    if not path.exists():
        console.print(f"[red]Error:[/red] File not found: {path}")
        return 1

    declared = media_type or mimetypes.guess_type(path.name)[0] or "application/octet-stream"
    machine = create_verification_machine()
    try:
        snapshot = machine.select(
            SelectedFile(name=path.name, media_type=declared, payload=path.read_bytes())
        )
        if not snapshot.has_artifact:
            print_verification(snapshot)
            return 1

        console.print(f"[dim]Verifying {path.name} ({snapshot.status.value})...[/dim]")
        snapshot = await machine.verify()
        print_verification(snapshot)
    finally:
        machine.dispose()
    return 0 if snapshot.status.value == "verified" else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Studex identity: sessions, password recovery and ID verification"
    )
    commands = parser.add_subparsers(dest="command", required=True)

    login_cmd = commands.add_parser("login", help="Log in with email and password")
    login_cmd.add_argument("email")

    signup_cmd = commands.add_parser("signup", help="Create an account")
    signup_cmd.add_argument("email")
    signup_cmd.add_argument("--name")
    signup_cmd.add_argument("--institution")
    signup_cmd.add_argument("--field-of-study")
    signup_cmd.add_argument("--year", type=int)
    signup_cmd.add_argument("--bio")

    commands.add_parser("logout", help="Clear the stored session")
    commands.add_parser("whoami", help="Show the stored session")

    forgot_cmd = commands.add_parser("forgot-password", help="Email a password reset link")
    forgot_cmd.add_argument("email")

    reset_cmd = commands.add_parser("reset-password", help="Set a new password from a reset link")
    reset_cmd.add_argument("url", help="Reset link, including query string or fragment")

    debug_cmd = commands.add_parser("reset-debug", help="Show the recovery parameters in a reset link")
    debug_cmd.add_argument("url")

    verify_cmd = commands.add_parser("verify-id", help="Verify an ID card image")
    verify_cmd.add_argument("file", type=Path)
    verify_cmd.add_argument("--media-type", help="Override the guessed MIME type")

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    if args.command == "login":
        return asyncio.run(login(args.email))
    if args.command == "signup":
        return asyncio.run(signup(args))
    if args.command == "logout":
        try:
            get_session_manager().logout()
        except StudexError as e:
            console.print(f"[red]Error:[/red] {e.message}")
            return 1
        console.print("[green]Logged out[/green]")
        return 0
    if args.command == "whoami":
        print_session(get_session_manager().session)
        return 0
    if args.command == "forgot-password":
        return asyncio.run(forgot_password(args.email))
    if args.command == "reset-password":
        return asyncio.run(reset_password(args.url))
    if args.command == "reset-debug":
        print_recovery_report(describe_recovery_url(args.url))
        return 0
    if args.command == "verify-id":
        return asyncio.run(verify_id(args.file, args.media_type))
    return 2


if __name__ == "__main__":
    sys.exit(main())
