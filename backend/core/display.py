"""Rich terminal rendering for the identity CLI."""

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from modules.auth.models import Session
from modules.recovery.models import RecoveryStatus, RecoveryUrlReport, RecoveryView
from modules.verification.models import VerificationSnapshot, VerificationStatus

console = Console()


def _flag(present: bool) -> str:
    return "[green]Present[/green]" if present else "[red]Missing[/red]"


def print_session(session: Session) -> None:
    """Show the current identity, or that nobody is logged in."""
    identity = session.identity
    if identity is None:
        console.print("[dim]Not logged in[/dim]")
        return

    table = Table(show_header=False, box=None)
    table.add_row("Name", identity.name or "[dim]-[/dim]")
    table.add_row("Email", identity.email or "[dim]-[/dim]")
    table.add_row("Institution", identity.institution or "[dim]-[/dim]")
    table.add_row("Field of study", identity.field_of_study or "[dim]-[/dim]")
    table.add_row("Year", str(identity.year))
    table.add_row(
        "Verified",
        "[green]yes[/green]" if identity.is_verified else "[yellow]no[/yellow]",
    )
    console.print(Panel(table, title=f"Logged in as {identity.id}", expand=False))


def print_recovery_report(report: RecoveryUrlReport) -> None:
    """Show which reset-link parameters were found where."""
    table = Table(title="Reset link parameters")
    table.add_column("Parameter")
    table.add_column("Query (?)")
    table.add_column("Fragment (#)")

    query, fragment = report.query, report.fragment
    table.add_row("type", query.type or "[red]Missing[/red]", fragment.type or "[red]Missing[/red]")
    table.add_row("access_token", _flag(query.access_token), _flag(fragment.access_token))
    table.add_row("refresh_token", _flag(query.refresh_token), _flag(fragment.refresh_token))

    console.print(f"[bold]URL:[/bold] {report.url}")
    console.print(table)
    if report.source:
        console.print(f"[green]Usable recovery tokens found in the {report.source.value}[/green]")
    else:
        console.print("[red]No usable recovery tokens[/red]")


def print_recovery_status(status: RecoveryStatus) -> None:
    """Render the reset-password screen for the current state."""
    if status.view == RecoveryView.SPINNER:
        console.print("[dim]Verifying reset link...[/dim]")
    elif status.view == RecoveryView.ERROR_PANEL:
        console.print(Panel(f"{status.error}\n\n[dim]Go to Home[/dim]", title="Invalid Reset Link", style="red"))
    elif status.view == RecoveryView.CONFIRMATION:
        console.print(
            Panel(
                "Your password has been successfully updated. "
                "You can now sign in with your new password.\n\n[dim]Go to Sign In[/dim]",
                title="Password Reset Successful!",
                style="green",
            )
        )
    elif status.error:
        console.print(f"[red]{status.error}[/red]")


def print_verification(snapshot: VerificationSnapshot) -> None:
    """Show the outcome of an ID verification."""
    if snapshot.status == VerificationStatus.VERIFIED and snapshot.details:
        table = Table(show_header=False, box=None)
        table.add_row("Name", snapshot.details.name)
        table.add_row("Institution", snapshot.details.institution)
        table.add_row("ID number", snapshot.details.document_number)
        console.print(Panel(table, title="Fully Verified", style="green", expand=False))
    elif snapshot.status == VerificationStatus.FAILED:
        console.print(Panel(snapshot.error or "Unable to verify ID", title="Verification failed", style="red"))
    elif snapshot.error:
        console.print(f"[red]Error:[/red] {snapshot.error}")
    else:
        console.print(f"[dim]Status: {snapshot.status.value}[/dim]")
