"""
Aspas - CLI Entry Point.

Usage:
    aspas onboard            Create your profile interactively
    aspas health             Check configuration and the profile store
    aspas version            Show version
"""

import asyncio
import logging

import typer
from rich.console import Console
from rich.panel import Panel
from rich.progress_bar import ProgressBar

app = typer.Typer(
    name="aspas",
    help="Aspas - Create your profile.",
    add_completion=False,
)
console = Console()

BACK_COMMANDS = ("back", "b")
EXIT_COMMANDS = ("exit", "quit", "q")


def _show_step(flow) -> None:
    from onboarding.forms import get_step_prompt

    prompt = get_step_prompt(flow.step)
    console.print()
    console.print(ProgressBar(total=1.0, completed=flow.progress, width=40))
    console.print(f"[bold]{prompt['title']}[/bold]")
    if prompt["subtitle"]:
        console.print(f"[dim]{prompt['subtitle']}[/dim]")


async def _run_onboarding(flow, picker) -> bool:
    """
    Walk the user through all three steps.

    Returns True once a profile is saved, False if the user quits.
    """
    from onboarding.state import OnboardingStep

    while True:
        _show_step(flow)
        hint = "[dim]('back' to go back, 'quit' to stop)[/dim]" if flow.can_go_back else "[dim]('quit' to stop)[/dim]"

        if flow.step == OnboardingStep.PROFILE_PICTURE:
            if flow.state.has_picture:
                console.print("[green]Picture selected.[/green] Press enter to finish, 'edit' to pick another.")
            answer = console.input(f"{hint} > ").strip()

            if answer.lower() in EXIT_COMMANDS:
                return False
            if answer.lower() in BACK_COMMANDS:
                flow.back()
                continue
            if not flow.state.has_picture or answer.lower() == "edit":
                if not await flow.pick_picture(picker):
                    console.print("[yellow]No picture selected.[/yellow]")
                continue

            with console.status("Saving profile..."):
                result = await flow.finish()

            if result.success:
                console.print(f"\n[bold green]Profile saved![/bold green] [dim](record {result.record_id})[/dim]")
                return True
            reason = result.failure.reason if result.failure else "unknown error"
            console.print(f"[red]Could not save your profile: {reason}[/red]")
            console.print("[dim]Press enter to try again.[/dim]")
            continue

        answer = console.input(f"{hint} > ").strip()
        if answer.lower() in EXIT_COMMANDS:
            return False
        if answer.lower() in BACK_COMMANDS:
            flow.back()
            continue

        if flow.step == OnboardingStep.PHONE_NUMBER:
            flow.set_phone_number(answer)
            if not flow.advance():
                console.print("[yellow]Enter exactly 10 digits.[/yellow]")
        else:
            flow.set_first_name(answer)
            if not flow.advance():
                console.print("[yellow]First name can't be empty.[/yellow]")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at DEBUG level"),
) -> None:
    """Configure logging from settings."""
    from aspas.config import settings

    logging.basicConfig(
        level="DEBUG" if verbose else settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command()
def onboard() -> None:
    """Create your profile: phone number, first name, picture."""
    from aspas.config import settings
    from aspas.db.client import get_store
    from onboarding.flow import OnboardingFlow
    from onboarding.images import FilePathImagePicker
    from onboarding.store import ProfileStoreAdapter

    console.print(
        Panel.fit(
            "[bold green]Welcome to Aspas[/bold green]\n"
            "Three quick steps to set up your profile.\n\n"
            "[dim]Type 'quit' at any time to stop.[/dim]",
            title="Profile",
            border_style="green",
        )
    )

    flow = OnboardingFlow(
        adapter=ProfileStoreAdapter(get_store()),
        picture_quality=settings.profile_picture_quality,
        reset_on_finish=settings.reset_on_finish,
    )
    picker = FilePathImagePicker(lambda: console.input("Path to picture (empty to cancel): "))

    try:
        saved = asyncio.run(_run_onboarding(flow, picker))
    except KeyboardInterrupt:
        console.print("\n\n[dim]Onboarding interrupted.[/dim]")
        raise typer.Exit(1)

    if not saved:
        console.print("\n[dim]Onboarding stopped. Nothing was saved.[/dim]")


@app.command()
def health() -> None:
    """Check configuration and the profile store."""
    from aspas.config import get_settings
    from aspas.db.adapter import StoreError
    from aspas.db.client import get_store

    console.print("\n[bold]Aspas Health Check[/bold]\n")

    try:
        settings = get_settings()
    except Exception as e:
        console.print(f"\n[red]❌ Configuration error: {e}[/red]")
        console.print("[dim]Check your environment variables or .env file.[/dim]")
        raise typer.Exit(1)

    console.print("✅ Configuration loaded")
    console.print(f"   Environment: {settings.aspas_env}")
    console.print(f"   Log level: {settings.log_level}")
    console.print(f"   Picture quality: {settings.profile_picture_quality}")

    try:
        asyncio.run(get_store().ping())
    except StoreError as e:
        console.print(f"❌ Profile store: {e.message}")
        raise typer.Exit(1)

    console.print(f"✅ Profile store ready at {settings.aspas_db_path}")
    console.print("\n[green]All checks passed![/green]")


@app.command()
def version() -> None:
    """Show version information."""
    from aspas import __version__

    console.print(f"Aspas version {__version__}")


if __name__ == "__main__":
    app()
