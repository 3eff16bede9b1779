"""gitscript CLI - scripting shortcuts over the git command line."""

import json
from pathlib import Path
from typing import Optional

import typer
from rich import print
from rich.console import Console
from rich.markup import escape

from . import __version__
from .config import (
    get_default_format,
    get_repo_path,
    set_format_command,
    set_repo_command,
    show_config_command,
)
from .formatting import format_short_sha
from .git_basic import COMMANDS, GitBasicInterface, GitError
from .status import RepoStatus, classify_status
from .tables import create_record_table
from .workflow import WorkflowRecord, revert_update, update

app = typer.Typer(
    name="gitscript",
    help="Scripting shortcuts for common git branch workflows",
    no_args_is_help=True,
)

console = Console()

REPO_OPTION = typer.Option(
    None, "--repo", "-C", help="Repository path (defaults to config, then current directory)"
)
FORMAT_OPTION = typer.Option(None, "--format", help="Output format: table or json")


def open_repo(repo: Optional[Path]) -> GitBasicInterface:
    """Open the repository given on the command line, in config, or the current directory."""
    repo_path = repo or get_repo_path()
    try:
        return GitBasicInterface(repo_path, console=console)
    except GitError as e:
        console.print(f"[red]Error: {e}[/red]")
        console.print("[yellow]Please run gitscript from within a git repository.[/yellow]")
        raise typer.Exit(1) from None


def display_record(record: WorkflowRecord, title: str, format_type: Optional[str]) -> None:
    """Print a workflow record and exit with the code of its last step."""
    format_type = format_type or get_default_format()

    if format_type == "json":
        console.print(json.dumps(record.to_dict(), indent=2), markup=False, soft_wrap=True)
    else:
        console.print(create_record_table(record, title))
        if record.ok:
            console.print(f"[green]✅ {title} succeeded[/green]")
        else:
            console.print(f"[red]❌ {title} failed at: {escape(record.command_text)}[/red]")
            if record.stderr.strip():
                console.print(f"[dim]{escape(record.stderr.strip())}[/dim]")

    if not record.ok:
        raise typer.Exit(record.exit_code)


@app.command("status")
def status(repo: Optional[Path] = REPO_OPTION) -> None:
    """Check that every change is committed and pushed."""
    git = open_repo(repo)
    result = git.status()
    if not result.ok:
        console.print(f"[red]Error: {escape(result.stderr.strip())}[/red]")
        raise typer.Exit(result.exit_code)

    repo_status = classify_status(result.stdout)
    if repo_status is RepoStatus.CLEAN:
        console.print("[green]✅ Working tree clean, nothing to push[/green]")
        return

    console.print(f"[yellow]{repo_status.message}[/yellow]")
    raise typer.Exit(1)


@app.command("update")
def update_command(
    branch: str = typer.Argument(help="Branch to check out and pull"),
    remote_branch: Optional[str] = typer.Argument(
        None, help="Remote branch to track if BRANCH is not local (e.g., origin/main)"
    ),
    repo: Optional[Path] = REPO_OPTION,
    format_type: Optional[str] = FORMAT_OPTION,
) -> None:
    """Fetch, check out BRANCH (creating it from its remote if needed) and pull."""
    git = open_repo(repo)
    console.print(f"[dim]Updating {branch}...[/dim]")
    record = update(git, branch, remote_branch)
    display_record(record, f"Update {branch}", format_type)


@app.command("revert-update")
def revert_update_command(
    branch: str = typer.Argument(help="Branch to check out"),
    branch_id: str = typer.Argument(help="Commit on BRANCH to hard reset to"),
    repo: Optional[Path] = REPO_OPTION,
    format_type: Optional[str] = FORMAT_OPTION,
) -> None:
    """Fetch, check out BRANCH and hard reset it to BRANCH_ID."""
    git = open_repo(repo)
    console.print(f"[dim]Reverting {branch} to {format_short_sha(branch_id)}...[/dim]")
    record = revert_update(git, branch, branch_id)
    display_record(record, f"Revert {branch}", format_type)


@app.command("info")
def info(repo: Optional[Path] = REPO_OPTION) -> None:
    """Show current branch, commit and tag."""
    git = open_repo(repo)
    try:
        branch = git.current()
        sha = git.current_id()
    except GitError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from None

    try:
        tag = git.describe_tag()
    except GitError:
        tag = "[dim]no tags[/dim]"

    console.print(f"[bold]Branch: {branch}[/bold]")
    console.print(f"├── Commit: {format_short_sha(sha)}")
    console.print(f"└── Tag: {tag}")


@app.command("run")
def run(
    name: str = typer.Argument(help=f"Command name: {', '.join(COMMANDS)}"),
    argument: Optional[str] = typer.Argument(None, help="Argument appended to the command"),
    repo: Optional[Path] = REPO_OPTION,
) -> None:
    """Run a single git command by name."""
    if name not in COMMANDS:
        console.print(f"[red]Error: Unknown command '{name}'[/red]")
        console.print(f"[yellow]Available: {', '.join(COMMANDS)}[/yellow]")
        raise typer.Exit(2)

    git = open_repo(repo)
    result = git.git_cmd(name, argument)
    console.print(f"[dim]$ {escape(result.command_text)}[/dim]")
    if result.stdout:
        console.print(result.stdout.rstrip(), markup=False, highlight=False)
    if result.stderr:
        console.print(result.stderr.rstrip(), markup=False, highlight=False, style="red")
    if not result.ok:
        raise typer.Exit(result.exit_code)


# Create config subcommand group
config_app = typer.Typer(name="config", help="Manage gitscript configuration")
app.add_typer(config_app)


@config_app.command("set-repo")
def set_repo(repo_path: str = typer.Argument(help="Default repository path")) -> None:
    """Set the default repository path."""
    set_repo_command(repo_path)


@config_app.command("set-format")
def set_format(format_type: str = typer.Argument(help="Output format: table or json")) -> None:
    """Set the default output format."""
    set_format_command(format_type)


@config_app.command("show")
def show(
    format_type: str = typer.Option("table", "--format", help="Output format: table or json"),
) -> None:
    """Show current configuration."""
    show_config_command(format_type)


@app.command()
def version() -> None:
    """Show version information."""
    print(f"gitscript version: [bold]{__version__}[/bold]")


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
