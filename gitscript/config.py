"""Configuration management for the gitscript CLI."""

import json
from pathlib import Path
from typing import Any, Dict, Optional

import typer
import yaml
from rich.console import Console

console = Console()

OUTPUT_FORMATS = ("table", "json")


def get_config_dir() -> Path:
    """Get gitscript configuration directory."""
    return Path.home() / ".gitscript"


def get_config_file() -> Path:
    """Get configuration file path."""
    return get_config_dir() / "config.yml"


def default_config() -> Dict[str, Any]:
    return {
        "default": {"repo_path": None},
        "preferences": {"default_format": "table"},
    }


def load_config() -> Dict[str, Any]:
    """Load configuration from file."""
    config_file = get_config_file()
    if not config_file.exists():
        return default_config()

    with open(config_file) as f:
        return yaml.safe_load(f) or {}


def save_config(config: Dict[str, Any]) -> None:
    """Save configuration to file."""
    config_file = get_config_file()
    config_file.parent.mkdir(exist_ok=True)
    with open(config_file, "w") as f:
        yaml.dump(config, f, default_flow_style=False)


def get_repo_path() -> Optional[str]:
    """Get configured repository path."""
    config = load_config()
    defaults = config.get("default", {})
    if isinstance(defaults, dict):
        repo_path = defaults.get("repo_path")
        return repo_path if isinstance(repo_path, str) else None
    return None


def get_default_format() -> str:
    """Get configured output format, falling back to table."""
    config = load_config()
    preferences = config.get("preferences", {})
    format_type = preferences.get("default_format") if isinstance(preferences, dict) else None
    return format_type if format_type in OUTPUT_FORMATS else "table"


def set_repo_command(repo_path: str) -> None:
    """Set the repository path."""
    # Expand ~ to home directory
    expanded_path = Path(repo_path).expanduser().resolve()

    if not (expanded_path / ".git").exists():
        console.print(f"[red]Error: Not a git repository: {expanded_path}[/red]")
        raise typer.Exit(1)

    config = load_config()
    config.setdefault("default", {})["repo_path"] = str(expanded_path)
    save_config(config)

    console.print(f"[green]✅ Repository path set to: {expanded_path}[/green]")


def set_format_command(format_type: str) -> None:
    """Set the default output format."""
    if format_type not in OUTPUT_FORMATS:
        console.print(
            f"[red]Error: Unknown format '{format_type}', expected one of: "
            f"{', '.join(OUTPUT_FORMATS)}[/red]"
        )
        raise typer.Exit(1)

    config = load_config()
    config.setdefault("preferences", {})["default_format"] = format_type
    save_config(config)

    console.print(f"[green]✅ Default format set to: {format_type}[/green]")


def show_config_command(format_type: str = "table") -> None:
    """Show current configuration."""
    repo_path = get_repo_path()
    default_format = get_default_format()

    if format_type == "json":
        output = {
            "repo_path": repo_path,
            "default_format": default_format,
            "config_file": str(get_config_file()),
        }
        console.print(json.dumps(output, indent=2))
    else:
        console.print("[bold]gitscript Configuration[/bold]")
        console.print(f"Repository: {repo_path or '[dim]current directory[/dim]'}")
        console.print(f"Default format: {default_format}")
        console.print(f"Config file: {get_config_file()}")
