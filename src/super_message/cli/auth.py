"""CLI: super-message auth set-token|status|logout"""

from typing import Optional

import click
from rich.console import Console

console = Console()


def _load_config() -> dict:
    from super_message.cli.main import _load_config
    return _load_config()


def _save_config(cfg: dict) -> None:
    from super_message.cli.main import _save_config
    _save_config(cfg)


@click.group()
def auth():
    """Access token commands."""


@auth.command("set-token")
@click.option("--base-url", default=None, help="Platform API host (defaults to SM_API or the public host)")
def auth_set_token(base_url: Optional[str]):
    """Save the channel access token from the developer console."""
    cfg = _load_config()
    token = click.prompt("Access token", hide_input=True).strip()
    if not token:
        console.print("[red]Access token must not be empty.[/red]")
        raise SystemExit(1)
    cfg["access_token"] = token
    if base_url:
        cfg["base_url"] = base_url
    _save_config(cfg)
    console.print("[dim]Token saved to ~/.super-message/config.json[/dim]")


@auth.command("status")
def auth_status():
    """Show whether an access token is configured."""
    cfg = _load_config()
    if cfg.get("access_token"):
        host = cfg.get("base_url", "default host")
        console.print(f"[green]Access token configured[/green] ({host})")
    else:
        console.print("[yellow]No access token. Run `super-message auth set-token`.[/yellow]")


@auth.command("logout")
def auth_logout():
    """Clear saved credentials."""
    _save_config({})
    console.print("[green]Logged out.[/green]")
