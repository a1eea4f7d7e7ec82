"""sshdeck CLI."""

import logging
from pathlib import Path

import typer
import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from sshdeck.config import AppConfig, build_config
from sshdeck.resolve import load_ssh_config, resolve_connection_defaults
from sshdeck.store import CombinedStore, NotFoundError, StoreError, build_store
from sshdeck.types import Host

app = typer.Typer(help="sshdeck - catalogue of SSH hosts")
console = Console()
err_console = Console(stderr=True)

logger = logging.getLogger("sshdeck")


def setup_logging(level: str = "info", log_file: Path | None = None):
    """Configure logging with rich handler and an optional log file."""
    handlers: list[logging.Handler] = [
        RichHandler(console=err_console, rich_tracebacks=True, level=logging.WARNING),
    ]
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s"))
        handlers.append(file_handler)

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()
    for handler in handlers:
        logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if level == "debug" else logging.INFO)
    logging.getLogger("paramiko").setLevel(logging.WARNING)


def get_config(ctx: typer.Context) -> AppConfig:
    return ctx.obj["config"]


def get_store(ctx: typer.Context) -> CombinedStore:
    """Build the store and load the current listing so IDs resolve."""
    store = build_store(get_config(ctx), logger=logger)
    try:
        store.list()
    except (OSError, StoreError, yaml.YAMLError) as e:
        fail(f"Cannot read hosts: {e}")
    return store


def fail(message: str) -> None:
    console.print(f"[red]Error:[/red] {message}")
    raise typer.Exit(1)


def find_host(store: CombinedStore, host_id: int) -> Host:
    try:
        return store.get(host_id)
    except NotFoundError as e:
        fail(str(e))


@app.callback()
def main(
    ctx: typer.Context,
    app_home: str | None = typer.Option(None, "--app-home", "-a", help="Application home folder"),
    log_level: str | None = typer.Option(None, "--log-level", "-l", help="Log level: debug or info"),
    ssh_config_file: str | None = typer.Option(
        None, "--ssh-config-file", "-s", help="Path to the ssh_config file"
    ),
    enable_feature: str | None = typer.Option(None, "--enable-feature", "-e", help="Enable feature"),
    disable_feature: str | None = typer.Option(None, "--disable-feature", "-d", help="Disable feature"),
):
    """Manage SSH host shortcuts."""
    try:
        config = build_config(
            cli_overrides={
                "app_home": app_home,
                "log_level": log_level,
                "ssh_config_file_path": ssh_config_file,
            },
            enable_feature=enable_feature,
            disable_feature=disable_feature,
        )
    except ValueError as e:
        raise typer.BadParameter(str(e))

    setup_logging(config.log_level, config.log_path)
    ctx.obj = {"config": config}


@app.command("list")
def list_hosts(
    ctx: typer.Context,
    group: str | None = typer.Option(None, "--group", "-g", help="Only show hosts in this group"),
):
    """List all hosts."""
    store = build_store(get_config(ctx), logger=logger)
    try:
        hosts = store.list()
    except (OSError, StoreError, yaml.YAMLError) as e:
        fail(f"Cannot read hosts: {e}")

    if group:
        hosts = [h for h in hosts if h.group == group]

    if not hosts:
        console.print("No hosts.")
        return

    table = Table()
    table.add_column("ID", justify="right")
    table.add_column("Title")
    table.add_column("Group")
    table.add_column("Address")
    table.add_column("Source")

    for host in hosts:
        table.add_row(
            str(host.id),
            host.title,
            host.group,
            host.address,
            host.storage.value if host.storage else "",
        )
    console.print(table)


@app.command()
def show(
    ctx: typer.Context,
    host_id: int = typer.Argument(..., help="Host ID from 'sshdeck list'"),
):
    """Show host details and the connection settings ssh would use."""
    config = get_config(ctx)
    host = find_host(get_store(ctx), host_id)
    defaults = resolve_connection_defaults(host, load_ssh_config(config.ssh_config_file_path))

    lines = [
        f"[bold]Title:[/bold] {host.title}",
        f"[bold]Group:[/bold] {host.group}",
        f"[bold]Description:[/bold] {host.description}",
        f"[bold]Address:[/bold] {host.address}",
        f"[bold]Port:[/bold] {host.remote_port}",
        f"[bold]Login:[/bold] {host.login_name}",
        f"[bold]Identity file:[/bold] {host.identity_file_path}",
        "",
        f"[bold]Resolved host:[/bold] {defaults.hostname}",
        f"[bold]Resolved port:[/bold] {defaults.port}",
        f"[bold]Resolved user:[/bold] {defaults.user}",
        f"[bold]Resolved identity:[/bold] {defaults.identity_file}",
    ]
    source = host.storage.value if host.storage else ""
    console.print(Panel("\n".join(lines), title=f"#{host.id} ({source})"))


def _updates(**fields) -> dict:
    return {k: v for k, v in fields.items() if v is not None}


@app.command()
def add(
    ctx: typer.Context,
    title: str = typer.Option(..., "--title", "-t", help="Host title"),
    address: str = typer.Option("", "--address", help="Host name or address"),
    port: str = typer.Option("", "--port", "-p", help="Remote port"),
    user: str = typer.Option("", "--user", "-u", help="Login name"),
    identity_file: str = typer.Option("", "--identity-file", "-i", help="Private key path"),
    group: str = typer.Option("", "--group", "-g", help="Group"),
    description: str = typer.Option("", "--description", help="Description"),
):
    """Add a new host."""
    store = get_store(ctx)
    host = Host(
        title=title,
        address=address or title,
        remote_port=port,
        login_name=user,
        identity_file_path=identity_file,
        group=group,
        description=description,
    )
    try:
        saved = store.save(host)
    except (StoreError, OSError) as e:
        fail(f"Cannot save host: {e}")
    console.print(f"[green]Added host[/green] #{saved.id} {saved.title}")


@app.command()
def edit(
    ctx: typer.Context,
    host_id: int = typer.Argument(..., help="Host ID"),
    title: str | None = typer.Option(None, "--title", "-t"),
    address: str | None = typer.Option(None, "--address"),
    port: str | None = typer.Option(None, "--port", "-p"),
    user: str | None = typer.Option(None, "--user", "-u"),
    identity_file: str | None = typer.Option(None, "--identity-file", "-i"),
    group: str | None = typer.Option(None, "--group", "-g"),
    description: str | None = typer.Option(None, "--description"),
):
    """Update fields of an existing host."""
    store = get_store(ctx)
    host = find_host(store, host_id)
    host = host.model_copy(
        update=_updates(
            title=title,
            address=address,
            remote_port=port,
            login_name=user,
            identity_file_path=identity_file,
            group=group,
            description=description,
        )
    )
    try:
        saved = store.save(host)
    except (StoreError, OSError) as e:
        fail(f"Cannot edit host #{host_id}: {e}")
    console.print(f"[green]Saved host[/green] #{saved.id} {saved.title}")


@app.command()
def copy(
    ctx: typer.Context,
    host_id: int = typer.Argument(..., help="Host ID"),
):
    """Duplicate a host. The copy is always writable."""
    store = get_store(ctx)
    clone = find_host(store, host_id).clone()
    clone.title = f"{clone.title} (copy)"
    try:
        saved = store.save(clone)
    except (StoreError, OSError) as e:
        fail(f"Cannot save host: {e}")
    console.print(f"[green]Copied host[/green] #{host_id} -> #{saved.id} {saved.title}")


@app.command()
def delete(
    ctx: typer.Context,
    host_id: int = typer.Argument(..., help="Host ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
):
    """Delete a host."""
    store = get_store(ctx)
    host = find_host(store, host_id)
    if not yes and not typer.confirm(f"Delete host '{host.title}'?"):
        raise typer.Exit(0)

    try:
        store.delete(host_id)
    except (StoreError, OSError) as e:
        fail(f"Cannot delete host #{host_id}: {e}")
    console.print(f"[green]Deleted host[/green] #{host_id} {host.title}")


@app.command("config")
def show_config(ctx: typer.Context):
    """Print the effective configuration."""
    for field, value in get_config(ctx).describe().items():
        console.print(f"[bold]{field + ':':<20}[/bold] {value}")


if __name__ == "__main__":
    app()
