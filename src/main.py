"""CLI entry point for SoundVault."""

import asyncio
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Annotated, Any, Optional

import typer
from rich import print as rprint
from rich.color import Color, ColorParseError
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from src.utils.config import (
    CATEGORY_ICON_OPTIONS,
    COLOR_OPTIONS,
    ICON_LABELS,
    PLAYLIST_ICON_OPTIONS,
    Settings,
    load_config,
)
from src.utils.formatting import format_date, format_duration, format_track_count
from src.utils.logging import get_logger, setup_logging
from src.utils.notifications import Notification, notify
from src.utils.validation import ValidationError
from src.vault_api import (
    AuthenticationError,
    Playlist,
    SessionStore,
    Track,
    VaultAPIError,
    VaultClient,
)

app = typer.Typer(
    name="vault",
    help="SoundVault - organize and play back your audio recordings",
    no_args_is_help=True,
)
console = Console()
logger = get_logger(__name__)

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to configuration file"),
]


def get_config_path(config: Optional[Path]) -> Path:
    """Get the configuration file path."""
    return config or Path("config.yaml")


def load_settings(config: Optional[Path], verbose: bool = False) -> Settings:
    """Load settings and configure logging for a command."""
    settings = load_config(get_config_path(config))
    setup_logging(
        log_level="DEBUG" if verbose else settings.logging.level,
        log_file=settings.logging.file_path,
        json_format=settings.logging.json_format,
    )
    return settings


def build_client(settings: Settings) -> VaultClient:
    return VaultClient(
        base_url=settings.api.base_url,
        session=SessionStore(settings.api.session_cookie),
        timeout=settings.api.timeout,
    )


def run_with_client(
    settings: Settings,
    action: Callable[[VaultClient], Awaitable[Any]],
    failure: str,
) -> Any:
    """Run an async action against the backend, reporting failures.

    Args:
        settings: Loaded settings
        action: Coroutine function taking the client
        failure: Description shown if the action fails

    Returns:
        Whatever the action returns
    """

    async def runner() -> Any:
        async with build_client(settings) as client:
            return await action(client)

    try:
        return asyncio.run(runner())
    except ValidationError as e:
        notify(Notification.error(str(e)))
        raise typer.Exit(1)
    except AuthenticationError:
        notify(Notification.error(f"{failure}. Sign in again with 'vault login'"))
        raise typer.Exit(1)
    except VaultAPIError:
        notify(Notification.error(failure))
        raise typer.Exit(1)
    except Exception as e:
        logger.exception("command_failed", failure=failure, error=str(e))
        notify(Notification.error(failure))
        raise typer.Exit(1)


def safe_color(color: str | None) -> str | None:
    """Return the colour if rich can render it, else None."""
    if not color:
        return None
    try:
        Color.parse(color)
    except ColorParseError:
        return None
    return color


def swatch(color: str | None, label: str) -> str:
    """Markup for a coloured square followed by an escaped label."""
    color = safe_color(color)
    square = f"[{color}]■[/]" if color else "■"
    return f"{square} {escape(label)}"


def print_tracks(tracks: list[Track], current: Track | None = None, title: str = "Tracks") -> None:
    table = Table(title=title)
    table.add_column("#", justify="right")
    table.add_column("Name", style="cyan")
    table.add_column("Added")
    table.add_column("Duration", justify="right")

    for index, track in enumerate(tracks):
        marker = "▶" if current and current.id == track.id else str(index + 1)
        table.add_row(marker, escape(track.name), format_date(track.created_at), format_duration(track.duration))
    console.print(table)


def print_playlists(playlists: list[Playlist], counts: dict[int, int] | None = None) -> None:
    table = Table(title="Your Vault")
    table.add_column("ID", justify="right")
    table.add_column("Playlist", style="cyan")
    table.add_column("Icon")
    table.add_column("Tracks", justify="right")

    for playlist in playlists:
        count = counts.get(playlist.id) if counts else None
        table.add_row(
            str(playlist.id),
            swatch(playlist.color, playlist.name),
            escape(ICON_LABELS.get(playlist.icon, playlist.icon)),
            format_track_count(count) if count is not None else "-",
        )
    console.print(table)


@app.command()
def login(config: ConfigOption = None) -> None:
    """Store the backend session cookie in the system keychain."""
    settings = load_settings(config)

    rprint("\n[bold blue]SoundVault Sign-in[/bold blue]\n")

    if SessionStore.has_session():
        rprint("[green]✓[/green] A session is already stored in the keychain")
        if not typer.confirm("Do you want to replace it?"):
            return

    rprint("Sign in to SoundVault in your browser, then copy the value of the")
    rprint(f"[cyan]{settings.api.session_cookie}[/cyan] cookie for {settings.api.base_url}.\n")

    value = typer.prompt("Paste your session cookie here", hide_input=True)

    if value.strip():
        SessionStore.store_session(value.strip())
        notify(Notification.success("Session stored in keychain"))
    else:
        notify(Notification.warning("No cookie provided. Sign-in incomplete."))


@app.command()
def logout() -> None:
    """Forget the stored session."""
    SessionStore.delete_session()
    notify(Notification.success("Signed out"))


@app.command()
def playlists(
    config: ConfigOption = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable verbose output")] = False,
) -> None:
    """List playlists in the vault."""
    settings = load_settings(config, verbose)

    from src.vault import VaultSession

    async def action(client: VaultClient) -> tuple[list[Playlist], dict[int, int]]:
        vault = VaultSession(client, defaults=settings.playlists)
        items = await vault.load_playlists()
        return items, await vault.track_counts(items)

    items, counts = run_with_client(settings, action, "Failed to load playlists")

    if not items:
        rprint("[yellow]Your vault is empty.[/yellow] Create your first playlist with 'vault create-playlist'.")
        return
    print_playlists(items, counts)


@app.command()
def playlist(
    playlist_id: Annotated[int, typer.Argument(help="Playlist ID")],
    config: ConfigOption = None,
) -> None:
    """Show a playlist and its tracks."""
    settings = load_settings(config)

    from src.vault import VaultSession

    async def action(client: VaultClient):
        return await VaultSession(client).open_playlist(playlist_id)

    detail = run_with_client(settings, action, "Failed to load playlist tracks")

    rprint(Panel(
        f"[bold]{escape(detail.name)}[/bold]\n{format_track_count(detail.track_count)}",
        border_style=safe_color(detail.color) or "none",
    ))
    if detail.tracks:
        print_tracks(detail.tracks)
    else:
        rprint("[dim]No tracks in this playlist yet.[/dim]")


@app.command("play-all")
def play_all(
    playlist_id: Annotated[int, typer.Argument(help="Playlist ID")],
    config: ConfigOption = None,
) -> None:
    """Start playback from the first track of a playlist."""
    settings = load_settings(config)

    from src.vault import VaultSession

    async def action(client: VaultClient):
        vault = VaultSession(client)
        await vault.open_playlist(playlist_id)
        return vault.play_all(), vault.tracks

    first, tracks = run_with_client(settings, action, "Failed to load playlist tracks")

    if first is None:
        rprint("[dim]Nothing to play: this playlist has no tracks.[/dim]")
        return

    rprint(f"[green]▶[/green] Now playing [cyan]{escape(first.name)}[/cyan] ({format_duration(first.duration)})")
    print_tracks(tracks, current=first, title="Queue")


@app.command()
def search(
    query: Annotated[str, typer.Argument(help="Text to look for in playlist and track names")],
    config: ConfigOption = None,
) -> None:
    """Search playlists and tracks by name."""
    settings = load_settings(config)

    from src.vault import VaultSession

    async def action(client: VaultClient):
        return await VaultSession(client).search(query)

    results = run_with_client(settings, action, "Failed to load tracks for search")

    if results.is_empty:
        rprint(f"[yellow]No results for[/yellow] \"{escape(query)}\"")
        return
    if results.playlists:
        print_playlists(results.playlists)
    if results.tracks:
        print_tracks(results.tracks, title="Tracks")


@app.command("create-playlist")
def create_playlist(
    name: Annotated[str, typer.Argument(help="Playlist name")],
    color: Annotated[
        Optional[str],
        typer.Option("--color", help=f"One of: {', '.join(COLOR_OPTIONS)}"),
    ] = None,
    icon: Annotated[
        Optional[str],
        typer.Option("--icon", help=f"One of: {', '.join(PLAYLIST_ICON_OPTIONS)}"),
    ] = None,
    config: ConfigOption = None,
) -> None:
    """Create a new playlist."""
    settings = load_settings(config)

    from src.vault import VaultSession

    async def action(client: VaultClient):
        return await VaultSession(client, defaults=settings.playlists).create_playlist(name, color, icon)

    created = run_with_client(settings, action, "Failed to create playlist")
    notify(Notification.success(f"Playlist '{created.name}' created successfully"))


@app.command()
def categories(config: ConfigOption = None) -> None:
    """List upload categories."""
    settings = load_settings(config)

    async def action(client: VaultClient):
        return await client.get_categories()

    items = run_with_client(settings, action, "Failed to load categories")

    table = Table(title="Categories")
    table.add_column("ID", justify="right")
    table.add_column("Category", style="cyan")
    table.add_column("Icon")
    for category in items:
        table.add_row(
            str(category.id),
            swatch(category.color, category.name),
            escape(ICON_LABELS.get(category.icon, category.icon)),
        )
    console.print(table)


@app.command("create-category")
def create_category(
    name: Annotated[str, typer.Argument(help="Category name")],
    color: Annotated[Optional[str], typer.Option("--color", help="Display colour")] = None,
    icon: Annotated[
        Optional[str],
        typer.Option("--icon", help=f"One of: {', '.join(CATEGORY_ICON_OPTIONS)}"),
    ] = None,
    config: ConfigOption = None,
) -> None:
    """Create a new upload category."""
    settings = load_settings(config)

    from src.upload import Uploader

    async def action(client: VaultClient):
        return await Uploader(client, settings.upload).create_category(name, color, icon)

    created = run_with_client(settings, action, "Failed to create category")
    notify(Notification.success(f"Category '{created.name}' created successfully"))


@app.command()
def upload(
    file: Annotated[Path, typer.Argument(help="Audio file to upload")],
    playlist_id: Annotated[
        Optional[int],
        typer.Option("--playlist", "-p", help="Playlist to add the track to"),
    ] = None,
    category_id: Annotated[
        Optional[int],
        typer.Option("--category", help="Legacy category to file the track under"),
    ] = None,
    name: Annotated[
        Optional[str],
        typer.Option("--name", "-n", help="Track name (defaults to the file name)"),
    ] = None,
    config: ConfigOption = None,
) -> None:
    """Upload an audio file into a playlist."""
    if playlist_id is None and category_id is None:
        notify(Notification.error("Please choose a destination with --playlist or --category"))
        raise typer.Exit(1)

    settings = load_settings(config)

    from src.upload import Uploader

    async def action(client: VaultClient):
        uploader = Uploader(client, settings.upload)
        if playlist_id is not None:
            return await uploader.upload_to_playlist(file, playlist_id, name=name, category_id=category_id)
        return await uploader.upload_to_category(file, category_id, name=name)

    result = run_with_client(settings, action, "Failed to upload audio file")

    if result.warning:
        notify(Notification.warning(result.warning))
    else:
        notify(Notification.success("Your audio file has been uploaded successfully"))


@app.command()
def profile(config: ConfigOption = None) -> None:
    """Show the signed-in account."""
    settings = load_settings(config)

    from src.profile import ProfileEditor, avatar_color, user_initials

    async def action(client: VaultClient):
        return await ProfileEditor(client).load()

    user = run_with_client(settings, action, "Failed to load profile")

    color = safe_color(avatar_color(user)) or "green"
    rprint(Panel(
        f"[bold {color}]{escape(user_initials(user))}[/bold {color}]  [bold]{escape(user.full_name or user.username)}[/bold]\n\n"
        f"  Username: {escape(user.username)}\n"
        f"  Email: {escape(user.email or '-')}\n"
        f"  Phone: {escape(user.phone or '-')}",
        title="Profile",
    ))


@app.command("edit-profile")
def edit_profile(config: ConfigOption = None) -> None:
    """Edit account details. Leave the password blank to keep it."""
    settings = load_settings(config)

    from src.profile import ProfileEditor

    async def fetch(client: VaultClient):
        editor = ProfileEditor(client)
        await editor.load()
        return editor.edit_form()

    form = run_with_client(settings, fetch, "Failed to load profile")

    form.full_name = typer.prompt("Full name", default=form.full_name, show_default=True)
    form.username = typer.prompt("Username", default=form.username, show_default=True)
    form.email = typer.prompt("Email", default=form.email, show_default=True)
    form.phone = typer.prompt("Phone", default=form.phone, show_default=True)
    form.password = typer.prompt(
        "New password (leave blank to keep current)",
        default="",
        show_default=False,
        hide_input=True,
    )

    async def submit(client: VaultClient):
        return await ProfileEditor(client).submit(form)

    run_with_client(settings, submit, "Failed to update profile")
    notify(Notification.success("Profile updated successfully"))


@app.command()
def status(config: ConfigOption = None) -> None:
    """Show configuration and sign-in status."""
    config_path = get_config_path(config)

    try:
        settings = load_config(config_path)
    except Exception as e:
        rprint(f"[red]Error loading config:[/red] {e}")
        raise typer.Exit(1)

    rprint("\n[bold blue]SoundVault Status[/bold blue]\n")
    rprint(f"[bold]Config:[/bold] {config_path}")
    rprint(f"[bold]Backend:[/bold] {settings.api.base_url}")
    rprint(f"[bold]Default playlist style:[/bold] {settings.playlists.default_icon} {settings.playlists.default_color}")
    rprint()

    rprint("[bold]Session:[/bold]")
    if SessionStore.has_session():
        rprint("  [green]✓[/green] Session cookie present in keychain")
    else:
        rprint("  [red]✗[/red] No session stored (run 'vault login')")


if __name__ == "__main__":
    app()
