"""CLI orchestration: wires config, parser, client and uploader together."""

import logging
import traceback

import httpx
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
    TimeRemainingColumn,
)

from phrase_upload.client import PhraseClient
from phrase_upload.config import resolve_config
from phrase_upload.errors import PhraseUploadError
from phrase_upload.records import load_records
from phrase_upload.uploader import upload_records

console = Console(stderr=True)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging with rich handler for colored, readable output."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )
    # httpx logs every request at INFO; our client already logs them at DEBUG.
    logging.getLogger("httpx").setLevel(logging.WARNING)


class RichProgress:
    """Adapts a rich ``Progress`` task to the uploader's progress sink."""

    def __init__(self, progress: Progress, task_id: TaskID) -> None:
        self.progress = progress
        self.task_id = task_id

    def advance(self) -> None:
        self.progress.advance(self.task_id)

    def finish(self) -> None:
        self.progress.stop_task(self.task_id)
        self.progress.refresh()


def _print_error(error: BaseException, verbose: bool) -> None:
    console.print("[red bold]Error 💥:[/red bold]")
    console.print(str(error), markup=False, highlight=False, soft_wrap=True)
    if verbose:
        console.print(
            "".join(traceback.format_exception(type(error), error, error.__traceback__)),
            markup=False,
            highlight=False,
            soft_wrap=True,
        )


def _upload(
    file: str,
    project_name: str | None,
    access_token: str | None,
    locale: str | None,
    config_path: str | None,
    http_client: httpx.Client | None,
) -> int:
    logger = logging.getLogger(__name__)

    config = resolve_config(
        access_token=access_token,
        project_name=project_name,
        locale=locale,
        config_path=config_path,
    )
    if config_path:
        logger.info("Configuration loaded from %s", config_path)

    records = load_records(file)
    console.print(f"[bold]Loaded {len(records)} keys from[/bold] {escape(file)}")

    with PhraseClient(
        token=config.phrase.access_token,
        base_url=config.phrase.base_url,
        http_client=http_client,
        timeout=config.phrase.timeout,
    ) as client:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            MofNCompleteColumn(),
            TimeElapsedColumn(),
            TimeRemainingColumn(),
            console=console,
        ) as progress:
            task_id = progress.add_task("Uploading...", total=len(records))
            upload = upload_records(
                client,
                records,
                project_name=config.upload.project_name,
                locale_name=config.upload.locale,
                progress=RichProgress(progress, task_id),
            )

    return upload.uploaded


def run(
    file: str,
    project_name: str | None = None,
    access_token: str | None = None,
    locale: str | None = None,
    config_path: str | None = None,
    verbose: bool = False,
    http_client: httpx.Client | None = None,
) -> None:
    """Main synchronous entry point for the CLI.

    Every failure is printed once to stderr and ends the process with a
    non-zero exit code.

    Args:
        file: Path to the key/value input file.
        project_name: Name of the Phrase project.
        access_token: Phrase API token; falls back to PHRASE_ACCESS_TOKEN.
        locale: Locale name to upload into; defaults to ``en``.
        config_path: Optional YAML configuration file.
        verbose: Enable debug logging and print tracebacks on errors.
        http_client: Preconfigured ``httpx.Client`` to send requests through.
    """
    setup_logging(verbose)
    logger = logging.getLogger(__name__)

    console.print("[bold cyan]Phrase Key Upload Tool[/bold cyan]")
    console.print("[dim]" + "─" * 50 + "[/dim]")

    try:
        uploaded = _upload(file, project_name, access_token, locale, config_path, http_client)
    except (PhraseUploadError, httpx.HTTPError) as e:
        _print_error(e, verbose)
        raise SystemExit(1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Upload cancelled by user.[/yellow]")
        raise SystemExit(130)
    except Exception as e:
        logger.exception("Unexpected error: %s", e)
        raise SystemExit(1)

    console.print(f"[green bold]Uploaded {uploaded} translations[/green bold]")
