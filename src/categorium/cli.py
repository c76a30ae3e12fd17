"""Command line interface for the Categorium project."""

from __future__ import annotations

import difflib
import logging
from pathlib import Path
from typing import Any, Callable, Optional

import click
import yaml
from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table

from categorium.categories import (
    STRATEGIES,
    CategorizationReport,
    Category,
    CategoryEngine,
    CategoryError,
    CategoryNotFoundError,
    CategoryStore,
)
from categorium.config import CategoriumConfig, ConfigError, ConfigManager
from categorium.logging_config import configure_logging
from categorium.registry import FileRegistry, RegistryError
from categorium.state import CategoryState, StateError, StateRepository

console = Console()
LOGGER = logging.getLogger(__name__)

_STRATEGY_LABELS = {
    "artist": "By artist",
    "genre": "By genre",
    "type": "By file type",
    "date": "By date",
}


class Collection:
    """A loaded collection: its root, engine, and persisted state."""

    def __init__(
        self,
        root: Path,
        engine: CategoryEngine,
        state: CategoryState,
        repository: StateRepository,
        config: CategoriumConfig,
    ) -> None:
        self.root = root
        self.engine = engine
        self.state = state
        self.repository = repository
        self.config = config

    def save(self) -> None:
        """Write the engine's categories back to the state file."""
        self.state.categories = list(self.engine.list_categories())
        self.repository.save(self.root, self.state)


def _handle_cli_error(
    message: str,
    *,
    code: str,
    json_output: bool,
    details: Any | None = None,
    original: Exception | None = None,
) -> None:
    """Emit a standardized error and terminate the command appropriately.

    Args:
        message: Human-readable error message.
        code: Machine-readable error identifier.
        json_output: Indicates whether JSON mode is active.
        details: Optional structured details to include in the payload.
        original: Original exception for chaining when not using JSON.

    Raises:
        SystemExit: When emitting JSON output to terminate the command.
        click.ClickException: For non-JSON flows to surface the error.
    """

    if json_output:
        payload: dict[str, Any] = {"error": {"code": code, "message": message}}
        if details is not None:
            payload["error"]["details"] = details
        console.print_json(data=payload)
        raise SystemExit(1)

    if isinstance(original, click.ClickException):
        raise original

    raise click.ClickException(message) from original


def _load_config() -> CategoriumConfig:
    manager = ConfigManager()
    try:
        return manager.load()
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc


def _open_collection(
    path: str,
    *,
    registry_path: Optional[str],
    recursive: bool,
    json_output: bool,
) -> Collection:
    """Load configuration, registry, and saved categories for ``path``."""
    config = _load_config()
    root = Path(path).expanduser().resolve()
    repository = StateRepository()
    configure_logging(config.logging, repository.log_path(root))

    try:
        if registry_path:
            registry = FileRegistry.from_manifest(Path(registry_path))
        else:
            registry = FileRegistry.scan(root, recursive=recursive)
    except RegistryError as exc:
        _handle_cli_error(str(exc), code="registry_error", json_output=json_output, original=exc)

    try:
        state = repository.load_or_create(root)
        store = CategoryStore(state.categories)
    except (StateError, CategoryError) as exc:
        _handle_cli_error(str(exc), code="state_error", json_output=json_output, original=exc)

    engine = CategoryEngine(
        registry,
        store,
        strategies=config.strategies,
        auto=config.auto,
    )
    LOGGER.debug("Opened collection %s with %d files", root, len(registry))
    return Collection(root, engine, state, repository, config)


def _collection_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Attach the options shared by every collection command."""

    func = click.option("-r", "--recursive", is_flag=True, help="Include all subdirectories.")(func)
    func = click.option(
        "--registry",
        "registry_path",
        type=click.Path(exists=True, dir_okay=False, path_type=str),
        help="Load files from a JSON/YAML manifest instead of scanning PATH.",
    )(func)
    return func


def _category_payload(category: Category) -> dict[str, Any]:
    return {
        "id": category.id,
        "name": category.name,
        "icon": category.icon,
        "color": category.color,
        "count": category.count,
        "rules": category.rule_values(),
    }


def _categories_table(categories: tuple[Category, ...] | list[Category], title: str) -> Table:
    table = Table(title=title)
    table.add_column("ID", overflow="fold")
    table.add_column("Name")
    table.add_column("Icon")
    table.add_column("Color")
    table.add_column("Count", justify="right")
    table.add_column("Rules")
    for category in categories:
        table.add_row(
            category.id,
            category.name,
            category.icon,
            f"[{category.color}]{category.color}[/]",
            str(category.count),
            ", ".join(str(value) for value in category.rule_values()),
        )
    return table


def _report_payload(report: CategorizationReport) -> dict[str, Any]:
    return {
        "strategy": report.strategy,
        "created": [_category_payload(category) for category in report.created],
        "skipped": [draft.name for draft in report.skipped],
        "errors": list(report.errors),
    }


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="categorium")
def cli() -> None:
    """Categorium groups your files into rule-based categories."""


@cli.group()
def categories() -> None:
    """Create, edit, and inspect categories for a collection."""


@categories.command("list")
@click.argument("path", type=click.Path(exists=True, file_okay=False, path_type=str))
@click.option("--json", "json_output", is_flag=True, help="Emit JSON instead of a table.")
@_collection_options
def categories_list(
    path: str, json_output: bool, registry_path: Optional[str], recursive: bool
) -> None:
    """List the categories saved for PATH in display order."""
    collection = _open_collection(
        path, registry_path=registry_path, recursive=recursive, json_output=json_output
    )
    items = collection.engine.list_categories()
    if json_output:
        console.print_json(data={"categories": [_category_payload(item) for item in items]})
        return
    if not items:
        console.print("[yellow]No categories yet.[/yellow]")
        return
    console.print(_categories_table(items, title=f"Categories for {collection.root}"))


@categories.command("add")
@click.argument("path", type=click.Path(exists=True, file_okay=False, path_type=str))
@click.argument("name")
@click.option("--icon", type=str, help="Icon name from the configured palette.")
@click.option("--color", type=str, help="Hex colour such as '#3b82f6'.")
@click.option("--term", "terms", multiple=True, help="Search term; repeat for more terms.")
@click.option("--json", "json_output", is_flag=True, help="Emit JSON describing the category.")
@_collection_options
def categories_add(
    path: str,
    name: str,
    icon: Optional[str],
    color: Optional[str],
    terms: tuple[str, ...],
    json_output: bool,
    registry_path: Optional[str],
    recursive: bool,
) -> None:
    """Create a category NAME whose members match any of the search terms."""
    collection = _open_collection(
        path, registry_path=registry_path, recursive=recursive, json_output=json_output
    )
    palette = collection.config.palette
    icon = icon or palette.default_icon
    if icon not in palette.icons:
        _handle_cli_error(
            f"Unknown icon '{icon}'. Choose one of: {', '.join(palette.icons)}.",
            code="invalid_icon",
            json_output=json_output,
        )

    try:
        category = collection.engine.create_manual_category(
            name, icon, color or palette.default_color, terms
        )
    except CategoryError as exc:
        _handle_cli_error(str(exc), code="invalid_category", json_output=json_output, original=exc)

    if category is None:
        if json_output:
            console.print_json(data={"category": None})
        else:
            console.print("[yellow]Category name is blank; nothing was created.[/yellow]")
        return

    collection.save()
    if json_output:
        console.print_json(data={"category": _category_payload(category)})
        return
    console.print(
        f"[green]Created category '{category.name}' ({category.id}) "
        f"matching {category.count} file(s).[/green]"
    )


@categories.command("update")
@click.argument("path", type=click.Path(exists=True, file_okay=False, path_type=str))
@click.argument("category_id")
@click.option("--name", type=str, help="New category name.")
@click.option("--icon", type=str, help="New icon name.")
@click.option("--color", type=str, help="New hex colour.")
@click.option("--term", "terms", multiple=True, help="Replacement search terms.")
@click.option("--json", "json_output", is_flag=True, help="Emit JSON describing the category.")
@_collection_options
def categories_update(
    path: str,
    category_id: str,
    name: Optional[str],
    icon: Optional[str],
    color: Optional[str],
    terms: tuple[str, ...],
    json_output: bool,
    registry_path: Optional[str],
    recursive: bool,
) -> None:
    """Update fields of CATEGORY_ID; the stored count is kept as is."""
    collection = _open_collection(
        path, registry_path=registry_path, recursive=recursive, json_output=json_output
    )
    changes: dict[str, Any] = {"name": name, "icon": icon, "color": color}
    if terms:
        changes["rules"] = [term for term in terms if term.strip()]
    changes = {key: value for key, value in changes.items() if value is not None}
    if not changes:
        _handle_cli_error("Nothing to update.", code="empty_update", json_output=json_output)

    try:
        category = collection.engine.update_category(category_id, changes)
    except CategoryNotFoundError as exc:
        _handle_cli_error(str(exc), code="not_found", json_output=json_output, original=exc)
    except CategoryError as exc:
        _handle_cli_error(str(exc), code="invalid_category", json_output=json_output, original=exc)

    collection.save()
    if json_output:
        console.print_json(data={"category": _category_payload(category)})
        return
    console.print(f"[green]Updated category '{category.name}' ({category.id}).[/green]")


@categories.command("delete")
@click.argument("path", type=click.Path(exists=True, file_okay=False, path_type=str))
@click.argument("category_id")
@click.option("--missing-ok", is_flag=True, help="Do not fail when the id is unknown.")
@_collection_options
def categories_delete(
    path: str,
    category_id: str,
    missing_ok: bool,
    registry_path: Optional[str],
    recursive: bool,
) -> None:
    """Delete CATEGORY_ID from the collection."""
    collection = _open_collection(
        path, registry_path=registry_path, recursive=recursive, json_output=False
    )
    try:
        collection.engine.delete_category(category_id, missing_ok=missing_ok)
    except CategoryNotFoundError as exc:
        _handle_cli_error(str(exc), code="not_found", json_output=False, original=exc)

    collection.save()
    console.print(f"[green]Deleted category {category_id}.[/green]")


@categories.command("show")
@click.argument("path", type=click.Path(exists=True, file_okay=False, path_type=str))
@click.argument("category_id")
@click.option("--json", "json_output", is_flag=True, help="Emit JSON instead of a table.")
@_collection_options
def categories_show(
    path: str,
    category_id: str,
    json_output: bool,
    registry_path: Optional[str],
    recursive: bool,
) -> None:
    """Show the files that currently match CATEGORY_ID."""
    collection = _open_collection(
        path, registry_path=registry_path, recursive=recursive, json_output=json_output
    )
    try:
        category = collection.engine.store.get(category_id)
        files = collection.engine.files_in_category(category_id)
    except CategoryNotFoundError as exc:
        _handle_cli_error(str(exc), code="not_found", json_output=json_output, original=exc)

    if json_output:
        console.print_json(
            data={
                "category": _category_payload(category),
                "files": [file.model_dump(mode="json") for file in files],
            }
        )
        return

    table = Table(
        title=f"{category.name} ({len(files)} file(s) now, {category.count} at creation)"
    )
    table.add_column("Name")
    table.add_column("Type")
    table.add_column("Created")
    table.add_column("Tags")
    for file in files:
        table.add_row(
            file.name, file.type.value, file.created_at.date().isoformat(), ", ".join(file.tags)
        )
    console.print(table)


@cli.command()
@click.argument("path", type=click.Path(exists=True, file_okay=False, path_type=str))
@click.option(
    "--by",
    "strategies",
    type=click.Choice(sorted(STRATEGIES)),
    multiple=True,
    help="Strategy to run; repeat for several. Defaults to those enabled in config.",
)
@click.option(
    "--dedupe/--no-dedupe",
    default=None,
    help="Skip categories whose name and rules already exist.",
)
@click.option("--json", "json_output", is_flag=True, help="Emit JSON describing the run.")
@click.option("--quiet", is_flag=True, help="Suppress non-error output.")
@_collection_options
def auto(
    path: str,
    strategies: tuple[str, ...],
    dedupe: Optional[bool],
    json_output: bool,
    quiet: bool,
    registry_path: Optional[str],
    recursive: bool,
) -> None:
    """Generate categories for PATH with the automatic strategies."""
    collection = _open_collection(
        path, registry_path=registry_path, recursive=recursive, json_output=json_output
    )
    quiet = quiet or collection.config.cli.quiet_default
    reports = collection.engine.auto_categorize(list(strategies) or None, dedupe=dedupe)
    collection.save()

    if json_output:
        console.print_json(data={"reports": [_report_payload(report) for report in reports]})
        return

    for report in reports:
        for error in report.errors:
            console.print(f"[red]{_STRATEGY_LABELS[report.strategy]}: {error}[/red]")
        if quiet:
            continue
        if report.created:
            console.print(
                _categories_table(report.created, title=_STRATEGY_LABELS[report.strategy])
            )
        else:
            console.print(
                f"[yellow]{_STRATEGY_LABELS[report.strategy]}: no categories created.[/yellow]"
            )
        if report.skipped:
            console.print(
                f"[yellow]Skipped {len(report.skipped)} existing categor"
                f"{'y' if len(report.skipped) == 1 else 'ies'}.[/yellow]"
            )

    if not quiet:
        created = sum(len(report.created) for report in reports)
        console.print(f"[green]auto summary for {collection.root}: created={created}.[/green]")


@cli.group()
def config() -> None:
    """Manage Categorium configuration files and overrides."""


@config.command("view")
@click.option("--no-env", is_flag=True, help="Ignore environment overrides when displaying output.")
def config_view(no_env: bool) -> None:
    """Display the effective configuration after applying precedence rules."""
    manager = ConfigManager()
    try:
        manager.ensure_exists()
        settings = manager.load(include_env=not no_env)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    yaml_text = yaml.safe_dump(settings.model_dump(mode="json"), sort_keys=False)
    console.print(Syntax(yaml_text, "yaml", word_wrap=True))


@config.command("set")
@click.argument("key")
@click.option("--value", required=True, help="Value to assign to KEY.")
def config_set(key: str, value: str) -> None:
    """Persist a configuration value expressed as a dotted KEY."""
    manager = ConfigManager()
    manager.ensure_exists()

    before = manager.read_text().splitlines()
    try:
        written = manager.set_value(key, value)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc
    after = manager.read_text().splitlines()

    diff = list(
        difflib.unified_diff(
            before,
            after,
            fromfile="config.yaml (before)",
            tofile="config.yaml (after)",
            lineterm="",
        )
    )
    if not diff:
        console.print("[yellow]No changes applied; value already up to date.[/yellow]")
        return

    console.print(Syntax("\n".join(diff), "diff", word_wrap=False))
    console.print(f"[green]Updated {written}.[/green]")


@config.command("edit")
def config_edit() -> None:
    """Open the configuration file in an interactive editor session."""
    manager = ConfigManager()
    manager.ensure_exists()

    original = manager.read_text()
    edited = click.edit(original, extension=".yaml")

    if edited is None:
        console.print("[yellow]Edit cancelled; no changes applied.[/yellow]")
        return

    if edited == original:
        console.print("[yellow]No changes detected.[/yellow]")
        return

    try:
        manager.replace_text(edited)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc
    console.print("[green]Configuration updated successfully.[/green]")


def main() -> None:
    """Invoke the Click CLI as the console script entry point."""
    cli()


if __name__ == "__main__":
    main()
