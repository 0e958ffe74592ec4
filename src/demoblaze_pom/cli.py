"""CLI entry point for the DemoBlaze suite."""

from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .capture import FailureArtifacts
from .config import load_config
from .log import configure_logging
from .models import ScenarioFailure
from .runner import DEFAULT_SUITE, TestRunner

console = Console()


@click.group()
@click.version_option(package_name="demoblaze-pom")
@click.option("--config", "-c", "config_path", type=click.Path(exists=True), help="Config file path")
@click.pass_context
def main(ctx: click.Context, config_path: str | None) -> None:
    """DemoBlaze POM - end-to-end checks for the DemoBlaze store."""
    ctx.ensure_object(dict)

    config = load_config(Path(config_path) if config_path else None)
    ctx.obj["config"] = config
    configure_logging(config)


@main.command()
@click.option("--suite", "-s", type=click.Path(path_type=Path), default=DEFAULT_SUITE, show_default=True, help="Path to the scenario directory")
@click.option("--browser", "-b", "browsers", multiple=True, type=click.Choice(["chromium", "firefox", "webkit"]), help="Browser(s) to run on")
@click.option("--headed", is_flag=True, help="Show the browser window")
@click.option("-k", "keyword", default=None, help="Only run scenarios matching the expression")
@click.pass_context
def run(ctx: click.Context, suite: Path, browsers: tuple[str, ...], headed: bool, keyword: str | None) -> None:
    """Run the scenarios and summarise failures."""
    config = ctx.obj["config"]
    runner = TestRunner(config)

    console.print(f"\n[bold blue]🛒 Running scenarios:[/] {suite}")
    console.print(f"[dim]Store: {config.base_url} | Browsers: {', '.join(browsers) or 'default'}[/]\n")

    with console.status("[yellow]Running scenarios...[/]"):
        success, output, failures = runner.run_tests(suite, browsers=browsers, headed=headed, keyword=keyword)

    if success:
        console.print("[bold green]✓ All scenarios passed![/]\n")
        return

    if not failures:
        # Collection errors and the like never reach the summary lines
        console.print("[red]Suite failed without reporting scenario failures:[/]")
        console.print(output[-2000:], markup=False)
        ctx.exit(1)

    console.print(_failure_table(failures, "Scenario Failures"))
    console.print(f"\n[red]{len(failures)} failed[/]")
    console.print("[dim]Run 'demoblaze-pom failures' to see captured screenshots and URLs[/]\n")
    ctx.exit(1)


@main.command()
@click.option("--dir", "-d", "results_dir", type=click.Path(path_type=Path), default=None, help="Artifacts directory")
@click.option("--limit", "-n", type=int, default=20, show_default=True, help="Show at most this many failures")
@click.pass_context
def failures(ctx: click.Context, results_dir: Path | None, limit: int) -> None:
    """List diagnostics captured for failed scenarios."""
    config = ctx.obj["config"]
    artifacts = FailureArtifacts(results_dir or config.artifacts.dir)
    captured = artifacts.get_failures()

    if not captured:
        console.print(f"[green]No captured failures in {artifacts.results_dir}[/]\n")
        return

    console.print(_failure_table(captured[:limit], f"Captured Failures ({artifacts.results_dir})", with_artifacts=True))


@main.command("config")
@click.pass_context
def show_config(ctx: click.Context) -> None:
    """Print the effective configuration."""
    config = ctx.obj["config"]
    table = Table(title="Effective Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")

    for key, value in _flatten(config.model_dump(mode="json")):
        table.add_row(key, str(value))

    console.print(table)


def _failure_table(failures: list[ScenarioFailure], title: str, with_artifacts: bool = False) -> Table:
    table = Table(title=title)
    table.add_column("Scenario", style="cyan", max_width=50)
    table.add_column("Kind", style="yellow")
    table.add_column("Error", style="dim", max_width=60)
    if with_artifacts:
        table.add_column("URL", style="blue", max_width=40)
        table.add_column("Screenshot", style="magenta", max_width=40)

    for failure in failures:
        row = [
            escape(f"{failure.test_file.name}::{failure.test_name}"),
            failure.kind.value,
            escape(failure.error_message[:120]),
        ]
        if with_artifacts:
            row.append(failure.url or "-")
            row.append(str(failure.screenshot_path) if failure.screenshot_path else "-")
        table.add_row(*row)

    return table


def _flatten(data: dict, prefix: str = "") -> list[tuple[str, object]]:
    items = []
    for key, value in data.items():
        name = f"{prefix}{key}"
        if isinstance(value, dict):
            items.extend(_flatten(value, f"{name}."))
        else:
            items.append((name, value))
    return items


if __name__ == "__main__":
    main()
