"""
CLI for the braw2ilpd tool.

Built on the command classes in cli_commands, which return standardized
result dictionaries; this module only handles arguments and console output.
"""

import json
from typing import Optional

import typer
from rich.markup import escape
from rich.table import Table

from .cli_commands import AttributesCommand, ExtractCommand
from .config import console, load_settings, setup_logging

# Create the main CLI app
app = typer.Typer(
    name="braw2ilpd",
    help="Extract ILPD lens projection data from Blackmagic RAW immersive clips"
)


@app.command()
def extract(
    input_path: str = typer.Argument(..., help="Input .braw clip"),
    output: Optional[str] = typer.Argument(None, help="Output .ilpd file or directory (default: current directory)"),
    all_attributes: bool = typer.Option(False, "--all", "-a", help="Also write all attributes to a _detailed_attributes.txt file"),
    backend: Optional[str] = typer.Option(None, "--backend", "-b", help="Codec backend as 'package.module:callable' (overrides BRAW2ILPD_BACKEND)"),
    log_dir: Optional[str] = typer.Option(None, "--log-dir", help="Directory for a per-run log file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
):
    """Extract the ILPD file (and optionally all attributes) from a clip."""

    config = load_settings()
    config.update_config({
        'backend': backend,
        'logging': {'dir': log_dir, 'verbose': verbose or None},
    })
    setup_logging(config.get_setting('logging.dir'), config.get_setting('logging.verbose', False))

    cmd = ExtractCommand(config=config)
    result = cmd.execute(input_path=input_path, output=output, write_report=all_attributes)

    data = result.get('data') or {}
    for warning in data.get('warnings', []):
        console.print(f"[yellow]⚠️  Warning: {escape(warning)}[/yellow]")

    primary = data.get('primary') or {}
    if primary.get('status') == 'written':
        console.print(f"[green]✅ ILPD projection data saved to:[/green] {escape(primary['path'])}")

    report = data.get('report') or {}
    if report.get('status') == 'written':
        console.print(f"[green]✅ Detailed attributes saved to:[/green] {escape(report['path'])}")

    if not result.get('success'):
        console.print(f"[red]❌ Extraction failed: {escape(result.get('error') or 'unknown error')}[/red]")

        error_msg = (result.get('error') or '').lower()
        if 'backend' in error_msg:
            console.print("[yellow]💡 Point --backend or BRAW2ILPD_BACKEND at a Blackmagic RAW SDK binding[/yellow]")
        elif 'immersive' in error_msg:
            console.print("[yellow]💡 Only clips recorded with an immersive camera carry ILPD data[/yellow]")

        raise typer.Exit(result.get('exit_code', 1))

    console.print("\n[bold green]Extraction completed successfully![/bold green]")


@app.command("attributes")
def list_attributes(
    format_type: str = typer.Option("table", "--format", "-f", help="Output format (table, json)")
):
    """List the immersive attributes read from every clip."""

    result = AttributesCommand().execute()
    attributes = result['data']['attributes']

    if format_type == "json":
        print(json.dumps(attributes, indent=2))
        return

    table = Table(title="Immersive Attributes", show_header=True, header_style="bold magenta")
    table.add_column("#", justify="right")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Description", style="dim")

    for attribute in attributes:
        table.add_row(str(attribute['index']), attribute['name'], attribute['description'])

    console.print(table)


def run():
    """Console script entry point."""
    app()


if __name__ == "__main__":
    app()
