"""
Command line interface for bill code generation.

Loads a bill configuration, runs every enabled layer and reports the
result with rich formatting.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

import dateparser
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from .core.config import GeneratorConfig, get_config_manager, load_config
from .core.events import GenerationListener
from .core.exceptions import ConfigValidationError, GeneratorError
from .core.generator import GenerationResult
from .core.model import BillConfig
from .core.validation import validate_bill_config
from .logging_config import configure_logging, get_logger
from .orchestrator import CodeGenerator, plan_stages
from .registry import get_registry
from .utils import BillConfigLoaderError, load_bill_config, save_bill_config

logger = get_logger(__name__)

DEFAULT_OUTPUT_DIR = "generated"

# Initialize rich console
console = Console()


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


class RichProgressListener(GenerationListener):
    """Shows one spinner line per stage on a rich Progress display."""

    def __init__(self, progress: Progress):
        self.progress = progress
        self._tasks = {}

    def on_stage_start(self, stage: str):
        self._tasks[stage] = self.progress.add_task(
            f"[cyan]Generating {stage} layer...", total=None
        )

    def on_file_written(self, stage: str, path: Path):
        task = self._tasks.get(stage)
        if task is not None:
            self.progress.update(
                task, description=f"[cyan]Generating {stage} layer: {path.name}"
            )

    def on_stage_complete(self, stage: str, files: List[Path]):
        task = self._tasks.pop(stage, None)
        if task is not None:
            self.progress.remove_task(task)
        self.progress.console.print(
            f"[green]✓[/green] {stage}: {len(files)} file(s)"
        )

    def on_stage_failed(self, stage: str, error: Exception):
        task = self._tasks.pop(stage, None)
        if task is not None:
            self.progress.remove_task(task)
        self.progress.console.print(f"[red]✗[/red] {stage}: {error}")


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="billgen",
        description="Generate NC bill source code from a bill configuration",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  billgen bill.json -o ./out
  billgen --url https://host/bills/AU84.json -o ./out --date 2026-02-10
  billgen bill.json --write-back --json
  billgen --list-layers
        """.strip(),
    )

    input_group = parser.add_mutually_exclusive_group(required=False)
    input_group.add_argument("file", nargs="?", help="Bill configuration JSON file")
    input_group.add_argument("--url", help="URL to fetch the bill configuration from")

    parser.add_argument(
        "--output",
        "-o",
        metavar="DIR",
        help="Output directory (default: globalConfig.outputDir or ./generated)",
    )
    parser.add_argument("--config", metavar="FILE", help="Generator configuration file (JSON)")
    parser.add_argument("--encoding", help="Encoding of generated files (default: gbk)")
    parser.add_argument(
        "--date",
        help="Date stamped into generated files, e.g. 2026-02-10 or 'yesterday'",
    )
    parser.add_argument("--template-dir", metavar="DIR", help="Custom template directory")

    parser.add_argument(
        "--skip-validation",
        action="store_true",
        help="Generate even if the bill configuration is incomplete",
    )
    parser.add_argument(
        "--write-back",
        action="store_true",
        help="Save identifiers assigned during generation back to the input file",
    )
    parser.add_argument(
        "--json", action="store_true", help="Print the result as JSON"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose logging")

    info_group = parser.add_argument_group("information")
    info_group.add_argument(
        "--list-layers", action="store_true", help="List generator layers and exit"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Entry point for the ``billgen`` command.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    configure_logging(logging.DEBUG if args.verbose else logging.WARNING)

    try:
        if args.list_layers:
            return _list_layers()

        if not (args.file or args.url):
            console.print("[red]✗[/red] Input source required (file or --url)")
            return 1

        bill = load_bill_config(file_path=args.file, url=args.url)
        config = _build_config(args)

        if not args.skip_validation:
            errors = validate_bill_config(bill)
            if errors:
                raise ConfigValidationError(errors)

        output_dir = Path(args.output or _default_output_dir(bill))
        result = _generate(bill, output_dir, config, quiet=args.json)

        if args.write_back and args.file and result.bill is not None:
            save_bill_config(result.bill, args.file)
            if not args.json:
                console.print(f"[green]✓[/green] Identifiers saved to [cyan]{args.file}[/cyan]")

        if args.json:
            print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
        else:
            _print_result(result, verbose=args.verbose)

        return 0 if result.success else 1

    except ConfigValidationError as e:
        console.print("[red]✗ Bill configuration is incomplete:[/red]")
        for message in e.errors:
            console.print(f"  [yellow]•[/yellow] {message}")
        return 1
    except (CLIError, BillConfigLoaderError, GeneratorError) as e:
        console.print(f"[red]✗ Error:[/red] {e}")
        return 1


def _default_output_dir(bill: BillConfig) -> str:
    if bill.global_config and bill.global_config.output_dir:
        return bill.global_config.output_dir
    return DEFAULT_OUTPUT_DIR


def _parse_date(value: str) -> str:
    """Parse a human date into an ISO date string."""
    parsed = dateparser.parse(value)
    if parsed is None:
        raise CLIError(f"Could not understand date: {value}")
    return parsed.date().isoformat()


def _build_config(args: argparse.Namespace) -> GeneratorConfig:
    """Build configuration from CLI arguments."""
    overrides = {
        "encoding": args.encoding,
        "template_dir": args.template_dir,
        "date": _parse_date(args.date) if args.date else None,
    }
    config = load_config(custom_config=overrides, config_file=args.config)
    for warning in get_config_manager().validate_config(config):
        logger.warning("Generator config: %s", warning)
    return config


def _generate(
    bill: BillConfig, output_dir: Path, config: GeneratorConfig, quiet: bool
) -> GenerationResult:
    if quiet:
        return CodeGenerator(config).generate(bill, output_dir)

    stages = ", ".join(plan_stages(bill))
    console.print(
        f"📄 [bold]{bill.bill_code}[/bold] {bill.bill_name} "
        f"([cyan]{bill.bill_type.value}[/cyan]) → {output_dir}"
    )
    console.print(f"[dim]Stages: {stages}[/dim]")

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
    ) as progress:
        listener = RichProgressListener(progress)
        return CodeGenerator(config, listener=listener).generate(bill, output_dir)


def _print_result(result: GenerationResult, verbose: bool = False):
    if not result.success:
        console.print(f"[red]✗ Code generation failed:[/red] {result.error_message}")
        if result.files:
            console.print(
                f"[dim]{len(result.files)} file(s) written before the failure were kept[/dim]"
            )
        return

    table = Table(
        title="📊 Generation Summary",
        box=box.SIMPLE,
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Property", style="bold")
    table.add_column("Value", style="green")

    table.add_row("Output Directory", str(result.output_dir))
    table.add_row("Duration", f"{result.duration_ms:.1f} ms")
    if result.stats is not None:
        table.add_row("Files", str(result.stats.file_count))
        table.add_row("Lines", str(result.stats.code_lines))
        if verbose:
            table.add_row("Source Lines", str(result.stats.source_lines))
            table.add_row("Comment Lines", str(result.stats.comment_lines))
            table.add_row("Blank Lines", str(result.stats.blank_lines))

    console.print()
    console.print(table)

    if verbose:
        for path in result.files:
            console.print(f"  [dim]•[/dim] {path}")


def _list_layers() -> int:
    """List registered layers."""
    registry = get_registry()

    table = Table(title="📋 Generator Layers", box=box.ROUNDED, title_style="bold cyan")
    table.add_column("Layer", style="bold green", no_wrap=True)
    table.add_column("Generator Class", style="dim")
    table.add_column("Aliases", style="blue")
    table.add_column("Description")

    for name in registry.list_layers():
        info = registry.get_layer_info(name)
        aliases = ", ".join(info["aliases"]) if info["aliases"] else "[dim]none[/dim]"
        table.add_row(f"🔧 {name}", info["class"], aliases, info["description"])

    console.print()
    console.print(table)
    console.print()
    console.print(
        Panel(
            "[bold]Usage:[/bold] billgen [dim]bill.json[/dim] -o [cyan]DIR[/cyan]",
            title="💡 Quick Start",
            border_style="blue",
        )
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
