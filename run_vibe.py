import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv

load_dotenv()

from rich.console import Console
from rich.json import JSON
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from vibechart.core.settings import get_settings
from vibechart.services import ChartGenerator, ConfigHistory, CSVLoader, DataProfiler, VibePipeline, prepare_series, table_records
from vibechart.services.errors import VibeChartError
from vibechart.utils.session_store import SessionStore

console = Console(soft_wrap=False)


def _trim(text: str, limit: int = 70) -> str:
    text = text.strip()
    if not text:
        return ""
    return text if len(text) <= limit else f"{text[: limit - 1]}..."


def _analysis_panel(analysis: Dict[str, Any]) -> Panel:
    structure = analysis.get("dataStructure") or {}
    spacing = analysis.get("spacingIssues") or {}
    summary = Table.grid(padding=(0, 2))
    summary.add_column(style="cyan", justify="right", no_wrap=True)
    summary.add_column(style="bold white")
    summary.add_row("Rows", str(structure.get("totalRows", 0)))
    summary.add_row("Date columns", ", ".join(structure.get("dateColumns") or []) or "-")
    summary.add_row("Numeric columns", ", ".join(structure.get("numericColumns") or []) or "-")
    summary.add_row("Categorical columns", ", ".join(structure.get("categoricalColumns") or []) or "-")
    summary.add_row("Recommended", f"{analysis.get('recommendedChartType')} ({_trim(analysis.get('reason', ''), 60)})")
    for issue in spacing.get("issues") or []:
        summary.add_row("Spacing", issue)
    return Panel(summary, title="Dataset analysis", border_style="bright_magenta")


def _history_panel(history: ConfigHistory) -> Panel:
    table = Table(show_header=True, header_style="bold cyan", box=None, padding=(0, 1))
    table.add_column("#", justify="right", style="magenta")
    table.add_column("Instruction", style="white", overflow="fold")
    table.add_column("Chart", style="green")
    for idx, entry in enumerate(history.entries):
        table.add_row(str(idx), entry.instruction or "(generated)", f"{entry.config.get('chartType')}: {entry.config.get('xKey')} vs {entry.config.get('yKey')}")
    return Panel(table, title=f"History ({len(history)})", border_style="blue")


def _series_panel(preview: Dict[str, Any]) -> Panel:
    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Series", style="magenta")
    table.add_column("Points", justify="right")
    for series in preview.get("series") or []:
        table.add_row(str(series["name"]), str(len(series["data"])))
    title = f"Preview ({preview.get('chartType')}, {len(preview.get('categories') or [])} x labels)"
    return Panel(table, title=title, border_style="yellow")


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Generate and tweak a chart configuration from a CSV file.")
    parser.add_argument("csv_path")
    parser.add_argument("--instruction", "-i", action="append", default=[], help="styling instruction, repeatable")
    parser.add_argument("--undo", type=int, default=0, help="number of instructions to undo at the end")
    parser.add_argument("--session", default=None, help="save the final chart under this session id")
    parser.add_argument("--output", default=None, help="write the final configuration JSON to this path")
    args = parser.parse_args(argv)

    settings = get_settings()
    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")

    try:
        table = CSVLoader().load_csv(Path(args.csv_path).read_bytes(), name=Path(args.csv_path).name)
        pipeline = VibePipeline.from_settings(settings)
        generated = ChartGenerator(pipeline, DataProfiler(sample_rows=settings.sample_rows)).generate(table)
        console.print(_analysis_panel(generated["analysis"]))
        if generated["fallback"]:
            console.print(Panel("The model could not produce a chart; using the fallback configuration.", title="Notice", border_style="red"))

        history = ConfigHistory(generated["config"])
        for instruction in args.instruction:
            updated = pipeline.run(instruction, history.current, history.instructions())
            history.push(updated, instruction)
        for _ in range(args.undo):
            history.undo()
    except VibeChartError as exc:
        console.print(Panel(Text(str(exc)), title="Failed", border_style="red"))
        raise SystemExit(1)

    console.rule("Done")
    console.print(_history_panel(history))
    rows = table_records(table)
    console.print(_series_panel(prepare_series(rows, history.current)))

    if args.session:
        try:
            record = SessionStore(settings.storage_root).save(args.session, history.current, rows)
        except VibeChartError as exc:
            console.print(Panel(Text(str(exc)), title="Save failed", border_style="red"))
            raise SystemExit(1)
        console.print(f"[green]Saved[/] session {record['sessionId']} at {record['savedAt']}")
    if args.output:
        Path(args.output).write_text(json.dumps(history.current, ensure_ascii=False, indent=2), encoding="utf-8")

    console.print(Panel(JSON.from_data(history.current, indent=2), title="Configuration", border_style="cyan", expand=False))


if __name__ == "__main__":
    main(sys.argv[1:])
