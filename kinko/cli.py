"""Command-line interface for Kinko Transcriber.

Provides commands for:
- transcribe: Convert a solo shakuhachi recording to Kinko notation
- chart: Show the fingering chart of the notation alphabet
- info: Show audio file information
"""

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

app = typer.Typer(
    name="kinko",
    help="Shakuhachi audio to Kinko-ryu notation",
    rich_markup_mode="markdown",
)
console = Console()


@dataclass
class StageTimings:
    """Track timing of processing stages."""

    stages: Dict[str, float] = field(default_factory=dict)
    _current_stage: Optional[str] = field(default=None, repr=False)
    _start_time: float = field(default=0.0, repr=False)

    def start(self, stage: str) -> None:
        """Start timing a stage."""
        self._current_stage = stage
        self._start_time = time.perf_counter()

    def stop(self) -> float:
        """Stop timing the current stage, return duration."""
        if self._current_stage is None:
            return 0.0
        duration = time.perf_counter() - self._start_time
        self.stages[self._current_stage] = duration
        self._current_stage = None
        return duration

    @property
    def total_time(self) -> float:
        """Get total time across all stages."""
        return sum(self.stages.values())

    def print_summary(self) -> None:
        """Print timing summary to console."""
        console.print("\n[bold]Timing Summary:[/bold]")
        for stage, duration in self.stages.items():
            console.print(f"  {stage}: {duration:.2f}s")
        console.print(f"  [bold]Total: {self.total_time:.2f}s[/bold]")


def _configure_logging(verbose: bool) -> None:
    if not verbose:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )
    logging.getLogger("numba").setLevel(logging.WARNING)


@app.command()
def transcribe(
    input_file: Path = typer.Argument(..., help="Input audio file (WAV, FLAC, OGG, AIFF)"),
    output: Optional[Path] = typer.Option(
        None, "-o", "--output", help="Write the score as JSON to this path"
    ),
    config_file: Optional[Path] = typer.Option(
        None, "-c", "--config", help="YAML configuration file"
    ),
    instrument: Optional[str] = typer.Option(
        None, "-i", "--instrument", help="Frequency range preset: default/shakuhachi/shakuhachi_2_4"
    ),
    comparator: Optional[str] = typer.Option(
        None, "--comparator", help="Notation matching: hz (default) or cents"
    ),
    tempo_method: Optional[str] = typer.Option(
        None, "--tempo-method", help="Tempo estimation: onset (default) or notes"
    ),
    title: Optional[str] = typer.Option(None, "--title", help="Score title"),
    json_output: bool = typer.Option(
        False, "--json", help="Print the score as JSON (for scripting)"
    ),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose output"),
):
    """Transcribe a recording to Kinko-ryu notation.

    **Examples:**

        kinko transcribe honkyoku.wav

        kinko transcribe take1.flac -o take1.json --instrument shakuhachi

        kinko transcribe take1.wav --comparator cents --json
    """
    from .core import KinkoError, TranscriptionConfig
    from .input import AudioLoader
    from .output import JSONExporter
    from .pipeline import KinkoTranscriber

    _configure_logging(verbose)

    if not input_file.exists():
        console.print(f"[red]Error: File not found: {input_file}[/red]")
        raise typer.Exit(1)

    timings = StageTimings()
    try:
        if config_file is not None:
            config = TranscriptionConfig.from_yaml(config_file)
        else:
            config = TranscriptionConfig()
        if instrument:
            config = config.with_instrument(instrument)
        overrides = {}
        if comparator:
            overrides["notation_comparator"] = comparator
        if tempo_method:
            overrides["tempo_method"] = tempo_method
        if overrides:
            config = config.replace(**overrides)

        if not json_output:
            console.print(f"[blue]Loading audio:[/blue] {input_file}")
        timings.start("load")
        buffer = AudioLoader().load(input_file)
        timings.stop()

        if verbose and not json_output:
            console.print(f"  Duration: {buffer.duration:.2f}s, Sample rate: {buffer.sr}Hz")

        if not json_output:
            console.print("[blue]Transcribing...[/blue]")
        timings.start("transcribe")
        score = KinkoTranscriber(config).transcribe(
            buffer.samples,
            buffer.sr,
            duration=buffer.duration,
            title=title or input_file.stem,
            metadata={"original_file": input_file.name, "format": input_file.suffix.lstrip(".").upper()},
        )
        timings.stop()

        exporter = JSONExporter()
        if output is not None:
            timings.start("export")
            exporter.export(score, output)
            timings.stop()

    except (KinkoError, ValueError, FileNotFoundError) as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    if json_output:
        console.print_json(exporter.to_json(score))
        return

    if score.is_sentinel:
        console.print("[yellow]No notes detected; the score holds a placeholder note[/yellow]")
    console.print(
        f"  {len(score.notes)} notes in {len(score.phrases)} phrases, "
        f"tempo {score.tempo_bpm} BPM, key {score.key_label}, "
        f"confidence {score.confidence:.2f}"
    )
    _show_score_table(score)

    if output is not None:
        console.print(f"[blue]Exported to:[/blue] {output}")
    console.print("[green]Transcription complete![/green]")

    if verbose:
        timings.print_summary()


@app.command()
def chart():
    """Show the fingering chart of the Kinko alphabet."""
    from .notation import NotationMapper

    table = Table(title="Kinko-ryu Fingering Chart")
    table.add_column("Note", style="cyan")
    table.add_column("Symbol", style="bold")
    table.add_column("Fingering", style="green")
    table.add_column("Frequency (Hz)", style="yellow", justify="right")
    table.add_column("Description")

    for row in NotationMapper().fingering_chart():
        table.add_row(
            row["note"],
            row["symbol"],
            row["fingering"],
            f"{row['frequency']:.2f}",
            row["description"],
        )

    console.print(table)


@app.command()
def info(
    input_file: Path = typer.Argument(..., help="Input audio file"),
):
    """Show information about an audio file."""
    from .input import AudioLoader

    if not input_file.exists():
        console.print(f"[red]Error: File not found: {input_file}[/red]")
        raise typer.Exit(1)

    try:
        header = AudioLoader().info(input_file)
    except RuntimeError as e:  # libsndfile could not open it
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    console.print(f"\n[bold]Audio Info:[/bold] {input_file.name}")
    console.print(f"  Duration: {header.duration:.2f} seconds")
    console.print(f"  Sample rate: {header.samplerate} Hz")
    console.print(f"  Channels: {header.channels}")
    console.print(f"  Samples: {header.frames:,}")


def _show_score_table(score):
    """Display phrases and notes in a table."""
    table = Table(title=score.title)
    table.add_column("Phrase", style="cyan", justify="right")
    table.add_column("Symbol", style="bold")
    table.add_column("Fingering", style="green")
    table.add_column("Pitch (Hz)", style="yellow", justify="right")
    table.add_column("Duration (s)", style="yellow", justify="right")
    table.add_column("Ornaments", style="magenta")
    table.add_column("Techniques", style="magenta")

    for index, phrase in enumerate(score.phrases, start=1):
        for note in phrase.notes:
            table.add_row(
                str(index),
                note.symbol,
                note.fingering_id,
                f"{note.pitch_hz:.1f}",
                f"{note.duration:.3f}",
                " ".join(o.value for o in note.ornaments),
                ", ".join(sorted(t.value for t in note.techniques)),
            )
        table.add_section()

    console.print(table)


def main():
    """Entry point."""
    app()


if __name__ == "__main__":
    main()
