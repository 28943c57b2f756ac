"""Command-line interface for Audio to MIDI.

Provides commands for:
- convert: Extract notes from audio and write a MIDI file
- info: Show audio file information
"""

import typer
from pathlib import Path
from typing import Optional
from rich.console import Console
from rich.table import Table
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn, TimeElapsedColumn

app = typer.Typer(
    name="audio-to-midi",
    help="Extract melody, chord and drum notes from audio",
    rich_markup_mode="markdown",
)
console = Console()


@app.command()
def convert(
    input_file: Path = typer.Argument(..., help="Input audio file (WAV, FLAC, MP3, ...)"),
    output: Optional[Path] = typer.Option(
        None, "-o", "--output", help="Output MIDI file path"
    ),
    mode: str = typer.Option(
        "melody", "-m", "--mode", help="Capture mode: melody/harmony/drums"
    ),
    tempo: float = typer.Option(
        240.0, "-t", "--tempo", help="Tempo (BPM) of the beat grid notes are placed on"
    ),
    peak_order: str = typer.Option(
        "detection", "--peak-order", help="Harmony mode: keep lowest (detection) or strongest (magnitude) peaks"
    ),
    confidence: float = typer.Option(
        0.8, "--confidence", help="Melody mode: minimum pitch confidence (0-1)"
    ),
    verbose: bool = typer.Option(
        False, "-v", "--verbose", help="Verbose output"
    ),
    json_output: bool = typer.Option(
        False, "--json", help="Output notes as JSON (for scripting)"
    ),
):
    """Convert an audio file to MIDI notes.

    **Examples:**

        audio-to-midi convert hum.wav

        audio-to-midi convert loop.wav -m drums -o loop.mid

        audio-to-midi convert pad.flac -m harmony --peak-order magnitude --json
    """
    from .analysis import PeakOrder
    from .core import AudioToMidiError
    from .output import MIDIExporter
    from .transcription import AudioToMidiConverter, ConversionMode

    if not input_file.exists():
        console.print(f"[red]Error: File not found: {input_file}[/red]")
        raise typer.Exit(1)

    try:
        conversion_mode = ConversionMode.parse(mode)
        order = PeakOrder(peak_order.lower())
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    # Default output path
    if output is None:
        output = input_file.with_suffix(".mid")

    try:
        converter = AudioToMidiConverter(
            tempo=tempo,
            peak_order=order,
            confidence_threshold=confidence,
        )
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    if not json_output:
        console.print(f"[blue]Converting ({conversion_mode.value} mode):[/blue] {input_file}")

    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("{task.description}"),
            BarColumn(),
            TextColumn("{task.percentage:>3.0f}%"),
            TimeElapsedColumn(),
            console=console,
            transient=True,
            disable=json_output,
        ) as progress:
            task = progress.add_task("Starting...", total=100)

            def on_progress(stage: str, percent: float) -> None:
                progress.update(task, description=stage, completed=percent)

            result = converter.convert(input_file, conversion_mode, on_progress)
    except AudioToMidiError as e:
        console.print(f"[red]Conversion failed: {e}[/red]")
        raise typer.Exit(1)

    exporter = MIDIExporter(
        tempo=converter.tempo,
        is_drum=conversion_mode is ConversionMode.DRUMS,
    )
    exporter.export(result, output)

    if json_output:
        data = result.to_dict()
        data["input"] = str(input_file)
        data["output"] = str(output)
        data["mode"] = conversion_mode.value
        console.print_json(data=data)
        return

    console.print(f"  Detected {len(result.notes)} notes")
    if verbose and result.notes:
        _show_notes_table(result.notes)
    console.print(f"[green]Wrote {output}[/green]")


@app.command()
def info(
    input_file: Path = typer.Argument(..., help="Input audio file"),
):
    """Show information about an audio file."""
    from .core import AudioToMidiError
    from .input import AudioLoader

    if not input_file.exists():
        console.print(f"[red]Error: File not found: {input_file}[/red]")
        raise typer.Exit(1)

    try:
        header = AudioLoader().info(input_file)
    except AudioToMidiError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    console.print(f"\n[bold]Audio Info:[/bold] {input_file.name}")
    console.print(f"  Format: {header.format}")
    console.print(f"  Duration: {header.duration:.2f} seconds")
    console.print(f"  Sample rate: {header.sample_rate} Hz")
    console.print(f"  Channels: {header.channels}")
    console.print(f"  Samples: {header.frames:,}")


def _show_notes_table(notes):
    """Display notes in a table."""
    table = Table(title="Detected Notes")
    table.add_column("Pitch", style="cyan")
    table.add_column("Start (beats)", style="green")
    table.add_column("Duration (beats)", style="yellow")
    table.add_column("Velocity", style="magenta")

    for note in notes:
        table.add_row(
            note.pitch_name,
            f"{note.start:.3f}",
            f"{note.duration:.3f}",
            f"{note.velocity:.2f}",
        )

    console.print(table)


def main():
    """Entry point."""
    app()


if __name__ == "__main__":
    main()
