"""
Command-line interface for pdfbinder.
"""

import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.progress import BarColumn, Progress, TaskProgressColumn, TextColumn
from rich.table import Table

from pdfbinder import __version__
from pdfbinder.editor import EditorPage, SourceId, compile_pages, render_thumbnails
from pdfbinder.exceptions import PdfBinderError
from pdfbinder.merge import combine, merge_with_cover, process_batch
from pdfbinder.settings import load_settings
from pdfbinder.types import RGB, LogoImage, PdfMetadata, SourceFile, WatermarkConfig
from pdfbinder.utils import get_logger

console = Console()

INPUT_PDF = click.Path(exists=True, dir_okay=False, path_type=Path)


def _fail(error):
    console.print(f"\n[bold red]✗ Processing failed:[/bold red] {error}")
    sys.exit(1)


def _metadata(title, author, subject):
    if not any((title, author, subject)):
        return None
    return PdfMetadata(title=title, author=author, subject=subject)


def _logo(path):
    if path is None:
        return None
    return LogoImage.from_filename(path.name, path.read_bytes())


def _progress():
    return Progress(
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        console=console,
    )


def parse_page_selection(value):
    """Parse ``FILE:PAGE[@ROTATION]`` into ``(path, 0-based index, rotation)``."""
    path, separator, page_part = value.rpartition(":")
    if not separator or not path:
        raise click.BadParameter(f"expected FILE:PAGE[@ROTATION], got {value!r}")

    page_text, _, rotation_text = page_part.partition("@")
    try:
        page = int(page_text)
        rotation = int(rotation_text) if rotation_text else 0
    except ValueError:
        raise click.BadParameter(f"page and rotation must be integers in {value!r}") from None

    if page < 1:
        raise click.BadParameter(f"pages are numbered from 1, got {page}")
    if rotation % 90:
        raise click.BadParameter(f"rotation must be a multiple of 90, got {rotation}")
    return Path(path), page - 1, rotation % 360


@click.group()
@click.version_option(version=__version__)
@click.option(
    '--config', '-c',
    'config_path',
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='TOML file with a [pdfbinder] settings table',
)
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
@click.pass_context
def cli(ctx, config_path, verbose):
    """
    pdfbinder - merge, watermark and rearrange PDF files.
    """
    get_logger("pdfbinder", logging.DEBUG if verbose else logging.WARNING)
    try:
        ctx.obj = load_settings(config_path)
    except PdfBinderError as e:
        _fail(e)


@cli.command(name="merge")
@click.argument('content', nargs=-1, required=True, type=INPUT_PDF)
@click.option('--output', '-o', required=True, type=click.Path(dir_okay=False, path_type=Path), help='Output PDF path')
@click.option('--cover', type=INPUT_PDF, help='Cover PDF placed first, never watermarked')
@click.option('--default-cover', is_flag=True, help='Synthesize a cover page when --cover is not given')
@click.option('--logo', type=INPUT_PDF, help='PNG or JPEG logo for the synthesized cover')
@click.option('--title', help='Document title')
@click.option('--author', help='Document author')
@click.option('--subject', help='Document subject')
@click.pass_obj
def merge(settings, content, output, cover, default_cover, logo, title, author, subject):
    """
    Merge CONTENT files behind a cover, stamping every content page.

    Examples:

        pdfbinder merge unit1.pdf unit2.pdf -o notes.pdf --default-cover

        pdfbinder merge unit*.pdf -o notes.pdf --cover cover.pdf --title "Notes"
    """
    try:
        with _progress() as progress:
            task = progress.add_task("Merging", total=100)
            data = merge_with_cover(
                [path.read_bytes() for path in content],
                cover=cover.read_bytes() if cover else None,
                use_default_cover=default_cover,
                metadata=_metadata(title, author, subject),
                logo=_logo(logo),
                progress_callback=lambda value: progress.update(task, completed=value),
                settings=settings,
            )
        output.write_bytes(data)
    except (PdfBinderError, OSError) as e:
        _fail(e)

    console.print(f"\n[bold green]✓ Merged {len(content)} file(s) into:[/bold green] {output}")


@cli.command(name="watermark")
@click.argument('content', nargs=-1, required=True, type=INPUT_PDF)
@click.option('--output-dir', '-o', default='./output', type=click.Path(file_okay=False, path_type=Path), help='Output directory')
@click.option('--cover', type=INPUT_PDF, help='Cover PDF prepended to every output')
@click.option('--logo', type=INPUT_PDF, help='PNG or JPEG logo drawn behind the stamp')
@click.option('--diagonal/--no-diagonal', default=True, help='Stamp rotated by +60 degrees')
@click.option('--bottom/--no-bottom', default=True, help='Small stamp above the bottom edge')
@click.option('--top/--no-top', default=False, help='Small stamp below the top edge')
@click.option('--crossed/--no-crossed', default=False, help='Stamp rotated by -60 degrees')
@click.option('--text', help='Stamp text')
@click.option('--color', default='#808080', show_default=True, help='Stamp colour as #rrggbb')
@click.option('--opacity', default=0.2, show_default=True, type=click.FloatRange(0, 1), help='Stamp opacity')
@click.option('--logo-opacity', default=0.5, show_default=True, type=click.FloatRange(0, 1))
@click.option('--logo-scale', default=0.5, show_default=True, type=click.FloatRange(0, 1), help='Logo width relative to the page')
@click.option('--suffix', help='Suffix appended to output file names')
@click.option('--isolate-failures', is_flag=True, help='Keep going when a file fails')
@click.option('--combine', 'combined', type=click.Path(dir_okay=False, path_type=Path), help='Also write all outputs into one PDF')
@click.option('--title', help='Document title')
@click.option('--author', help='Document author')
@click.option('--subject', help='Document subject')
@click.pass_obj
def watermark(settings, content, output_dir, cover, logo, diagonal, bottom, top, crossed, text, color,
              opacity, logo_opacity, logo_scale, suffix, isolate_failures, combined, title, author, subject):
    """
    Watermark each CONTENT file into its own output.

    Examples:

        pdfbinder watermark unit1.pdf unit2.pdf -o stamped

        pdfbinder watermark *.pdf --top --crossed --logo logo.png --combine all.pdf
    """
    try:
        config = WatermarkConfig(
            diagonal=diagonal,
            bottom=bottom,
            top=top,
            crossed=crossed,
            text_color=RGB.from_hex(color),
            text_opacity=opacity,
            logo=_logo(logo),
            logo_opacity=logo_opacity,
            logo_scale=logo_scale,
            text=text,
        )
        files = [SourceFile(path.name, path.read_bytes()) for path in content]

        with _progress() as progress:
            task = progress.add_task("Watermarking", total=100)
            result = process_batch(
                files,
                config=config,
                cover=cover.read_bytes() if cover else None,
                metadata=_metadata(title, author, subject),
                suffix=suffix,
                progress_callback=lambda value: progress.update(task, completed=value),
                isolate_failures=isolate_failures,
                settings=settings,
            )

        output_dir.mkdir(parents=True, exist_ok=True)
        for item in result.files:
            (output_dir / item.download_filename).write_bytes(item.data)
        if combined is not None and result.files:
            combined.write_bytes(combine([item.data for item in result.files], settings=settings))
    except (PdfBinderError, OSError, ValueError) as e:
        _fail(e)

    summary_table = Table(title="Watermark Summary", show_header=False)
    summary_table.add_column("Metric", style="cyan")
    summary_table.add_column("Value", style="green")
    summary_table.add_row("Total Files", str(result.total))
    summary_table.add_row("✓ Successful", f"[green]{len(result.files)}[/green]")
    summary_table.add_row("✗ Failed", f"[red]{len(result.failures)}[/red]")
    summary_table.add_row("Output Directory", str(output_dir.resolve()))
    if combined is not None and result.files:
        summary_table.add_row("Combined", str(combined))
    console.print(summary_table)

    if result.failures:
        console.print("\n[bold red]Failed Files:[/bold red]")
        for failure in result.failures:
            console.print(f"  ✗ {failure.original_name}: {failure.error}")
        sys.exit(1)


@cli.command(name="combine")
@click.argument('inputs', nargs=-1, required=True, type=INPUT_PDF)
@click.option('--output', '-o', required=True, type=click.Path(dir_okay=False, path_type=Path), help='Output PDF path')
@click.pass_obj
def combine_files(settings, inputs, output):
    """
    Concatenate already processed PDFs without stamping them again.

    Example:

        pdfbinder combine a_vtunotesforall.pdf b_vtunotesforall.pdf -o all.pdf
    """
    try:
        output.write_bytes(combine([path.read_bytes() for path in inputs], settings=settings))
    except (PdfBinderError, OSError) as e:
        _fail(e)

    console.print(f"\n[bold green]✓ Combined {len(inputs)} file(s) into:[/bold green] {output}")


@cli.command(name="edit")
@click.argument('selection', nargs=-1, required=True)
@click.option('--output', '-o', required=True, type=click.Path(dir_okay=False, path_type=Path), help='Output PDF path')
@click.option('--title', help='Document title')
@click.option('--author', help='Document author')
@click.option('--subject', help='Document subject')
@click.pass_obj
def edit(settings, selection, output, title, author, subject):
    """
    Build a PDF from pages picked out of any number of files.

    Each SELECTION is FILE:PAGE[@ROTATION] with 1-based page numbers and a
    clockwise rotation in multiples of 90.

    Examples:

        pdfbinder edit a.pdf:1 b.pdf:3@90 a.pdf:2 -o edited.pdf
    """
    pages = []
    sources = {}
    for position, value in enumerate(selection):
        path, index, rotation = parse_page_selection(value)
        source_id = SourceId(str(path))
        if source_id not in sources:
            if not path.is_file():
                raise click.BadParameter(f"file not found: {path}")
            sources[source_id] = path.read_bytes()
        pages.append(
            EditorPage(
                id=str(position),
                source_id=source_id,
                original_page_index=index,
                rotation_delta=rotation,
            )
        )

    try:
        output.write_bytes(
            compile_pages(pages, sources, metadata=_metadata(title, author, subject), settings=settings)
        )
    except (PdfBinderError, OSError) as e:
        _fail(e)

    console.print(f"\n[bold green]✓ Wrote {len(pages)} page(s) to:[/bold green] {output}")


@cli.command(name="thumbnails")
@click.argument('input_pdf', type=INPUT_PDF)
@click.option('--output-dir', '-o', default='./thumbnails', type=click.Path(file_okay=False, path_type=Path), help='Output directory')
@click.option('--scale', type=click.FloatRange(min=0, min_open=True), help='Render scale, defaults to the configured thumbnail scale')
@click.pass_obj
def thumbnails(settings, input_pdf, output_dir, scale):
    """
    Render a PNG preview of every page.

    Example:

        pdfbinder thumbnails notes.pdf -o previews --scale 0.5
    """
    try:
        images = render_thumbnails(input_pdf.read_bytes(), scale or settings.thumbnail_scale)
        output_dir.mkdir(parents=True, exist_ok=True)
        for number, image in enumerate(images, 1):
            (output_dir / f"{input_pdf.stem}-{number:03d}.png").write_bytes(image)
    except (PdfBinderError, OSError, ValueError) as e:
        _fail(e)

    console.print(f"\n[bold green]✓ Rendered {len(images)} thumbnail(s) into:[/bold green] {output_dir}")


if __name__ == '__main__':
    cli()
