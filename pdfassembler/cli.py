"""
Command-line interface for PDF Assembler.
"""

import os
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from pdfassembler import (
    __version__,
    add_watermark,
    get_document_info,
    get_thumbnails,
    merge_documents,
    pdf_to_images,
    split_document,
)
from pdfassembler.config import get_settings
from pdfassembler.core.utils import get_logger, strip_extension
from pdfassembler.exceptions import PdfAssemblerError
from pdfassembler.images import COLOR_MODES, IMAGE_FORMATS
from pdfassembler.tools.common.pipeline import registry
from pdfassembler.utils import format_file_size, write_outputs, write_zip_archive
from pdfassembler.watermark import WATERMARK_POSITIONS

console = Console()

INTERACTIVE_THUMBNAIL_LIMIT = 20


def _fail(message):
    console.print(f"\n[bold red]✗ Error:[/bold red] {message}")
    sys.exit(1)


def _read_source(path):
    try:
        return Path(path).read_bytes()
    except OSError as e:
        _fail(f"Cannot read {path}: {e}")


def _write_results(result, output_dir, zip_path):
    entries = list(zip(result.details["names"], result.outputs))
    if zip_path:
        archive = write_zip_archive(entries, zip_path)
        console.print(f"\n[bold green]✓ Wrote {len(entries)} file(s) to {archive}[/bold green]")
        return

    written = write_outputs(entries, output_dir)
    console.print(f"\n[bold green]✓ Successfully created {len(written)} file(s)[/bold green]")
    console.print(f"[dim]Output directory: {os.path.abspath(output_dir)}[/dim]")

    console.print("\n[bold]Created files:[/bold]")
    sample_size = min(5, len(written))
    for file_path, pages in zip(written[:sample_size], result.details["page_counts"]):
        console.print(f"  • {file_path.name} ({pages} page{'s' if pages != 1 else ''})")
    if len(written) > sample_size:
        console.print(f"  ... and {len(written) - sample_size} more")
    console.print()


@click.group()
@click.version_option(version=__version__)
@click.option(
    '--log-level',
    default=None,
    help='Diagnostic log level (defaults to PDFASSEMBLER_LOG_LEVEL or WARNING)',
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False)
)
@click.pass_context
def cli(ctx, log_level):
    """
    PDF Assembler - extract, merge, watermark and render PDF pages.
    """
    level = (log_level or get_settings().log_level).upper()
    ctx.obj = {"logger": get_logger("pdfassembler.cli", level)}


@cli.command(name="info")
@click.argument('input_pdf', type=click.Path(exists=True, dir_okay=False))
def show_info(input_pdf):
    """
    Display information about a PDF file.

    Example:

        pdf-assembler info input.pdf
    """
    try:
        info = get_document_info(_read_source(input_pdf), name=os.path.basename(input_pdf))
    except PdfAssemblerError as e:
        _fail(e)

    table = Table(title=f"PDF Information: {info.name}")
    table.add_column("Property", style="cyan", no_wrap=True)
    table.add_column("Value", style="green")

    table.add_row("File Path", os.path.abspath(input_pdf))
    table.add_row("File Size", format_file_size(info.byte_size))
    table.add_row("Number of Pages", str(info.num_pages))
    table.add_row("Encrypted", "Yes" if info.is_encrypted else "No")
    table.add_row("Bookmarks", str(info.outline_entries))

    for label, value in (
        ("Title", info.title),
        ("Author", info.author),
        ("Subject", info.subject),
        ("Creator", info.creator),
        ("Producer", info.producer),
    ):
        if value:
            table.add_row(label, value)

    if info.page_sizes:
        width, height = info.page_sizes[0]
        table.add_row("First Page Size", f"{width:.0f} x {height:.0f} pt")

    console.print()
    console.print(table)
    console.print()


@cli.command(name="extract")
@click.argument('input_pdf', type=click.Path(exists=True, dir_okay=False))
@click.option(
    '--ranges', '-r',
    required=True,
    help='Page ranges, e.g. "1-3,5,8-10" (1-indexed, inclusive)',
    type=str
)
@click.option(
    '--output-dir', '-o',
    default='./output',
    help='Output directory for extracted documents',
    type=click.Path(file_okay=False)
)
@click.option(
    '--zip', 'zip_path',
    default=None,
    help='Write all outputs into this zip archive instead of a directory',
    type=click.Path(dir_okay=False)
)
@click.option(
    '--no-metadata',
    is_flag=True,
    help='Do not copy author and subject from the source'
)
@click.pass_context
def extract_command(ctx, input_pdf, ranges, output_dir, zip_path, no_metadata):
    """
    Extract page ranges into separate PDF files.

    Ranges outside the document are skipped.

    Examples:

        pdf-assembler extract input.pdf -r 1-3

        pdf-assembler extract input.pdf -r "1-3,8-10" --zip pages.zip
    """
    _run_split(ctx, input_pdf, output_dir, zip_path, no_metadata, mode="range", ranges=ranges)


@cli.command(name="split")
@click.argument('input_pdf', type=click.Path(exists=True, dir_okay=False))
@click.option(
    '--parts', '-n',
    default=None,
    help='Split into this many parts of equal page count',
    type=click.IntRange(min=1)
)
@click.option(
    '--pages', '-p',
    default=None,
    help='Comma-separated page numbers, one output file per page',
    type=str
)
@click.option(
    '--all', 'every_page',
    is_flag=True,
    help='Write every page to its own file'
)
@click.option(
    '--output-dir', '-o',
    default='./output',
    help='Output directory for split documents',
    type=click.Path(file_okay=False)
)
@click.option(
    '--zip', 'zip_path',
    default=None,
    help='Write all outputs into this zip archive instead of a directory',
    type=click.Path(dir_okay=False)
)
@click.option(
    '--no-metadata',
    is_flag=True,
    help='Do not copy author and subject from the source'
)
@click.pass_context
def split_command(ctx, input_pdf, parts, pages, every_page, output_dir, zip_path, no_metadata):
    """
    Split a PDF into equal parts, selected pages or single pages.

    Examples:

        pdf-assembler split input.pdf --parts 3

        pdf-assembler split input.pdf --pages 1,4,7

        pdf-assembler split input.pdf --all --zip pages.zip
    """
    selected = [option for option in (parts, pages, every_page or None) if option is not None]
    if len(selected) != 1:
        _fail("Choose exactly one of --parts, --pages or --all")

    if parts is not None:
        _run_split(ctx, input_pdf, output_dir, zip_path, no_metadata, mode="parts", parts=parts)
    elif pages is not None:
        try:
            page_numbers = [int(token) for token in pages.split(",") if token.strip()]
        except ValueError:
            _fail(f"Invalid page list: '{pages}'. Expected comma-separated integers.")
        _run_split(ctx, input_pdf, output_dir, zip_path, no_metadata, mode="pages", pages=page_numbers)
    else:
        _run_split(ctx, input_pdf, output_dir, zip_path, no_metadata, mode="all")


def _run_split(ctx, input_pdf, output_dir, zip_path, no_metadata, **options):
    source = _read_source(input_pdf)
    console.print(f"\n[bold cyan]Processing {os.path.basename(input_pdf)}...[/bold cyan]")
    result = split_document(
        source,
        name=os.path.basename(input_pdf),
        preserve_metadata=not no_metadata,
        logger=ctx.obj["logger"],
        **options,
    )
    if not result.success:
        _fail(result.error)
    _write_results(result, output_dir, zip_path)


@cli.command(name="merge")
@click.argument('input_pdfs', nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.option(
    '--output', '-o',
    default='merged.pdf',
    help='Output file for the merged document',
    type=click.Path(dir_okay=False)
)
@click.option(
    '--no-bookmarks',
    is_flag=True,
    help='Do not add a bookmark for each source document'
)
@click.option(
    '--no-metadata',
    is_flag=True,
    help='Do not copy title and author from the first document'
)
@click.pass_context
def merge_command(ctx, input_pdfs, output, no_bookmarks, no_metadata):
    """
    Merge PDF files in the given order.

    Example:

        pdf-assembler merge a.pdf b.pdf c.pdf -o combined.pdf
    """
    if len(input_pdfs) < 2:
        _fail("At least 2 PDF files are required for merging")

    console.print(f"\n[bold cyan]Merging {len(input_pdfs)} files...[/bold cyan]")
    result = merge_documents(
        [_read_source(path) for path in input_pdfs],
        names=[os.path.basename(path) for path in input_pdfs],
        add_bookmarks=not no_bookmarks,
        preserve_metadata=not no_metadata,
        logger=ctx.obj["logger"],
    )
    if not result.success:
        _fail(result.error)

    destination = Path(output)
    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_bytes(result.outputs[0])

    console.print(
        f"\n[bold green]✓ Merged into {destination} ({result.details['page_counts'][0]} pages)[/bold green]\n"
    )


@cli.command(name="thumbnails")
@click.argument('input_pdf', type=click.Path(exists=True, dir_okay=False))
@click.option(
    '--output-dir', '-o',
    default='./thumbnails',
    help='Output directory for PNG previews',
    type=click.Path(file_okay=False)
)
@click.option(
    '--max-pages', '-m',
    default=INTERACTIVE_THUMBNAIL_LIMIT,
    show_default=True,
    help='Maximum number of pages to preview',
    type=click.IntRange(min=1)
)
@click.pass_context
def thumbnails_command(ctx, input_pdf, output_dir, max_pages):
    """
    Render PNG previews of the first pages of a PDF.

    Example:

        pdf-assembler thumbnails input.pdf -m 5
    """
    previews = get_thumbnails(_read_source(input_pdf), max_pages, logger=ctx.obj["logger"])
    stem = strip_extension(os.path.basename(input_pdf))
    written = write_outputs(
        [(f"{stem}_page_{item.page_number:03d}.png", item.image_bytes) for item in previews],
        output_dir,
    )

    table = Table(title=f"Thumbnails: {os.path.basename(input_pdf)}")
    table.add_column("Page", style="cyan", justify="right")
    table.add_column("Size", style="green")
    table.add_column("Source", style="magenta")
    table.add_column("File")
    for item, path in zip(previews, written):
        table.add_row(
            str(item.page_number),
            f"{item.width}x{item.height}",
            "placeholder" if item.placeholder else "rendered",
            path.name,
        )

    console.print()
    console.print(table)
    console.print(f"[dim]Output directory: {os.path.abspath(output_dir)}[/dim]\n")


@cli.command(name="watermark")
@click.argument('input_pdf', type=click.Path(exists=True, dir_okay=False))
@click.option(
    '--text', '-t',
    required=True,
    help='Watermark text',
    type=str
)
@click.option(
    '--position',
    default='center',
    show_default=True,
    help='Where the text is drawn on each page',
    type=click.Choice(WATERMARK_POSITIONS)
)
@click.option(
    '--font-size',
    default=None,
    help='Font size in points, clamped to 24-72 (default 48)',
    type=float
)
@click.option(
    '--opacity',
    default=None,
    help='Text opacity, clamped to 0.1-1.0 (default 0.3)',
    type=float
)
@click.option(
    '--output', '-o',
    default=None,
    help='Output file (defaults to <name>_watermarked.pdf in the current directory)',
    type=click.Path(dir_okay=False)
)
@click.pass_context
def watermark_command(ctx, input_pdf, text, position, font_size, opacity, output):
    """
    Stamp a text watermark on every page of a PDF.

    Examples:

        pdf-assembler watermark input.pdf -t CONFIDENTIAL

        pdf-assembler watermark input.pdf -t DRAFT --position diagonal --opacity 0.5
    """
    console.print(f"\n[bold cyan]Watermarking {os.path.basename(input_pdf)}...[/bold cyan]")
    result = add_watermark(
        _read_source(input_pdf),
        text,
        position=position,
        font_size=font_size,
        opacity=opacity,
        name=os.path.basename(input_pdf),
        logger=ctx.obj["logger"],
    )
    if not result.success:
        _fail(result.error)

    destination = Path(output or result.details["names"][0])
    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_bytes(result.outputs[0])

    console.print(
        f"\n[bold green]✓ Watermarked {result.details['page_counts'][0]} pages into {destination}[/bold green]\n"
    )


@cli.command(name="to-images")
@click.argument('input_pdf', type=click.Path(exists=True, dir_okay=False))
@click.option(
    '--format', '-f', 'image_format',
    default='png',
    show_default=True,
    help='Image format',
    type=click.Choice(list(IMAGE_FORMATS), case_sensitive=False)
)
@click.option(
    '--dpi',
    default=150,
    show_default=True,
    help='Resolution, clamped to 72-600',
    type=int
)
@click.option(
    '--quality', '-q',
    default=90,
    show_default=True,
    help='JPEG/WebP quality, clamped to 10-100',
    type=int
)
@click.option(
    '--color-mode',
    default='color',
    show_default=True,
    help='Color conversion applied to each image',
    type=click.Choice(COLOR_MODES)
)
@click.option(
    '--output-dir', '-o',
    default='./images',
    help='Output directory for page images',
    type=click.Path(file_okay=False)
)
@click.option(
    '--zip', 'zip_path',
    default=None,
    help='Write all images into this zip archive instead of a directory',
    type=click.Path(dir_okay=False)
)
@click.pass_context
def to_images_command(ctx, input_pdf, image_format, dpi, quality, color_mode, output_dir, zip_path):
    """
    Convert every page of a PDF to an image.

    Examples:

        pdf-assembler to-images input.pdf --dpi 300

        pdf-assembler to-images input.pdf -f jpeg --color-mode grayscale --zip pages.zip
    """
    console.print(f"\n[bold cyan]Converting {os.path.basename(input_pdf)}...[/bold cyan]")
    result = pdf_to_images(
        _read_source(input_pdf),
        dpi=dpi,
        image_format=image_format.lower(),
        quality=quality,
        color_mode=color_mode,
        name=os.path.basename(input_pdf),
        logger=ctx.obj["logger"],
    )
    if not result.success:
        _fail(result.error)

    entries = list(zip(result.details["names"], result.outputs))
    if zip_path:
        archive = write_zip_archive(entries, zip_path)
        console.print(f"\n[bold green]✓ Wrote {len(entries)} image(s) to {archive}[/bold green]\n")
        return

    written = write_outputs(entries, output_dir)
    table = Table(title=f"Page Images: {os.path.basename(input_pdf)}")
    table.add_column("Page", style="cyan", justify="right")
    table.add_column("Size", style="green")
    table.add_column("File")
    for number, (width, height), path in zip(result.details["page_numbers"], result.details["sizes"], written):
        table.add_row(str(number), f"{width}x{height}", path.name)

    console.print()
    console.print(table)
    console.print(f"[dim]Output directory: {os.path.abspath(output_dir)}[/dim]\n")


@cli.command(name="tools")
def list_tools():
    """
    List the registered document tools.
    """
    table = Table(title="Registered Tools")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Description", style="green")
    for spec in registry.specs():
        table.add_row(spec.name, spec.summary)

    console.print()
    console.print(table)
    console.print()


if __name__ == '__main__':
    cli()
