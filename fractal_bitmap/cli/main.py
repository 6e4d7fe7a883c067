"""
Command-line interface for Mandelbrot bitmap generation.
"""

import click
import sys
from pathlib import Path
import logging
import time

from .. import __version__
from ..api import MandelbrotRenderer
from ..io.config import ConfigManager
from ..rendering.image_output import read_bitmap_headers
from ..acceleration.threading_backend import KERNELS, get_optimal_worker_count

logger = logging.getLogger(__name__)


@click.group(invoke_without_command=True)
@click.option('--version', is_flag=True, help='Show version information')
@click.option('--config', type=click.Path(exists=True), help='Configuration file path')
@click.option('--preset', help='Configuration preset to use')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.option('--quiet', '-q', is_flag=True, help='Suppress most output')
@click.pass_context
def main(ctx, version, config, preset, verbose, quiet):
    """
    Fractal Bitmap - Mandelbrot escape-time images as 24-bit bitmaps.
    """
    # Setup logging
    if quiet:
        logging.basicConfig(level=logging.ERROR)
    elif verbose:
        logging.basicConfig(level=logging.DEBUG,
                            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    else:
        logging.basicConfig(level=logging.INFO,
                            format='%(levelname)s: %(message)s')

    if version:
        click.echo(f"Fractal Bitmap v{__version__}")
        click.echo(f"Python: {sys.version}")
        click.echo(f"Hardware threads: {get_optimal_worker_count()}")

        if ctx.invoked_subcommand is None:
            sys.exit(0)

    ctx.ensure_object(dict)
    ctx.obj['config_file'] = config
    ctx.obj['preset'] = preset
    ctx.obj['verbose'] = verbose


def _parse_center(value):
    parts = [float(x.strip()) for x in value.split(',')]
    if len(parts) != 2:
        raise ValueError("Invalid center format. Use 'real,imag'")
    return tuple(parts)


@main.command()
@click.argument('output', type=click.Path(), required=False)
@click.option('--width', '-w', type=int, help='Image width')
@click.option('--height', '-h', type=int, help='Image height')
@click.option('--max-iter', type=int, help='Maximum iterations')
@click.option('--workers', type=int, help='Number of worker threads')
@click.option('--scale', type=float, help='Imaginary-axis extent covered by the image height')
@click.option('--center', type=str, help='Complex plane center: "real,imag"')
@click.option('--kernel', type=click.Choice(list(KERNELS)), help='Per-range evaluation kernel')
@click.option('--histogram/--no-histogram', default=True, help='Print the iteration histogram')
@click.pass_context
def render(ctx, output, width, height, max_iter, workers, scale, center, kernel, histogram):
    """
    Render the Mandelbrot set to a bitmap.

    OUTPUT: Output bitmap path (defaults to the configured path)
    """
    try:
        overrides = {
            'width': width,
            'height': height,
            'max_iterations': max_iter,
            'num_workers': workers,
            'scale': scale,
            'kernel': kernel,
            'output_path': output,
        }
        if center:
            overrides['center'] = _parse_center(center)

        config = ConfigManager().create_render_config(
            preset=ctx.obj.get('preset'),
            config_file=ctx.obj.get('config_file'),
            **overrides
        )

        renderer = MandelbrotRenderer(config)

        click.echo(f"Rendering {config.width}x{config.height} Mandelbrot "
                   f"with {renderer.accelerator.num_workers} workers...")
        start_time = time.time()

        result, written = renderer.render_to_file()

        if histogram:
            counts = result.histogram.counts
            click.echo(' '.join(str(int(n)) for n in counts))
            click.echo()
            click.echo(f"Iterations: {result.histogram.total()}")
            click.echo(f"Width * height: {config.width * config.height}")

        if not written:
            click.echo(f"Error: could not write {config.output_path}", err=True)
            sys.exit(1)

        click.echo(f"Render complete: {time.time() - start_time:.2f}s")
        click.echo(f"Saved: {config.output_path}")

    except (ValueError, OSError) as e:
        click.echo(f"Error: {e}", err=True)
        if ctx.obj.get('verbose'):
            import traceback
            traceback.print_exc()
        sys.exit(1)


@main.command()
@click.argument('bitmap_file', type=click.Path(exists=True, dir_okay=False))
def inspect(bitmap_file):
    """
    Show the headers of a bitmap file.

    BITMAP_FILE: Bitmap to inspect
    """
    data = Path(bitmap_file).read_bytes()
    try:
        file_header, info_header = read_bitmap_headers(data)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(f"File: {bitmap_file}")
    click.echo(f"  magic: {file_header.magic.decode('ascii', 'replace')}")
    click.echo(f"  file_size: {file_header.file_size}")
    click.echo(f"  data_offset: {file_header.data_offset}")
    for name, value in info_header.to_dict().items():
        click.echo(f"  {name}: {value}")

    if file_header.file_size != len(data):
        click.echo(f"Warning: header size {file_header.file_size} != actual {len(data)}", err=True)


@main.command('list-presets')
def list_presets():
    """List the available configuration presets."""
    manager = ConfigManager()
    click.echo("Available presets:")
    for name, settings in manager.presets.items():
        summary = ', '.join(f"{k}={v}" for k, v in settings.items())
        click.echo(f"  {name}: {summary}")


if __name__ == '__main__':
    main()
