"""CLI for stretching every image in a folder."""

import click
from pathlib import Path
from typing import Optional

from pnm_autocontrast.cli.params import STRICT_FLOAT, STRICT_INT
from pnm_autocontrast.config import LAYOUTS, load_config


@click.command()
@click.argument('input_folder', metavar='INPUT_DIR',
                type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option('--output', '-o', type=click.Path(file_okay=False, path_type=Path),
              help='Output folder (default: from config, else ./result)')
@click.option('--coefficient', '-c', type=STRICT_FLOAT, default=None,
              help='Fraction of pixels clipped at each end (default: from config, else 0)')
@click.option('--threads', '-t', type=STRICT_INT, default=None,
              help='Worker thread count (default: from config, else CPU count)')
@click.option('--layout', type=click.Choice(LAYOUTS), default=None,
              help='Buffer layout for RGB images')
@click.option('--config', type=click.Path(exists=True, path_type=Path),
              help='Path to config file')
@click.option('--verbose', '-v', is_flag=True, default=False,
              help='Print per-image details and per-phase timings')
@click.pass_context
def main(ctx: click.Context, input_folder: Path, output: Optional[Path],
         coefficient: Optional[float], threads: Optional[int], layout: Optional[str],
         config: Optional[Path], verbose: bool):
    """
    Stretch the contrast of every PNM image in INPUT_DIR.

    Results are written under the output folder with the same file names.
    An image that cannot be processed is reported and skipped; the exit
    status is non-zero if any image failed.
    """
    cfg = load_config(config)
    output_folder = output or Path(cfg.get('output.folder'))
    coefficient = cfg.get('coefficient') if coefficient is None else coefficient
    threads = cfg.threads if threads is None else threads
    layout = layout or cfg.get('layout')
    if layout not in LAYOUTS:
        raise click.BadParameter(f"unknown layout {layout!r} in config", param_hint='--layout')
    verbose = bool(verbose or cfg.get('verbose'))

    # Lazy import to speed up CLI startup
    from pnm_autocontrast.core.logging_utils import get_logger
    from pnm_autocontrast.errors import AutocontrastError
    from pnm_autocontrast.processing.pipeline import batch_jobs, process_batch

    jobs = batch_jobs(input_folder, output_folder, cfg.extensions)
    if not jobs:
        click.echo(f"No images found in {input_folder}", err=True)
        ctx.exit(1)

    logger = get_logger(verbose=verbose)
    logger.header(f"Stretching {len(jobs)} image(s) -> {output_folder}")

    try:
        summary = process_batch(jobs, coefficient, workers=threads, layout=layout,
                                verbose=verbose, logger=logger)
    except AutocontrastError as e:
        raise click.ClickException(str(e))

    if not summary.ok:
        ctx.exit(1)


if __name__ == '__main__':
    main()
