"""CLI for single-image contrast stretching."""

import click
from pathlib import Path
from typing import Optional

from pnm_autocontrast.cli.params import STRICT_FLOAT, STRICT_INT
from pnm_autocontrast.config import LAYOUTS, load_config


@click.command()
@click.argument('threads', type=STRICT_INT)
@click.argument('input_path', metavar='INPUT', type=click.Path(path_type=Path))
@click.argument('output_path', metavar='OUTPUT', type=click.Path(path_type=Path))
@click.argument('coefficient', type=STRICT_FLOAT)
@click.option('--layout', type=click.Choice(LAYOUTS), default=None,
              help='Buffer layout for RGB images (default: from config, else interleaved)')
@click.option('--config', type=click.Path(exists=True, path_type=Path),
              help='Path to config file')
@click.option('--verbose', '-v', is_flag=True, default=False,
              help='Print image details and per-phase timings')
def main(threads: int, input_path: Path, output_path: Path, coefficient: float,
         layout: Optional[str], config: Optional[Path], verbose: bool):
    """
    Stretch the contrast of a binary PNM image (P5 or P6).

    THREADS worker threads compute the histogram and apply the mapping.
    COEFFICIENT is the fraction of pixels that may be clipped at each end
    of the brightness range, e.g. 0.01 ignores the darkest and brightest 1%.
    """
    cfg = load_config(config)
    layout = layout or cfg.get('layout')
    if layout not in LAYOUTS:
        raise click.BadParameter(f"unknown layout {layout!r} in config", param_hint='--layout')
    verbose = bool(verbose or cfg.get('verbose'))

    # Lazy import to speed up CLI startup
    from pnm_autocontrast.core.logging_utils import get_logger
    from pnm_autocontrast.errors import AutocontrastError
    from pnm_autocontrast.processing.pipeline import handle_image

    logger = get_logger(verbose=verbose)
    try:
        handle_image(input_path, output_path, coefficient, workers=threads,
                     layout=layout, verbose=verbose, logger=logger)
    except AutocontrastError as e:
        raise click.ClickException(str(e))


if __name__ == '__main__':
    main()
