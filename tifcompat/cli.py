"""CLI interface for tifcompat -- check TIFF files for Exstream compatibility."""

import logging
import sys

import click

import tifcompat
from tifcompat import log
from tifcompat.checker import check
from tifcompat.models import ScanMode, Verdict

logger = logging.getLogger(__name__)

COMPATIBLE_MARK = '✔ '
INCOMPATIBLE_MARK = '✘ '


def echo_verdict(path: str, verdict: Verdict, quiet: bool = False):
    """Print the status line for one file, followed by its failure reasons."""
    if verdict.compatible:
        click.echo(f'{log.cli_success(COMPATIBLE_MARK)} {path}')
        return

    click.echo(f'{log.cli_error(INCOMPATIBLE_MARK)} {path}')
    if quiet:
        return
    click.echo('Error:')
    for message in verdict.messages:
        click.echo(log.cli_warning(message))


@click.command()
@click.version_option(version=tifcompat.__version__, prog_name='tifcompat')
@click.argument('paths', nargs=-1, type=click.Path())
@click.option('--fail-fast', is_flag=True,
              help='Report only the first disqualifying tag of each file.')
@click.option('--keep-going', is_flag=True,
              help='Continue past files that cannot be opened; exit 1 at the end.')
@click.option('--quiet', '-q', is_flag=True, help='Print status lines only.')
@click.option('--no-color', is_flag=True,
              help='Disable colored output on a terminal (piped output is always plain).')
@click.option('--debug', is_flag=True, help='Log parser and rule details to stderr.')
@click.pass_context
def main(ctx, paths, fail_fast, keep_going, quiet, no_color, debug):
    """Check whether TIFF files can be imported by Exstream.

    A file is rejected if it is not a TIFF, contains unflattened layers
    (ImageSourceData) or uses a compression predictor (Predictor).
    """
    if not paths:
        click.echo(f'Usage: {ctx.command_path} filename1 [filename2 filename3 ...]')
        return

    if debug:
        logging.basicConfig(level=logging.DEBUG,
                            format='%(levelname)s %(name)s: %(message)s')
    if no_color:
        log.set_color_enabled(False)

    mode = ScanMode.FAIL_FAST if fail_fast else ScanMode.COLLECT_ALL
    unopened = 0

    for path in paths:
        try:
            fh = open(path, 'rb')
        except OSError as e:
            logger.debug("open(%s) failed: %s", path, e)
            click.echo(log.cli_error(f'Cannot open file: {path}'))
            if not keep_going:
                sys.exit(1)
            unopened += 1
            continue

        # Released before the next path is opened.
        with fh:
            verdict = check(fh, mode)
        echo_verdict(path, verdict, quiet=quiet)

    if unopened:
        click.echo(log.cli_dim(f'{unopened} file(s) could not be opened'))
        sys.exit(1)


if __name__ == '__main__':
    main()
