"""Command line interface for Audio Info."""

import sys
from pathlib import Path
from typing import TextIO

import click
from tqdm import tqdm

from . import __version__
from .core.batch import BatchProcessor
from .core.scanner import AudioScanner
from .exceptions import ConfigError, DiscoveryError
from .metadata.audio_metadata import AudioMetadataExtractor
from .output.formatters import OUTPUT_FORMATS, render
from .utils.config import LOG_LEVELS, Config
from .utils.logger import setup_logger


def _fail(message: str, quiet: bool) -> None:
    if not quiet:
        click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def _stdin_is_terminal(stream: TextIO) -> bool:
    isatty = getattr(stream, 'isatty', None)
    return bool(isatty and isatty())


@click.command(context_settings={'help_option_names': ['-h', '--help']})
@click.argument('files', nargs=-1, type=click.Path(path_type=Path))
@click.option('-f', '--format', 'output_format', type=click.Choice(OUTPUT_FORMATS, case_sensitive=False),
              default=None, help='Output format (default: text)')
@click.option('-b', '--basic', is_flag=True, help='Show only basic info, without tags (text output)')
@click.option('-q', '--quiet', is_flag=True, help='Suppress error messages')
@click.option('-k', '--keep-going', is_flag=True, help='Continue processing other files even if one fails')
@click.option('-r', '--recursive', is_flag=True, help='Recursive directory processing')
@click.option('--config', 'config_path', type=click.Path(exists=True, dir_okay=False),
              help='Path to configuration file')
@click.option('--log-level', type=click.Choice(LOG_LEVELS, case_sensitive=False), default=None,
              help='Logging level (default from configuration)')
@click.version_option(__version__, prog_name='audio-info')
def cli(files, output_format, basic, quiet, keep_going, recursive, config_path, log_level):
    """Show audio file technical metadata.

    FILES are audio files or directories. Omit them to read file paths,
    one per line, from standard input.
    """
    try:
        config = Config(config_path=config_path)
        level = log_level or config.get_log_level()
    except ConfigError as e:
        _fail(e.message, quiet)

    logger = setup_logger(
        level=level,
        log_file=config.get('logging.file'),
        console=not quiet and config.get('logging.console', True)
    )

    output_format = (output_format or config.get('output.format', 'text')).lower()
    if output_format not in OUTPUT_FORMATS:
        _fail(f"Unknown output format in configuration: {output_format}", quiet)

    stdin = sys.stdin
    use_stdin = not files

    if use_stdin and _stdin_is_terminal(stdin):
        _fail("No files provided and no data available on stdin", quiet)

    scanner = AudioScanner(config, logger)
    try:
        if use_stdin:
            audio_files = scanner.collect_from_stdin(stdin)
        else:
            audio_files = scanner.collect_audio_files(files, recursive=recursive)
    except DiscoveryError as e:
        _fail(e.message, quiet)

    if not audio_files:
        _fail("No audio files found", quiet)

    stderr = sys.stderr
    show_progress = (
        not quiet
        and config.get('output.progress', True)
        and len(audio_files) > 1
        and stderr.isatty()
    )
    progress_bar = None
    if show_progress:
        progress_bar = tqdm(total=len(audio_files), desc="Reading files", unit="file",
                            ncols=100, file=stderr, leave=False)

    processor = BatchProcessor(AudioMetadataExtractor(config, logger), logger)
    batch = processor.run(audio_files, keep_going=keep_going, progress_bar=progress_bar)

    if batch.aborted:
        sys.exit(1)

    if batch.results:
        click.echo(render(batch.results, output_format, basic_only=basic))

    if batch.had_errors:
        sys.exit(1)


if __name__ == '__main__':
    cli()
