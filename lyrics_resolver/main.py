"""
Command-line interface for Lyrics-Resolver

Commands:
- resolve: find and print the lyrics of a track
- extract: fetch a song page and show what the container extractor sees
- queries: show the search queries built for a track
- config: show or validate the active configuration
"""

import asyncio
import functools
import sys
from typing import Optional

import aiohttp
import click

from . import __version__
from .config.settings import get_settings, reload_settings
from .lyrics.extractor import find_container_blocks
from .lyrics.page import fetch_page
from .lyrics.queries import synthesize_queries
from .lyrics.resolver import reset_lyrics_resolver, resolve_lyrics_sync
from .lyrics.text import normalize_lyrics_text
from .utils.exceptions import ConfigError
from .utils.helpers import truncate_string
from .utils.logger import configure_from_settings, get_logger, setup_logging

logger = get_logger(__name__)


def handle_error(func):
    """
    Decorator to handle common CLI errors gracefully

    Args:
        func: The CLI command function to wrap

    Returns:
        Wrapped function with error handling
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except KeyboardInterrupt:
            click.echo(click.style("\n\nOperation cancelled by user", fg='yellow'))
            sys.exit(130)
        except ConfigError as e:
            logger.error(f"Configuration error: {e.message}")
            click.echo(click.style(f"Configuration error: {e.message}", fg='red'), err=True)
            sys.exit(2)
    return wrapper


@click.group(invoke_without_command=True)
@click.option('--version', is_flag=True, help='Show version information')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
@click.option('--config', type=click.Path(), help='Path to config file')
@click.pass_context
@handle_error
def cli(ctx, version, verbose, config):
    """
    Lyrics-Resolver - find and clean up song lyrics from Genius
    """
    ctx.ensure_object(dict)

    if version:
        click.echo(f"Lyrics-Resolver v{__version__}")
        return

    if config:
        reload_settings(config)
        reset_lyrics_resolver()

    configure_from_settings()

    if verbose:
        ctx.obj['verbose'] = True
        settings = get_settings()
        setup_logging(level="DEBUG", colored_output=settings.logging.colored_output)
        logger.debug("Verbose mode enabled")

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cli.command()
@click.argument('title')
@click.argument('artist')
@click.option('--album', '-a', help='Album name')
@click.option('--year', '-y', type=int, help='Release year')
@click.option('--language', '-l', default='en', show_default=True, help='Lyrics language')
@click.option('--exclude', '-x', multiple=True, help='Genius song id to skip (repeatable)')
@click.option('--show-id', is_flag=True, help='Print the Genius song id of the result')
@handle_error
def resolve(title, artist, album, year, language, exclude, show_id):
    """Find lyrics for TITLE by ARTIST"""
    result = resolve_lyrics_sync(
        title, artist,
        album=album,
        year=year,
        language=language,
        excluded_ids=exclude,
    )

    if result is None:
        click.echo(click.style("No lyrics found", fg='yellow'), err=True)
        sys.exit(1)

    if show_id:
        click.echo(click.style(f"Genius id: {result.source_id}", fg='cyan'))
        click.echo()
    click.echo(result.text)


async def _fetch(url: str) -> Optional[str]:
    settings = get_settings()
    async with aiohttp.ClientSession() as session:
        page = await fetch_page(session, url, settings)
    if not page.ok:
        logger.error(page.reason)
        return None
    return page.value


@cli.command()
@click.argument('url')
@click.option('--raw', is_flag=True, help='Print the container markup instead of text')
@handle_error
def extract(url, raw):
    """Fetch a song page at URL and show the extracted lyrics"""
    html = asyncio.run(_fetch(url))
    if html is None:
        click.echo(click.style("Failed to fetch page", fg='red'), err=True)
        sys.exit(1)

    blocks = list(find_container_blocks(html))
    click.echo(f"Page length: {len(html)}, containers: {len(blocks)}")
    for index, block in enumerate(blocks, 1):
        preview = truncate_string(block.replace('\n', ' '), 80)
        click.echo(f"  [{index}] {len(block)} chars: {preview}")

    if not blocks:
        sys.exit(1)

    click.echo()
    markup = ''.join(blocks)
    click.echo(markup if raw else normalize_lyrics_text(markup))


@cli.command()
@click.argument('title')
@click.argument('artist')
@click.option('--album', '-a', help='Album name')
@click.option('--year', '-y', type=int, help='Release year')
def queries(title, artist, album, year):
    """Show the search queries built for TITLE by ARTIST"""
    for index, query in enumerate(synthesize_queries(title, artist, album, year), 1):
        click.echo(f"{index}. {query}")


@cli.group()
def config():
    """Configuration management"""
    pass


@config.command('show')
def config_show():
    """Show the active configuration"""
    settings = get_settings()
    for section, values in settings.to_dict().items():
        click.echo(click.style(f"[{section}]", fg='green', bold=True))
        for key, value in values.items():
            if key == 'access_token':
                value = '***' if value else '(not set)'
            click.echo(f"  {key}: {value}")


@config.command('validate')
@handle_error
def config_validate():
    """Validate the active configuration"""
    get_settings().validate(strict=True)
    click.echo(click.style("Configuration is valid", fg='green'))


if __name__ == '__main__':
    cli()
