"""File source - operate on the contents of a file."""

import logging
import sys
from pathlib import Path

import click

logger = logging.getLogger(__name__)


@click.command()
@click.argument('path')
@click.pass_context
def file(ctx, path):
    """Operate on the contents of a file (use - for stdin).

    Carriage return characters are ignored.

    Example:
        zalgo encode file notes.txt
        cat notes.txt | zalgo encode file -
    """
    ctx.ensure_object(dict)

    try:
        if path == '-':
            content = sys.stdin.read()
        else:
            source = Path(path)
            if not source.is_file():
                raise click.ClickException(f"File not found: {path}")
            with open(source, 'r', encoding='utf-8', newline='') as f:
                content = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise click.ClickException(f"Failed to read {path}: {e}")

    if '\r' in content:
        logger.warning('%s: ignoring carriage return characters', path)
        content = content.replace('\r', '')

    ctx.obj['payload'] = content
    ctx.obj['source_name'] = 'file'
