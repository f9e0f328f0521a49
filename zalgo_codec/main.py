#!/usr/bin/env python3
"""Zalgo - CLI for the zalgo codec.

Usage:
    zalgo [global-options] <command> [source-name] [source-args]

Examples:
    zalgo sources                            # List available input sources
    zalgo encode text Zalgo, He comes!       # Encode the words after 'text'
    zalgo -o hidden.txt encode file notes.txt
    zalgo decode file hidden.txt
    zalgo wrap script.py > hidden.py         # Self-decoding Python program
    zalgo run hidden.py                      # Decode and execute it
"""

import logging
import sys
from pathlib import Path

import click

from . import __version__
from .core import embed, errors, files, transform
from .core.logging import setup_logging
from .sources import discover_sources, get_source, list_sources

logger = logging.getLogger(__name__)


def _fail(err: errors.ZalgoError):
    """Report a codec error to the user without a Python traceback."""
    if err.backtrace:
        click.echo(f"Backtrace (most recent call last):\n{err.backtrace}", err=True)
    raise click.ClickException(str(err)) from err


def _emit(ctx, output: str):
    """Write the result to --out-path or stdout."""
    out_path = ctx.obj['out_path']
    size = len(output.encode('utf-8'))

    if ctx.obj['dry_run']:
        click.echo(f"Would write {size} bytes to {out_path or 'stdout'}")
        return

    if out_path is None:
        # Not every character may show up in a terminal, but it is all there.
        click.echo(output)
        return

    try:
        files.write_text(out_path, output)
    except OSError as e:
        raise click.ClickException(f"Failed to write {out_path}: {e}")
    click.echo(f"Saved to: {out_path} ({size} bytes)", err=True)


def _read_file(path) -> str:
    try:
        return files.read_text(path)
    except (OSError, UnicodeDecodeError) as e:
        raise click.ClickException(f"Failed to read {path}: {e}")


def _source_help(source_name, via='encode|decode'):
    source_cmd = get_source(source_name)
    with click.Context(source_cmd, info_name=f'zalgo {via} {source_name}') as source_ctx:
        click.echo(source_cmd.get_help(source_ctx))


def _echo_sources():
    click.echo("Sources (zalgo encode|decode SOURCE ...):")
    for name in list_sources():
        click.echo(f"  {name:8} {get_source(name).get_short_help_str(limit=60)}")


def _read_source(ctx, source_name):
    """Run the named source command on the remaining arguments.

    Returns:
        The shared context object with 'payload' set, or None if only help
        was requested.
    """
    if source_name is None or source_name in ('--help', '-h'):
        click.echo(ctx.command.get_help(ctx))
        click.echo()
        _echo_sources()
        return None

    try:
        source_cmd = get_source(source_name)
    except KeyError as e:
        raise click.ClickException(str(e))

    if '--help' in ctx.args or '-h' in ctx.args:
        _source_help(source_name, ctx.info_name)
        return None

    source_ctx = source_cmd.make_context(source_name, list(ctx.args), parent=ctx)
    with source_ctx:
        source_cmd.invoke(source_ctx)
        obj = source_ctx.obj

    if obj.get('payload') is None:
        raise click.ClickException(f"Source '{source_name}' did not provide any input")
    return obj


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
@click.option('--dry-run', '-n', is_flag=True, help='Show what would be done')
@click.option('--out-path', '-o', type=click.Path(dir_okay=False, path_type=Path),
              help='Save the result to this file instead of printing it. '
                   'Use this rather than a shell pipe if your terminal is not UTF-8.')
@click.option('--force', '-f', is_flag=True, help='Overwrite OUT_PATH if it already exists')
@click.option('--backtrace', is_flag=True, envvar='ZALGO_BACKTRACE',
              help='Show where codec errors were raised')
@click.version_option(__version__, prog_name='zalgo')
@click.pass_context
def cli(ctx, verbose, dry_run, out_path, force, backtrace):
    """Zalgo - hide printable ASCII inside a single grapheme cluster."""
    ctx.ensure_object(dict)
    ctx.obj['verbose'] = verbose
    ctx.obj['dry_run'] = dry_run
    ctx.obj['out_path'] = out_path

    setup_logging(logging.DEBUG if verbose else logging.WARNING)
    errors.capture_backtraces(backtrace)

    if force and out_path is None:
        raise click.UsageError("--force is only valid together with --out-path")
    if out_path is not None and out_path.exists() and not force:
        raise click.ClickException(
            f'the file "{out_path}" already exists, to overwrite its contents '
            f'you can supply the -f or --force arguments')


@cli.command('sources')
def cmd_sources():
    """List the input sources of encode and decode."""
    _echo_sources()


@cli.command('encode', context_settings=dict(
    ignore_unknown_options=True,
    allow_extra_args=True,
), add_help_option=False)
@click.argument('source_name', metavar='SOURCE', required=False)
@click.pass_context
def cmd_encode(ctx, source_name):
    """Turn normal (printable ASCII + newline) text into a single grapheme cluster.

    Example:
        zalgo encode text Zalgo
        zalgo encode file notes.txt
    """
    obj = _read_source(ctx, source_name)
    if obj is None:
        return

    payload = obj['payload']
    try:
        encoded = transform.encode(payload)
    except errors.EncodeError as e:
        _fail(e)

    if ctx.obj['verbose']:
        click.echo(f"Encoded {len(payload)} characters into {len(encoded.encode('utf-8'))} bytes", err=True)
    _emit(ctx, encoded)


@cli.command('decode', context_settings=dict(
    ignore_unknown_options=True,
    allow_extra_args=True,
), add_help_option=False)
@click.argument('source_name', metavar='SOURCE', required=False)
@click.pass_context
def cmd_decode(ctx, source_name):
    """Turn text that has been encoded back into its normal form.

    Example:
        zalgo decode text <encoded>
        zalgo decode file hidden.txt
    """
    obj = _read_source(ctx, source_name)
    if obj is None:
        return

    if obj.get('word_count', 1) != 1:
        raise click.ClickException("can only decode one grapheme cluster at a time")

    # A trailing line feed is never part of an encoded cluster.
    encoded = obj['payload'].rstrip('\n')
    try:
        decoded = transform.decode(encoded)
    except errors.DecodeError as e:
        _fail(e)

    if ctx.obj['verbose']:
        click.echo(f"Decoded:  {len(decoded)} characters", err=True)
    _emit(ctx, decoded)


@cli.command('wrap')
@click.argument('path', type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def cmd_wrap(ctx, path):
    """Turn Python code into a decoder wrapped around encoded source code.

    Tabs are replaced by four spaces and carriage returns are ignored.

    Example:
        zalgo -o hidden.py wrap script.py
        python hidden.py
    """
    source = files.normalize_for_encoding(_read_file(path), source=path)
    try:
        wrapped = embed.wrap_python(source)
    except errors.EncodeError as e:
        _fail(e)
    _emit(ctx, wrapped)


@cli.command('unwrap')
@click.argument('path', type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def cmd_unwrap(ctx, path):
    """Unwrap and decode a wrapped Python file."""
    wrapped = _read_file(path)

    try:
        source = embed.unwrap_python(wrapped)
    except errors.DecodeError as e:
        _fail(e)
    _emit(ctx, source)


@cli.command('run', context_settings=dict(
    ignore_unknown_options=True,
    allow_extra_args=True,
))
@click.argument('path', type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def cmd_run(ctx, path):
    """Decode an encoded or wrapped Python file and execute it.

    The file is fully decoded and compiled before anything runs. Arguments
    after PATH are passed to the program in sys.argv.

    Example:
        zalgo run hidden.py --some-flag
    """
    content = _read_file(path)

    try:
        source = embed.load_source(content)
    except errors.DecodeError as e:
        _fail(e)

    try:
        code = compile(source, path, 'exec')
    except SyntaxError as e:
        raise click.ClickException(f"Decoded source does not compile: {e}")

    if ctx.obj['dry_run']:
        click.echo(f"Would run {len(source)} characters of decoded Python from {path}")
        return

    logger.debug("Running %s with args %s", path, ctx.args)
    saved_argv = sys.argv
    sys.argv = [path] + list(ctx.args)
    try:
        exec(code, {'__name__': '__main__', '__file__': path})
    finally:
        sys.argv = saved_argv


@cli.command('help')
@click.argument('topic', required=False)
@click.pass_context
def cmd_help(ctx, topic):
    """Show help for a command or an input source.

    Examples:
        zalgo help          # Commands and sources
        zalgo help wrap     # Help for the 'wrap' command
        zalgo help file     # Help for the 'file' source
    """
    if topic is None:
        click.echo(ctx.parent.get_help())
        click.echo()
        _echo_sources()
        return

    cmd = cli.get_command(ctx, topic)
    if cmd is not None:
        with click.Context(cmd, info_name=f'zalgo {topic}') as sub_ctx:
            click.echo(cmd.get_help(sub_ctx))
    elif topic in discover_sources():
        _source_help(topic)
    else:
        raise click.ClickException(f"Unknown topic: '{topic}'. Commands: {', '.join(sorted(cli.commands))}; "
                                   f"sources: {', '.join(list_sources())}")


def main():
    """Entry point."""
    cli(obj={})


if __name__ == '__main__':
    main()
