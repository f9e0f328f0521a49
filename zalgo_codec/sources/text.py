"""Text source - operate on the words given on the command line."""

import click


@click.command()
@click.argument('words', nargs=-1, required=True)
@click.pass_context
def text(ctx, words):
    """Operate on all text after the command.

    Words are joined with single spaces.

    Example:
        zalgo encode text Zalgo, He comes!
    """
    ctx.ensure_object(dict)

    ctx.obj['payload'] = ' '.join(words)
    ctx.obj['word_count'] = len(words)
    ctx.obj['source_name'] = 'text'
