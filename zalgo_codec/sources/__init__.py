"""Input sources for the encode/decode commands.

Each module in this package defines one click command that reads its input
and stores it in ``ctx.obj['payload']``. Sources are discovered by scanning
the package, so adding a module is enough to make a new source available.
"""

import importlib
import pkgutil

import click

_sources = None


def discover_sources():
    """Import every module in this package and collect its click commands.

    Returns:
        Dict mapping source name to click.Command
    """
    global _sources
    if _sources is None:
        found = {}
        for info in pkgutil.iter_modules(__path__):
            module = importlib.import_module(f'{__name__}.{info.name}')
            for value in vars(module).values():
                if isinstance(value, click.Command):
                    found[value.name] = value
        _sources = found
    return _sources


def list_sources():
    return sorted(discover_sources())


def get_source(name: str) -> click.Command:
    """Look up a source by name.

    Raises:
        KeyError: If no such source exists.
    """
    sources = discover_sources()
    if name not in sources:
        raise KeyError(f"Unknown source: '{name}'. Available: {', '.join(sorted(sources))}")
    return sources[name]
