import logging
import sys

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(name)s - %(message)s'


def setup_logging(level=logging.WARNING):
    """Setup basic logging configuration on stderr.

    Stdout is reserved for encoded/decoded output.
    """
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )
    return logging.getLogger('zalgo_codec')
