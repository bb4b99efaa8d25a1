import logging
import sys


def setup_logging(level: int = logging.INFO):
    """
    Configure the root logger for applications built on densetensor.

    Uses the format "timestamp - logger name - level - message" and attaches a
    StreamHandler that writes to stdout. The library never calls this itself;
    pass ``logging.DEBUG`` to see file reads and writes.
    """
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )
