import logging
import sys
from typing import TextIO


def configure_logging(debug: bool, stream: TextIO | None = None) -> None:
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        stream=stream or sys.stderr,
    )
