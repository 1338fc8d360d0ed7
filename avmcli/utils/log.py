#!/usr/bin/env python3

import logging

LOG_FORMAT = "[%(levelname)s] %(message)s"


def configure_logging(debug: bool = False) -> None:
    """Send log records to stderr; DEBUG traces only when debug mode is on"""
    level = logging.DEBUG if debug else logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger().setLevel(level)
    # urllib3 is chatty at DEBUG and adds nothing to our own traces
    logging.getLogger("urllib3").setLevel(max(level, logging.INFO))
