"""Bunch of random utilities."""

import logging
import os
from typing import Optional
from urllib.parse import urlparse

import coloredlogs

from eth_v2factory.exceptions import ConfigurationError


def setup_console_logging(
    default_log_level="warning",
    log_level: Optional[str] = None,
) -> logging.Logger:
    """Set up coloured log output.

    - Log output goes to stderr, stdout is reserved for the deployment record

    - Tune down some noisy dependency library logging

    :param default_log_level:
        Used when ``LOG_LEVEL`` environment variable is not set.

    :param log_level:
        Overrides ``LOG_LEVEL`` environment variable.

    :return:
        Root logger
    """

    level = (log_level or os.environ.get("LOG_LEVEL", default_log_level)).upper()
    numeric_level = getattr(logging, level, None)
    if not isinstance(numeric_level, int):
        raise ConfigurationError(f"Unknown log level: {level}")

    fmt = "%(asctime)s %(name)-44s %(message)s"
    date_fmt = "%H:%M:%S"
    coloredlogs.install(level=numeric_level, fmt=fmt, datefmt=date_fmt)

    # Mute noise
    logging.getLogger("web3.providers.HTTPProvider").setLevel(logging.WARNING)
    logging.getLogger("web3.RequestManager").setLevel(logging.WARNING)
    logging.getLogger("urllib3.connectionpool").setLevel(logging.WARNING)
    return logging.getLogger()


def get_url_domain(url: str) -> Optional[str]:
    """Redact URL so that only domain is displayed.

    Some services e.g. infura use path as an API key.
    """
    parsed = urlparse(url)
    if parsed.port in (80, 443, None):
        return parsed.hostname
    else:
        return f"{parsed.hostname}:{parsed.port}"
