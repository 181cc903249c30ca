# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Logging utilities for mime-mailer.

The package never configures handlers itself. Logging setup (level,
handlers, format) belongs to the application entry point, for instance
``logging.basicConfig()`` in the CLI.

Example:
    Typical usage in a module::

        from mime_mailer.logger import get_logger

        logger = get_logger(__name__)
        logger.info("Message sent")
"""

import logging


def get_logger(name: str = "mime_mailer") -> logging.Logger:
    """Retrieve a logger instance.

    Args:
        name: The logger name. Defaults to "mime_mailer".

    Returns:
        A ``logging.Logger`` instance bound to the given name.
    """
    return logging.getLogger(name)
