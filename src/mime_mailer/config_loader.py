# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Configuration loader for mailer.ini files.

Expected format::

    [encoder]
    line_length = 76
    boundary_length = 24
    line_feed = crlf

    [smtp]
    host = smtp.example.com
    port = 587
    user = sender@example.com
    password = secret
    use_tls = true

    [http_relay]
    url = https://relay.example.com/send
    token = abc123

Every section and key is optional; missing values keep the dataclass
defaults.
"""

from __future__ import annotations

import configparser
from pathlib import Path

from .config import EncoderConfig, HttpRelayConfig, MailerConfig, SmtpConfig
from .errors import ConfigError
from .logger import get_logger

logger = get_logger(__name__)

LINE_FEEDS = {"crlf": "\r\n", "lf": "\n"}


class ConfigLoader:
    """Load :class:`MailerConfig` from an INI file."""

    def __init__(self, config_path: str | Path):
        """Initialize with path to the INI file."""
        self.config_path = Path(config_path)
        self.config = configparser.ConfigParser(interpolation=None)

    def load_config(self) -> None:
        """Read the configuration file."""
        if not self.config_path.exists():
            raise ConfigError(f"Config file not found: {self.config_path}")

        try:
            self.config.read(self.config_path)
        except configparser.Error as e:
            raise ConfigError(f"Invalid config file {self.config_path}: {e}") from e

    def _get_int(self, section: str, key: str, default: int) -> int:
        try:
            return self.config.getint(section, key, fallback=default)
        except ValueError as e:
            raise ConfigError(f"Invalid integer for {section}.{key}: {e}") from e

    def _get_float(self, section: str, key: str, default: float) -> float:
        try:
            return self.config.getfloat(section, key, fallback=default)
        except ValueError as e:
            raise ConfigError(f"Invalid number for {section}.{key}: {e}") from e

    def _get_bool(self, section: str, key: str, default: bool) -> bool:
        try:
            return self.config.getboolean(section, key, fallback=default)
        except ValueError as e:
            raise ConfigError(f"Invalid boolean for {section}.{key}: {e}") from e

    def parse_encoder(self) -> EncoderConfig:
        """Parse the [encoder] section."""
        defaults = EncoderConfig()
        if not self.config.has_section("encoder"):
            return defaults

        line_feed = self.config.get("encoder", "line_feed", fallback="crlf").strip().lower()
        if line_feed not in LINE_FEEDS:
            raise ConfigError(f"Unknown line_feed '{line_feed}', expected one of: crlf, lf")

        encoder = EncoderConfig(
            line_length=self._get_int("encoder", "line_length", defaults.line_length),
            boundary_length=self._get_int("encoder", "boundary_length", defaults.boundary_length),
            boundary_alphabet=self.config.get(
                "encoder", "boundary_alphabet", fallback=defaults.boundary_alphabet
            ),
            boundary_prefix=self.config.get("encoder", "boundary_prefix", fallback=None) or None,
            line_feed=LINE_FEEDS[line_feed],
        )
        if encoder.line_length < 4 or encoder.boundary_length < 1:
            raise ConfigError("line_length must be >= 4 and boundary_length >= 1")
        return encoder

    def parse_smtp(self) -> SmtpConfig:
        """Parse the [smtp] section."""
        defaults = SmtpConfig()
        if not self.config.has_section("smtp"):
            return defaults

        return SmtpConfig(
            host=self.config.get("smtp", "host", fallback=defaults.host),
            port=self._get_int("smtp", "port", defaults.port),
            user=self.config.get("smtp", "user", fallback=None) or None,
            password=self.config.get("smtp", "password", fallback=None) or None,
            use_tls=self._get_bool("smtp", "use_tls", defaults.use_tls),
            timeout=self._get_float("smtp", "timeout", defaults.timeout),
        )

    def parse_http_relay(self) -> HttpRelayConfig:
        """Parse the [http_relay] section."""
        defaults = HttpRelayConfig()
        if not self.config.has_section("http_relay"):
            return defaults

        return HttpRelayConfig(
            url=self.config.get("http_relay", "url", fallback=None) or None,
            token=self.config.get("http_relay", "token", fallback=None) or None,
            user=self.config.get("http_relay", "user", fallback=None) or None,
            password=self.config.get("http_relay", "password", fallback=None) or None,
            timeout=self._get_float("http_relay", "timeout", defaults.timeout),
        )

    def parse(self) -> MailerConfig:
        """Build the full configuration from the loaded file."""
        for section in self.config.sections():
            if section not in ("encoder", "smtp", "http_relay"):
                logger.warning(f"Ignoring unknown section [{section}] in {self.config_path}")

        return MailerConfig(
            encoder=self.parse_encoder(),
            smtp=self.parse_smtp(),
            http_relay=self.parse_http_relay(),
        )


def load_config(config_path: str | Path) -> MailerConfig:
    """Convenience function to load a :class:`MailerConfig` from a file.

    Args:
        config_path: Path to the INI file.

    Returns:
        The parsed configuration.

    Raises:
        ConfigError: If the file is missing or contains invalid values.
    """
    loader = ConfigLoader(config_path)
    loader.load_config()
    config = loader.parse()
    logger.info(f"Loaded mailer configuration from {config_path}")
    return config
