"""
Tests for environment configuration.

Run from project root: python -m pytest tests/test_config -v
"""

import logging
import os
import unittest
from unittest.mock import patch

from tracker import config as config_module
from tracker.config import Config, configure_logging, settings


class TestConfig(unittest.TestCase):
    """Test configuration defaults and helpers."""

    def test_settings_alias(self):
        self.assertIs(settings, config_module.config)
        self.assertIsInstance(settings, Config)

    def test_env_flag(self):
        """Test common spellings of on and off."""
        for value in ("1", "true", "Yes", " on "):
            with patch.dict(os.environ, {"CALLBREAK_TEST_FLAG": value}):
                self.assertTrue(config_module._env_flag("CALLBREAK_TEST_FLAG", "false"))
        for value in ("0", "false", "off", ""):
            with patch.dict(os.environ, {"CALLBREAK_TEST_FLAG": value}):
                self.assertFalse(config_module._env_flag("CALLBREAK_TEST_FLAG", "true"))

    def test_env_flag_default(self):
        os.environ.pop("CALLBREAK_TEST_FLAG", None)
        self.assertTrue(config_module._env_flag("CALLBREAK_TEST_FLAG", "true"))

    def test_configure_logging(self):
        """Test the explicit level is passed to basicConfig."""
        with patch.object(logging, "basicConfig") as basic_config:
            configure_logging("debug")

        basic_config.assert_called_once_with(level=logging.DEBUG, format=settings.LOG_FORMAT)

    def test_configure_logging_unknown_level(self):
        with patch.object(logging, "basicConfig") as basic_config:
            configure_logging("chatty")

        self.assertEqual(basic_config.call_args.kwargs["level"], logging.INFO)


if __name__ == "__main__":
    unittest.main(verbosity=2)
