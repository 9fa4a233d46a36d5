#!/usr/bin/env python3
"""
Unit tests for web application configuration.
"""

import os
import unittest
from unittest.mock import patch

from web.backend import config as web_config


class TestWebConfig(unittest.TestCase):

    def setUp(self):
        web_config.get_config.cache_clear()

    def tearDown(self):
        web_config.get_config.cache_clear()

    def test_env_overrides(self):
        env = {
            "DATABASE_URL": "postgresql://env:pass@db:5432/staffing",
            "WEB_HOST": "127.0.0.1",
            "WEB_PORT": "9000",
            "MATCHING_FETCH_CAP": "200",
        }
        with patch.object(web_config, "_load_yaml_config", return_value={}):
            with patch.dict(os.environ, env):
                config = web_config.get_config()

        self.assertEqual(config.database.url, "postgresql://env:pass@db:5432/staffing")
        self.assertEqual(config.web.host, "127.0.0.1")
        self.assertEqual(config.web.port, 9000)
        self.assertEqual(config.matching.fetch_cap, 200)

    def test_yaml_sections(self):
        raw = {"matching": {"default_limit": 20}, "profiles": {"code_allocation_attempts": 2}}
        with patch.object(web_config, "_load_yaml_config", return_value=raw):
            with patch.dict(os.environ, {}, clear=True):
                config = web_config.get_config()

        self.assertEqual(config.matching.default_limit, 20)
        self.assertEqual(config.profiles.code_allocation_attempts, 2)
        self.assertEqual(config.web.port, 8080)

    def test_config_is_cached(self):
        with patch.object(web_config, "_load_yaml_config", return_value={}) as loader:
            first = web_config.get_config()
            second = web_config.get_config()
        self.assertIs(first, second)
        loader.assert_called_once()
