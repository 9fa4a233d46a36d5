#!/usr/bin/env python3
"""
Configuration management for the staffing portal web application.
"""

import os
import yaml
from pathlib import Path
from functools import lru_cache
from typing import Dict, Any
from pydantic import BaseModel, Field

from core.config_loader import DatabaseConfig, MatchingConfig, ProfilesConfig


class WebConfig(BaseModel):
    """Web server configuration."""
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8080)


class AppConfig(BaseModel):
    """Main application configuration."""
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    web: WebConfig = Field(default_factory=WebConfig)
    matching: MatchingConfig = Field(default_factory=MatchingConfig)
    profiles: ProfilesConfig = Field(default_factory=ProfilesConfig)


def _load_yaml_config() -> Dict[str, Any]:
    """Load configuration from YAML file."""
    config_path = get_project_root() / 'config.yaml'

    if config_path.exists():
        with open(config_path, 'r') as f:
            return yaml.safe_load(f) or {}
    return {}


def _apply_env_overrides(config_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Apply environment variable overrides to configuration."""
    if 'DATABASE_URL' in os.environ:
        config_dict.setdefault('database', {})['url'] = os.environ['DATABASE_URL']

    if 'WEB_HOST' in os.environ:
        config_dict.setdefault('web', {})['host'] = os.environ['WEB_HOST']

    if 'WEB_PORT' in os.environ:
        config_dict.setdefault('web', {})['port'] = int(os.environ['WEB_PORT'])

    if 'MATCHING_FETCH_CAP' in os.environ:
        config_dict.setdefault('matching', {})['fetch_cap'] = int(os.environ['MATCHING_FETCH_CAP'])

    return config_dict


@lru_cache()
def get_config() -> AppConfig:
    """
    Get application configuration with caching.

    Loads from YAML file and applies environment variable overrides.

    Returns:
        AppConfig: The application configuration.
    """
    raw_config = _load_yaml_config()
    raw_config = _apply_env_overrides(raw_config)

    return AppConfig(**raw_config)


def get_project_root() -> Path:
    """Get the project root directory."""
    return Path(__file__).parent.parent.parent
