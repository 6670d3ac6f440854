"""
routepack Configuration

Central configuration for the routepack adapter.
"""

import os
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

ENV_PREFIX = 'ROUTEPACK_'
VALID_LOG_LEVELS = {'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'}


def _auto_detect(env_value: str) -> Any:
    """Auto-detect the type of an environment value."""
    # Handle explicit empty values (null, none, empty)
    if env_value.lower() in ('null', 'none', '~', ''):
        return None

    if env_value.lower() in ('true', 'false', 'yes', 'no', 'on', 'off'):
        return env_value.lower() in ('true', 'yes', 'on')

    # Integer detection (handle negative numbers too)
    if env_value.lstrip('-').isdigit():
        return int(env_value)

    # List detection (comma-separated values)
    if ',' in env_value:
        return [item.strip() for item in env_value.split(',') if item.strip()]

    if '.' in env_value and env_value.replace('.', '', 1).lstrip('-').isdigit():
        return float(env_value)

    return env_value


class Config:
    """
    Adapter configuration settings.

    Organized into:
    - Internal: routepack internals (DO NOT MODIFY)
    - Env: Environment file configuration
    - User Settings: adapter-level defaults applied to every route
    """

    class Internal:
        """
        routepack Internal Configuration

        WARNING: THESE SETTINGS ARE PROTECTED AND CANNOT BE MODIFIED.
        The hosting platform reads the output produced with these values.
        """
        VALID_RUNTIMES = ['edge', 'nodejs16.x', 'nodejs18.x']
        NODE_RUNTIMES = {'16': 'nodejs16.x', '18': 'nodejs18.x'}

        # Output layout
        OUTPUT_DIR_NAME = '.open-runtimes'
        TMP_DIR_NAME = 'open-runtimes-tmp'
        CONFIG_FILE_NAME = 'config.json'
        FUNCTION_PREFIX = 'fn-'

        # Routing document
        ROUTING_VERSION = 3
        DATA_SUFFIX = '(?:/__data.json)?$'
        CATCH_ALL_SRC = '/.*'
        IMMUTABLE_CACHE_CONTROL = 'public, immutable, max-age=31536000'

        # Bundler target
        BUNDLE_TARGET = 'es2020'
        BUNDLE_PLATFORM = 'browser'
        BUNDLE_FORMAT = 'esm'
        BUNDLE_SOURCEMAP = 'linked'
        BUNDLE_BANNER = (
            'global.fs = require("fs");\n'
            'global.path = require("path");\n'
            'global.crypto = require("crypto");\n'
            'globalThis.global = globalThis;'
        )

    class Env:
        """Environment file configuration"""
        file = ".env"  # Path to .env file (can be ".env.prod", etc.)
        auto_load = True  # Automatically load .env file
        override = True  # Override existing environment variables

    # User-Configurable Settings
    # ============================

    # Adapter defaults (None means "not set")
    RUNTIME = None  # One of Internal.VALID_RUNTIMES, inferred from Node.js if None
    EXTERNAL = []  # Modules left out of every bundle
    REGIONS = None
    MEMORY = None
    MAX_DURATION = None

    # Build
    OUTPUT_DIR = None  # Defaults to Internal.OUTPUT_DIR_NAME
    ESBUILD_BINARY = "esbuild"
    NODE_BINARY = "node"

    # Logging
    VERBOSE_LOGGING = True
    LOG_LEVEL = "INFO"  # Logging level: DEBUG, INFO, WARNING, ERROR, CRITICAL

    def __init_subclass__(cls, **kwargs):
        """Validate that child classes don't override Internal."""
        super().__init_subclass__(**kwargs)

        if 'Internal' in cls.__dict__:
            raise TypeError(
                f"Cannot override Config.Internal in {cls.__name__}. "
                "Config.Internal contains platform-critical settings."
            )

    @classmethod
    def load_from_env(cls, env_file: Optional[str] = None):
        """
        Load configuration from .env file and environment variables.

        All environment variables must be prefixed with ROUTEPACK_*

        Args:
            env_file: Path to .env file (overrides Config.Env.file)

        Example .env file:
            ROUTEPACK_RUNTIME=edge
            ROUTEPACK_EXTERNAL=sharp,canvas
            ROUTEPACK_MEMORY=1024
            ROUTEPACK_LOG_LEVEL=DEBUG
        """
        if cls.Env.auto_load:
            env_path = Path(env_file or cls.Env.file)
            if env_path.exists():
                load_dotenv(env_path, override=cls.Env.override)
                if cls.VERBOSE_LOGGING:
                    logger.info(f"Loaded environment from: {env_path}")
            elif cls.VERBOSE_LOGGING:
                logger.info(f".env file not found: {env_path}")

        for env_key, env_value in os.environ.items():
            if not env_key.startswith(ENV_PREFIX):
                continue

            attr_name = env_key[len(ENV_PREFIX):]

            if attr_name == 'INTERNAL' or hasattr(cls.Internal, attr_name):
                logger.warning(f"Cannot override internal setting: {env_key}")
                continue

            parsed_value = _auto_detect(env_value)

            # A single external module is still a list
            if attr_name == 'EXTERNAL' and isinstance(parsed_value, str):
                parsed_value = [parsed_value]

            if attr_name == 'LOG_LEVEL':
                if not isinstance(parsed_value, str) or parsed_value.upper() not in VALID_LOG_LEVELS:
                    logger.warning(f"Invalid LOG_LEVEL: {env_value}. Using default value.")
                    continue
                parsed_value = parsed_value.upper()

            setattr(cls, attr_name, parsed_value)

            if cls.VERBOSE_LOGGING:
                logger.info(f"Auto-set {attr_name} = {parsed_value} (from {env_key})")

        return cls

    @classmethod
    def validate(cls) -> bool:
        """
        Validate configuration settings.

        Returns:
            True if configuration is valid
        """
        if cls.RUNTIME is not None and cls.RUNTIME not in cls.Internal.VALID_RUNTIMES:
            raise ValueError(
                f"RUNTIME must be one of: {', '.join(cls.Internal.VALID_RUNTIMES)}"
            )

        if cls.LOG_LEVEL.upper() not in VALID_LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of: {', '.join(sorted(VALID_LOG_LEVELS))}")

        if not isinstance(cls.EXTERNAL, list):
            raise ValueError("EXTERNAL must be a list of module names")

        return True

    @classmethod
    def output_dir(cls) -> Path:
        return Path(cls.OUTPUT_DIR or cls.Internal.OUTPUT_DIR_NAME)

    @classmethod
    def defaults(cls) -> Dict[str, Any]:
        """
        Adapter-level defaults as a config mapping.

        Only settings that are set are included, so that unset values never
        shadow a route's own config.
        """
        values = {
            'runtime': cls.RUNTIME,
            'external': list(cls.EXTERNAL) if cls.EXTERNAL else None,
            'regions': cls.REGIONS,
            'memory': cls.MEMORY,
            'maxDuration': cls.MAX_DURATION,
        }
        return {key: value for key, value in values.items() if value is not None}
