"""Migration settings.

Values are layered, later sources winning:
1. config.base.yaml (shared defaults)
2. config.{env}.yaml (dev, staging or prod, picked by APP_ENV)
3. config.local.yaml (local overrides, git-ignored)
4. Environment variables

Usage:
    from config.settings import config

    uri = config.MONGO_URI
    collection = config.BRANDS_COLLECTION
"""
import os
from pathlib import Path
from typing import Optional, Any, Dict
import yaml


ENV_ALIASES = {
    'dev': 'development',
    'development': 'development',
    'staging': 'staging',
    'stage': 'staging',
    'prod': 'production',
    'production': 'production',
}

ENV_FILES = {
    'development': 'config.dev.yaml',
    'staging': 'config.staging.yaml',
    'production': 'config.prod.yaml',
}

DEFAULT_ENV = 'development'

# Relative paths in config resolve against the repository root
PROJECT_ROOT = Path(__file__).resolve().parent.parent


def _env_flag(name: str) -> Optional[bool]:
    env_val = os.getenv(name, '').lower()
    if env_val:
        return env_val in ('1', 'true', 'yes')
    return None


def _env_int(name: str) -> Optional[int]:
    env_val = os.getenv(name)
    return int(env_val) if env_val else None


class Config:
    """Migration configuration read from the YAML layers and the environment."""

    _config_data: Dict[str, Any] = {}
    _loaded: bool = False
    _current_env: str = DEFAULT_ENV

    def __init__(self):
        if not Config._loaded:
            self._load_config()

    @classmethod
    def _get_environment(cls) -> str:
        env = (os.getenv('APP_ENV') or DEFAULT_ENV).lower().strip()
        return ENV_ALIASES.get(env, DEFAULT_ENV)

    def _load_config(self):
        config_dir = Path(__file__).parent
        Config._current_env = self._get_environment()
        Config._config_data = {}

        layers = ['config.base.yaml', ENV_FILES[Config._current_env], 'config.local.yaml']
        for name in layers:
            path = config_dir / name
            if path.exists():
                with open(path, 'r') as f:
                    Config._config_data = self._deep_merge(Config._config_data, yaml.safe_load(f) or {})

        Config._loaded = True

    def _deep_merge(self, base: dict, override: dict) -> dict:
        """Deep merge two dictionaries."""
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value
        return result

    def _get_yaml_value(self, *keys, default=None) -> Any:
        """Get a nested value from YAML config."""
        value = Config._config_data
        for key in keys:
            if isinstance(value, dict):
                value = value.get(key)
            else:
                return default
            if value is None:
                return default
        return value

    def _resolve_path(self, value: str) -> Path:
        path = Path(value)
        if not path.is_absolute():
            path = PROJECT_ROOT / path
        return path

    @classmethod
    def reload(cls):
        """Reload configuration (useful for testing)."""
        cls._loaded = False
        cls._config_data = {}
        return cls()

    @property
    def ENV(self) -> str:
        return Config._current_env

    # ==========================================================================
    # Database
    # ==========================================================================

    @property
    def MONGO_URI(self) -> Optional[str]:
        """MongoDB connection URI. No default: a missing URI is fatal."""
        return (os.getenv('MONGODB_URI') or os.getenv('MONGO_URI')
                or self._get_yaml_value('database', 'mongo_uri'))

    @property
    def MONGO_DB_NAME(self) -> str:
        return os.getenv('MONGO_DB') or self._get_yaml_value('database', 'name', default='brands_db')

    @property
    def BRANDS_COLLECTION(self) -> str:
        return os.getenv('BRANDS_COLLECTION') or self._get_yaml_value('database', 'collection', default='brands')

    @property
    def MONGO_TIMEOUT_MS(self) -> int:
        """Server selection timeout used by the startup ping."""
        env_val = _env_int('MONGO_TIMEOUT_MS')
        if env_val is not None:
            return env_val
        return self._get_yaml_value('database', 'server_selection_timeout_ms', default=5000)

    # ==========================================================================
    # Migration
    # ==========================================================================

    @property
    def FIXTURE_PATH(self) -> Path:
        """Dirty input fixture (JSON array with Extended JSON _id values)."""
        value = os.getenv('FIXTURE_PATH') or self._get_yaml_value('migration', 'fixture_path', default='data/brands.json')
        return self._resolve_path(value)

    @property
    def EXPORT_PATH(self) -> Path:
        value = os.getenv('EXPORT_PATH') or self._get_yaml_value(
            'migration', 'export_path', default='data/brands-transformed.json')
        return self._resolve_path(value)

    @property
    def SEED_COUNT(self) -> int:
        """Number of synthetic brands appended after the transform."""
        env_val = _env_int('SEED_COUNT')
        if env_val is not None:
            return env_val
        return self._get_yaml_value('migration', 'seed_count', default=10)

    @property
    def SEED_MIN_YEAR(self) -> int:
        return self._get_yaml_value('migration', 'seed_min_year', default=1980)

    @property
    def SEED_MAX_LOCATIONS(self) -> int:
        return self._get_yaml_value('migration', 'seed_max_locations', default=5000)

    @property
    def DEFAULT_TIMEZONE(self) -> str:
        """Timezone used to decide the current calendar year."""
        return os.getenv('DEFAULT_TIMEZONE') or self._get_yaml_value('timezone', 'default', default='UTC')

    # ==========================================================================
    # Logging
    # ==========================================================================

    @property
    def LOG_LEVEL(self) -> str:
        env_val = os.getenv('LOG_LEVEL')
        if env_val:
            return env_val.upper()
        return str(self._get_yaml_value('logging', 'level', default='INFO')).upper()

    @property
    def LOG_DATE_FORMAT(self) -> str:
        return self._get_yaml_value('logging', 'date_format', default='%H:%M:%S')

    @property
    def LOG_FORMAT(self) -> str:
        """LOG_PATTERN if set, otherwise built from the include_* switches."""
        pattern = os.getenv('LOG_PATTERN') or self._get_yaml_value('logging', 'pattern', default='%(message)s')
        if pattern != '%(message)s':
            return pattern

        include_datetime = _env_flag('LOG_INCLUDE_DATETIME')
        if include_datetime is None:
            include_datetime = self._get_yaml_value('logging', 'include_datetime', default=False)
        include_level = _env_flag('LOG_INCLUDE_LEVEL')
        if include_level is None:
            include_level = self._get_yaml_value('logging', 'include_level', default=False)

        parts = []
        if include_datetime:
            parts.append('%(asctime)s')
        if include_level:
            parts.append('%(levelname)s')
        parts.append('%(message)s')
        return ' - '.join(parts)

    def validate_required(self) -> None:
        """Check the seed settings before a run.

        The connection string is checked when the session connects. Raises
        RuntimeError listing every problem found.
        """
        errors = []

        if self.SEED_COUNT < 0:
            errors.append(f'SEED_COUNT must be >= 0 (got {self.SEED_COUNT})')
        if self.SEED_MAX_LOCATIONS < 1:
            errors.append(f'migration.seed_max_locations must be >= 1 (got {self.SEED_MAX_LOCATIONS})')

        if errors:
            raise RuntimeError('Configuration errors:\n' + '\n'.join(f'  - {e}' for e in errors))


# Singleton config instance
config = Config()
