"""
Configuration management for the volume discount app.
"""
import os
from dotenv import load_dotenv

from .utils.exceptions import ConfigurationError

load_dotenv()


def _env_flag(name: str, default: str = 'false') -> bool:
    return os.getenv(name, default).lower() in ('1', 'true', 'yes', 'on')


class BaseConfig:
    """Base configuration."""
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')

    # Metafield the admin stores the function configuration in
    METAFIELD_NAMESPACE = os.getenv('METAFIELD_NAMESPACE', '$app:volume-discount')
    METAFIELD_KEY = os.getenv('METAFIELD_KEY', 'function-configuration')

    # Tier keys are tier01..tier99
    MAX_TIERS = int(os.getenv('MAX_TIERS', '6'))

    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

    # Pass a DEBUG logger to the discount function from the CLI
    DISCOUNT_DIAGNOSTICS = _env_flag('DISCOUNT_DIAGNOSTICS')


class DevelopmentConfig(BaseConfig):
    """Development configuration."""
    DEBUG = True
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'DEBUG')


class ProductionConfig(BaseConfig):
    """Production configuration."""
    DEBUG = False


class TestingConfig(BaseConfig):
    """Testing configuration."""
    TESTING = True
    MAX_TIERS = 6
    DISCOUNT_DIAGNOSTICS = False


config_map = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig
}


def get_config(config_name: str = 'development'):
    """Get configuration class by name."""
    return config_map.get(config_name, DevelopmentConfig)


def validate_config(config) -> None:
    """
    Validate configuration before app startup.

    Args:
        config: Flask config mapping

    Raises:
        ConfigurationError: If a setting is unusable
    """
    max_tiers = config.get('MAX_TIERS')
    if not isinstance(max_tiers, int) or not 1 <= max_tiers <= 99:
        raise ConfigurationError(f'MAX_TIERS must be between 1 and 99, got {max_tiers!r}')

    if not config.get('METAFIELD_NAMESPACE') or not config.get('METAFIELD_KEY'):
        raise ConfigurationError('METAFIELD_NAMESPACE and METAFIELD_KEY must be set')
