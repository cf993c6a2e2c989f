"""
Configuration of the Oracle client
"""
import logging
import os


class Config:
    """Base configuration."""

    # Native driver (see db_drivers.get_available_drivers)
    DB_DRIVER = os.environ.get('DB_DRIVER') or 'oracle'

    # Credentials and connection target
    ORACLE_USERNAME = os.environ.get('ORACLE_USERNAME', '')
    ORACLE_PASSWORD = os.environ.get('ORACLE_PASSWORD', '')
    ORACLE_CONNECTION_STRING = os.environ.get('ORACLE_CONNECTION_STRING') or None
    ORACLE_CHARACTER_SET = os.environ.get('ORACLE_CHARACTER_SET') or None

    # Instant Client directory, enables Thick mode
    ORACLE_CLIENT_LIB_DIR = os.environ.get('ORACLE_CLIENT_LIB_DIR') or None

    # Logging
    LOG_LEVEL = os.environ.get('LOG_LEVEL') or 'INFO'


class DevelopmentConfig(Config):
    """Development configuration."""
    LOG_LEVEL = 'DEBUG'


class ProductionConfig(Config):
    """Production configuration."""
    LOG_LEVEL = 'WARNING'


class TestingConfig(Config):
    """Testing configuration."""

    # In-memory database for fast tests
    DB_DRIVER = 'sqlite'
    ORACLE_USERNAME = 'test'
    ORACLE_PASSWORD = 'test'
    ORACLE_CONNECTION_STRING = ':memory:'
    ORACLE_CHARACTER_SET = None
    ORACLE_CLIENT_LIB_DIR = None


config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}


def configure_logging(level='INFO'):
    """Configures the root logger, once."""
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
