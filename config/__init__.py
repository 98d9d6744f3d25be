"""Configuration for the brand migrator.

Usage:
    from config import config

    mongo_uri = config.MONGO_URI
    seed_count = config.SEED_COUNT

Select the environment layer with APP_ENV (development, staging, production).
"""
from .settings import config, Config

__all__ = ['config', 'Config']
