"""Centralized configuration for Shelfkeep."""
from __future__ import annotations

import os


class Config:
    """Base configuration loaded from environment variables."""
    SECRET_KEY = os.getenv('SECRET_KEY')
    DATABASE_PATH = os.getenv('DATABASE_PATH', '/data/shelfkeep.db')
    RATE_LIMIT_PER_MINUTE = int(os.getenv('RATE_LIMIT_PER_MINUTE', '60'))
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()
    SESSION_COOKIE_SECURE = os.getenv('SESSION_COOKIE_SECURE', 'false').lower() == 'true'
    SESSION_COOKIE_HTTPONLY = os.getenv('SESSION_COOKIE_HTTPONLY', 'true').lower() == 'true'
    SESSION_COOKIE_SAMESITE = os.getenv('SESSION_COOKIE_SAMESITE', 'Lax')
    FORCE_HTTPS = os.getenv('FORCE_HTTPS', 'false').lower() == 'true'
    PORT = int(os.getenv('PORT', '5000'))
    WTF_CSRF_TIME_LIMIT = None

    BCRYPT_ROUNDS = int(os.getenv('BCRYPT_ROUNDS', '12'))
    API_TOKEN_MAX_ISSUE_ATTEMPTS = int(os.getenv('API_TOKEN_MAX_ISSUE_ATTEMPTS', '10'))
    API_TOKEN_DEFAULT_EXPIRY_YEARS = int(os.getenv('API_TOKEN_DEFAULT_EXPIRY_YEARS', '100'))


class ProductionConfig(Config):
    DEBUG = False


class TestingConfig(Config):
    TESTING = True
    SECRET_KEY = 'test-secret-key-for-testing'
    WTF_CSRF_ENABLED = False
    RATELIMIT_ENABLED = False
    # bcrypt's minimum cost keeps the suite fast
    BCRYPT_ROUNDS = 4
