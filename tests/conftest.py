"""Pytest configuration.

Environment variables are set before ``src`` is imported because the
default configuration is loaded at import time.
"""

import os

os.environ["APP_ENVIRONMENT"] = "test"
os.environ["SESSION_SIGNING_SECRET"] = "test-signing-secret"
os.environ["LOG_FILE"] = ""
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["OTP_RATE_LIMIT"] = "1000"
os.environ["SMS_PROVIDER"] = "console"

pytest_plugins = ["tests.fixtures"]
