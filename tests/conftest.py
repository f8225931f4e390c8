"""Test environment: in-memory SQLite store and a fixed signing key, set before app imports."""

import os

os.environ["APP_ENV"] = "dev"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["DB_CREATE_TABLES"] = "true"
os.environ["JWT_SECRET"] = "test-signing-key-for-unit-tests-0123456789"
os.environ["JWT_ISSUER"] = "crudapi-tests"
os.environ["JWT_AUDIENCE"] = "crudapi-tests-clients"
os.environ["JWT_EXPIRE_MINUTES"] = "60"

import app.core.security as security  # noqa: E402

# Minimum bcrypt cost keeps hashing fast in tests.
security.BCRYPT_ROUNDS = 4
