import os
from urllib.parse import urlparse

import pytest
from testcontainers.postgres import PostgresContainer


@pytest.fixture(scope="module")
def postgres_env():
    """Start Postgres and return the DB_* environment pointing at it."""
    with PostgresContainer("postgres:16") as postgres:
        parsed_url = urlparse(postgres.get_connection_url())

        env = os.environ.copy()
        env["DB_USER"] = parsed_url.username
        env["DB_PASSWORD"] = parsed_url.password
        env["DB_HOST"] = parsed_url.hostname
        env["DB_PORT"] = str(parsed_url.port)
        env["DB_NAME"] = parsed_url.path.lstrip("/")
        env["CACHE_PROVIDER"] = "none"
        yield env
