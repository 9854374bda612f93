import pytest
import redis
from fastapi.testclient import TestClient

from roomdesk.config import Config
from roomdesk.main import app_factory
from testcontainers.redis import RedisContainer


@pytest.fixture(scope="session")
def redis_url():
    with RedisContainer("redis:7-alpine") as c:
        host = c.get_container_host_ip()
        port = c.get_exposed_port(6379)
        yield f"redis://{host}:{port}/0"


@pytest.fixture
def clean_redis(redis_url):
    client = redis.Redis.from_url(redis_url)
    try:
        client.flushdb()
    finally:
        client.close()


@pytest.fixture
def app(redis_url, clean_redis):
    return app_factory(redis_url, config=Config())


@pytest.fixture
def client(app):
    with TestClient(app) as tc:
        yield tc
