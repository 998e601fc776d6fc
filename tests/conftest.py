"""Pytest configuration and fixtures"""
import os
import pytest
from unittest.mock import Mock

from kalspire.config import Settings

# Keep tests away from real credentials and the user's data dir
os.environ["KALSPIRE_STORAGE_BACKEND"] = "memory"
os.environ.pop("UPSTASH_REDIS_REST_URL", None)
os.environ.pop("UPSTASH_REDIS_REST_TOKEN", None)


@pytest.fixture
def sample_color():
    """Red variant"""
    from kalspire.services.models import ColorVariant

    return ColorVariant(id="color-red", name="Red", hex_code="#ff0000", stock=3)


@pytest.fixture
def other_color():
    """Blue variant"""
    from kalspire.services.models import ColorVariant

    return ColorVariant(id="color-blue", name="Blue", hex_code="#0000ff", stock=2)


@pytest.fixture
def sample_product(sample_color, other_color):
    """Product with two color variants"""
    from kalspire.services.models import Product

    return Product(
        id="product-a",
        name="Knitted Sweater",
        description="Wool blend",
        price=10,
        images=["https://example.com/a.jpg"],
        category_id="cat-1",
        stock=5,
        color_variants=[sample_color, other_color],
    )


@pytest.fixture
def second_product():
    """Product without colors"""
    from kalspire.services.models import Product

    return Product(id="product-b", name="Canvas Tote", price=25, stock=1)


@pytest.fixture
def third_product():
    from kalspire.services.models import Product

    return Product(id="product-c", name="Enamel Mug", price="7.50", stock=20, tags=["kitchen"])


@pytest.fixture
def memory_repository():
    from kalspire.cart.storage import InMemoryCartRepository

    return InMemoryCartRepository()


@pytest.fixture
def memory_settings(tmp_path):
    return Settings(storage_backend="memory", data_dir=tmp_path)


@pytest.fixture
def file_settings(tmp_path):
    return Settings(storage_backend="file", data_dir=tmp_path)


@pytest.fixture
def mock_redis():
    """Mock Upstash Redis client backed by a dict"""
    store = {}
    redis = Mock()
    redis.get.side_effect = lambda key: store.get(key)
    redis.set.side_effect = lambda key, value, ex=None: store.__setitem__(key, value)
    redis.delete.side_effect = lambda key: store.pop(key, None)
    redis.store = store
    return redis
