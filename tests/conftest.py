"""Pytest configuration and fixtures."""

import pytest
import tempfile
from pathlib import Path


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir)


@pytest.fixture
def customer_data():
    """Customer document with nested objects, a null and an array of objects."""
    return {
        "id": 1,
        "name": "John",
        "mobile": None,
        "location": {"city": "Vilnius", "country": "LT"},
        "customer": {"id": 1, "name": "John"},
        "items": [
            {"name": "tomatoes", "sale": True},
            {"name": "snickers", "sale": False}
        ]
    }


@pytest.fixture
def gym_data():
    """Gym listing used by the transformation tests."""
    return {
        "id": 1,
        "slug": "raw-metal",
        "name": "Raw Metal Gym",
        "texts": {
            "name": "Raw metal gym",
            "description": "The best gym in town. Come and visit us today!"
        },
        "images": {
            "top": "//images/top.jpg",
            "background": "//images/background.png"
        },
        "features": [
            {"id": 1, "description": "Convenient location"},
            {"id": 2, "description": "Lots of space"}
        ]
    }


@pytest.fixture
def gym_translation():
    """Translation of the gym listing in its own shape."""
    return {
        "title": "Metalinis Gymas",
        "media": {
            "backgroundImage": "//images/translated-background.png"
        },
        "features": [
            {"id": 2, "description": "space translated"},
            {"id": 1, "description": "location translated"}
        ]
    }
