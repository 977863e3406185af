"""Shared pytest fixtures for the product form tests."""

import pytest

from config import TestConfig
from productform import create_app
from productform.lookup import LookupTable
from productform.models import FileRef, FormValues, Option
from productform.product.engine import ProductFormEngine


@pytest.fixture
def app():
    app = create_app(TestConfig)
    yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def lookup():
    return LookupTable.default()


@pytest.fixture
def png():
    return FileRef(size=1024, mime_type='image/png', filename='photo.png')


@pytest.fixture
def valid_values(png):
    return FormValues(
        product_name='Garden Hose',
        product_description='Fifty feet of kink-free rubber hose.',
        product_image=png,
        product_price=19.99,
        states=(Option('California'),),
        cities=(Option('San Diego'),),
    )


@pytest.fixture
def submitted():
    """Collects whatever the engine hands to its submitter."""
    return []


@pytest.fixture
def engine(lookup, submitted):
    return ProductFormEngine(lookup, submitter=submitted.append)


@pytest.fixture
def fill_valid(png):
    """Returns a helper that puts a complete, valid product into an engine."""
    def fill(engine):
        engine.set_field('product_name', 'Garden Hose')
        engine.set_field('product_description', 'Fifty feet of kink-free rubber hose.')
        engine.set_field('product_image', png)
        engine.set_field('product_price', '19.99')
        engine.set_field('states', ['California'])
        engine.set_field('cities', ['San Diego'])
    return fill
