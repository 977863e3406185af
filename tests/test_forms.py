"""Tests for the field validation rules."""

from dataclasses import replace

import pytest

from productform.errors import UnknownFieldError
from productform.models import FileRef, FormValues, Option
from productform.product.forms import MAX_IMAGE_SIZE, validate, validate_field


def test_valid_values_have_no_errors(valid_values):
    assert validate(valid_values) == {}


def test_empty_form_reports_every_field():
    assert validate(FormValues()) == {
        'product_name': 'Product Name is required',
        'product_description': 'Description is required',
        'product_image': 'Image is required',
        'product_price': 'Price is required',
        'states': 'Select at least one state',
        'cities': 'Select at least one city',
    }


def test_validate_is_pure(valid_values):
    values = replace(valid_values, product_price=-1.0, cities=())
    first = validate(values)
    second = validate(values)
    assert first == second
    assert values.product_price == -1.0
    assert values.cities == ()


@pytest.mark.parametrize('name, message', [
    ('', 'Product Name is required'),
    ('   ', 'Product Name is required'),
    ('ab', 'Product Name must be at least 3 characters'),
    ('abc', None),
])
def test_product_name(valid_values, name, message):
    values = replace(valid_values, product_name=name)
    assert validate_field('product_name', values) == message


@pytest.mark.parametrize('description, message', [
    ('', 'Description is required'),
    ('too short', 'Description is required'),
    ('ten chars!', None),
])
def test_product_description(valid_values, description, message):
    values = replace(valid_values, product_description=description)
    assert validate_field('product_description', values) == message


@pytest.mark.parametrize('image, message', [
    (None, 'Image is required'),
    (FileRef(size=3_000_000, mime_type='image/png'), 'File size too large (max 2MB)'),
    (FileRef(size=100, mime_type='image/gif'), 'Only JPG/PNG allowed'),
    # Size is checked before type
    (FileRef(size=3_000_000, mime_type='image/gif'), 'File size too large (max 2MB)'),
    (FileRef(size=MAX_IMAGE_SIZE, mime_type='image/jpeg'), None),
    (FileRef(size=MAX_IMAGE_SIZE + 1, mime_type='image/jpeg'), 'File size too large (max 2MB)'),
])
def test_product_image(valid_values, image, message):
    values = replace(valid_values, product_image=image)
    assert validate_field('product_image', values) == message
    assert validate(values).get('product_image') == message


@pytest.mark.parametrize('price, message', [
    (None, 'Price is required'),
    (0.0, 'Price is required'),
    (-5.0, 'Price is required'),
    (0.01, None),
    (250.0, None),
])
def test_product_price(valid_values, price, message):
    values = replace(valid_values, product_price=price)
    assert validate_field('product_price', values) == message
    assert validate(values).get('product_price') == message


def test_selections_need_at_least_one(valid_values):
    values = replace(valid_values, states=(), cities=())
    assert validate_field('states', values) == 'Select at least one state'
    assert validate_field('cities', values) == 'Select at least one city'

    values = replace(values, states=(Option('Texas'),), cities=(Option('Austin'),))
    assert validate_field('states', values) is None
    assert validate_field('cities', values) is None


def test_fields_are_checked_independently(valid_values):
    values = replace(valid_values, product_name='ab', product_price=-5.0)
    assert validate(values) == {
        'product_name': 'Product Name must be at least 3 characters',
        'product_price': 'Price is required',
    }


def test_validate_field_unknown_name(valid_values):
    with pytest.raises(UnknownFieldError):
        validate_field('colour', valid_values)
