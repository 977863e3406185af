from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Optional


@dataclass(frozen=True)
class Option:
    """
    A selectable entry in the states or cities list.
    """
    value: str
    label: str = ''

    def __post_init__(self):
        # A bare value is its own label
        if not self.label:
            object.__setattr__(self, 'label', self.value)

    def __repr__(self):
        return f'<Option {self.value}>'


@dataclass(frozen=True)
class FileRef:
    """
    Metadata of an uploaded file. The engine never looks at the bytes.
    """
    size: int
    mime_type: str
    filename: str = ''

    @classmethod
    def from_storage(cls, storage):
        """Builds a FileRef from a werkzeug FileStorage, or None if nothing was uploaded."""
        if storage is None or not storage.filename:
            return None
        stream = storage.stream
        position = stream.tell()
        stream.seek(0, 2)  # end of stream
        size = stream.tell()
        stream.seek(position)
        return cls(size=size, mime_type=storage.mimetype or '', filename=storage.filename)

    def __repr__(self):
        return f'<FileRef {self.filename or "?"} {self.mime_type} {self.size}B>'


@dataclass
class FormValues:
    """
    Current values of the product form. Empty on creation.
    """
    product_name: str = ''
    product_description: str = ''
    product_image: Optional[FileRef] = None
    product_price: Optional[float] = None
    states: tuple = field(default_factory=tuple)
    cities: tuple = field(default_factory=tuple)

    @property
    def state_values(self):
        return [option.value for option in self.states]

    @property
    def city_values(self):
        return [option.value for option in self.cities]

    def copy(self):
        return replace(self)

    def as_form_data(self):
        """Plain dict in the shape the WTForms schema expects."""
        return {
            'product_name': self.product_name,
            'product_description': self.product_description,
            'product_image': self.product_image,
            'product_price': self.product_price,
            'states': self.state_values,
            'cities': self.city_values,
        }


FIELD_NAMES = (
    'product_name',
    'product_description',
    'product_image',
    'product_price',
    'states',
    'cities',
)
