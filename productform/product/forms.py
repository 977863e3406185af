from wtforms import Form, StringField, TextAreaField, FileField, FloatField, SelectMultipleField
from wtforms.validators import DataRequired, Length, ValidationError, StopValidation

from productform.errors import UnknownFieldError

MAX_IMAGE_SIZE = 2 * 1024 * 1024  # 2MB
ALLOWED_IMAGE_TYPES = ('image/jpeg', 'image/png')


# --- File Validators ---
# These work on FileRef metadata instead of an uploaded FileStorage,
# so the same rules apply inside and outside a request.
# Each one stops the chain, so only the first failure is reported.

class ImageRequired:
    def __init__(self, message='Image is required'):
        self.message = message

    def __call__(self, form, field):
        if field.data is None:
            raise StopValidation(self.message)


class MaxFileSize:
    def __init__(self, max_size=MAX_IMAGE_SIZE, message='File size too large (max 2MB)'):
        self.max_size = max_size
        self.message = message

    def __call__(self, form, field):
        if field.data is not None and field.data.size > self.max_size:
            raise StopValidation(self.message)


class AllowedMimeTypes:
    def __init__(self, mime_types=ALLOWED_IMAGE_TYPES, message='Only JPG/PNG allowed'):
        self.mime_types = tuple(mime_types)
        self.message = message

    def __call__(self, form, field):
        if field.data is not None and field.data.mime_type not in self.mime_types:
            raise StopValidation(self.message)


class ProductSchema(Form):
    """
    Validation rules for the product form.

    Each field has its own ordered validator chain; the first
    failing validator's message is the one shown for that field.
    """
    product_name = StringField('Product Name',
                               validators=[DataRequired(message='Product Name is required'),
                                           Length(min=3, message='Product Name must be at least %(min)d characters')])

    product_description = TextAreaField('Product Description',
                                        validators=[DataRequired(message='Description is required'),
                                                    Length(min=10, message='Description is required')])

    product_image = FileField('Product Image',
                              validators=[ImageRequired(), MaxFileSize(), AllowedMimeTypes()])

    product_price = FloatField('Product Price',
                               validators=[DataRequired(message='Price is required')])

    # Membership is enforced by the selection controller, not here
    states = SelectMultipleField('Select States', choices=[], validate_choice=False,
                                 validators=[Length(min=1, message='Select at least one state')])

    cities = SelectMultipleField('Select Cities', choices=[], validate_choice=False,
                                 validators=[Length(min=1, message='Select at least one city')])

    def validate_product_price(self, field):
        """Price must be a positive number."""
        if not field.data > 0:
            raise ValidationError('Price is required')


def _build_form(values):
    return ProductSchema(data=values.as_form_data())


def validate(values):
    """
    Validates every field and returns a dict of field name -> first error message.

    Fields without errors are left out. The result depends only on `values`.
    """
    form = _build_form(values)
    form.validate()
    return {field.name: field.errors[0] for field in form if field.errors}


def validate_field(name, values):
    """
    Validates a single field. Returns its error message, or None if it is valid.
    """
    form = _build_form(values)
    if name not in form:
        raise UnknownFieldError(name)

    field = form[name]
    # Inline validate_<field> methods are only picked up by Form.validate()
    inline = getattr(ProductSchema, f'validate_{name}', None)
    field.validate(form, [inline] if inline else [])
    return field.errors[0] if field.errors else None
