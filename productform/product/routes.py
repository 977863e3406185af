from flask import Blueprint, current_app, flash, jsonify, redirect, render_template, request, url_for

from productform.errors import SubmitError
from productform.models import FileRef
from productform.utils import log
from .engine import ProductFormEngine, log_submission
from .forms import MaxFileSize

# Tell the blueprint where to find its templates
product_bp = Blueprint('product', __name__, template_folder='../templates/product')


def _lookup():
    return current_app.extensions['product_lookup']


def _submitter():
    # Apps can plug in their own collaborator; the default only logs
    return current_app.extensions.get('product_submitter', log_submission)


def _apply_request(engine, req):
    """
    Replays the posted form into the engine the way the browser form
    would have: text fields, price and image first, then states, then
    cities once the city list is enabled.
    """
    engine.set_field('product_name', req.form.get('product_name'))
    engine.set_field('product_description', req.form.get('product_description'))
    engine.set_field('product_price', req.form.get('product_price'))
    engine.set_field('product_image', FileRef.from_storage(req.files.get('product_image')))
    engine.set_field('states', req.form.getlist('states'))

    cities = req.form.getlist('cities')
    if engine.is_disabled('cities'):
        if cities:
            log(f"Ignoring cities posted without a state: {cities}")
    else:
        engine.set_field('cities', cities)


@product_bp.route('/new', methods=['GET', 'POST'])
def new_product():
    """
    Shows the product form and handles its submission.
    """
    engine = ProductFormEngine(_lookup(), submitter=_submitter())

    if request.method == 'POST':
        _apply_request(engine, request)
        try:
            if engine.submit():
                flash('Your product has been submitted!', 'success')
                return redirect(url_for('product.new_product'))
        except SubmitError as e:
            current_app.logger.error(f"Product submission failed: {e}")
            flash(f'Could not submit the product: {e}', 'danger')

    return render_template('new_product.html',
                           title='Product Form',
                           engine=engine,
                           values=engine.values,
                           errors=engine.errors)


@product_bp.route('/cities')
def cities():
    """
    Cities available for the selected states, for filtering the city
    list in the browser. Unknown states are ignored.
    """
    states = request.args.getlist('states')
    return jsonify(states=states, cities=_lookup().cities_for(states))


@product_bp.errorhandler(413)
def upload_too_large(e):
    """
    The body went over MAX_CONTENT_LENGTH, so none of the posted fields
    can be read. Show an empty form carrying the image size error.
    """
    current_app.logger.warning(f"Rejected product upload over {current_app.config.get('MAX_CONTENT_LENGTH')} bytes")
    engine = ProductFormEngine(_lookup(), submitter=_submitter())
    errors = {'product_image': MaxFileSize().message}
    flash('The upload was too large, please choose a smaller image and fill in the form again.', 'danger')
    return render_template('new_product.html',
                           title='Product Form',
                           engine=engine,
                           values=engine.values,
                           errors=errors), 413
