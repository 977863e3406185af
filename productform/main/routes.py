from flask import Blueprint, redirect, url_for

main_bp = Blueprint('main', __name__)

@main_bp.route('/')
@main_bp.route('/index')
def index():
    """The product form is the only page, so send visitors there."""
    return redirect(url_for('product.new_product'))
