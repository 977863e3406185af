from flask import Flask, render_template
from config import Config
from .extensions import csrf
from .lookup import load_lookup_table
from .utils import setup_logging, log, log_exception
import os

def create_app(config_class=Config):
    app = Flask(__name__, instance_relative_config=True)
    
    # 1. Load configuration from config.py
    app.config.from_object(config_class)

    # 2. Ensure the instance folder exists (for our log file)
    try:
        os.makedirs(app.instance_path)
    except OSError:
        pass

    log_file = app.config.get('LOG_FILE')
    setup_logging(os.path.join(app.instance_path, log_file) if log_file else None)

    # 3. Initialize extensions
    csrf.init_app(app)

    # 4. Load the state -> cities table once.
    # A broken table is a ConfigurationError and stops startup here.
    app.extensions['product_lookup'] = load_lookup_table(app.config.get('LOCATIONS_FILE'))

    # --- Register Blueprints ---
    from .main.routes import main_bp
    app.register_blueprint(main_bp)

    from .product.routes import product_bp
    app.register_blueprint(product_bp, url_prefix='/product')

    # --- Error Handlers ---
    @app.errorhandler(404)
    def page_not_found(e):
        return render_template('404.html'), 404

    @app.errorhandler(500)
    def internal_server_error(e):
        # We also log the error to our file
        log_exception("Unhandled 500 Error", e)
        return render_template('500.html'), 500

    log("Product form app created.")
    return app
