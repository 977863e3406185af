import os
from dotenv import load_dotenv

# Find the absolute path of the root directory
basedir = os.path.abspath(os.path.dirname(__file__))
# Load environment variables from .env file
load_dotenv(os.path.join(basedir, '.env'))

class Config:
    """Base configuration class."""
    
    # A secret key is required for sessions, forms (CSRF), and flash messages
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'a-very-hard-to-guess-default-key'
    
    # Optional JSON file with the state -> cities table.
    # When unset, the built-in table is used.
    LOCATIONS_FILE = os.environ.get('LOCATIONS_FILE')
    
    # Log file name, relative to the instance folder. Empty disables file logging.
    LOG_FILE = os.environ.get('LOG_FILE', 'app.log')
    
    # Hard cap on request bodies, well above the 2MB image limit so the
    # form rule reports oversized images. Bodies over the cap get the
    # 413 page of the product blueprint.
    MAX_CONTENT_LENGTH = int(os.environ.get('MAX_CONTENT_LENGTH', 16 * 1024 * 1024))


class TestConfig(Config):
    """Configuration used by the test suite."""
    TESTING = True
    WTF_CSRF_ENABLED = False
    LOG_FILE = ''
