import logging
import traceback

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"

# --- Logging ---
def setup_logging(log_file=None, level=logging.INFO):
    """Configures logging to file (when given) and console."""
    handlers = [logging.StreamHandler()]  # Always print to console
    if log_file:
        handlers.insert(0, logging.FileHandler(log_file))
    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers)

def log(msg):
    logging.info(msg)

def log_exception(msg, e):
    logging.error(f"{msg}: {e}")
    logging.error(traceback.format_exc())
