import logging

# Logging configuration
logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")


def get_logger(name):
    """Return a module logger sharing the app-wide format."""
    return logging.getLogger(name)
