# scoreboard/logging_config.py
import logging
import sys

from scoreboard.settings import settings


def setup_logging():
    """
    Set up logging configuration for the application.
    """
    # Create a logger
    logger = logging.getLogger()
    logger.setLevel(settings.LOG_LEVEL)

    # Create a console handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(settings.LOG_LEVEL)

    # Create a formatter
    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    # Add the formatter to the handler
    console_handler.setFormatter(formatter)

    # Add the handler to the logger
    logger.addHandler(console_handler)

    # Quiet the test client's request logging
    logging.getLogger("httpx").setLevel(logging.WARNING)

    return logger


# Call the setup function to configure logging
app_logger = setup_logging()
