import logging
from logging.handlers import RotatingFileHandler

from minivote.core.settings import get_settings

_settings = get_settings()

voting_logger = logging.getLogger("voting")
voting_logger.setLevel(getattr(logging, _settings.log_level, logging.INFO))

# Prevent duplicate handlers
if not voting_logger.handlers:
    # Rotating file handler: max 5 MB per file, keep 3 backups
    file_handler = RotatingFileHandler(_settings.log_file, maxBytes=5*1024*1024, backupCount=3)
    formatter = logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")
    file_handler.setFormatter(formatter)
    voting_logger.addHandler(file_handler)
