import logging
from config import config

def setup_logging(debug_mode: str = None):
    """
    Configure logging level based on debug mode setting.
    Non-debug mode uses WARNING level so per-frame evaluation stays quiet.
    Debug modes use INFO level for rep, set and session tracking.
    """
    mode = debug_mode or config.debug_mode
    if mode == "non_debug":
        level = logging.WARNING
    else:
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    form_logger = logging.getLogger("form_coach")
    form_logger.setLevel(level)
    return form_logger

# Global logger instance - import this in other modules
logger = setup_logging()
