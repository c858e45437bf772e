# attendance-server/attendance_api/core/log_config.py
import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

def setup_logging(level: str = "INFO") -> None:
    """Configures root logging once for the whole process."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    # passlib logs backend detection at DEBUG
    logging.getLogger("passlib").setLevel(logging.WARNING)
