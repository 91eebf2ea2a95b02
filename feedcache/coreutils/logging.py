import logging
from datetime import datetime
from pathlib import Path

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


def setup_logging(level=logging.INFO, log_dir: str | None = "logs"):
    """Setup basic logging configuration"""
    handlers: list[logging.Handler] = [logging.StreamHandler()]

    if log_dir:
        Path(log_dir).mkdir(parents=True, exist_ok=True)
        handlers.append(
            logging.FileHandler(
                Path(log_dir) / f"feedcache_{datetime.now().strftime('%Y-%m-%d')}.log"
            )
        )

    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers)
    return logging.getLogger("feedcache")
