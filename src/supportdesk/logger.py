import logging
import os

LOG_DIR = os.getenv("SUPPORTDESK_LOG_DIR", "logs")
LOG_FILE = os.path.join(LOG_DIR, "supportdesk.log")


def get_logger(name="supportdesk"):
    """
    Returns a configured logger instance.
    Each module can call get_logger(__name__) for scoped logging.

    Console output goes to stderr: stdout carries MCP protocol frames when
    serving over stdio and must not receive log lines.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:  # Avoid duplicate handlers
        logger.setLevel(logging.DEBUG)

        # Console handler (INFO and above), stderr
        ch = logging.StreamHandler()
        ch.setLevel(logging.INFO)
        ch.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        logger.addHandler(ch)

        # File handler (DEBUG and above)
        try:
            os.makedirs(LOG_DIR, exist_ok=True)
            fh = logging.FileHandler(LOG_FILE, mode="a", encoding="utf-8")
        except OSError as e:
            logger.warning("File logging disabled (%s): %s", LOG_FILE, e)
        else:
            fh.setLevel(logging.DEBUG)
            fh.setFormatter(logging.Formatter(
                "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
            ))
            logger.addHandler(fh)

        # Keep records out of the root logger (and whatever it prints to)
        logger.propagate = False

    return logger


def get_preview_logger():
    """
    Side channel for unsent email previews. Plain message format so the
    rendered ticket reads as-is on the operator's terminal.
    """
    logger = logging.getLogger("supportdesk.preview")
    if not logger.handlers:
        logger.setLevel(logging.INFO)
        ch = logging.StreamHandler()
        ch.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(ch)
        logger.propagate = False
    return logger
