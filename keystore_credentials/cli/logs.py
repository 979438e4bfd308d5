import logging


def configure_logging(debug: bool = False) -> logging.Handler:
    """Send package logs to stderr. Debug mode adds timestamps and levels."""
    logger = logging.getLogger("keystore_credentials")
    logger.handlers = []

    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s", "%H:%M:%S")
        if debug
        else logging.Formatter("%(message)s")
    )
    logger.addHandler(handler)

    logger.setLevel(logging.DEBUG if debug else logging.WARNING)
    logger.propagate = False

    return handler
