import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """
    Configure root logging for the server.

    Library warnings (python-docx, pdfminer) are non-fatal, so they are
    routed into the log instead of being raised to the caller.
    """
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    logging.captureWarnings(True)
    logging.getLogger("pdfminer").setLevel(logging.WARNING)
