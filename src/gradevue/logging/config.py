import logging
from dataclasses import dataclass

from gradevue.utils import log_level

formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")


def get_logger(name: str) -> logging.Logger:
    """
    Returns a named gradevue logger with a console handler attached.

    The handler is only attached once per logger, so repeated imports do not
    duplicate output.

    Args:
        name (str): The logger name, e.g. ``"gradevue.parser"``.

    Returns:
        logging.Logger: The configured logger.
    """
    logger = logging.getLogger(name)
    logger.setLevel(log_level.upper())

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setLevel(log_level.upper())
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


# Logger for payload normalization
logger_parser = get_logger("gradevue.parser")

# Logger for session state transitions
logger_session = get_logger("gradevue.session")

# Logger for upstream requests
logger_api = get_logger("gradevue.api")


@dataclass
class Logger:
    verbose: bool = False
    log: bool = True

    def __post_init__(self):
        self.logger = logger_session

    def print_and_log(self, message, verbose=False, log=False):
        """
        Logs a message and optionally prints it to the console.

        Args:
            message (str): The message to be logged and/or printed.
            verbose (bool): Print the message even if ``self.verbose`` is False.
            log (bool): Log the message even if ``self.log`` is False.

        Behavior:
            - If `self.verbose` or `verbose` is True, the message is printed.
            - If `self.log` or `log` is True, the message is logged at INFO level.
        """
        if self.verbose or verbose:
            print(message)

        if self.log or log:
            self.logger.info(message)
