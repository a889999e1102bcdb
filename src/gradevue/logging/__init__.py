from gradevue.logging import config

from gradevue.logging.config import (Logger, formatter, get_logger, logger_api,
                                     logger_parser, logger_session,)

__all__ = ['Logger', 'config', 'formatter', 'get_logger', 'logger_api',
           'logger_parser', 'logger_session']
