import logging
from pythonjsonlogger import jsonlogger

HANDLER_NAME = 'pokedex-json'


def setup_logger(level: str = 'INFO') -> None:
    logger = logging.getLogger()
    logger.setLevel(level)
    if any(h.get_name() == HANDLER_NAME for h in logger.handlers):
        return
    logHandler = logging.StreamHandler()
    logHandler.set_name(HANDLER_NAME)
    formatter = jsonlogger.JsonFormatter('%(asctime)s %(levelname)s %(name)s %(message)s',
                                         rename_fields={'levelname': 'level', 'asctime': 'timestamp'})
    logHandler.setFormatter(formatter)
    logger.addHandler(logHandler)
