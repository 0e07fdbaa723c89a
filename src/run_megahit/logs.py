import sys
import logging

from .utils import NAME

FORMAT = '%(asctime)s %(levelname)s: %(message)s'
DATE_FORMAT = '%H:%M:%S'

def Init(debug: bool=False, log_file=None) -> logging.Logger:
    log = logging.getLogger(NAME)
    for h in list(log.handlers):
        log.removeHandler(h)
        h.close()
    log.setLevel(logging.DEBUG if debug else logging.INFO)
    log.propagate = False

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file is not None:
        handlers.append(logging.FileHandler(str(log_file), mode='a'))
    fmt = logging.Formatter(FORMAT, datefmt=DATE_FORMAT)
    for h in handlers:
        h.setFormatter(fmt)
        log.addHandler(h)
    return log
