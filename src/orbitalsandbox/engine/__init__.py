import logging
import os
from logging.handlers import RotatingFileHandler

logging.basicConfig(level=logging.WARN)
logger = logging.getLogger("orbitalsandbox.engine")

log_file_env:str|None = os.environ.get("LOG_FILE", None)
if log_file_env:
    file_handler = RotatingFileHandler(log_file_env, maxBytes=5_000_000, backupCount=3)
    file_handler.setFormatter(logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s %(filename)s:%(lineno)d: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))
    logger.addHandler(file_handler)

log_level_env:str|None = os.environ.get("LOG_LEVEL", None)
if log_level_env:
    levels_by_name = logging.getLevelNamesMapping()
    level = levels_by_name[log_level_env.upper()]

    logger.setLevel(level)
    logger.propagate = False
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logger.addHandler(handler)

else:
    logger.setLevel(logging.WARN)
