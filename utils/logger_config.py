import os
import logging
import codecs
from config.settings import DATA_DIR, LOG_LEVEL, CONSOLE_LOG_LEVEL

LOG_FORMAT = '%(asctime)s - [%(thread)d] - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

ERROR_LOG_FILE = 'error.txt'
GENERAL_LOG_FILE = 'Log.txt'


def _ensure_bom(path):
    """فایل لاگ خالی با BOM شروع می‌شود تا در ویرایشگرهای ویندوز فارسی درست نمایش داده شود"""
    try:
        if not os.path.exists(path) or os.path.getsize(path) == 0:
            with open(path, 'wb') as f:
                f.write(codecs.BOM_UTF8)
    except OSError as e:
        print(f"Warning: Could not add BOM to {path}: {e}")


def _file_handler(path, level, formatter):
    _ensure_bom(path)
    try:
        handler = logging.FileHandler(path, 'a', 'utf-8')
    except OSError as e:
        print(f"Warning: Could not create log handler for {path}: {e}")
        return None
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def setup_logger(name):
    """
    لاگر نام‌دار با دو فایل UTF-8 (خطاها و لاگ عمومی) در پوشه داده و خروجی کنسول

    فراخوانی دوباره با همان نام هندلر تکراری اضافه نمی‌کند.
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    logger.setLevel(LOG_LEVEL)
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    try:
        os.makedirs(DATA_DIR, exist_ok=True)
    except OSError as e:
        print(f"Warning: Could not create log directory {DATA_DIR}: {e}")

    handlers = [
        _file_handler(os.path.join(DATA_DIR, ERROR_LOG_FILE), logging.ERROR, formatter),
        _file_handler(os.path.join(DATA_DIR, GENERAL_LOG_FILE), LOG_LEVEL, formatter),
    ]

    console_handler = logging.StreamHandler()
    console_handler.setLevel(CONSOLE_LOG_LEVEL)
    console_handler.setFormatter(formatter)
    handlers.append(console_handler)

    for handler in handlers:
        if handler is not None:
            logger.addHandler(handler)
    return logger
