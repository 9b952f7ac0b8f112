# file: database/factor_repository.py

from database.api_client import to_record
from utils.logger_config import setup_logger

# راه‌اندازی لاگر
logger = setup_logger('database.factor_repository')

FACTOR_ENDPOINT = '/factor'


def get_factor(client, factor_id):
    """دریافت فاکتور بر اساس شناسه"""
    try:
        return to_record(client.get(f"{FACTOR_ENDPOINT}/{factor_id}"))
    except Exception as e:
        logger.error(f"خطا در دریافت فاکتور {factor_id}: {str(e)}")
        raise


def filter_factors(client, filters, page_index=0, page_size=None):
    """دریافت یک صفحه از فاکتورهای فیلتر شده"""
    try:
        return client.list_page(FACTOR_ENDPOINT, filters or {}, page_index, page_size)
    except Exception as e:
        logger.error(f"خطا در جستجوی فاکتورها با فیلتر {filters}: {str(e)}")
        raise
