# file: database/customer_repository.py

from database.api_client import to_record
from utils.logger_config import setup_logger

# راه‌اندازی لاگر
logger = setup_logger('database.customer_repository')

CUSTOMER_ENDPOINT = '/customer-user'


def get_customer(client, customer_id):
    try:
        return to_record(client.get(f"{CUSTOMER_ENDPOINT}/{customer_id}"))
    except Exception as e:
        logger.error(f"خطا در دریافت مشتری {customer_id}: {str(e)}")
        raise


def filter_customers(client, filters, page_index=0, page_size=None):
    try:
        return client.list_page(CUSTOMER_ENDPOINT, filters or {}, page_index, page_size)
    except Exception as e:
        logger.error(f"خطا در جستجوی مشتریان با فیلتر {filters}: {str(e)}")
        raise


def get_customer_debt(client, customer_id):
    """خلاصه بدهی مشتری: totalTransactions، totalDebt و finalDebt"""
    try:
        return to_record(client.get(f"{CUSTOMER_ENDPOINT}/debt/{customer_id}"))
    except Exception as e:
        logger.error(f"خطا در دریافت بدهی مشتری {customer_id}: {str(e)}")
        raise
