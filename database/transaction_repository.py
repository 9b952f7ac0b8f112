# file: database/transaction_repository.py

from database.api_client import to_record
from utils.logger_config import setup_logger

# راه‌اندازی لاگر
logger = setup_logger('database.transaction_repository')

TRANSACTION_ENDPOINT = '/transaction'


def create_transaction(client, data):
    """ثبت تراکنش؛ مبلغ و زمان ایجاد به صورت رشته ارقام انگلیسی ارسال می‌شوند"""
    try:
        record = to_record(client.post(TRANSACTION_ENDPOINT, data))
        logger.info(f"تراکنش با کد پیگیری {data.get('trackingCode')} برای فاکتور {data.get('factorId')} ثبت شد")
        return record
    except Exception as e:
        logger.error(f"خطا در ثبت تراکنش {data.get('trackingCode')}: {str(e)}")
        raise


def get_factor_transactions(client, factor_id):
    try:
        return list(client.iterate(TRANSACTION_ENDPOINT, {'factorId': factor_id}))
    except Exception as e:
        logger.error(f"خطا در دریافت تراکنش‌های فاکتور {factor_id}: {str(e)}")
        raise

