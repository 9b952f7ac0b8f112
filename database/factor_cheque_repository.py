# file: database/factor_cheque_repository.py

from database.api_client import to_record
from utils.logger_config import setup_logger

# راه‌اندازی لاگر
logger = setup_logger('database.factor_cheque_repository')

FACTOR_CHEQUE_ENDPOINT = '/factor-cheque'


def create_factor_cheque(client, factor_id, cheque_id):
    """تخصیص چک به فاکتور"""
    try:
        record = to_record(client.post(FACTOR_CHEQUE_ENDPOINT, {'factorId': factor_id, 'chequeId': cheque_id}))
        logger.info(f"چک {cheque_id} به فاکتور {factor_id} تخصیص داده شد")
        return record
    except Exception as e:
        logger.error(f"خطا در تخصیص چک {cheque_id} به فاکتور {factor_id}: {str(e)}")
        raise


def get_factor_cheque(client, link_id):
    try:
        return to_record(client.get(f"{FACTOR_CHEQUE_ENDPOINT}/{link_id}"))
    except Exception as e:
        logger.error(f"خطا در دریافت تخصیص چک {link_id}: {str(e)}")
        raise


def delete_factor_cheque(client, link_id):
    """حذف تخصیص چک از فاکتور"""
    try:
        client.delete(f"{FACTOR_CHEQUE_ENDPOINT}/{link_id}")
        logger.info(f"تخصیص چک {link_id} حذف شد")
        return True
    except Exception as e:
        logger.error(f"خطا در حذف تخصیص چک {link_id}: {str(e)}")
        raise


def get_factor_cheques(client, factor_id):
    """تمام چک‌های تخصیص داده شده به یک فاکتور همراه با اطلاعات چک (chequeData)"""
    try:
        return list(client.iterate(FACTOR_CHEQUE_ENDPOINT, {'factorId': factor_id}))
    except Exception as e:
        logger.error(f"خطا در دریافت چک‌های فاکتور {factor_id}: {str(e)}")
        raise


def get_cheque_links(client, cheque_id):
    """تخصیص‌های فعال یک چک؛ در حالت سالم حداکثر یک مورد"""
    try:
        return list(client.iterate(FACTOR_CHEQUE_ENDPOINT, {'chequeId': cheque_id}))
    except Exception as e:
        logger.error(f"خطا در دریافت تخصیص‌های چک {cheque_id}: {str(e)}")
        raise


def get_links_for_cheques(client, cheque_ids):
    """تخصیص‌های فعال مجموعه‌ای از چک‌ها در یک جستجو؛ برای لیست خالی درخواستی ارسال نمی‌شود"""
    cheque_ids = list(cheque_ids)
    if not cheque_ids:
        return []
    try:
        return list(client.iterate(FACTOR_CHEQUE_ENDPOINT, {'chequeId': cheque_ids}))
    except Exception as e:
        logger.error(f"خطا در دریافت تخصیص‌های {len(cheque_ids)} چک: {str(e)}")
        raise
