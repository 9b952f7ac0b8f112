# file: database/cheque_repository.py

from database.api_client import to_record
from utils.logger_config import setup_logger

# راه‌اندازی لاگر
logger = setup_logger('database.cheque_repository')

CHEQUE_ENDPOINT = '/cheque'


def create_cheque(client, data):
    """ایجاد چک جدید و برگرداندن رکورد ایجاد شده"""
    try:
        record = to_record(client.post(CHEQUE_ENDPOINT, data))
        logger.info(f"چک جدید با شماره {data.get('number')} ثبت شد")
        return record
    except Exception as e:
        logger.error(f"خطا در ثبت چک {data.get('number')}: {str(e)}")
        raise


def get_cheque(client, cheque_id):
    """دریافت چک بر اساس شناسه"""
    try:
        return to_record(client.get(f"{CHEQUE_ENDPOINT}/{cheque_id}"))
    except Exception as e:
        logger.error(f"خطا در دریافت چک {cheque_id}: {str(e)}")
        raise


def update_cheque(client, cheque_id, data):
    """به‌روزرسانی فیلدهای چک؛ سرویس برای هر به‌روزرسانی یک لاگ ثبت می‌کند"""
    try:
        record = to_record(client.put(f"{CHEQUE_ENDPOINT}/{cheque_id}", data))
        logger.info(f"چک {cheque_id} با فیلدهای {sorted(data)} به‌روزرسانی شد")
        return record
    except Exception as e:
        logger.error(f"خطا در به‌روزرسانی چک {cheque_id}: {str(e)}")
        raise


def delete_cheque(client, cheque_id):
    """حذف چک"""
    try:
        client.delete(f"{CHEQUE_ENDPOINT}/{cheque_id}")
        logger.info(f"چک {cheque_id} حذف شد")
        return True
    except Exception as e:
        logger.error(f"خطا در حذف چک {cheque_id}: {str(e)}")
        raise


def filter_cheques(client, filters, page_index=0, page_size=None):
    """دریافت یک صفحه از چک‌های فیلتر شده"""
    try:
        page = client.list_page(CHEQUE_ENDPOINT, filters or {}, page_index, page_size)
        logger.info(f"تعداد {len(page.items)} چک از {page.count} یافت شد")
        return page
    except Exception as e:
        logger.error(f"خطا در جستجوی چک‌ها با فیلتر {filters}: {str(e)}")
        raise


def iterate_cheques(client, filters):
    """پیمایش تمام چک‌های منطبق با فیلتر"""
    return client.iterate(CHEQUE_ENDPOINT, filters or {})
