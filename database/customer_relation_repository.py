# file: database/customer_relation_repository.py

from database.api_client import to_record
from utils.logger_config import setup_logger

# راه‌اندازی لاگر
logger = setup_logger('database.customer_relation_repository')

RELATION_ENDPOINT = '/customer-relation'


def create_relation(client, customer_id, manager_id):
    """ایجاد ارتباط مشتری و کارمند؛ برای ارتباط تکراری سرویس وضعیت 409 برمی‌گرداند"""
    try:
        record = to_record(client.post(RELATION_ENDPOINT, {
            'customerUserId': customer_id,
            'managerUserId': manager_id,
        }))
        logger.info(f"مشتری {customer_id} به کارمند {manager_id} اختصاص یافت")
        return record
    except Exception as e:
        logger.error(f"خطا در ایجاد ارتباط مشتری {customer_id} با کارمند {manager_id}: {str(e)}")
        raise


def delete_relation(client, customer_id, manager_id):
    try:
        client.delete(RELATION_ENDPOINT, {
            'customerUserId': customer_id,
            'managerUserId': manager_id,
        })
        logger.info(f"ارتباط مشتری {customer_id} با کارمند {manager_id} حذف شد")
        return True
    except Exception as e:
        logger.error(f"خطا در حذف ارتباط مشتری {customer_id} با کارمند {manager_id}: {str(e)}")
        raise


def filter_relations(client, filters, page_index=0, page_size=None):
    """جستجوی ارتباط‌ها بر اساس managerUserId و/یا نام مشتری"""
    try:
        return client.list_page(RELATION_ENDPOINT, filters or {}, page_index, page_size)
    except Exception as e:
        logger.error(f"خطا در جستجوی ارتباط‌ها با فیلتر {filters}: {str(e)}")
        raise


def iterate_manager_relations(client, manager_id):
    """پیمایش تمام ارتباط‌های یک کارمند در تمام صفحات"""
    return client.iterate(RELATION_ENDPOINT, {'managerUserId': manager_id})
