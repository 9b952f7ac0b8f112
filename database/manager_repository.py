# file: database/manager_repository.py

from database.api_client import to_record, unwrap
from utils.logger_config import setup_logger

# راه‌اندازی لاگر
logger = setup_logger('database.manager_repository')

MANAGER_ENDPOINT = '/manager-user'


def get_manager(client, manager_id):
    """دریافت کارمند بر اساس شناسه"""
    try:
        return to_record(client.get(f"{MANAGER_ENDPOINT}/{manager_id}"))
    except Exception as e:
        logger.error(f"خطا در دریافت کارمند {manager_id}: {str(e)}")
        raise


def get_role_name(client, user_id):
    """
    نام نقش کاربر از روی رکورد manager-user
    اگر کاربر رکورد کارمندی نداشته باشد None برگردانده می‌شود
    """
    try:
        body = unwrap(client.post(f"{MANAGER_ENDPOINT}/filter", {'userId': user_id})) or {}
    except Exception as e:
        logger.error(f"خطا در دریافت نقش کاربر {user_id}: {str(e)}")
        raise

    # سرویس گاهی آرایه و گاهی یک رکورد تکی برمی‌گرداند
    data = body.get('data') if isinstance(body, dict) else None
    if isinstance(data, list):
        data = data[0] if data else None

    if not data or not data.get('role'):
        logger.info(f"نقشی برای کاربر {user_id} یافت نشد")
        return None
    return data['role'].get('name')
