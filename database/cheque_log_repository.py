# file: database/cheque_log_repository.py

from utils.logger_config import setup_logger

# راه‌اندازی لاگر
logger = setup_logger('database.cheque_log_repository')

CHEQUE_LOG_ENDPOINT = '/cheque-log'


def get_cheque_logs(client, cheque_id):
    """
    دریافت لاگ‌های یک چک به ترتیب زمان ایجاد

    هر لاگ شامل status، sayyadi، comment، createdAt و تصویر چک در لحظه ثبت است.
    """
    try:
        page = client.list_page(
            CHEQUE_LOG_ENDPOINT,
            {'chequeId': cheque_id},
            page_size=client.config.log_page_size,
            extra_params={'sortColumn': 'createdAt'},
        )
        logger.info(f"تعداد {len(page.items)} لاگ برای چک {cheque_id} یافت شد")
        return page.items
    except Exception as e:
        logger.error(f"خطا در دریافت لاگ‌های چک {cheque_id}: {str(e)}")
        raise
