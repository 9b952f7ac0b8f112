# تنظیمات کلی برنامه
import os
from dataclasses import dataclass

# تنظیمات مسیرها
BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
DATA_DIR = os.environ.get('SETTLEMENT_DATA_DIR', os.path.join(BASE_DIR, 'Data'))
REPORTS_DIR = os.path.join(DATA_DIR, 'reports')

# تنظیمات سرویس داده
API_BASE_URL = os.environ.get('SETTLEMENT_API_BASE_URL', 'https://alami-b2b-api.liara.run/api')
API_TOKEN = os.environ.get('SETTLEMENT_API_TOKEN', '')
REQUEST_TIMEOUT = float(os.environ.get('SETTLEMENT_TIMEOUT', '30'))  # ثانیه
READ_RETRIES = int(os.environ.get('SETTLEMENT_READ_RETRIES', '3'))

# صفحه‌بندی
DEFAULT_PAGE_SIZE = int(os.environ.get('SETTLEMENT_PAGE_SIZE', '20'))
LOG_PAGE_SIZE = 1000  # لاگ‌ها در یک صفحه و مرتب بر اساس createdAt خوانده می‌شوند


def _env_flag(name, default):
    value = os.environ.get(name)
    if value is None:
        return default
    return value not in ('0', 'false', 'False')


# جدول وضعیت چک: در حالت سخت‌گیرانه وضعیت‌های نهایی قابل تغییر نیستند
STRICT_CHEQUE_STATES = _env_flag('SETTLEMENT_STRICT_CHEQUE_STATES', True)

# تاخیر جستجوی همزمان با تایپ (ثانیه)
SEARCH_DEBOUNCE = float(os.environ.get('SETTLEMENT_SEARCH_DEBOUNCE', '0.5'))

# سطح لاگ فایل عمومی و کنسول
LOG_LEVEL = os.environ.get('SETTLEMENT_LOG_LEVEL', 'INFO').upper()
CONSOLE_LOG_LEVEL = os.environ.get('SETTLEMENT_CONSOLE_LOG_LEVEL', 'WARNING').upper()


@dataclass(frozen=True)
class ServiceConfig:
    """پیکربندی صریح سرویس‌ها؛ به جای نمونه‌های سراسری به سازنده‌ها پاس داده می‌شود"""
    base_url: str = API_BASE_URL
    token: str = API_TOKEN
    timeout: float = REQUEST_TIMEOUT
    read_retries: int = READ_RETRIES
    page_size: int = DEFAULT_PAGE_SIZE
    log_page_size: int = LOG_PAGE_SIZE
    strict_cheque_states: bool = STRICT_CHEQUE_STATES
    search_debounce: float = SEARCH_DEBOUNCE

    @classmethod
    def from_env(cls, **overrides):
        """ساخت پیکربندی از متغیرهای محیطی با امکان جایگزینی مقادیر"""
        values = {
            'base_url': os.environ.get('SETTLEMENT_API_BASE_URL', API_BASE_URL),
            'token': os.environ.get('SETTLEMENT_API_TOKEN', API_TOKEN),
            'timeout': float(os.environ.get('SETTLEMENT_TIMEOUT', REQUEST_TIMEOUT)),
            'read_retries': int(os.environ.get('SETTLEMENT_READ_RETRIES', READ_RETRIES)),
            'page_size': int(os.environ.get('SETTLEMENT_PAGE_SIZE', DEFAULT_PAGE_SIZE)),
            'strict_cheque_states': _env_flag('SETTLEMENT_STRICT_CHEQUE_STATES', STRICT_CHEQUE_STATES),
            'search_debounce': float(os.environ.get('SETTLEMENT_SEARCH_DEBOUNCE', SEARCH_DEBOUNCE)),
        }
        values.update(overrides)
        return cls(**values)
