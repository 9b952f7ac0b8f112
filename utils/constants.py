"""ثابت‌های سیستم تسویه فاکتور - نقش‌ها، وضعیت‌ها و بانک‌ها"""

from enum import Enum

# =============================================================================
# نقش‌ها
# =============================================================================

class Role(str, Enum):
    CUSTOMER = 'customer'
    SALE_MANAGER = 'sale_manager'
    MARKETER = 'marketer'
    DEVELOPER = 'developer'
    FINANCE_MANAGER = 'finance_manager'
    MANAGER = 'manager'


ROLE_DISPLAY_NAMES = {
    Role.CUSTOMER: 'مشتری',
    Role.SALE_MANAGER: 'مدیر فروش',
    Role.MARKETER: 'کارشناس فروش',
    Role.DEVELOPER: 'توسعه دهنده',
    Role.FINANCE_MANAGER: 'مدیر مالی',
    Role.MANAGER: 'مدیر کل',
}

# نقش‌هایی که به تمام مشتریان دسترسی دارند
UNRESTRICTED_ROLES = frozenset({
    Role.MANAGER,
    Role.DEVELOPER,
    Role.FINANCE_MANAGER,
    Role.SALE_MANAGER,
})

# =============================================================================
# بخش‌های منو
# =============================================================================

class Section(str, Enum):
    DASHBOARD = 'dashboard'
    CUSTOMERS = 'customers'
    INVOICES = 'invoices'
    CHEQUES = 'cheques'
    PRODUCTS = 'products'
    BRANDS = 'brands'
    CAMPAIGNS = 'campaigns'
    STOCK_LOGS = 'stock_logs'
    EMPLOYEES = 'employees'
    CONFIGURATION = 'configuration'
    TAGS = 'tags'


# بخش‌هایی که فقط مدیر کل و توسعه دهنده می‌بینند
ADMIN_ONLY_SECTIONS = frozenset({
    Section.EMPLOYEES,
    Section.CONFIGURATION,
    Section.TAGS,
})

ADMIN_ROLES = frozenset({Role.MANAGER, Role.DEVELOPER})

# =============================================================================
# چک
# =============================================================================

class ChequeStatus(str, Enum):
    CREATED = 'created'
    PASSED = 'passed'
    REJECTED = 'rejected'
    CANCELED = 'canceled'


CHEQUE_STATUS_DISPLAY_NAMES = {
    ChequeStatus.CREATED: 'ایجاد شده',
    ChequeStatus.PASSED: 'پاس شده',
    ChequeStatus.REJECTED: 'برگشت خورده',
    ChequeStatus.CANCELED: 'لغو شده',
}

# جدول انتقال وضعیت در حالت سخت‌گیرانه
CHEQUE_TRANSITIONS = {
    ChequeStatus.CREATED: frozenset({
        ChequeStatus.PASSED,
        ChequeStatus.REJECTED,
        ChequeStatus.CANCELED,
    }),
    ChequeStatus.PASSED: frozenset(),
    ChequeStatus.REJECTED: frozenset(),
    ChequeStatus.CANCELED: frozenset(),
}


class BankCode(str, Enum):
    MELLI = 'melli'
    MELLAT = 'mellat'
    TEJARAT = 'tejarat'
    SADERAT = 'saderat'
    PARSIAN = 'parsian'
    PASARGAD = 'pasargad'
    EGHTESAD_NOVIN = 'eghtesad_novin'
    SAMAN = 'saman'
    SINA = 'sina'
    DEY = 'dey'
    KESHAVARZI = 'keshavarzi'
    MASKAN = 'maskan'
    REFAH = 'refah'
    SANAT = 'sanat'
    OTHER = 'other'


BANK_DISPLAY_NAMES = {
    BankCode.MELLI: 'بانک ملی ایران',
    BankCode.MELLAT: 'بانک ملت',
    BankCode.TEJARAT: 'بانک تجارت',
    BankCode.SADERAT: 'بانک صادرات ایران',
    BankCode.PARSIAN: 'بانک پارسیان',
    BankCode.PASARGAD: 'بانک پاسارگاد',
    BankCode.EGHTESAD_NOVIN: 'بانک اقتصاد نوین',
    BankCode.SAMAN: 'بانک سامان',
    BankCode.SINA: 'بانک سینا',
    BankCode.DEY: 'بانک دی',
    BankCode.KESHAVARZI: 'بانک کشاورزی',
    BankCode.MASKAN: 'بانک مسکن',
    BankCode.REFAH: 'بانک رفاه کارگران',
    BankCode.SANAT: 'بانک صنعت و معدن',
    BankCode.OTHER: 'سایر',
}

# =============================================================================
# فاکتور
# =============================================================================

class FactorStatus(str, Enum):
    CREATED = 'created'
    APPROVED_BY_MANAGER = 'approved_by_manager'
    APPROVED_BY_FINANCE = 'approved_by_finance'
    CANCELED = 'canceled'
    DELETED = 'deleted'


FACTOR_STATUS_DISPLAY_NAMES = {
    FactorStatus.CREATED: 'ایجاد شده',
    FactorStatus.APPROVED_BY_MANAGER: 'تایید شده توسط مدیر',
    FactorStatus.APPROVED_BY_FINANCE: 'تایید شده توسط مالی',
    FactorStatus.CANCELED: 'لغو شده',
    FactorStatus.DELETED: 'حذف شده',
}


class PaymentMethod(str, Enum):
    CASH = 'cash'
    CHEQUE = 'cheque'


PAYMENT_METHOD_DISPLAY_NAMES = {
    PaymentMethod.CASH: 'نقدی',
    PaymentMethod.CHEQUE: 'چک',
}

# =============================================================================
# تقویم
# =============================================================================

PERSIAN_MONTHS = [
    'فروردین', 'اردیبهشت', 'خرداد', 'تیر', 'مرداد', 'شهریور',
    'مهر', 'آبان', 'آذر', 'دی', 'بهمن', 'اسفند',
]

PERSIAN_WEEKDAYS = ['شنبه', 'یکشنبه', 'دوشنبه', 'سه‌شنبه', 'چهارشنبه', 'پنجشنبه', 'جمعه']


def get_display_name(mapping, value, default=None):
    """دریافت نام نمایشی فارسی؛ برای مقادیر ناشناخته خود مقدار برگردانده می‌شود"""
    for key, name in mapping.items():
        if key == value or key.value == value:
            return name
    return default if default is not None else value
