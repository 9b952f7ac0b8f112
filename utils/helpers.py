import re
from utils.exceptions import ValidationError
from utils.logger_config import setup_logger

# راه‌اندازی لاگر
logger = setup_logger('utils.helpers')

PERSIAN_DIGITS = '۰۱۲۳۴۵۶۷۸۹'
ARABIC_DIGITS = '٠١٢٣٤٥٦٧٨٩'
ASCII_DIGITS = '0123456789'

_TO_LOCAL = str.maketrans(ASCII_DIGITS, PERSIAN_DIGITS)
_TO_ASCII = str.maketrans(PERSIAN_DIGITS + ARABIC_DIGITS, ASCII_DIGITS * 2)


def to_persian_digits(value):
    """تبدیل ارقام انگلیسی به ارقام فارسی"""
    if value is None:
        return ''
    return str(value).translate(_TO_LOCAL)


def to_english_digits(value):
    """
    تبدیل ارقام فارسی و عربی به ارقام انگلیسی
    کاربر ممکن است با صفحه‌کلید عربی ارقام عربی تایپ کند
    """
    if value is None:
        return ''
    return str(value).translate(_TO_ASCII)


def parse_amount(value, field_name='مبلغ'):
    """
    تبدیل مبلغ وارد شده توسط کاربر به عدد صحیح مثبت

    ارقام فارسی/عربی تبدیل و جداکننده‌های هزارگان حذف می‌شوند.
    مبلغ بدون اعشار است؛ بخش اعشاری مجاز نیست.

    Raises:
        ValidationError: اگر مبلغ خالی، غیرعددی یا غیرمثبت باشد
    """
    if isinstance(value, bool):
        raise ValidationError(f'{field_name} نامعتبر است')
    if isinstance(value, int):
        amount = value
    else:
        text = to_english_digits(value).strip()
        text = re.sub(r'[,\s٬،_]', '', text)
        if not text or not re.fullmatch(r'\d+', text):
            logger.warning(f"مبلغ نامعتبر دریافت شد: {value!r}")
            raise ValidationError(f'{field_name} وارد شده نامعتبر است')
        amount = int(text)

    if amount <= 0:
        raise ValidationError(f'{field_name} باید بزرگتر از صفر باشد')
    return amount


def format_currency(amount):
    """قالب‌بندی مبلغ با جداکننده هزارگان و ارقام فارسی"""
    try:
        return to_persian_digits(f"{int(amount):,}")
    except (TypeError, ValueError):
        return to_persian_digits(amount)
