# -*- coding: utf-8 -*-
"""
ماژول ابزارهای تاریخ شمسی
تمام تاریخ‌های این سیستم به صورت کلید هشت رقمی YYYYMMDD شمسی ذخیره و منتقل می‌شوند.

نگاشت شمسی به میلادی در day_of_week و to_unix_seconds تقریبی است (سال + ۶۲۱ و جابجایی
ثابت ماه‌ها) و برای سازگاری با ترتیب داده‌های ذخیره شده حفظ شده است.
"""

import re
import datetime
from collections import namedtuple

import jdatetime

from utils.constants import PERSIAN_MONTHS
from utils.exceptions import ValidationError
from utils.helpers import to_english_digits

MIN_YEAR = 1300
MAX_YEAR = 1500
GRID_CELLS = 42  # شش ردیف هفت ستونی

GridCell = namedtuple('GridCell', ['year', 'month', 'day', 'in_month'])

_KEY_RE = re.compile(r'^\d{8}$')


def split_key(key):
    """تجزیه کلید YYYYMMDD به (سال، ماه، روز)"""
    if not isinstance(key, str) or not _KEY_RE.match(key):
        raise ValidationError(f'تاریخ نامعتبر است: {key}')
    return int(key[:4]), int(key[4:6]), int(key[6:8])


def make_key(year, month, day):
    return f"{year:04d}{month:02d}{day:02d}"


def today():
    """تاریخ امروز شمسی در فرمت YYYYMMDD"""
    return jdatetime.date.today().strftime('%Y%m%d')


def to_display(key):
    """
    تبدیل کلید YYYYMMDD به فرمت نمایشی YYYY/MM/DD
    مقادیری که هشت کاراکتر نیستند بدون تغییر برگردانده می‌شوند
    """
    if not key or len(key) != 8:
        return key
    return f"{key[:4]}/{key[4:6]}/{key[6:8]}"


def parse_display(display_date):
    """
    تبدیل تاریخ نمایشی YYYY/MM/DD به کلید YYYYMMDD

    ارقام فارسی و عربی پذیرفته می‌شوند و ماه و روز تک رقمی با صفر پر می‌شوند.
    """
    if not display_date:
        raise ValidationError('تاریخ وارد نشده است')

    text = to_english_digits(display_date).strip()
    parts = text.split('/')
    if len(parts) != 3 or not all(part.isdigit() for part in parts):
        raise ValidationError(f'فرمت تاریخ نامعتبر است: {display_date}')

    year, month, day = parts
    return f"{year.zfill(4)}{month.zfill(2)}{day.zfill(2)}"


def normalize_date_input(value):
    """پذیرش تاریخ به هر دو فرمت YYYY/MM/DD یا YYYYMMDD و برگرداندن کلید معتبر"""
    text = to_english_digits(value).strip() if value else ''
    key = parse_display(text) if '/' in text else text
    if not validate(key):
        raise ValidationError(f'تاریخ نامعتبر است: {value}')
    return key


def days_in_month(year, month):
    """تعداد روزهای ماه؛ اسفند همیشه ۲۹ روز در نظر گرفته می‌شود"""
    if month <= 6:
        return 31
    if month <= 11:
        return 30
    return 29


def validate(key):
    """اعتبارسنجی کلید تاریخ شمسی"""
    try:
        year, month, day = split_key(key)
    except ValidationError:
        return False

    if year < MIN_YEAR or year > MAX_YEAR:
        return False
    if month < 1 or month > 12:
        return False
    if day < 1 or day > days_in_month(year, month):
        return False
    return True


def _approximate_gregorian(key):
    """
    نگاشت تقریبی شمسی به میلادی
    ماه‌های ۱ تا ۹ سه ماه جلوتر در همان سال، ماه‌های ۱۰ تا ۱۲ نه ماه عقب‌تر در سال بعد.
    روزهای اضافه مانند ۳۱ شهریور به ماه بعد سرریز می‌شوند.
    """
    year, month, day = split_key(key)
    g_year = year + 621
    if month <= 9:
        g_month = month + 3
    else:
        g_month = month - 9
        g_year += 1
    return datetime.date(g_year, g_month, 1) + datetime.timedelta(days=day - 1)


def day_of_week(key):
    """روز هفته از ۰ (شنبه) تا ۶ (جمعه)"""
    g_date = _approximate_gregorian(key)
    # weekday پایتون: دوشنبه = ۰ ... شنبه = ۵
    return (g_date.weekday() + 2) % 7


def to_unix_seconds(key):
    """
    زمان یونیکس نیمه‌شب محلی روز معادل؛ فقط برای مرتب‌سازی تراکنش‌ها
    و نه برای محاسبات دقیق تاریخ
    """
    g_date = _approximate_gregorian(key)
    midnight = datetime.datetime(g_date.year, g_date.month, g_date.day)
    return int(midnight.timestamp())


def format_unix_timestamp(timestamp):
    """نمایش زمان یونیکس به صورت تاریخ شمسی YYYY/MM/DD"""
    try:
        moment = datetime.datetime.fromtimestamp(int(timestamp))
    except (TypeError, ValueError, OverflowError, OSError):
        return 'نامشخص'
    return jdatetime.date.fromgregorian(date=moment.date()).strftime('%Y/%m/%d')


def month_name(month):
    return PERSIAN_MONTHS[month - 1]


def _shift_month(year, month, delta):
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def month_grid(year, month):
    """
    جدول ۴۲ خانه‌ای (۶ × ۷) یک ماه برای انتخابگر تاریخ

    خانه‌های ابتدا و انتها با روزهای ماه قبل و بعد پر می‌شوند. ستون اول شنبه است.
    """
    if month < 1 or month > 12:
        raise ValidationError(f'ماه نامعتبر است: {month}')

    first_weekday = day_of_week(make_key(year, month, 1))
    prev_year, prev_month = _shift_month(year, month, -1)
    next_year, next_month = _shift_month(year, month, 1)
    prev_days = days_in_month(prev_year, prev_month)

    cells = [
        GridCell(prev_year, prev_month, day, False)
        for day in range(prev_days - first_weekday + 1, prev_days + 1)
    ]
    cells.extend(GridCell(year, month, day, True) for day in range(1, days_in_month(year, month) + 1))

    trailing = GRID_CELLS - len(cells)
    cells.extend(GridCell(next_year, next_month, day, False) for day in range(1, trailing + 1))
    return cells


class CalendarConverter:
    """
    واسط شیءگرای توابع تاریخ

    clock تابعی است که امروز را برمی‌گرداند؛ در تست‌ها قابل جایگزینی است.
    """

    def __init__(self, clock=None):
        self._clock = clock or today

    def today(self):
        return self._clock()

    to_display = staticmethod(to_display)
    parse_display = staticmethod(parse_display)
    normalize = staticmethod(normalize_date_input)
    validate = staticmethod(validate)
    day_of_week = staticmethod(day_of_week)
    to_unix_seconds = staticmethod(to_unix_seconds)
    month_grid = staticmethod(month_grid)
    month_name = staticmethod(month_name)
