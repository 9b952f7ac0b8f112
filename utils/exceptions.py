"""خطاهای سیستم تسویه فاکتور"""


class SettlementError(Exception):
    """کلاس پایه خطاها؛ message متنی است که به کاربر نمایش داده می‌شود"""

    default_message = 'خطای نامشخص'

    def __init__(self, message=None, status_code=None):
        self.message = message or self.default_message
        self.status_code = status_code
        super().__init__(self.message)


class ValidationError(SettlementError):
    """ورودی نامعتبر که پیش از هر فراخوانی سرویس تشخیص داده می‌شود"""
    default_message = 'ورودی نامعتبر است'


class ConflictError(SettlementError):
    """رکورد تکراری یا چکی که قبلاً به فاکتور دیگری تخصیص داده شده"""
    default_message = 'رکورد تکراری است'


class InvalidStateError(SettlementError):
    default_message = 'این عملیات در وضعیت فعلی مجاز نیست'


class NotFoundError(SettlementError):
    default_message = 'رکورد یافت نشد'


class TransportError(SettlementError):
    """خطا در خود فراخوانی سرویس راه دور"""
    default_message = 'خطا در ارتباط با سرور'


class AccessDeniedError(SettlementError):
    default_message = 'دسترسی به کنسول مجاز نیست'
