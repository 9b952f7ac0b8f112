#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
ماژول جستجوی محدود به دسترسی
ورودی‌های کاربر (با ارقام فارسی و تاریخ نمایشی) به بدنه فیلتر سرویس تبدیل می‌شوند و
محدوده دسترسی کارمند روی جستجوی چک، فاکتور و مشتری اعمال می‌شود.
"""

from dataclasses import dataclass
from typing import Optional

from database import cheque_repository, customer_relation_repository, customer_repository, factor_repository
from database.api_client import Page
from modules.access_scope import Unrestricted
from utils.date_utils import normalize_date_input
from utils.exceptions import ValidationError
from utils.helpers import to_english_digits
from utils.logger_config import setup_logger

# راه‌اندازی لاگر
logger = setup_logger('modules.scoped_search')

# فیلد مشتری در فیلتر فاکتور به صورت لیست ارسال می‌شود
INVOICE_CUSTOMER_FIELD = 'customerUserIds'


def _clean(value):
    if value is None:
        return ''
    return to_english_digits(getattr(value, 'value', value)).strip()


@dataclass
class ChequeFilter:
    number: str = ''
    start_date: str = ''
    end_date: str = ''
    price: str = ''
    status: str = ''
    bank_name: str = ''
    customer_id: Optional[str] = None

    def to_filters(self) -> dict:
        """
        ساخت بدنه فیلتر؛ فیلدهای خالی ارسال نمی‌شوند

        Raises:
            ValidationError: تاریخ یا مبلغ نامعتبر
        """
        filters = {}
        if _clean(self.number):
            filters['number'] = _clean(self.number)
        if _clean(self.start_date):
            filters['startDate'] = normalize_date_input(self.start_date)
        if _clean(self.end_date):
            filters['endDate'] = normalize_date_input(self.end_date)
        if filters.get('startDate') and filters.get('endDate') and filters['startDate'] > filters['endDate']:
            raise ValidationError('تاریخ شروع بعد از تاریخ پایان است')
        if _clean(self.price):
            price = _clean(self.price).replace(',', '')
            if not price.isdigit():
                raise ValidationError(f'مبلغ نامعتبر است: {self.price}')
            filters['price'] = int(price)
        if _clean(self.status):
            filters['status'] = _clean(self.status)
        if _clean(self.bank_name):
            filters['bankName'] = _clean(self.bank_name)
        if self.customer_id:
            filters['customerUserId'] = self.customer_id
        return filters


@dataclass
class InvoiceFilter:
    name: str = ''
    status: str = ''
    payment_method: str = ''
    orash_factor_id: str = ''

    def to_filters(self) -> dict:
        filters = {}
        if self.name and self.name.strip():
            filters['name'] = self.name.strip()
        if _clean(self.status):
            filters['status'] = _clean(self.status)
        if _clean(self.payment_method):
            filters['paymentMethod'] = _clean(self.payment_method)
        if _clean(self.orash_factor_id):
            filters['orashFactorId'] = _clean(self.orash_factor_id)
        return filters


def search_cheques(client, policy, scope, cheque_filter=None, page_index=0, page_size=None):
    """جستجوی چک‌ها با اعمال محدوده دسترسی کارمند"""
    base = (cheque_filter or ChequeFilter()).to_filters()
    return policy.run_scoped(
        scope,
        base,
        lambda filters: cheque_repository.filter_cheques(client, filters, page_index, page_size),
    )


def search_invoices(client, policy, scope, invoice_filter=None, page_index=0, page_size=None):
    """جستجوی فاکتورها؛ برای کارمند محدود فقط فاکتورهای مشتریان خودش"""
    base = (invoice_filter or InvoiceFilter()).to_filters()
    return policy.run_scoped(
        scope,
        base,
        lambda filters: factor_repository.filter_factors(client, filters, page_index, page_size),
        field=INVOICE_CUSTOMER_FIELD,
    )


def search_customers(client, scope, employee_id, filters=None, page_index=0, page_size=None):
    """
    جستجوی مشتریان

    کارمند محدود مشتریان را از مسیر ارتباط‌ها با managerUserId خودش می‌بیند.
    """
    filters = {key: _clean(value) for key, value in (filters or {}).items() if _clean(value)}
    if isinstance(scope, Unrestricted):
        return customer_repository.filter_customers(client, filters, page_index, page_size)

    if not scope.customer_ids:
        logger.info(f"کارمند {employee_id} هیچ مشتری اختصاص یافته‌ای ندارد")
        return Page([], 0)
    filters['managerUserId'] = employee_id
    return customer_relation_repository.filter_relations(client, filters, page_index, page_size)
