#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
ماژول تطبیق پرداخت‌های فاکتور

چک‌ها و تراکنش‌های نقدی به فاکتور متصل می‌شوند و پوشش فاکتور از روی آن‌ها محاسبه می‌شود:

    پوشش          = جمع مبلغ تمام چک‌های متصل (در هر وضعیتی) + جمع تراکنش‌های نقدی
    پوشش پاس شده  = همان جمع فقط برای چک‌های پاس شده
    مانده          = max(0, مبلغ فاکتور - پوشش)
    درصد پوشش     = گرد شده (نیم به بالا) پوشش / مبلغ فاکتور * 100 و برای فاکتور با مبلغ صفر برابر صفر

هر چک در هر لحظه حداکثر به یک فاکتور متصل است و از فاکتور تایید شده توسط مالی
هیچ چکی جدا نمی‌شود.
"""

from collections import namedtuple

from database import (
    cheque_repository,
    customer_repository,
    factor_cheque_repository,
    factor_repository,
    transaction_repository,
)
from modules.cheque_lifecycle import ChequeLifecycle
from utils.constants import ChequeStatus, FactorStatus, PaymentMethod
from utils.date_utils import normalize_date_input, to_unix_seconds
from utils.exceptions import ConflictError, InvalidStateError, SettlementError, ValidationError
from utils.helpers import parse_amount, to_english_digits
from utils.logger_config import setup_logger

# راه‌اندازی لاگر
logger = setup_logger('reconciliation.payment_reconciler')

Coverage = namedtuple('Coverage', ['coverage', 'passed_coverage', 'remaining', 'coverage_percent'])


def _as_int(value):
    """مبالغ سرویس گاهی عدد و گاهی رشته هستند"""
    if value is None or value == '':
        return 0
    return int(to_english_digits(value)) if isinstance(value, str) else int(value)


def factor_customer_id(factor):
    customer = (factor.get('customerData') or {}).get('account') or {}
    return customer.get('id') or factor.get('customerUserId')


def factor_manager_id(factor):
    creator = (factor.get('creatorData') or {}).get('account') or {}
    return creator.get('id') or factor.get('creatorUserId')


def factor_creator_user_id(factor):
    personal = (factor.get('creatorData') or {}).get('personal') or {}
    return personal.get('userId') or factor.get('creatorUserId')


def link_cheque(link):
    """اطلاعات چک متصل؛ سرویس آن را در chequeData برمی‌گرداند"""
    return link.get('chequeData') or link.get('cheque') or {}


def calculate_coverage(total_amount, cheques, cash_amounts):
    """
    محاسبه پوشش فاکتور

    Args:
        total_amount: مبلغ کل فاکتور
        cheques: لیست (مبلغ، وضعیت) چک‌های متصل
        cash_amounts: مبالغ تراکنش‌های نقدی
    """
    total_amount = _as_int(total_amount)
    cheque_sum = sum(_as_int(amount) for amount, _ in cheques)
    passed_sum = sum(_as_int(amount) for amount, status in cheques if status == ChequeStatus.PASSED.value)
    coverage = cheque_sum + sum(_as_int(amount) for amount in cash_amounts)

    remaining = max(0, total_amount - coverage)
    # گرد کردن نیم به بالا با حساب صحیح
    percent = (coverage * 200 + total_amount) // (2 * total_amount) if total_amount else 0
    return Coverage(coverage, passed_sum, remaining, percent)


class PaymentReconciler:
    """اتصال چک و تراکنش نقدی به فاکتور و محاسبه پوشش"""

    def __init__(self, client, lifecycle=None):
        self.client = client
        self.lifecycle = lifecycle or ChequeLifecycle(client)

    # ------------------------------------------------------------------
    # چک‌ها
    # ------------------------------------------------------------------

    def assign_cheque(self, invoice_id, cheque_id):
        """
        اتصال چک به فاکتور

        Raises:
            ConflictError: اگر چک به این فاکتور یا فاکتور دیگری متصل باشد
        """
        existing = factor_cheque_repository.get_cheque_links(self.client, cheque_id)
        if existing:
            owner = existing[0].get('factorId')
            logger.warning(f"چک {cheque_id} قبلا به فاکتور {owner} تخصیص داده شده است")
            raise ConflictError(f'این چک قبلا به فاکتور {owner} تخصیص داده شده است')

        link = factor_cheque_repository.create_factor_cheque(self.client, invoice_id, cheque_id)
        logger.info(f"چک {cheque_id} به فاکتور {invoice_id} متصل شد")
        return link

    def unassign_cheque(self, link_id, invoice_id=None):
        """
        جدا کردن چک از فاکتور

        وضعیت فاکتور صاحب تخصیص (factorId خود تخصیص) بررسی می‌شود. invoice_id فقط برای
        تطبیق است و باید با صاحب تخصیص یکی باشد.

        Raises:
            ValidationError: اگر invoice_id با فاکتور صاحب تخصیص یکی نباشد
            InvalidStateError: اگر فاکتور توسط مالی تایید شده باشد
        """
        link = factor_cheque_repository.get_factor_cheque(self.client, link_id)
        owner_id = link.get('factorId')
        if invoice_id is not None and invoice_id != owner_id:
            logger.warning(f"تخصیص {link_id} متعلق به فاکتور {owner_id} است نه {invoice_id}")
            raise ValidationError('این تخصیص متعلق به فاکتور انتخاب شده نیست')

        factor = factor_repository.get_factor(self.client, owner_id)
        if factor.get('status') == FactorStatus.APPROVED_BY_FINANCE.value:
            logger.warning(f"تلاش برای حذف چک از فاکتور تایید شده {owner_id}")
            raise InvalidStateError('فاکتور توسط مالی تایید شده است و چک آن قابل حذف نیست')

        factor_cheque_repository.delete_factor_cheque(self.client, link_id)
        logger.info(f"تخصیص {link_id} از فاکتور {owner_id} حذف شد")

    def create_and_assign_cheque(self, invoice_id, number, issue_date, face_amount, bank_code,
                                 description=None, sayyadi=False):
        """
        ایجاد چک برای مشتری فاکتور و اتصال آن به فاکتور

        اگر اتصال ناموفق باشد چک تازه ایجاد شده حذف می‌شود و خطای اتصال دوباره پرتاب می‌شود.
        """
        factor = factor_repository.get_factor(self.client, invoice_id)
        cheque = self.lifecycle.create(
            number, issue_date, face_amount, bank_code,
            customer_id=factor_customer_id(factor),
            manager_id=factor_manager_id(factor),
            description=description,
            sayyadi=sayyadi,
            actor_id=factor_creator_user_id(factor),
        )
        cheque_id = cheque.get('id')

        try:
            link = self.assign_cheque(invoice_id, cheque_id)
        except SettlementError:
            logger.error(f"اتصال چک جدید {cheque_id} به فاکتور {invoice_id} ناموفق بود؛ چک حذف می‌شود")
            try:
                cheque_repository.delete_cheque(self.client, cheque_id)
            except SettlementError as e:
                logger.error(f"حذف چک بدون فاکتور {cheque_id} ناموفق بود: {e.message}")
            raise
        return cheque, link

    def linked_cheques(self, invoice_id):
        """تخصیص‌های چک فاکتور همراه با اطلاعات چک"""
        return factor_cheque_repository.get_factor_cheques(self.client, invoice_id)

    def available_cheques(self, invoice_id, number=None):
        """چک‌های مشتری فاکتور که به هیچ فاکتوری متصل نیستند"""
        factor = factor_repository.get_factor(self.client, invoice_id)
        filters = {'customerUserId': factor_customer_id(factor)}
        if number and to_english_digits(number).strip():
            filters['number'] = to_english_digits(number).strip()

        cheques = list(cheque_repository.iterate_cheques(self.client, filters))
        assigned = {
            link.get('chequeId')
            for link in factor_cheque_repository.get_links_for_cheques(
                self.client, [cheque.get('id') for cheque in cheques])
        }
        available = [cheque for cheque in cheques if cheque.get('id') not in assigned]
        logger.info(f"تعداد {len(available)} چک آزاد برای فاکتور {invoice_id} یافت شد")
        return available

    # ------------------------------------------------------------------
    # تراکنش نقدی
    # ------------------------------------------------------------------

    def record_cash_transaction(self, invoice_id, customer_id, tracking_code, amount, date):
        """
        ثبت تراکنش نقدی برای فاکتور با روش پرداخت نقدی

        Raises:
            ValidationError: کد پیگیری خالی، مبلغ غیرمثبت، تاریخ نامعتبر یا فاکتور غیرنقدی
        """
        tracking_code = to_english_digits(tracking_code).strip() if tracking_code else ''
        if not tracking_code:
            raise ValidationError('کد پیگیری وارد نشده است')
        price = parse_amount(amount)
        created_at = to_unix_seconds(normalize_date_input(date))

        factor = factor_repository.get_factor(self.client, invoice_id)
        if factor.get('paymentMethod') != PaymentMethod.CASH.value:
            raise ValidationError('روش پرداخت این فاکتور نقدی نیست')

        data = {
            'customerUserId': customer_id,
            'chequeId': None,
            'factorId': invoice_id,
            'trackingCode': tracking_code,
            'price': str(price),
            'method': PaymentMethod.CASH.value,
            'createdAt': str(created_at),
        }
        return transaction_repository.create_transaction(self.client, data)

    def cash_transactions(self, invoice_id):
        """تراکنش‌های نقدی فاکتور به ترتیب زمان"""
        transactions = [
            t for t in transaction_repository.get_factor_transactions(self.client, invoice_id)
            if t.get('method') == PaymentMethod.CASH.value
        ]
        return sorted(transactions, key=lambda t: _as_int(t.get('createdAt')))

    # ------------------------------------------------------------------
    # پوشش و بدهی
    # ------------------------------------------------------------------

    def invoice_total(self, invoice_id):
        return _as_int(factor_repository.get_factor(self.client, invoice_id).get('totalAmount'))

    def compute_coverage(self, invoice_id) -> Coverage:
        factor = factor_repository.get_factor(self.client, invoice_id)
        cheques = [
            (link_cheque(link).get('price'), link_cheque(link).get('status'))
            for link in self.linked_cheques(invoice_id)
        ]
        cash = [t.get('price') for t in self.cash_transactions(invoice_id)]

        result = calculate_coverage(factor.get('totalAmount'), cheques, cash)
        logger.info(
            f"پوشش فاکتور {invoice_id}: {result.coverage} از {factor.get('totalAmount')} "
            f"({result.coverage_percent}%)، پاس شده {result.passed_coverage}"
        )
        return result

    def customer_debt(self, customer_id):
        """خلاصه بدهی مشتری"""
        debt = customer_repository.get_customer_debt(self.client, customer_id) or {}
        return {
            'totalTransactions': _as_int(debt.get('totalTransactions')),
            'totalDebt': _as_int(debt.get('totalDebt')),
            'finalDebt': _as_int(debt.get('finalDebt')),
        }
