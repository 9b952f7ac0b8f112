#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
ماژول چرخه عمر چک

وضعیت چک از «ایجاد شده» به یکی از وضعیت‌های «پاس شده»، «برگشت خورده» یا «لغو شده» می‌رود.
در حالت سخت‌گیرانه (پیش‌فرض) این سه وضعیت نهایی هستند و هیچ تغییر وضعیتی از آن‌ها
پذیرفته نمی‌شود. پرچم صیادی مستقل از وضعیت است و در هر وضعیتی قابل تغییر است.

هر تغییر روی چک توسط سرویس داده یک لاگ تغییرناپذیر ثبت می‌کند؛ این ماژول لاگ را
فقط می‌خواند.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple

from config.settings import ServiceConfig
from database import cheque_log_repository, cheque_repository, customer_repository, manager_repository
from utils.constants import BankCode, CHEQUE_TRANSITIONS, ChequeStatus
from utils.date_utils import normalize_date_input
from utils.exceptions import InvalidStateError, NotFoundError, ValidationError
from utils.helpers import parse_amount, to_english_digits
from utils.logger_config import setup_logger

# راه‌اندازی لاگر
logger = setup_logger('modules.cheque_lifecycle')


@dataclass(frozen=True)
class ChequeLogEntry:
    id: Optional[str]
    cheque_id: str
    status: Optional[str]
    sayyadi: Optional[bool]
    comment: str
    created_at: str
    cheque: dict = field(default=None, compare=False, repr=False)

    @classmethod
    def from_record(cls, record):
        return cls(
            id=record.get('id'),
            cheque_id=record.get('chequeId'),
            status=record.get('status'),
            sayyadi=record.get('sayyadi'),
            comment=record.get('comment') or '',
            created_at=str(record.get('createdAt') or ''),
            cheque=dict(record.get('cheque') or {}),
        )


def parse_status(value) -> ChequeStatus:
    try:
        return ChequeStatus(value)
    except ValueError:
        raise ValidationError(f'وضعیت چک نامعتبر است: {value}')


def parse_bank_code(value) -> BankCode:
    try:
        return BankCode(value)
    except ValueError:
        raise ValidationError(f'بانک نامعتبر است: {value}')


def validate_cheque_number(number) -> str:
    number = to_english_digits(number).strip() if number is not None else ''
    if not number:
        raise ValidationError('شماره چک وارد نشده است')
    return number


class ChequeLifecycle:
    """عملیات ایجاد، ویرایش و تغییر وضعیت چک"""

    def __init__(self, client, config: Optional[ServiceConfig] = None):
        self.client = client
        self.config = config or getattr(client, 'config', None) or ServiceConfig()

    @property
    def strict(self) -> bool:
        return self.config.strict_cheque_states

    # ------------------------------------------------------------------
    # ایجاد و ویرایش
    # ------------------------------------------------------------------

    def build_cheque_payload(self, number, issue_date, face_amount, bank_code, customer_id, manager_id,
                             description=None, sayyadi=False, actor_id=None) -> dict:
        """اعتبارسنجی ورودی‌ها پیش از هر فراخوانی سرویس و ساخت بدنه درخواست"""
        if not customer_id:
            raise ValidationError('مشتری انتخاب نشده است')
        if not manager_id:
            raise ValidationError('کارمند مسئول انتخاب نشده است')

        payload = {
            'number': validate_cheque_number(number),
            'date': normalize_date_input(issue_date),
            'price': parse_amount(face_amount, 'مبلغ چک'),
            'bankName': parse_bank_code(bank_code).value,
            'customerUserId': customer_id,
            'managerUserId': manager_id,
            'creatorUserId': actor_id if actor_id is not None else manager_id,
            'status': ChequeStatus.CREATED.value,
            'description': description or None,
            'sayyadi': bool(sayyadi),
        }
        return payload

    def _ensure_parties_exist(self, customer_id, manager_id):
        try:
            customer_repository.get_customer(self.client, customer_id)
        except NotFoundError:
            raise NotFoundError(f'مشتری {customer_id} یافت نشد')
        try:
            manager_repository.get_manager(self.client, manager_id)
        except NotFoundError:
            raise NotFoundError(f'کارمند {manager_id} یافت نشد')

    def create(self, number, issue_date, face_amount, bank_code, customer_id, manager_id,
               description=None, sayyadi=False, actor_id=None) -> dict:
        """
        ایجاد چک در وضعیت «ایجاد شده»

        Raises:
            ValidationError: شماره خالی، تاریخ نامعتبر، مبلغ غیرمثبت یا بانک ناشناخته
            NotFoundError: مشتری یا کارمند وجود ندارد
        """
        payload = self.build_cheque_payload(
            number, issue_date, face_amount, bank_code, customer_id, manager_id,
            description=description, sayyadi=sayyadi, actor_id=actor_id,
        )
        self._ensure_parties_exist(customer_id, manager_id)
        cheque = cheque_repository.create_cheque(self.client, payload)
        logger.info(f"چک {payload['number']} به مبلغ {payload['price']} برای مشتری {customer_id} ایجاد شد")
        return cheque

    def get(self, cheque_id) -> dict:
        return cheque_repository.get_cheque(self.client, cheque_id)

    def update_fields(self, cheque_id, actor_id=None, **fields) -> dict:
        """
        ویرایش فیلدهای چک به جز وضعیت و صیادی

        فیلدهای مجاز: number، issue_date، face_amount، bank_code، customer_id، manager_id، description
        """
        mapping = {
            'number': ('number', validate_cheque_number),
            'issue_date': ('date', normalize_date_input),
            'face_amount': ('price', lambda value: parse_amount(value, 'مبلغ چک')),
            'bank_code': ('bankName', lambda value: parse_bank_code(value).value),
            'customer_id': ('customerUserId', None),
            'manager_id': ('managerUserId', None),
            'description': ('description', lambda value: value or None),
        }
        unknown = set(fields) - set(mapping)
        if unknown:
            raise ValidationError(f'فیلدهای غیرقابل ویرایش: {", ".join(sorted(unknown))}')
        if not fields:
            raise ValidationError('هیچ فیلدی برای ویرایش مشخص نشده است')

        payload = {}
        for name, value in fields.items():
            wire_name, convert = mapping[name]
            payload[wire_name] = convert(value) if convert else value
        if actor_id is not None:
            payload['creatorUserId'] = actor_id

        if 'customerUserId' in payload:
            customer_repository.get_customer(self.client, payload['customerUserId'])
        if 'managerUserId' in payload:
            manager_repository.get_manager(self.client, payload['managerUserId'])

        return cheque_repository.update_cheque(self.client, cheque_id, payload)

    # ------------------------------------------------------------------
    # وضعیت و صیادی
    # ------------------------------------------------------------------

    def can_transition(self, current, new) -> bool:
        if not self.strict:
            return True
        return parse_status(new) in CHEQUE_TRANSITIONS[parse_status(current)]

    def update_status(self, cheque_id, new_status, comment='', actor_id=None) -> ChequeLogEntry:
        """
        تغییر وضعیت چک

        Raises:
            ValidationError: وضعیت ناشناخته
            InvalidStateError: انتقال غیرمجاز در حالت سخت‌گیرانه
        """
        new_status = parse_status(new_status)
        cheque = self.get(cheque_id)
        current = cheque.get('status') or ChequeStatus.CREATED.value

        if not self.can_transition(current, new_status):
            logger.warning(f"انتقال غیرمجاز وضعیت چک {cheque_id} از {current} به {new_status.value}")
            raise InvalidStateError(f'تغییر وضعیت چک از «{current}» به «{new_status.value}» مجاز نیست')

        payload = {'status': new_status.value, 'comment': comment or ''}
        if actor_id is not None:
            payload['creatorUserId'] = actor_id
        cheque_repository.update_cheque(self.client, cheque_id, payload)
        logger.info(f"وضعیت چک {cheque_id} از {current} به {new_status.value} تغییر کرد")
        return self.latest_entry(cheque_id)

    def toggle_sayyadi(self, cheque_id, value, comment='', actor_id=None) -> ChequeLogEntry:
        """تنظیم پرچم صیادی؛ مستقل از وضعیت چک"""
        payload = {'sayyadi': bool(value), 'comment': comment or ''}
        if actor_id is not None:
            payload['creatorUserId'] = actor_id
        cheque_repository.update_cheque(self.client, cheque_id, payload)
        logger.info(f"پرچم صیادی چک {cheque_id} به {bool(value)} تغییر کرد")
        return self.latest_entry(cheque_id)

    # ------------------------------------------------------------------
    # تاریخچه
    # ------------------------------------------------------------------

    def history(self, cheque_id) -> Tuple[ChequeLogEntry, ...]:
        """تاریخچه تغییرات چک، جدیدترین در ابتدا"""
        records = cheque_log_repository.get_cheque_logs(self.client, cheque_id)
        entries = [ChequeLogEntry.from_record(record) for record in records]
        # مرتب‌سازی پایدار صعودی و سپس معکوس؛ لاگ‌های هم‌زمان به ترتیب ثبت باقی می‌مانند
        entries.sort(key=lambda entry: entry.created_at)
        return tuple(reversed(entries))

    def latest_entry(self, cheque_id) -> ChequeLogEntry:
        entries = self.history(cheque_id)
        if not entries:
            raise NotFoundError(f'لاگی برای چک {cheque_id} ثبت نشده است')
        return entries[0]
