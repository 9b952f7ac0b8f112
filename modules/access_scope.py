#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
ماژول محدوده دسترسی
از روی نقش و شناسه کارمند، مجموعه مشتریانی که کارمند اجازه دیدن آن‌ها را دارد تعیین می‌کند
و این محدوده را روی فیلتر جستجوی چک، فاکتور و مشتری اعمال می‌کند.
"""

from collections import namedtuple
from dataclasses import dataclass
from typing import Callable, FrozenSet, Optional

from database.api_client import Page
from utils.constants import ADMIN_ONLY_SECTIONS, ADMIN_ROLES, Role, Section, UNRESTRICTED_ROLES
from utils.exceptions import AccessDeniedError
from utils.logger_config import setup_logger

# راه‌اندازی لاگر
logger = setup_logger('modules.access_scope')

CUSTOMER_FIELD = 'customerUserId'


@dataclass(frozen=True)
class Unrestricted:
    """دسترسی به تمام مشتریان"""


@dataclass(frozen=True)
class RestrictedTo:
    """دسترسی فقط به مشتریان مشخص شده"""
    customer_ids: FrozenSet


UNRESTRICTED = Unrestricted()

# فیلتر نهایی؛ matches_nothing یعنی نیازی به ارسال درخواست نیست
ScopedFilter = namedtuple('ScopedFilter', ['filters', 'matches_nothing'])


def _as_id_set(value):
    if isinstance(value, (list, tuple, set, frozenset)):
        return set(value)
    return {value}


class AccessScopePolicy:
    """سیاست دسترسی بر اساس نقش"""

    def __init__(self, registry):
        self.registry = registry

    @staticmethod
    def role_from_name(role_name: Optional[str]) -> Role:
        """نگاشت نام نقش سرویس به Role؛ نقش ناشناخته مشتری در نظر گرفته می‌شود"""
        try:
            return Role(role_name)
        except ValueError:
            logger.info(f"نقش ناشناخته {role_name!r}؛ نقش مشتری در نظر گرفته شد")
            return Role.CUSTOMER

    @staticmethod
    def ensure_console_access(role: Role) -> None:
        """مشتری هیچ دسترسی به کنسول ندارد"""
        if Role(role) == Role.CUSTOMER:
            raise AccessDeniedError()

    def resolve_scope(self, role: Role, employee_id):
        """
        محدوده دسترسی یک کارمند

        نقش‌های مدیریتی بدون محدودیت هستند و کارشناس فروش فقط مشتریان اختصاص یافته
        به خودش را می‌بیند.

        Raises:
            AccessDeniedError: برای نقش مشتری
        """
        role = Role(role)
        self.ensure_console_access(role)
        if role in UNRESTRICTED_ROLES:
            return UNRESTRICTED

        customer_ids = frozenset(self.registry.list_customer_ids_for_manager(employee_id))
        logger.info(f"محدوده دسترسی کارمند {employee_id}: {len(customer_ids)} مشتری")
        return RestrictedTo(customer_ids)

    @staticmethod
    def apply_scope(scope, base_filter: Optional[dict] = None, field: str = CUSTOMER_FIELD) -> ScopedFilter:
        """
        اعمال محدوده روی فیلتر پایه

        اگر فیلتر پایه خودش مشتری مشخصی داشته باشد، اشتراک آن با محدوده گرفته می‌شود.
        """
        filters = dict(base_filter or {})
        if isinstance(scope, Unrestricted):
            return ScopedFilter(filters, False)

        allowed = set(scope.customer_ids)
        if field in filters and filters[field] not in (None, '', []):
            allowed &= _as_id_set(filters[field])

        if not allowed:
            return ScopedFilter(filters, True)

        filters[field] = sorted(allowed, key=str)
        return ScopedFilter(filters, False)

    def run_scoped(self, scope, base_filter: Optional[dict], fetch: Callable[[dict], Page],
                   field: str = CUSTOMER_FIELD) -> Page:
        """اجرای جستجو با محدوده؛ فیلتر تهی بدون فراخوانی سرویس صفحه خالی برمی‌گرداند"""
        scoped = self.apply_scope(scope, base_filter, field)
        if scoped.matches_nothing:
            logger.info("محدوده دسترسی خالی است؛ درخواستی ارسال نشد")
            return Page([], 0)
        return fetch(scoped.filters)

    @staticmethod
    def can_access_section(role: Role, section: Section) -> bool:
        """دسترسی به بخش‌های منو"""
        role = Role(role)
        if role == Role.CUSTOMER:
            return False
        if Section(section) in ADMIN_ONLY_SECTIONS:
            return role in ADMIN_ROLES
        return True

    @classmethod
    def visible_sections(cls, role: Role):
        return [section for section in Section if cls.can_access_section(role, section)]
