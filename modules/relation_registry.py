#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
ماژول ارتباط مشتری و کارمند
هر مشتری می‌تواند به یک کارمند (مدیر مشتری) اختصاص داده شود. این ارتباط تنها مبنای
محدود کردن مشتریان قابل مشاهده برای کارشناس فروش است.
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Dict, Iterable, Set

from database import customer_relation_repository
from utils.exceptions import ConflictError, SettlementError
from utils.logger_config import setup_logger

# راه‌اندازی لاگر
logger = setup_logger('modules.relation_registry')


@dataclass
class BulkRelationResult:
    """نتیجه تجمیعی ایجاد گروهی ارتباط‌ها"""
    created: int = 0
    duplicate: int = 0
    failed: int = 0
    errors: Dict[str, str] = field(default_factory=dict)

    @property
    def succeeded(self) -> bool:
        """موفق اگر حداقل یک ارتباط ایجاد شده یا از قبل وجود داشته باشد"""
        return (self.created + self.duplicate) > 0


def relation_customer_id(relation: dict):
    """شناسه حساب مشتری در رکورد ارتباط"""
    customer = relation.get('customer') or {}
    account = customer.get('account') or {}
    return account.get('id') or relation.get('customerUserId')


class RelationRegistry:
    """مدیریت ارتباط‌های مشتری و کارمند روی سرویس داده"""

    def __init__(self, client, max_workers: int = 8):
        self.client = client
        self.max_workers = max_workers

    def create_relation(self, customer_id, manager_id) -> dict:
        """
        ایجاد ارتباط

        Raises:
            ConflictError: اگر ارتباط از قبل وجود داشته باشد؛ فراخواننده می‌تواند آن را موفق تلقی کند
        """
        try:
            return customer_relation_repository.create_relation(self.client, customer_id, manager_id)
        except ConflictError:
            logger.info(f"ارتباط مشتری {customer_id} با کارمند {manager_id} از قبل وجود دارد")
            raise

    def delete_relation(self, customer_id, manager_id) -> bool:
        """
        حذف ارتباط

        Raises:
            NotFoundError: اگر ارتباطی با این مشخصات وجود نداشته باشد
        """
        return customer_relation_repository.delete_relation(self.client, customer_id, manager_id)

    def list_customer_ids_for_manager(self, manager_id) -> Set:
        """مجموعه شناسه مشتریان اختصاص یافته به کارمند؛ مجموعه خالی نتیجه‌ای معتبر است"""
        customer_ids = {
            relation_customer_id(relation)
            for relation in customer_relation_repository.iterate_manager_relations(self.client, manager_id)
        }
        customer_ids.discard(None)
        logger.info(f"تعداد {len(customer_ids)} مشتری برای کارمند {manager_id} یافت شد")
        return customer_ids

    def bulk_create(self, customer_ids: Iterable, manager_id) -> BulkRelationResult:
        """
        ایجاد همزمان ارتباط برای چند مشتری

        ارتباط‌های تکراری شمرده می‌شوند و خطا محسوب نمی‌شوند. سایر خطاها برای هر مشتری
        جداگانه ثبت می‌شوند و مانع ادامه کار نیستند.
        """
        customer_ids = list(dict.fromkeys(customer_ids))
        result = BulkRelationResult()
        if not customer_ids:
            return result

        def _create(customer_id):
            try:
                self.create_relation(customer_id, manager_id)
                return customer_id, 'created', None
            except ConflictError:
                return customer_id, 'duplicate', None
            except SettlementError as e:
                return customer_id, 'failed', e.message

        with ThreadPoolExecutor(max_workers=min(self.max_workers, len(customer_ids))) as executor:
            outcomes = list(executor.map(_create, customer_ids))

        for customer_id, outcome, message in outcomes:
            if outcome == 'created':
                result.created += 1
            elif outcome == 'duplicate':
                result.duplicate += 1
            else:
                result.failed += 1
                result.errors[str(customer_id)] = message

        logger.info(
            f"ایجاد گروهی ارتباط برای کارمند {manager_id}: "
            f"{result.created} جدید، {result.duplicate} تکراری، {result.failed} ناموفق"
        )
        if result.failed:
            logger.warning(f"خطا در ایجاد ارتباط برای مشتریان: {result.errors}")
        return result
