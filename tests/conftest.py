# -*- coding: utf-8 -*-
import os
import tempfile

# لاگ‌های تست در پوشه موقت نوشته می‌شوند؛ باید پیش از وارد کردن config.settings تنظیم شود
os.environ.setdefault('SETTLEMENT_DATA_DIR', tempfile.mkdtemp(prefix='settlement-tests-'))

import pytest

from config.settings import ServiceConfig
from modules.access_scope import AccessScopePolicy
from modules.cheque_lifecycle import ChequeLifecycle
from modules.relation_registry import RelationRegistry
from reconciliation.payment_reconciler import PaymentReconciler
from tests.fake_service import FakeService


@pytest.fixture
def service():
    fake = FakeService()
    fake.add_customer('c1')
    fake.add_customer('c2')
    fake.add_manager('m1', role='manager')
    fake.add_manager('mk1', role='marketer')
    return fake


@pytest.fixture
def lifecycle(service):
    return ChequeLifecycle(service)


@pytest.fixture
def legacy_lifecycle(service):
    return ChequeLifecycle(service, ServiceConfig(strict_cheque_states=False))


@pytest.fixture
def reconciler(service, lifecycle):
    return PaymentReconciler(service, lifecycle)


@pytest.fixture
def registry(service):
    return RelationRegistry(service, max_workers=4)


@pytest.fixture
def policy(registry):
    return AccessScopePolicy(registry)


@pytest.fixture
def make_cheque(lifecycle):
    def _make(number='1001', price=400000, customer_id='c1', manager_id='m1', date='14030615'):
        return lifecycle.create(number, date, price, 'melli', customer_id, manager_id)
    return _make
