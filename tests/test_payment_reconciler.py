#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
تست تخصیص پرداخت‌ها به فاکتور و محاسبه پوشش
"""

import pytest

from database import factor_cheque_repository
from reconciliation.payment_reconciler import Coverage, calculate_coverage
from utils.date_utils import to_unix_seconds
from utils.exceptions import ConflictError, InvalidStateError, TransportError, ValidationError


@pytest.fixture
def invoices(service):
    service.add_factor('fA', 'c1', 'm1', 1000000, payment_method='cheque')
    service.add_factor('fB', 'c1', 'm1', 500000, payment_method='cheque')
    service.add_factor('fCash', 'c1', 'm1', 1000000, payment_method='cash')
    return service


def test_coverage_example(reconciler, lifecycle, invoices, make_cheque):
    cheque = make_cheque(price=400000)
    reconciler.assign_cheque('fCash', cheque['id'])
    lifecycle.update_status(cheque['id'], 'passed')
    reconciler.record_cash_transaction('fCash', 'c1', 'TRK-1', '۳۰۰,۰۰۰', '1403/06/20')

    result = reconciler.compute_coverage('fCash')
    assert result == Coverage(coverage=700000, passed_coverage=400000, remaining=300000, coverage_percent=70)


def test_coverage_counts_unpassed_cheques_only_in_nominal(reconciler, invoices, make_cheque):
    reconciler.assign_cheque('fA', make_cheque(number='1', price=250000)['id'])
    reconciler.assign_cheque('fA', make_cheque(number='2', price=250000)['id'])
    result = reconciler.compute_coverage('fA')
    assert result.coverage == 500000
    assert result.passed_coverage == 0
    assert result.remaining == 500000
    assert result.coverage_percent == 50


def test_coverage_zero_total_and_overpayment():
    assert calculate_coverage(0, [(100, 'passed')], []).coverage_percent == 0
    over = calculate_coverage(100, [(80, 'created')], ['50'])
    assert over.remaining == 0
    assert over.coverage_percent == 130


@pytest.mark.parametrize('total, covered, percent', [
    (1000, 125, 13),
    (1000, 25, 3),
    (1000, 124, 12),
    (200, 1, 1),
    (3, 1, 33),
])
def test_coverage_percent_rounds_half_up(total, covered, percent):
    assert calculate_coverage(total, [(covered, 'created')], []).coverage_percent == percent


def test_assign_conflict_keeps_existing_link(reconciler, service, invoices, make_cheque):
    cheque = make_cheque()
    link = reconciler.assign_cheque('fB', cheque['id'])

    with pytest.raises(ConflictError):
        reconciler.assign_cheque('fA', cheque['id'])
    with pytest.raises(ConflictError):
        reconciler.assign_cheque('fB', cheque['id'])

    assert [l['id'] for l in reconciler.linked_cheques('fB')] == [link['id']]
    assert reconciler.linked_cheques('fA') == []


def test_server_conflict_also_surfaces(reconciler, invoices, make_cheque, monkeypatch):
    cheque = make_cheque()
    reconciler.assign_cheque('fB', cheque['id'])
    # کنترل سمت کلاینت دور زده می‌شود؛ سرویس همچنان 409 برمی‌گرداند
    monkeypatch.setattr(factor_cheque_repository, 'get_cheque_links', lambda client, cheque_id: [])
    with pytest.raises(ConflictError):
        reconciler.assign_cheque('fA', cheque['id'])


def test_unassign_cheque(reconciler, invoices, make_cheque):
    link = reconciler.assign_cheque('fA', make_cheque()['id'])
    reconciler.unassign_cheque(link['id'])
    assert reconciler.linked_cheques('fA') == []


def test_unassign_blocked_after_finance_approval(reconciler, service, invoices, make_cheque):
    link = reconciler.assign_cheque('fA', make_cheque()['id'])
    service.factors['fA']['status'] = 'approved_by_finance'

    with pytest.raises(InvalidStateError):
        reconciler.unassign_cheque(link['id'], invoice_id='fA')
    assert len(reconciler.linked_cheques('fA')) == 1


def test_unassign_checks_owning_invoice_not_given_one(reconciler, service, invoices, make_cheque):
    link = reconciler.assign_cheque('fA', make_cheque()['id'])
    service.factors['fA']['status'] = 'approved_by_finance'

    with pytest.raises(ValidationError):
        reconciler.unassign_cheque(link['id'], invoice_id='fB')
    with pytest.raises(InvalidStateError):
        reconciler.unassign_cheque(link['id'])
    assert link['id'] in service.factor_cheques


def test_record_cash_transaction_wire_format(reconciler, service, invoices):
    transaction = reconciler.record_cash_transaction('fCash', 'c1', ' ۷۷۸۸ ', '۱,۵۰۰', '۱۴۰۳/۰۶/۲۰')
    assert transaction['price'] == '1500'
    assert transaction['createdAt'] == str(to_unix_seconds('14030620'))
    assert transaction['method'] == 'cash'
    assert transaction['chequeId'] is None
    assert transaction['trackingCode'] == '7788'


@pytest.mark.parametrize('tracking, amount, date', [
    ('', '1000', '14030620'),
    ('T', '0', '14030620'),
    ('T', '-10', '14030620'),
    ('T', '1000', '1403/13/01'),
])
def test_record_cash_transaction_validation(reconciler, service, invoices, tracking, amount, date):
    with pytest.raises(ValidationError):
        reconciler.record_cash_transaction('fCash', 'c1', tracking, amount, date)
    assert service.calls_to('transaction') == []


def test_record_cash_requires_cash_invoice(reconciler, invoices):
    with pytest.raises(ValidationError):
        reconciler.record_cash_transaction('fA', 'c1', 'T', '1000', '14030620')


def test_cash_transactions_sorted_by_time(reconciler, invoices):
    reconciler.record_cash_transaction('fCash', 'c1', 'late', '100', '14030620')
    reconciler.record_cash_transaction('fCash', 'c1', 'early', '100', '14030101')
    assert [t['trackingCode'] for t in reconciler.cash_transactions('fCash')] == ['early', 'late']


def test_create_and_assign_cheque(reconciler, service, invoices):
    cheque, link = reconciler.create_and_assign_cheque('fA', '5555', '14030701', '200000', 'tejarat')
    assert cheque['customerUserId'] == 'c1'
    assert cheque['managerUserId'] == 'm1'
    assert link['chequeId'] == cheque['id']


def test_create_and_assign_compensates_on_link_failure(reconciler, service, invoices):
    service.failures[('POST', 'factor-cheque')] = TransportError('قطع ارتباط')
    with pytest.raises(TransportError):
        reconciler.create_and_assign_cheque('fA', '5555', '14030701', '200000', 'tejarat')
    assert service.cheques == {}
    assert service.factor_cheques == {}


def test_create_and_assign_keeps_original_error_when_cleanup_fails(reconciler, service, invoices):
    service.failures[('POST', 'factor-cheque')] = TransportError('قطع ارتباط')
    service.failures[('DELETE', 'cheque/cheque-1')] = TransportError('حذف ناموفق')
    with pytest.raises(TransportError) as info:
        reconciler.create_and_assign_cheque('fA', '5555', '14030701', '200000', 'tejarat')
    assert info.value.message == 'قطع ارتباط'


def test_available_cheques_excludes_linked(reconciler, invoices, make_cheque):
    free = make_cheque(number='100')
    on_a = make_cheque(number='200')
    on_b = make_cheque(number='300')
    make_cheque(number='400', customer_id='c2')
    reconciler.assign_cheque('fA', on_a['id'])
    reconciler.assign_cheque('fB', on_b['id'])

    assert [c['id'] for c in reconciler.available_cheques('fA')] == [free['id']]
    assert reconciler.available_cheques('fA', number='۲۰۰') == []


def test_customer_debt(reconciler, service):
    service.debts['c1'] = {'totalTransactions': '3', 'totalDebt': 900, 'finalDebt': '-100'}
    assert reconciler.customer_debt('c1') == {'totalTransactions': 3, 'totalDebt': 900, 'finalDebt': -100}


def test_available_cheques_uses_single_link_lookup(reconciler, service, invoices, make_cheque):
    first, _, _ = [make_cheque(number=number) for number in ('100', '200', '300')]
    reconciler.assign_cheque('fB', first['id'])

    before = len(service.calls_to('factor-cheque'))
    assert len(reconciler.available_cheques('fA')) == 2
    assert len(service.calls_to('factor-cheque')) == before + 1

    before = len(service.calls_to('factor-cheque'))
    assert reconciler.available_cheques('fA', number='999') == []
    assert len(service.calls_to('factor-cheque')) == before
