#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
تست چرخه عمر چک و تاریخچه تغییرات
"""

import dataclasses

import pytest

from utils.constants import ChequeStatus
from utils.exceptions import InvalidStateError, NotFoundError, ValidationError


def test_create_sends_created_status(lifecycle, service):
    cheque = lifecycle.create('۱۲۳۴', '1403/06/15', '۴۰۰,۰۰۰', 'mellat', 'c1', 'm1', description='')
    assert cheque['status'] == 'created'
    assert cheque['number'] == '1234'
    assert cheque['date'] == '14030615'
    assert cheque['price'] == 400000
    assert cheque['creatorUserId'] == 'm1'
    assert cheque['description'] is None
    assert cheque['sayyadi'] is False


@pytest.mark.parametrize('kwargs', [
    dict(number=''),
    dict(issue_date='14031230'),
    dict(face_amount='0'),
    dict(bank_code='unknown'),
    dict(customer_id=''),
])
def test_create_validates_before_remote_call(lifecycle, service, kwargs):
    values = dict(number='1', issue_date='14030615', face_amount=1000, bank_code='melli',
                  customer_id='c1', manager_id='m1')
    values.update(kwargs)
    with pytest.raises(ValidationError):
        lifecycle.create(**values)
    assert service.calls == []


def test_create_requires_existing_customer(lifecycle, service):
    with pytest.raises(NotFoundError):
        lifecycle.create('1', '14030615', 1000, 'melli', 'missing', 'm1')
    assert service.cheques == {}


def test_history_after_three_mutations(lifecycle, make_cheque):
    cheque = make_cheque()
    lifecycle.toggle_sayyadi(cheque['id'], True, 'ثبت صیادی')
    lifecycle.update_status(cheque['id'], ChequeStatus.PASSED, 'وصول شد')

    history = lifecycle.history(cheque['id'])
    assert len(history) == 3
    assert [entry.comment for entry in history] == ['وصول شد', 'ثبت صیادی', 'ایجاد چک']
    assert [entry.created_at for entry in history] == sorted((e.created_at for e in history), reverse=True)
    assert history[0].status == 'passed'
    assert history[0].sayyadi is True


def test_history_entries_are_immutable(lifecycle, make_cheque):
    cheque = make_cheque()
    first = lifecycle.history(cheque['id'])
    with pytest.raises(dataclasses.FrozenInstanceError):
        first[0].status = 'passed'

    lifecycle.update_status(cheque['id'], 'rejected')
    second = lifecycle.history(cheque['id'])
    assert second[-1] == first[0]


def test_update_status_returns_latest_entry(lifecycle, make_cheque):
    cheque = make_cheque()
    entry = lifecycle.update_status(cheque['id'], 'canceled', 'ابطال')
    assert entry.status == 'canceled'
    assert entry.comment == 'ابطال'
    assert entry.cheque_id == cheque['id']


@pytest.mark.parametrize('terminal', ['passed', 'rejected', 'canceled'])
def test_terminal_states_reject_transitions(lifecycle, make_cheque, terminal):
    cheque = make_cheque()
    lifecycle.update_status(cheque['id'], terminal)
    with pytest.raises(InvalidStateError):
        lifecycle.update_status(cheque['id'], 'created')
    assert len(lifecycle.history(cheque['id'])) == 2


def test_legacy_mode_allows_free_transitions(legacy_lifecycle, make_cheque):
    cheque = make_cheque()
    legacy_lifecycle.update_status(cheque['id'], 'rejected')
    entry = legacy_lifecycle.update_status(cheque['id'], 'passed')
    assert entry.status == 'passed'


def test_sayyadi_toggle_from_terminal_state(lifecycle, make_cheque):
    cheque = make_cheque()
    lifecycle.update_status(cheque['id'], 'passed')
    entry = lifecycle.toggle_sayyadi(cheque['id'], True)
    assert entry.sayyadi is True
    assert entry.status == 'passed'


def test_unknown_status_is_validation_error(lifecycle, make_cheque):
    cheque = make_cheque()
    with pytest.raises(ValidationError):
        lifecycle.update_status(cheque['id'], 'bounced')


def test_can_transition_table(lifecycle, legacy_lifecycle):
    assert lifecycle.can_transition('created', 'passed')
    assert not lifecycle.can_transition('passed', 'rejected')
    assert legacy_lifecycle.can_transition('passed', 'rejected')


def test_update_fields(lifecycle, service, make_cheque):
    cheque = make_cheque()
    updated = lifecycle.update_fields(cheque['id'], face_amount='۵۰۰۰۰۰', issue_date='1403/07/01', bank_code='saman')
    assert updated['price'] == 500000
    assert updated['date'] == '14030701'
    assert updated['bankName'] == 'saman'
    assert updated['status'] == 'created'


def test_update_fields_rejects_status(lifecycle, make_cheque):
    cheque = make_cheque()
    with pytest.raises(ValidationError):
        lifecycle.update_fields(cheque['id'], status='passed')


def test_latest_entry_without_logs(lifecycle, service):
    with pytest.raises(NotFoundError):
        lifecycle.latest_entry('cheque-404')
