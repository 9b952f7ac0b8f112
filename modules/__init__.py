#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
پکیج ماژول‌های تسویه
این پکیج شامل سرویس‌های ارتباط مشتری، محدوده دسترسی، چرخه عمر چک و گزارش است.
"""

# وارد کردن کلاس‌های اصلی
from .relation_registry import RelationRegistry, BulkRelationResult
from .access_scope import AccessScopePolicy, RestrictedTo, Unrestricted, UNRESTRICTED
from .cheque_lifecycle import ChequeLifecycle, ChequeLogEntry
from .scoped_search import ChequeFilter, InvoiceFilter, search_cheques, search_customers, search_invoices
from .search_sequencer import SearchSequencer

__all__ = [
    'RelationRegistry',
    'BulkRelationResult',
    'AccessScopePolicy',
    'RestrictedTo',
    'Unrestricted',
    'UNRESTRICTED',
    'ChequeLifecycle',
    'ChequeLogEntry',
    'ChequeFilter',
    'InvoiceFilter',
    'search_cheques',
    'search_invoices',
    'search_customers',
    'SearchSequencer',
]

__version__ = '1.0.0'
__description__ = 'سرویس‌های تسویه فاکتور و مدیریت چک'
