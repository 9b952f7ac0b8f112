#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
تست گزارش اکسل پوشش فاکتورها
"""

import pandas as pd

from modules.report_generator import COVERAGE_COLUMNS, ReportGenerator


def test_coverage_frame_skips_missing_invoice(reconciler, service, make_cheque):
    service.add_factor('f1', 'c1', 'm1', 1000000)
    reconciler.assign_cheque('f1', make_cheque(price=250000)['id'])

    frame = ReportGenerator(reconciler).coverage_frame(['f1', 'missing'])
    assert list(frame.columns) == COVERAGE_COLUMNS
    assert frame.to_dict('records') == [{
        'شناسه فاکتور': 'f1',
        'مبلغ فاکتور': 1000000,
        'پوشش': 250000,
        'پوشش پاس شده': 0,
        'مانده': 750000,
        'درصد پوشش': 25,
    }]


def test_cheque_frame_display_names():
    frame = ReportGenerator.cheque_frame([{
        'number': '12', 'date': '14030615', 'price': 1000, 'bankName': 'mellat',
        'status': 'passed', 'sayyadi': True, 'description': None,
    }])
    row = frame.iloc[0]
    assert row['تاریخ'] == '1403/06/15'
    assert row['بانک'] == 'بانک ملت'
    assert row['وضعیت'] == 'پاس شده'
    assert row['صیادی'] == 'بله'


def test_export_excel_writes_sheets(tmp_path, reconciler, service, make_cheque):
    service.add_factor('f1', 'c1', 'm1', 1000000)
    cheque = make_cheque(price=1000000)
    reconciler.assign_cheque('f1', cheque['id'])

    path = ReportGenerator(reconciler, output_dir=str(tmp_path)).export_excel(
        ['f1'], cheques=[cheque], file_name='report.xlsx')

    sheets = pd.read_excel(path, sheet_name=None, engine='openpyxl')
    assert set(sheets) == {'خلاصه', 'پوشش فاکتورها', 'چک‌ها'}
    assert sheets['پوشش فاکتورها']['درصد پوشش'].tolist() == [100]
    summary = dict(zip(sheets['خلاصه']['شرح'], sheets['خلاصه']['مقدار']))
    assert summary['جمع مانده'] == 0
