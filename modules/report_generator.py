#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
ماژول تولید گزارش
این ماژول گزارش پوشش فاکتورها و فهرست چک‌ها را به صورت فایل اکسل تولید می‌کند.
"""

import os
from datetime import datetime
from typing import Iterable, List, Optional

import pandas as pd
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter

from config.settings import REPORTS_DIR
from utils.constants import (
    BANK_DISPLAY_NAMES,
    CHEQUE_STATUS_DISPLAY_NAMES,
    get_display_name,
)
from utils.date_utils import to_display
from utils.exceptions import SettlementError
from utils.logger_config import setup_logger

# راه‌اندازی لاگر
logger = setup_logger('modules.report_generator')

COVERAGE_COLUMNS = ['شناسه فاکتور', 'مبلغ فاکتور', 'پوشش', 'پوشش پاس شده', 'مانده', 'درصد پوشش']
CHEQUE_COLUMNS = ['شماره چک', 'تاریخ', 'مبلغ', 'بانک', 'وضعیت', 'صیادی', 'توضیحات']


class ReportGenerator:
    """
    کلاس تولید گزارش‌های اکسل
    """

    def __init__(self, reconciler, output_dir: Optional[str] = None):
        """
        پارامترها:
            reconciler: نمونه‌ای از PaymentReconciler
            output_dir: مسیر ذخیره گزارش‌ها
        """
        self.reconciler = reconciler
        self.output_dir = output_dir or REPORTS_DIR

    def coverage_frame(self, invoice_ids: Iterable) -> pd.DataFrame:
        """
        جدول پوشش فاکتورها
        فاکتورهایی که خواندن آن‌ها ناموفق باشد با لاگ خطا کنار گذاشته می‌شوند
        """
        rows = []
        for invoice_id in invoice_ids:
            try:
                factor_total = self.reconciler.invoice_total(invoice_id)
                coverage = self.reconciler.compute_coverage(invoice_id)
            except SettlementError as e:
                logger.error(f"خطا در محاسبه پوشش فاکتور {invoice_id}: {e.message}")
                continue
            rows.append([
                invoice_id,
                factor_total,
                coverage.coverage,
                coverage.passed_coverage,
                coverage.remaining,
                coverage.coverage_percent,
            ])
        return pd.DataFrame(rows, columns=COVERAGE_COLUMNS)

    @staticmethod
    def cheque_frame(cheques: List[dict]) -> pd.DataFrame:
        """جدول چک‌ها با نام‌های نمایشی فارسی"""
        rows = [
            [
                cheque.get('number'),
                to_display(cheque.get('date') or ''),
                int(cheque.get('price') or 0),
                get_display_name(BANK_DISPLAY_NAMES, cheque.get('bankName')),
                get_display_name(CHEQUE_STATUS_DISPLAY_NAMES, cheque.get('status')),
                'بله' if cheque.get('sayyadi') else 'خیر',
                cheque.get('description') or '',
            ]
            for cheque in cheques
        ]
        return pd.DataFrame(rows, columns=CHEQUE_COLUMNS)

    @staticmethod
    def summary_frame(coverage: pd.DataFrame) -> pd.DataFrame:
        total = int(coverage['مبلغ فاکتور'].sum()) if not coverage.empty else 0
        covered = int(coverage['پوشش'].sum()) if not coverage.empty else 0
        passed = int(coverage['پوشش پاس شده'].sum()) if not coverage.empty else 0
        remaining = int(coverage['مانده'].sum()) if not coverage.empty else 0
        return pd.DataFrame(
            [
                ['تعداد فاکتور', len(coverage)],
                ['جمع مبلغ فاکتورها', total],
                ['جمع پوشش', covered],
                ['جمع پوشش پاس شده', passed],
                ['جمع مانده', remaining],
            ],
            columns=['شرح', 'مقدار'],
        )

    def export_excel(self, invoice_ids: Iterable, cheques: Optional[List[dict]] = None,
                     file_name: Optional[str] = None) -> str:
        """
        تولید فایل اکسل گزارش و برگرداندن مسیر آن

        شیت‌ها: خلاصه، پوشش فاکتورها و در صورت وجود، چک‌ها
        """
        os.makedirs(self.output_dir, exist_ok=True)
        if not file_name:
            file_name = f"settlement_report_{datetime.now().strftime('%Y%m%d_%H%M%S')}.xlsx"
        file_path = os.path.join(self.output_dir, file_name)

        coverage = self.coverage_frame(invoice_ids)
        sheets = {
            'خلاصه': self.summary_frame(coverage),
            'پوشش فاکتورها': coverage,
        }
        if cheques:
            sheets['چک‌ها'] = self.cheque_frame(cheques)

        with pd.ExcelWriter(file_path, engine='openpyxl') as writer:
            for sheet_name, frame in sheets.items():
                frame.to_excel(writer, index=False, sheet_name=sheet_name)
                self._apply_excel_styles(writer.sheets[sheet_name])

        logger.info(f"گزارش با {len(coverage)} فاکتور در فایل {file_path} ذخیره شد")
        return file_path

    @staticmethod
    def _apply_excel_styles(worksheet):
        """راست به چپ، هدر خاکستری و عرض ستون متناسب با محتوا"""
        worksheet.sheet_view.rightToLeft = True

        header_fill = PatternFill(start_color='E6E6E6', end_color='E6E6E6', fill_type='solid')
        header_font = Font(name='Tahoma', size=12, bold=True)
        for cell in worksheet[1]:
            cell.fill = header_fill
            cell.font = header_font
            cell.alignment = Alignment(horizontal='center', vertical='center')

        for row in worksheet.iter_rows(min_row=2):
            for cell in row:
                cell.font = Font(name='Tahoma', size=11)
                cell.alignment = Alignment(horizontal='right', vertical='center')

        for i, column in enumerate(worksheet.columns):
            max_length = max((len(str(cell.value)) for cell in column if cell.value is not None), default=0)
            worksheet.column_dimensions[get_column_letter(i + 1)].width = max(max_length + 4, 15)
