#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
ماژول ترتیب‌دهی جستجو

جستجوی حین تایپ با یک تأخیر ثابت تجمیع می‌شود و هر درخواست یک شماره ترتیب صعودی
می‌گیرد. پاسخی که مربوط به آخرین درخواست صادر شده نباشد کنار گذاشته می‌شود، حتی اگر
دیرتر از پاسخ جدیدتر برسد.
"""

import threading

from config.settings import ServiceConfig
from utils.exceptions import SettlementError
from utils.logger_config import setup_logger

# راه‌اندازی لاگر
logger = setup_logger('modules.search_sequencer')


class SearchSequencer:
    """
    تجمیع جستجوها و حذف پاسخ‌های قدیمی

    Args:
        fetch: تابعی که query را گرفته و نتیجه را برمی‌گرداند
        on_result: فراخوانی با (query، نتیجه) فقط برای آخرین درخواست
        delay: تأخیر تجمیع بر حسب ثانیه؛ پیش‌فرض search_debounce از پیکربندی
        on_error: فراخوانی با (query، خطا) برای آخرین درخواست ناموفق
        timer_factory: سازنده تایمر با امضای threading.Timer
    """

    def __init__(self, fetch, on_result, delay=None, on_error=None, timer_factory=threading.Timer, config=None):
        self.fetch = fetch
        self.on_result = on_result
        self.on_error = on_error
        self.delay = delay if delay is not None else (config or ServiceConfig()).search_debounce
        self._timer_factory = timer_factory
        self._lock = threading.Lock()
        self._latest = 0
        self._timer = None
        self.dropped = 0

    @property
    def latest(self):
        return self._latest

    def issue(self):
        """صدور شماره ترتیب جدید؛ تمام درخواست‌های قبلی قدیمی می‌شوند"""
        with self._lock:
            self._latest += 1
            return self._latest

    def is_current(self, sequence):
        with self._lock:
            return sequence == self._latest

    def submit(self, query):
        """ثبت جستجوی جدید؛ جستجوی در انتظار قبلی لغو می‌شود"""
        sequence = self.issue()
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = self._timer_factory(self.delay, self._run, args=(sequence, query))
            self._timer.daemon = True
        self._timer.start()
        return sequence

    def _run(self, sequence, query):
        if not self.is_current(sequence):
            # جستجوی جدیدتری پیش از اجرا صادر شده است
            return
        try:
            result = self.fetch(query)
        except SettlementError as e:
            if self.is_current(sequence):
                logger.error(f"خطا در جستجوی {query!r}: {e.message}")
                if self.on_error:
                    self.on_error(query, e)
            else:
                self._drop(sequence)
            return
        self.deliver(sequence, query, result)

    def deliver(self, sequence, query, result):
        """تحویل پاسخ به مصرف‌کننده در صورتی که مربوط به آخرین درخواست باشد"""
        if not self.is_current(sequence):
            self._drop(sequence)
            return False
        self.on_result(query, result)
        return True

    def _drop(self, sequence):
        with self._lock:
            self.dropped += 1
            latest = self._latest
        logger.info(f"پاسخ قدیمی جستجو با شماره {sequence} کنار گذاشته شد (آخرین: {latest})")

    def cancel(self):
        """لغو جستجوی در انتظار"""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
