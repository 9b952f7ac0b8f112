"""
کلاینت سرویس داده راه دور
تمام مخازن (repository) از طریق این کلاینت با سرویس ارتباط برقرار می‌کنند.
"""
from collections import namedtuple

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from config.settings import ServiceConfig
from utils.exceptions import (
    ConflictError,
    NotFoundError,
    TransportError,
    ValidationError,
)
from utils.logger_config import setup_logger

# راه‌اندازی لاگر
logger = setup_logger('database.api_client')

Page = namedtuple('Page', ['items', 'count'])

# فقط خواندنی‌ها تکرار می‌شوند؛ POST به مسیرهای filter نیز خواندنی است
_RETRY_STATUSES = (500, 502, 503, 504)


def unwrap(payload):
    """استخراج بخش data از پاسخ {status, message, data}"""
    if isinstance(payload, dict) and 'data' in payload:
        return payload['data']
    return payload


def to_page(payload):
    """تبدیل پاسخ صفحه‌بندی شده {data: [...], details: {count}} به Page"""
    body = unwrap(payload) or {}
    if isinstance(body, list):
        return Page(body, len(body))
    items = body.get('data') or []
    count = (body.get('details') or {}).get('count', len(items))
    return Page(items, count)


def to_record(payload):
    """استخراج رکورد تکی از پاسخ؛ سرویس رکورد را در data.data برمی‌گرداند"""
    body = unwrap(payload)
    if isinstance(body, dict) and isinstance(body.get('data'), dict):
        return body['data']
    return body


class ApiClient:
    """کلاینت HTTP با احراز هویت Bearer برای سرویس داده"""

    def __init__(self, config=None, session=None):
        self.config = config or ServiceConfig()
        self.session = session or requests.Session()
        self.session.headers.update({'Content-Type': 'application/json'})
        if self.config.token:
            self.session.headers['Authorization'] = f'Bearer {self.config.token}'
        self._read_session = self._build_read_session()

    def _build_read_session(self):
        """نشست جداگانه با سیاست تکرار برای درخواست‌های خواندنی"""
        retry = Retry(
            total=self.config.read_retries,
            connect=self.config.read_retries,
            read=self.config.read_retries,
            status=self.config.read_retries,
            backoff_factor=0.3,
            status_forcelist=_RETRY_STATUSES,
            allowed_methods=frozenset({'GET', 'POST'}),
            raise_on_status=False,
        )
        read_session = requests.Session()
        read_session.headers.update(self.session.headers)
        adapter = HTTPAdapter(max_retries=retry)
        read_session.mount('http://', adapter)
        read_session.mount('https://', adapter)
        return read_session

    def set_token(self, token):
        """به‌روزرسانی توکن دسترسی در هر دو نشست"""
        for session in (self.session, self._read_session):
            session.headers['Authorization'] = f'Bearer {token}'

    def _url(self, endpoint):
        return f"{self.config.base_url.rstrip('/')}/{endpoint.lstrip('/')}"

    @staticmethod
    def _is_read(method, endpoint):
        return method == 'GET' or (method == 'POST' and endpoint.split('?')[0].endswith('/filter'))

    def request(self, method, endpoint, json=None, params=None):
        """
        ارسال درخواست و تبدیل پاسخ‌های ناموفق به خطاهای دامنه

        Raises:
            ConflictError: وضعیت 409
            NotFoundError: وضعیت 404
            ValidationError: وضعیت 400 یا 422
            TransportError: سایر خطاها یا قطع ارتباط
        """
        method = method.upper()
        session = self._read_session if self._is_read(method, endpoint) else self.session
        try:
            response = session.request(
                method,
                self._url(endpoint),
                json=json,
                params=params,
                timeout=self.config.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"خطا در ارتباط با سرور برای {method} {endpoint}: {str(e)}")
            raise TransportError(f'خطا در ارتباط با سرور: {str(e)}') from e

        if response.ok:
            if not response.content:
                return None
            try:
                return response.json()
            except ValueError as e:
                logger.error(f"پاسخ نامعتبر از سرور برای {method} {endpoint}")
                raise TransportError('پاسخ نامعتبر از سرور') from e

        message = self._error_message(response)
        status = response.status_code
        logger.error(f"درخواست {method} {endpoint} با وضعیت {status} ناموفق بود: {message}")
        if status == 409:
            raise ConflictError(message, status_code=status)
        if status == 404:
            raise NotFoundError(message, status_code=status)
        if status in (400, 422):
            raise ValidationError(message, status_code=status)
        raise TransportError(message, status_code=status)

    @staticmethod
    def _error_message(response):
        try:
            body = response.json()
        except ValueError:
            body = {}
        if isinstance(body, dict) and body.get('message'):
            return body['message']
        return f'HTTP error! status: {response.status_code}'

    def get(self, endpoint, params=None):
        return self.request('GET', endpoint, params=params)

    def post(self, endpoint, data=None, params=None):
        return self.request('POST', endpoint, json=data, params=params)

    def put(self, endpoint, data=None):
        return self.request('PUT', endpoint, json=data)

    def delete(self, endpoint, data=None):
        return self.request('DELETE', endpoint, json=data)

    def list_page(self, endpoint, filters=None, page_index=0, page_size=None, extra_params=None):
        """
        دریافت یک صفحه از لیست فیلتر شده
        اگر filters داده شود به مسیر filter با POST ارسال می‌شود
        """
        params = {
            'pageIndex': page_index,
            'pageSize': page_size or self.config.page_size,
        }
        if extra_params:
            params.update(extra_params)
        if filters is None:
            payload = self.get(endpoint, params=params)
        else:
            payload = self.post(f"{endpoint.rstrip('/')}/filter", data=filters, params=params)
        return to_page(payload)

    def iterate(self, endpoint, filters=None, page_size=None, extra_params=None):
        """پیمایش تمام صفحات یک لیست"""
        page_size = page_size or self.config.page_size
        page_index = 0
        seen = 0
        while True:
            page = self.list_page(endpoint, filters, page_index, page_size, extra_params)
            for item in page.items:
                yield item
            seen += len(page.items)
            if not page.items or len(page.items) < page_size or seen >= page.count:
                return
            page_index += 1

    def close(self):
        self.session.close()
        self._read_session.close()
