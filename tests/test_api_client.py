#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
تست کلاینت سرویس داده با جایگزینی requests.Session.request
"""

from unittest.mock import MagicMock, patch

import pytest
import requests

from config.settings import ServiceConfig
from database.api_client import ApiClient, Page, to_page, to_record
from utils.exceptions import ConflictError, NotFoundError, TransportError, ValidationError


def _response(status, body=None):
    response = MagicMock()
    response.status_code = status
    response.ok = 200 <= status < 400
    response.content = b'' if body is None else b'{}'
    if body is None:
        response.json.side_effect = ValueError('no body')
    else:
        response.json.return_value = body
    return response


@pytest.fixture
def client():
    api = ApiClient(ServiceConfig(base_url='http://api.test/api', token='secret', page_size=2))
    yield api
    api.close()


def test_bearer_token_header(client):
    assert client.session.headers['Authorization'] == 'Bearer secret'
    client.set_token('other')
    assert client._read_session.headers['Authorization'] == 'Bearer other'


def test_filter_posts_are_reads():
    assert ApiClient._is_read('GET', '/cheque/1')
    assert ApiClient._is_read('POST', '/cheque/filter')
    assert not ApiClient._is_read('POST', '/cheque')
    assert not ApiClient._is_read('PUT', '/cheque/1')


@pytest.mark.parametrize('status, error', [
    (409, ConflictError),
    (404, NotFoundError),
    (400, ValidationError),
    (422, ValidationError),
    (500, TransportError),
])
def test_status_mapping(client, status, error):
    with patch.object(requests.Session, 'request', return_value=_response(status, {'message': 'پیام سرور'})):
        with pytest.raises(error) as info:
            client.post('/customer-relation', {'customerUserId': 'c1', 'managerUserId': 'm1'})
    assert info.value.message == 'پیام سرور'
    assert info.value.status_code == status


def test_error_message_without_body(client):
    with patch.object(requests.Session, 'request', return_value=_response(503)):
        with pytest.raises(TransportError) as info:
            client.get('/cheque/1')
    assert info.value.message == 'HTTP error! status: 503'


def test_connection_error_is_transport_error(client):
    with patch.object(requests.Session, 'request', side_effect=requests.ConnectionError('down')):
        with pytest.raises(TransportError):
            client.get('/cheque/1')


def test_request_url_and_payload(client):
    with patch.object(requests.Session, 'request', return_value=_response(200, {'data': {'data': {'id': 'x'}}})) as request:
        record = to_record(client.put('/cheque/x', {'sayyadi': True}))
    assert record == {'id': 'x'}
    args, kwargs = request.call_args
    assert args == ('PUT', 'http://api.test/api/cheque/x')
    assert kwargs['json'] == {'sayyadi': True}


def test_empty_success_body_returns_none(client):
    with patch.object(requests.Session, 'request', return_value=_response(200)):
        assert client.delete('/factor-cheque/1') is None


def test_to_page_variants():
    assert to_page({'data': {'data': [1, 2], 'details': {'count': 7}}}) == Page([1, 2], 7)
    assert to_page({'data': [1]}) == Page([1], 1)
    assert to_page(None) == Page([], 0)


def test_list_page_uses_filter_endpoint_and_paging(client):
    body = {'data': {'data': [{'id': 1}], 'details': {'count': 1}}}
    with patch.object(requests.Session, 'request', return_value=_response(200, body)) as request:
        page = client.list_page('/cheque', {'status': 'created'}, page_index=3)
    assert page == Page([{'id': 1}], 1)
    args, kwargs = request.call_args
    assert args == ('POST', 'http://api.test/api/cheque/filter')
    assert kwargs['params'] == {'pageIndex': 3, 'pageSize': 2}


def test_iterate_walks_all_pages(client):
    pages = [
        _response(200, {'data': {'data': [1, 2], 'details': {'count': 5}}}),
        _response(200, {'data': {'data': [3, 4], 'details': {'count': 5}}}),
        _response(200, {'data': {'data': [5], 'details': {'count': 5}}}),
    ]
    with patch.object(requests.Session, 'request', side_effect=pages) as request:
        items = list(client.iterate('/factor-cheque', {'factorId': 'f1'}))
    assert items == [1, 2, 3, 4, 5]
    assert [call.kwargs['params']['pageIndex'] for call in request.call_args_list] == [0, 1, 2]


def test_read_session_has_retry_adapter(client):
    adapter = client._read_session.get_adapter('http://api.test/api')
    assert adapter.max_retries.total == client.config.read_retries
    assert 503 in adapter.max_retries.status_forcelist
    write_adapter = client.session.get_adapter('http://api.test/api')
    assert write_adapter.max_retries.total == 0
