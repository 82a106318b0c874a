from unittest import TestCase
from urllib.parse import urlsplit

from flask import Flask
from requests import Response
from requests.adapters import BaseAdapter
from requests.structures import CaseInsensitiveDict

from potion_remote import Application

REMOTE_URL = 'http://remote.test'


class FlaskAdapter(BaseAdapter):
    """
    A ``requests`` transport adapter that hands requests to the test client of a Flask application and records
    ``(method, path)`` of every request it sends.
    """

    def __init__(self, app):
        super(FlaskAdapter, self).__init__()
        self.client = app.test_client()
        self.requests = []

    def send(self, request, stream=False, timeout=None, verify=True, cert=None, proxies=None):
        parsed = urlsplit(request.url)
        self.requests.append((request.method, parsed.path))

        headers = {k: v for k, v in request.headers.items() if k.lower() not in ('content-length', 'content-type')}
        result = self.client.open(parsed.path,
                                  method=request.method,
                                  query_string=parsed.query,
                                  data=request.body,
                                  content_type=request.headers.get('Content-Type'),
                                  headers=headers)

        response = Response()
        response.status_code = result.status_code
        response.reason = result.status
        response.headers = CaseInsensitiveDict(result.headers)
        response._content = result.get_data()
        response.encoding = 'utf-8'
        response.url = request.url
        response.request = request
        return response

    def close(self):
        pass


class BaseTestCase(TestCase):

    def setUp(self):
        self.app = self.create_app()
        self.application = self.create_application()
        self.adapter = FlaskAdapter(self.app)
        self.application.connection.session.mount(REMOTE_URL, self.adapter)

    def create_app(self):
        app = Flask(__name__)
        app.secret_key = 'XXX'
        app.debug = True
        return app

    def create_application(self):
        return Application('test', url=REMOTE_URL)

    @property
    def requests(self):
        return self.adapter.requests

    def assertRequests(self, expected, msg=None):
        self.assertEqual(expected, self.adapter.requests, msg)
        del self.adapter.requests[:]
