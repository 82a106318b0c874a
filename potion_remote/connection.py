import logging

import requests

from .exceptions import ConfigurationError

log = logging.getLogger(__name__)

QUERY_METHODS = ('GET', 'HEAD', 'DELETE')


class Connection(object):
    """
    Issues HTTP requests to the base URL of an :class:`Application` using a :class:`requests.Session`.

    Parameters of ``GET`` and ``DELETE`` requests are sent in the query string; all other requests send them as a
    JSON body. Network errors and malformed JSON propagate unchanged; nothing is retried.

    :param application: the :class:`Application` providing URL, headers and timeout
    :param requests.Session session: optional session, e.g. with custom transport adapters mounted
    """

    def __init__(self, application, session=None):
        self.application = application
        self.session = session or requests.Session()

    def url_for(self, path):
        if '://' in path:
            return path

        base = self.application.url
        if base is None:
            raise ConfigurationError('Application "{}" has no url configured.'.format(self.application.name))
        return '/'.join((base.rstrip('/'), path.lstrip('/')))

    def request(self, method, path, params=None, credentials=None):
        """
        :return: a tuple ``(status, body)`` where ``body`` is the decoded JSON response or ``None`` if it was empty
        """
        config = self.application.config
        method = method.upper()
        kwargs = {
            'headers': dict(config['REMOTE_HEADERS']),
            'timeout': config['REMOTE_TIMEOUT']
        }

        if credentials:
            kwargs['auth'] = tuple(credentials)

        if method in QUERY_METHODS:
            kwargs['params'] = params
        elif params is not None:
            kwargs['json'] = params

        response = self.session.request(method, self.url_for(path), **kwargs)
        log.debug('%s %s -> %s', method, response.url, response.status_code)
        return response.status_code, self.parse(response)

    @staticmethod
    def parse(response):
        if not response.content or not response.content.strip():
            return None
        if not response.ok and 'json' not in response.headers.get('Content-Type', ''):
            return response.text
        return response.json()

    def close(self):
        self.session.close()
