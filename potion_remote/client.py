from collections import namedtuple
import logging

from .exceptions import RemoteAuthenticationError

log = logging.getLogger(__name__)

Response = namedtuple('Response', 'status body')


def is_success(status):
    return 200 <= status < 300


class Collection(list):
    """
    A list of model instances fetched from a collection resource.

    .. attribute:: model

        The model class of the items.

    .. attribute:: parent

        The instance whose association this collection belongs to, if any.
    """

    def __init__(self, items=(), model=None, parent=None):
        super(Collection, self).__init__(items)
        self.model = model
        self.parent = parent

    def first(self):
        return self[0] if self else None

    def __repr__(self):
        return '<Collection {} {}>'.format(self.model.__name__ if self.model else None,
                                           super(Collection, self).__repr__())


class ResourceClient(object):
    """
    Reads and writes resources of one :class:`Application`.

    Every response is checked against the ``auth_exception`` signature of the application before anything else; a
    matching response raises :class:`RemoteAuthenticationError`. Root JSON is stripped afterwards when the
    application is configured with ``strip_root_json``.

    :param application: an :class:`Application`
    """

    def __init__(self, application):
        self.application = application

    def request(self, method, uri, params=None):
        application = self.application
        status, body = application.connection.request(method, uri, params, credentials=application.credentials())

        if application.is_auth_exception(status, body):
            raise RemoteAuthenticationError(status, body, uri)
        return Response(status, self.strip_root(body))

    def get(self, uri, params=None, model=None, parent=None):
        """
        :return: a ``model`` instance for a JSON object, a :class:`Collection` for a JSON array, ``None`` for
            an empty or unsuccessful response; the plain decoded body if no ``model`` is given.
        """
        response = self.request('GET', uri, params)
        if not is_success(response.status):
            log.info('GET %s failed with status %s', uri, response.status)
            return None
        return self.parse(response.body, model, parent)

    def post(self, uri, body=None):
        return self.request('POST', uri, body)

    def put(self, uri, body=None):
        return self.request('PUT', uri, body)

    def delete(self, uri):
        return self.request('DELETE', uri)

    @staticmethod
    def parse(body, model=None, parent=None):
        if model is None or body is None:
            return body
        if isinstance(body, list):
            return Collection((model(item) for item in body), model=model, parent=parent)
        if isinstance(body, dict):
            return model(body)
        return body

    def strip_root(self, body):
        root = self.application.strip_root_json
        if not root:
            return body
        body = self._unwrap(body, root)
        if isinstance(body, list):
            return [self._unwrap(item, root) for item in body]
        return body

    @staticmethod
    def _unwrap(value, root):
        if isinstance(value, dict) and len(value) == 1:
            key, inner = next(iter(value.items()))
            if key == root or (root is True and key != 'errors' and isinstance(inner, (dict, list))):
                return inner
        return value
