import re

from .client import ResourceClient
from .connection import Connection
from .exceptions import ConfigurationError
from . import schema

applications = {}

_SCHEME_PATTERN = re.compile(r'^[A-Za-z][A-Za-z0-9+.-]*://')


def get_application(name):
    try:
        return applications[name]
    except KeyError:
        raise ConfigurationError('No application named "{}" has been configured.'.format(name))


class Application(object):
    """
    Configuration of one remote service. Applications register themselves by name when created, so models can refer
    to them with ``Meta.application = 'name'``.

    .. code-block:: python

        app = Application('garage',
                          url='garage.example.com/api',
                          basic_auth=('user', 'secret'),
                          strip_root_json=True,
                          auth_exception={'error': 'unauthorized'})

    :param str name: name of the application
    :param str url: base URL; ``http://`` is prepended when no scheme is given
    :param basic_auth: a ``(user, password)`` tuple or a callable returning one, evaluated on every request
    :param strip_root_json: ``True`` to unwrap any single-key root object, or the name of the root key to unwrap
    :param auth_exception: a dict that is matched against response bodies, or a callable ``(status, body)``
        returning ``True`` for responses that signal an authentication failure
    :param dict config: transport settings

    =====================  ==================================  ===============================================
    Config key             Default                             Description
    =====================  ==================================  ===============================================
    REMOTE_TIMEOUT         ``10``                              Request timeout in seconds
    REMOTE_HEADERS         ``{'Accept': 'application/json'}``  Headers sent with every request
    =====================  ==================================  ===============================================

    .. attribute:: models

        Model classes bound to this application, keyed by class name and by ``Meta.name``.
    """

    def __init__(self, name, url=None, basic_auth=None, strip_root_json=None, auth_exception=None, config=None):
        self.name = name
        self.config = dict(config or {})
        self.config.setdefault('REMOTE_TIMEOUT', 10)
        self.config.setdefault('REMOTE_HEADERS', {'Accept': 'application/json'})

        self.url = url
        self.basic_auth = basic_auth
        self.strip_root_json = strip_root_json
        self.auth_exception = auth_exception
        self.models = {}

        self.connection = Connection(self)
        self.client = ResourceClient(self)

        applications[name] = self

    @property
    def url(self):
        return self._url

    @url.setter
    def url(self, value):
        if value is None:
            self._url = None
            return

        if not _SCHEME_PATTERN.match(value):
            value = 'http://{}'.format(value)

        if not schema.URI.is_valid(value):
            raise ConfigurationError('Invalid url for application "{}": {}'.format(self.name, repr(value)))
        self._url = value

    def credentials(self):
        auth = self.basic_auth
        if callable(auth):
            auth = auth()
        if not auth:
            return None
        return tuple(auth)

    def is_auth_exception(self, status, body):
        signature = self.auth_exception
        if signature is None:
            return False
        if callable(signature):
            return bool(signature(status, body))
        if isinstance(signature, dict):
            return isinstance(body, dict) and all(key in body and body[key] == value
                                                  for key, value in signature.items())
        return body == signature

    def register(self, model):
        self.models[model.__name__] = model
        self.models[model.meta.name] = model
        return model

    def __repr__(self):
        return '<Application {} {}>'.format(self.name, self.url)
