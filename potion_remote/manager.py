from datetime import datetime, timezone
import logging
import re

import aniso8601
import inflection

from .client import is_success
from .exceptions import ConfigurationError, ItemNotFound, UnresolvedTokenError
from .paths import interpolate
from . import schema, signals
from .utils import url

log = logging.getLogger(__name__)

CREATED = 201
UPDATED = 200


class Manager(object):
    """
    Reads and persists the instances of one model class through the :class:`ResourceClient` of its application.

    An instance is *new* while it has no ``id`` and *persisted* afterwards. Saving a new instance ``POST``\\ s all of
    its attributes to the model endpoint and expects ``201 Created``; saving a persisted instance ``PUT``\\ s the
    savable attributes to ``{endpoint}/{id}`` and expects ``200 OK``. On success the response body is merged into
    the attributes; otherwise the ``errors`` reported by the remote service are added to ``instance.errors``.

    :param model: model class
    """

    def __init__(self, model):
        self.model = model

    @property
    def client(self):
        application = self.model.application
        if application is None:
            raise ConfigurationError('{} is not bound to an application.'.format(self.model.__name__))
        return application.client

    @property
    def endpoint(self):
        return self.model.meta.uri

    def instance_uri(self, id):
        return url(self.endpoint, id)

    def item_uri(self, item):
        """
        :return: the endpoint interpolated against the attributes of ``item``, followed by its id if it has one
        :raises UnresolvedTokenError: if an endpoint token cannot be filled
        """
        endpoint = interpolate(self.endpoint, item.attributes)
        if item.new_record:
            return endpoint
        return url(endpoint, item.id)

    def instances(self, where=None):
        if where:
            return self.client.get(url(self.endpoint, 'search'), params=where, model=self.model)
        return self.client.get(self.endpoint, model=self.model)

    def first(self, where=None):
        items = self.instances(where)
        if not items:
            return None
        return items[0]

    def read(self, id):
        return self.client.get(self.instance_uri(id), model=self.model)

    def create(self, properties):
        item = self.model(properties)
        self.save(item)
        return item

    def update_all(self, properties):
        return is_success(self.client.put(self.endpoint, properties).status)

    def delete_by_id(self, id, uri=None):
        if id is None and uri is None:
            return False
        response = self.client.delete(uri or self.instance_uri(id))
        return is_success(response.status)

    def savable_attributes(self, item):
        names = self.model.meta.savable_attributes
        if names is None:
            names = list(item.attributes)
        names = list(names) + ['id']
        return {name: item.attributes[name] for name in names if name in item.attributes}

    def save(self, item):
        item.errors.clear()

        try:
            uri = self.item_uri(item)
        except UnresolvedTokenError as e:
            item.errors.add(e.token, 'is required to save {}'.format(self.model.__name__))
            return False

        if item.new_record:
            method, expected_status, payload = 'post', CREATED, dict(item.attributes)
            before, after = signals.before_create, signals.after_create
        else:
            method, expected_status, payload = 'put', UPDATED, self.savable_attributes(item)
            before, after = signals.before_update, signals.after_update

        signals.before_save.send(item)
        before.send(item)

        response = getattr(self.client, method)(uri, payload)

        if response.status == expected_status and isinstance(response.body, dict):
            item.attributes.update(response.body)
            after.send(item)
            signals.after_save.send(item)
            return True

        log.info('%s %s rejected with status %s', method.upper(), uri, response.status)
        self.add_errors(item, response)
        signals.save_failed.send(item, status=response.status, errors=item.errors.as_dict())
        return False

    def add_errors(self, item, response):
        errors = response.body.get('errors') if isinstance(response.body, dict) else None

        if errors is not None and not schema.ERRORS.is_valid(errors):
            log.warning('Ignoring malformed errors from %s: %r', self.model.__name__, errors)
            errors = None

        if errors:
            item.errors.update(errors)
        else:
            item.errors.add('base', 'was rejected by the remote service (status {})'.format(response.status))

    def destroy(self, item):
        if item.new_record:
            return False

        try:
            uri = self.item_uri(item)
        except UnresolvedTokenError as e:
            item.errors.add(e.token, 'is required to destroy {}'.format(self.model.__name__))
            return False

        signals.before_destroy.send(item)
        success = self.model.delete(item.id, uri)
        signals.after_destroy.send(item, success=success)
        return success

    def reload(self, item):
        if item.new_record:
            raise ItemNotFound(self.model, None)

        try:
            uri = self.item_uri(item)
        except UnresolvedTokenError as e:
            log.info('Cannot reload %s %r: %s', self.model.__name__, item.id, e)
            raise ItemNotFound(self.model, item.id)

        fresh = self.client.get(uri, model=self.model)
        if not isinstance(fresh, self.model):
            raise ItemNotFound(self.model, item.id)
        item.attributes = dict(fresh.attributes)
        return item

    def cache_key(self, item):
        prefix = inflection.pluralize(self.model.meta.name)

        if item.new_record:
            return '{}/new'.format(prefix)

        timestamp = item.attributes.get('updated_at')
        if timestamp is not None:
            return '{}/{}-{}'.format(prefix, item.id, number_timestamp(timestamp))
        return '{}/{}'.format(prefix, item.id)


def number_timestamp(value):
    """
    Normalizes a timestamp to a ``YYYYMMDDHHMMSS`` string in UTC.

    >>> number_timestamp('2012-05-04T10:20:30+02:00')
    '20120504082030'
    """
    if isinstance(value, (int, float)):
        value = datetime.fromtimestamp(value, timezone.utc)
    elif isinstance(value, str):
        try:
            value = aniso8601.parse_datetime(value)
        except ValueError:
            return re.sub(r'\D', '', value)

    if getattr(value, 'tzinfo', None) is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime('%Y%m%d%H%M%S')
