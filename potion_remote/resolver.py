import logging

from .associations import AssociationDescriptor, MANY_TO_ONE
from .exceptions import UnknownAssociationError, UnresolvedTokenError
from .paths import resolve_path
from .reference import ModelReference, default_target_name
from .signals import association_fetched

log = logging.getLogger(__name__)

ID_SUFFIX = '_id'


class AssociationResolver(object):
    """
    Resolves the associations of one model instance and caches their values for the lifetime of the instance.

    A value is fetched on first access and then served from the cache until it is explicitly reloaded or replaced.
    An association whose URI cannot be built yet --- because the instance lacks an id, a foreign key or a path
    attribute --- is never fetched; its getter returns the cached value, normally ``None``.

    Besides the associations declared on the model, every ``{name}_id`` attribute of the instance provides a
    many-to-one *reference* ``name`` that is fetched with ``Target.find(id)``.

    :param instance: the owning model instance
    """

    def __init__(self, instance):
        self.instance = instance
        self.cache = {}

    @property
    def registry(self):
        return type(self.instance).associations

    def lookup(self, name):
        """
        :return: the :class:`AssociationDescriptor` for ``name``, declared or synthesized from an id attribute
        :raises UnknownAssociationError: if there is neither
        """
        if name in self.registry:
            return self.registry.lookup(name)
        if self.is_reference(name):
            return AssociationDescriptor(name, MANY_TO_ONE, None, name + ID_SUFFIX, None)
        raise UnknownAssociationError(name, type(self.instance))

    def is_reference(self, name):
        return name not in self.registry and name + ID_SUFFIX in self.instance.attributes

    def references(self):
        return [key[:-len(ID_SUFFIX)] for key in self.instance.attributes
                if key.endswith(ID_SUFFIX) and len(key) > len(ID_SUFFIX) and self.is_reference(key[:-len(ID_SUFFIX)])]

    def target(self, name):
        association = self.lookup(name)
        return ModelReference(association.target or default_target_name(name)).resolve(type(self.instance))

    def uri(self, name):
        """
        :return: the URI of association ``name`` or ``None`` if it cannot be built yet
        """
        try:
            return resolve_path(self.lookup(name), self.instance)
        except UnresolvedTokenError:
            return None

    def can_resolve(self, name):
        return self.uri(name) is not None

    def is_cached(self, name):
        return name in self.cache

    def cached(self, name):
        return self.cache.get(name)

    def get(self, name, reload=False):
        if not self.can_resolve(name):
            log.debug('Deferring %s.%s; its URI cannot be built yet', type(self.instance).__name__, name)
            return self.cached(name)

        if reload or not self.is_cached(name):
            self.fetch(name)
        else:
            log.debug('Cache hit for %s.%s', type(self.instance).__name__, name)
        return self.cached(name)

    def fetch(self, name):
        association = self.lookup(name)
        try:
            uri = resolve_path(association, self.instance)
        except UnresolvedTokenError as e:
            log.debug('Not fetching %s.%s: %s', type(self.instance).__name__, name, e)
            return None

        target = self.target(name)
        log.debug('Fetching %s.%s from %s', type(self.instance).__name__, name, uri)

        if self.is_reference(name):
            value = target.find(self.instance.attributes[association.foreign_key_attribute])
        else:
            # targets without an application are read through the application of the owner
            owner = target if target.application is not None else type(self.instance)
            value = owner.manager.client.get(uri, model=target, parent=self.instance)

        self.set(name, value)
        association_fetched.send(self.instance, name=name, value=value)
        return value

    def set(self, name, value):
        self.lookup(name)
        self.cache[name] = value

    def __repr__(self):
        return '<AssociationResolver {} {}>'.format(type(self.instance).__name__, sorted(self.cache))
