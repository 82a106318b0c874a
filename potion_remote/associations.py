from collections import namedtuple

from .exceptions import MissingForeignKeyError, UnknownAssociationError

ONE_TO_MANY = 'one-to-many'
ONE_TO_ONE = 'one-to-one'
MANY_TO_ONE = 'many-to-one'

ASSOCIATION_KINDS = (ONE_TO_MANY, ONE_TO_ONE, MANY_TO_ONE)


class AssociationDescriptor(namedtuple('AssociationDescriptor', 'name kind path foreign_key target')):
    """
    Immutable declaration of one association.

    :param str name: association name
    :param str kind: one of ``ONE_TO_MANY``, ``ONE_TO_ONE`` or ``MANY_TO_ONE``
    :param path: URI template with ``:attribute`` tokens, or a callable returning one for an instance
    :param str foreign_key: attribute holding the id of the remote resource (many-to-one only)
    :param target: target model reference; defaults to the singular, camel-cased association name
    """
    __slots__ = ()

    @property
    def foreign_key_attribute(self):
        return self.foreign_key or '{}_id'.format(self.name)


class AssociationRegistry(object):
    """
    Associations declared on one model class, keyed by name.

    Every model class owns its own registry; subclasses receive a copy of their parent's registry when they are
    created, so that associations declared on a subclass never show up on the parent.

    :param owner: the model class this registry belongs to
    :param dict associations: initial associations
    """

    def __init__(self, owner=None, associations=None):
        self.owner = owner
        self._associations = dict(associations or {})

    def declare(self, name, kind, path=None, foreign_key=None, target=None):
        if kind not in ASSOCIATION_KINDS:
            raise ValueError('Unknown association kind: {}'.format(repr(kind)))
        if foreign_key is not None and kind != MANY_TO_ONE:
            raise MissingForeignKeyError(name, kind)

        descriptor = AssociationDescriptor(name, kind, path, foreign_key, target)
        self._associations[name] = descriptor
        return descriptor

    def lookup(self, name):
        try:
            return self._associations[name]
        except KeyError:
            raise UnknownAssociationError(name, self.owner)

    def copy(self, owner=None):
        return self.__class__(owner, self._associations)

    def update(self, registry):
        self._associations.update(registry._associations)

    def names(self):
        return list(self._associations)

    def __contains__(self, name):
        return name in self._associations

    def __iter__(self):
        return iter(self._associations)

    def __len__(self):
        return len(self._associations)

    def __repr__(self):
        return '<AssociationRegistry {} {}>'.format(
            self.owner.__name__ if self.owner else None,
            sorted(self._associations))


class BoundAssociation(object):
    """
    The accessor of one association on one model instance.

    Calling it returns the association value, fetching it on first access::

        car.wheels()             # fetches /cars/1/wheels once
        car.wheels(reload=True)  # always fetches
    """

    def __init__(self, resolver, name):
        self.resolver = resolver
        self.name = name

    def __call__(self, reload=False):
        return self.resolver.get(self.name, reload=reload)

    def fetch(self):
        return self.resolver.fetch(self.name)

    def set(self, value):
        self.resolver.set(self.name, value)

    def can_resolve(self):
        return self.resolver.can_resolve(self.name)

    def is_cached(self):
        return self.resolver.is_cached(self.name)

    @property
    def uri(self):
        return self.resolver.uri(self.name)

    def __repr__(self):
        return '<BoundAssociation {}.{}>'.format(type(self.resolver.instance).__name__, self.name)


class Association(object):
    """
    Base class for association declarations in the body of a :class:`Model`. The model metaclass registers each
    declaration with the class :class:`AssociationRegistry` under its attribute name.

    Reading the attribute from an instance returns a :class:`BoundAssociation`; assigning to it replaces the cached
    association value.

    :param target: target model class, registered model name, dotted import path or ``'self'``
    :param path: URI template with ``:attribute`` tokens, or a callable taking the instance
    :param str foreign_key: attribute holding the remote id (:class:`BelongsTo` only)
    """
    kind = None

    def __init__(self, target=None, path=None, foreign_key=None):
        if foreign_key is not None and self.kind != MANY_TO_ONE:
            raise MissingForeignKeyError(None, self.kind)
        self.target = target
        self.path = path
        self.foreign_key = foreign_key
        self.name = None

    def bind(self, model, name):
        if self.name is None:
            self.name = name
        return model.associations.declare(name,
                                          self.kind,
                                          path=self.path,
                                          foreign_key=self.foreign_key,
                                          target=self.target)

    def __get__(self, obj, owner):
        if obj is None:
            return self
        return BoundAssociation(obj.resolver, self.name)

    def __set__(self, obj, value):
        obj.resolver.set(self.name, value)

    def __repr__(self):
        return '{}({})'.format(self.__class__.__name__, repr(self.name))


class HasMany(Association):
    """
    One-to-many association, found at ``/{model plural}/{id}/{name plural}``.
    """
    kind = ONE_TO_MANY


class HasOne(Association):
    """
    One-to-one association, found at ``/{model plural}/{id}/{name singular}``.
    """
    kind = ONE_TO_ONE


class BelongsTo(Association):
    """
    Many-to-one association, found at ``/{name plural}/{foreign key value}``. The foreign key defaults to
    ``{name}_id``.
    """
    kind = MANY_TO_ONE


ASSOCIATION_CLASSES = {
    ONE_TO_MANY: HasMany,
    ONE_TO_ONE: HasOne,
    MANY_TO_ONE: BelongsTo
}
