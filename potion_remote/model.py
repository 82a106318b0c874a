import json

import inflection

from .application import get_application
from .associations import Association, AssociationRegistry, ASSOCIATION_CLASSES, ONE_TO_MANY, ONE_TO_ONE, MANY_TO_ONE
from .errors import Errors
from .manager import Manager
from .resolver import AssociationResolver
from .utils import AttributeDict, url


class ModelMeta(type):

    def __new__(mcs, name, bases, members):
        class_ = super(ModelMeta, mcs).__new__(mcs, name, bases, members)
        class_.meta = meta = AttributeDict(getattr(class_, 'meta', {}) or {})

        for base in bases:
            if hasattr(base, 'Meta'):
                meta.update({k: v for k, v in base.Meta.__dict__.items() if not k.startswith('__')})

        changes = members['Meta'].__dict__ if 'Meta' in members else {}
        for k, v in changes.items():
            if not k.startswith('__'):
                meta[k] = v

        if not changes.get('name', None):
            meta['name'] = inflection.underscore(name)

        if not changes.get('uri', None):
            meta['uri'] = url(inflection.pluralize(meta['name']))

        class_.associations = registry = AssociationRegistry(class_)
        for base in reversed(bases):
            if isinstance(getattr(base, 'associations', None), AssociationRegistry):
                registry.update(base.associations)

        for n, m in members.items():
            if isinstance(m, Association):
                m.bind(class_, n)

        application = meta.get('application')
        if isinstance(application, str):
            application = get_application(application)
        class_.application = application

        if application is not None:
            application.register(class_)

        class_.manager = Manager(class_)
        return class_


class Model(object, metaclass=ModelMeta):
    """
    A local representation of a resource on a remote service.

    Attributes are kept in a plain dictionary, :attr:`attributes`, and read with item access or :meth:`attribute`.
    Associations to other remote resources are declared in the class body with :class:`HasMany`, :class:`HasOne` and
    :class:`BelongsTo` and are fetched lazily, once per instance:

    .. code-block:: python

        class Car(Model):
            wheels = HasMany()
            engine = HasOne()
            brand = BelongsTo()
            owner = BelongsTo('Person', path='/people/:owner_key')

            class Meta:
                application = 'garage'
                savable_attributes = ('name', 'color')

        car = Car.find(7)
        car.wheels()             # GET /cars/7/wheels
        car.wheels(reload=True)  # fetches again

    An association replaces any method of the same name, so do not name associations after model methods.

    :class:`Meta` class attributes:

    =====================  ==============================  ==============================================================
    Attribute name         Default                         Description
    =====================  ==============================  ==============================================================
    name                   ---                             Name of the model; defaults to the underscored class name
    uri                    ``/{plural name}``              Endpoint of the model; may contain ``:attribute`` tokens
    application            ``None``                        The :class:`Application` (or its name) the model talks to
    savable_attributes     ``None``                        Attributes sent when updating; ``None`` sends all attributes
    default_attributes     ``()``                          Attributes set to ``None`` on new instances unless given
    =====================  ==============================  ==============================================================

    .. attribute:: meta

        A :class:`AttributeDict` of configuration attributes collected from the :class:`Meta` attributes of the base
        classes.

    .. attribute:: associations

        The :class:`AssociationRegistry` of this class.

    .. attribute:: manager

        The :class:`Manager` reading and persisting instances of this class.

    .. attribute:: resolver

        The :class:`AssociationResolver` of an instance, holding its association cache.
    """
    meta = None
    manager = None
    application = None
    associations = None

    class Meta:
        name = None
        uri = None
        application = None
        savable_attributes = None
        default_attributes = ()

    def __init__(self, attributes=None, **kwargs):
        attributes = dict(attributes or {}, **kwargs)

        self.errors = Errors()
        errors = attributes.pop('errors', None)
        if isinstance(errors, dict):
            self.errors.update(errors)

        for name in self.meta.default_attributes:
            attributes.setdefault(name, None)

        self.attributes = attributes
        self.resolver = AssociationResolver(self)

    @classmethod
    def declare_association(cls, name, kind, **options):
        association = ASSOCIATION_CLASSES[kind](**options)
        setattr(cls, name, association)
        association.bind(cls, name)
        return association

    @classmethod
    def has_many(cls, name, **options):
        return cls.declare_association(name, ONE_TO_MANY, **options)

    @classmethod
    def has_one(cls, name, **options):
        return cls.declare_association(name, ONE_TO_ONE, **options)

    @classmethod
    def belongs_to(cls, name, **options):
        return cls.declare_association(name, MANY_TO_ONE, **options)

    @classmethod
    def all(cls):
        return cls.manager.instances()

    @classmethod
    def find(cls, id):
        return cls.manager.read(id)

    @classmethod
    def where(cls, **params):
        """
        Searches the remote ``{endpoint}/search`` resource with ``params`` as query string.
        """
        return cls.manager.instances(params)

    @classmethod
    def find_by(cls, **params):
        return cls.manager.first(params)

    @classmethod
    def find_or_initialize(cls, **attributes):
        return cls.find_by(**attributes) or cls(attributes)

    @classmethod
    def find_or_create(cls, **attributes):
        return cls.find_by(**attributes) or cls.create(**attributes)

    @classmethod
    def create(cls, **attributes):
        """
        Creates a new remote resource. Check :attr:`persisted` or :attr:`errors` of the returned instance to see
        whether it succeeded.
        """
        return cls.manager.create(attributes)

    @classmethod
    def update_all(cls, **attributes):
        return cls.manager.update_all(attributes)

    @classmethod
    def delete(cls, id, uri=None):
        return cls.manager.delete_by_id(id, uri)

    @property
    def id(self):
        return self.attributes.get('id')

    @property
    def new_record(self):
        return self.attributes.get('id') is None

    @property
    def persisted(self):
        return not self.new_record

    @property
    def cache_key(self):
        return self.manager.cache_key(self)

    def attribute(self, name, default=None):
        return self.attributes.get(name, default)

    def set_attribute(self, name, value):
        self.attributes[name] = value

    def __getitem__(self, name):
        return self.attributes[name]

    def __setitem__(self, name, value):
        self.attributes[name] = value

    def __contains__(self, name):
        return name in self.attributes

    def reference(self, name, reload=False):
        """
        Reads the association ``name`` --- declared, or derived from a ``{name}_id`` attribute.
        """
        return self.resolver.get(name, reload=reload)

    def update_attribute(self, name, value):
        self.attributes[name] = value
        return self.save()

    def update_attributes(self, **attributes):
        self.attributes.update(attributes)
        return self.save()

    def save(self):
        """
        Creates or updates the remote resource.

        :return: ``True`` if the remote service accepted the changes; ``False`` otherwise, in which case
            :attr:`errors` contains the reasons
        """
        return self.manager.save(self)

    def destroy(self):
        return self.manager.destroy(self)

    def reload(self):
        """
        Replaces all attributes with those of the remote resource. Cached associations are kept.
        """
        return self.manager.reload(self)

    def to_json(self):
        return json.dumps(self.attributes)

    def __repr__(self):
        return '<{} {}>'.format(self.__class__.__name__, repr(self.attributes))
