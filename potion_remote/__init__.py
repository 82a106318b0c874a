from .application import Application, applications, get_application
from .associations import (
    AssociationDescriptor,
    AssociationRegistry,
    HasMany,
    HasOne,
    BelongsTo,
    ONE_TO_MANY,
    ONE_TO_ONE,
    MANY_TO_ONE,
)
from .client import Collection, ResourceClient, Response
from .connection import Connection
from .errors import Errors
from .exceptions import (
    RemoteError,
    ConfigurationError,
    UnresolvedTokenError,
    MissingForeignKeyError,
    UnknownAssociationError,
    UnknownModelError,
    ItemNotFound,
    RemoteAuthenticationError,
)
from .manager import Manager
from .model import Model
from .paths import resolve_path, interpolate

__all__ = (
    'Application',
    'applications',
    'get_application',
    'AssociationDescriptor',
    'AssociationRegistry',
    'HasMany',
    'HasOne',
    'BelongsTo',
    'ONE_TO_MANY',
    'ONE_TO_ONE',
    'MANY_TO_ONE',
    'Collection',
    'ResourceClient',
    'Response',
    'Connection',
    'Errors',
    'RemoteError',
    'ConfigurationError',
    'UnresolvedTokenError',
    'MissingForeignKeyError',
    'UnknownAssociationError',
    'UnknownModelError',
    'ItemNotFound',
    'RemoteAuthenticationError',
    'Manager',
    'Model',
    'resolve_path',
    'interpolate',
)
