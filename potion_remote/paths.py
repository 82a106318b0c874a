import re

import inflection

from .associations import ONE_TO_MANY, ONE_TO_ONE, MANY_TO_ONE
from .exceptions import UnresolvedTokenError, MissingForeignKeyError
from .utils import url

# Tokens must start with a letter or underscore so that port numbers are left alone.
TOKEN_PATTERN = re.compile(r':([A-Za-z_]\w*)')


def path_tokens(template):
    """
    :return: names of the attributes referenced by ``:name`` tokens in ``template``, in order of appearance
    """
    return TOKEN_PATTERN.findall(template)


def interpolate(template, attributes):
    """
    Replaces every ``:name`` token in ``template`` with the string value of ``attributes[name]``.

    >>> interpolate('/families/:family_key', {'family_key': 'noble'})
    '/families/noble'

    :raises UnresolvedTokenError: if a referenced attribute is missing or ``None``
    """

    def replace(match):
        value = attributes.get(match.group(1))
        if value is None:
            raise UnresolvedTokenError(match.group(1), template)
        return str(value)

    return TOKEN_PATTERN.sub(replace, template)


def base_name(model):
    return inflection.pluralize(model.meta.name)


def resolve_path(association, instance):
    """
    Returns the URI of the remote resource ``association`` refers to for ``instance``.

    An explicit ``path`` on the association always takes precedence, including over ``foreign_key``. Otherwise the
    URI is derived from the association kind:

    ==============  ======================================
    Kind            URI
    ==============  ======================================
    one-to-many     ``/{base}/{id}/{plural(name)}``
    one-to-one      ``/{base}/{id}/{singular(name)}``
    many-to-one     ``/{plural(name)}/{foreign key value}``
    ==============  ======================================

    :param AssociationDescriptor association:
    :param instance: a model instance
    :raises MissingForeignKeyError: if ``foreign_key`` is set on a one-to-many or one-to-one association
    :raises UnresolvedTokenError: if an attribute needed for the URI is missing
    """
    if association.foreign_key is not None and association.kind in (ONE_TO_MANY, ONE_TO_ONE):
        raise MissingForeignKeyError(association.name, association.kind)

    attributes = instance.attributes
    path = association.path
    if callable(path):
        path = path(instance)

    if path is not None:
        if '://' not in path:
            path = url(path)
        return interpolate(path, attributes)

    if association.kind == MANY_TO_ONE:
        foreign_key = association.foreign_key_attribute
        if attributes.get(foreign_key) is None:
            raise UnresolvedTokenError(foreign_key)
        return url(inflection.pluralize(association.name), attributes[foreign_key])

    if attributes.get('id') is None:
        raise UnresolvedTokenError('id')

    if association.kind == ONE_TO_MANY:
        return url(base_name(type(instance)), attributes['id'], inflection.pluralize(association.name))
    return url(base_name(type(instance)), attributes['id'], inflection.singularize(association.name))
