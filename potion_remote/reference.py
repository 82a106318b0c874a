from importlib import import_module
import inspect

import inflection

from .exceptions import UnknownModelError


def default_target_name(association_name):
    """
    >>> default_target_name('wheels')
    'Wheel'
    >>> default_target_name('line_item')
    'LineItem'
    """
    return inflection.camelize(inflection.singularize(association_name))


class ModelReference(object):
    def __init__(self, value):
        self.value = value

    def resolve(self, binding=None):
        """
        Attempt to resolve the reference value and return the matching :class:`Model` class.

        The value may be a model class, ``'self'``, the class name or ``Meta.name`` of a model registered with the
        same :class:`Application` as ``binding``, or a dotted import path.

        :param binding: model class the reference is resolved from
        """
        name = self.value

        if name == 'self':
            return binding

        from .model import Model
        if inspect.isclass(name) and issubclass(name, Model):
            return name

        application = binding.application if binding is not None else None
        if application is not None:
            model = application.models.get(name)
            if model is not None:
                return model

        if isinstance(name, str) and '.' in name:
            module_name, class_name = name.rsplit('.', 1)
            try:
                return getattr(import_module(module_name), class_name)
            except (ImportError, AttributeError):
                raise UnknownModelError('Model "{}" cannot be imported.'.format(name))

        if application is not None:
            raise UnknownModelError('Model named "{}" is not registered with application "{}".'.format(
                name, application.name))
        raise UnknownModelError('Model named "{}" cannot be found; {} is not bound to an application.'.format(
            name, binding.__name__ if binding is not None else 'the reference'))

    def __repr__(self):
        return "<ModelReference '{}'>".format(self.value)
