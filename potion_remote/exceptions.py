class RemoteError(Exception):
    pass


class ConfigurationError(RemoteError):
    pass


class UnresolvedTokenError(RemoteError):
    """
    Raised when an attribute required to build a resource URI is missing. Association getters treat this as
    "not yet fetchable" and never let it reach the caller.
    """

    def __init__(self, token, path=None):
        super(UnresolvedTokenError, self).__init__(
            'Cannot resolve ":{}" in {}'.format(token, repr(path) if path else 'resource URI'))
        self.token = token
        self.path = path


class MissingForeignKeyError(RemoteError):

    def __init__(self, name, kind):
        super(MissingForeignKeyError, self).__init__(
            '"foreign_key" is only supported on many-to-one associations, not on {} association{}'.format(
                kind, ' "{}"'.format(name) if name else ''))
        self.name = name
        self.kind = kind


class UnknownAssociationError(RemoteError, KeyError):

    def __init__(self, name, model=None):
        super(UnknownAssociationError, self).__init__(name)
        self.name = name
        self.model = model

    def __str__(self):
        if self.model is not None:
            return 'No association named "{}" declared on {}'.format(self.name, self.model.__name__)
        return 'No association named "{}"'.format(self.name)


class UnknownModelError(RemoteError):
    pass


class ItemNotFound(RemoteError):

    def __init__(self, model, id=None):
        super(ItemNotFound, self).__init__('{} with id {} not found'.format(model.__name__, repr(id)))
        self.model = model
        self.id = id


class RemoteAuthenticationError(RemoteError):

    def __init__(self, status, body=None, url=None):
        super(RemoteAuthenticationError, self).__init__(
            'Authentication failed for {} (status {})'.format(url or 'request', status))
        self.status = status
        self.body = body
        self.url = url
