from collections import OrderedDict


class Errors(object):
    """
    Error messages of a model instance, keyed by attribute name.

    Reading an attribute without errors returns an empty list:

    >>> errors = Errors()
    >>> errors.add('name', "can't be blank")
    >>> errors['name']
    ["can't be blank"]
    >>> errors['age']
    []
    """

    def __init__(self):
        self._messages = OrderedDict()

    def add(self, attribute, message):
        messages = self._messages.setdefault(str(attribute), [])
        if message not in messages:
            messages.append(message)

    def update(self, errors):
        """
        Folds a mapping of attribute names to a message or a list of messages into this collection.
        """
        for attribute, messages in (errors or {}).items():
            if isinstance(messages, (list, tuple)):
                for message in messages:
                    self.add(attribute, message)
            else:
                self.add(attribute, messages)

    def clear(self):
        self._messages.clear()

    def full_messages(self):
        return [message if attribute == 'base' else '{} {}'.format(attribute, message)
                for attribute, messages in self._messages.items()
                for message in messages]

    def as_dict(self):
        return {attribute: list(messages) for attribute, messages in self._messages.items()}

    def __getitem__(self, attribute):
        return list(self._messages.get(attribute, ()))

    def __contains__(self, attribute):
        return bool(self._messages.get(attribute))

    def __iter__(self):
        return iter(self._messages.items())

    def __len__(self):
        return sum(len(messages) for messages in self._messages.values())

    def __bool__(self):
        return len(self) > 0

    def __repr__(self):
        return '{}({})'.format(self.__class__.__name__, repr(self.as_dict()))
