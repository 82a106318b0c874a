from functools import cached_property

from jsonschema import Draft4Validator, FormatChecker


class Schema(object):
    """
    A JSON-schema with a lazily created validator. Used for checking data coming from the remote service and
    for checking configuration values.

    :param dict schema: JSON-schema
    """

    def __init__(self, schema):
        self._schema = schema

    def schema(self):
        return self._schema

    @cached_property
    def _validator(self):
        Draft4Validator.check_schema(self.schema())
        return Draft4Validator(self.schema(), format_checker=FormatChecker())

    def is_valid(self, instance):
        return self._validator.is_valid(instance)

    def iter_errors(self, instance):
        return self._validator.iter_errors(instance)

    def __repr__(self):
        return '{}({})'.format(self.__class__.__name__, repr(self._schema))


# {"name": ["can't be blank"], "age": "must be a number"}
ERRORS = Schema({
    "type": "object",
    "additionalProperties": {
        "anyOf": [
            {"type": "string"},
            {"type": "array", "items": {"type": "string"}}
        ]
    }
})

URI = Schema({
    "type": "string",
    "format": "uri"
})
