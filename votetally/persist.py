'''Conversion of tally objects to JSON-ready dictionaries.

All value types of Votetally (rankings, preferences, places, ballots and the
tally itself) carry a ``to_dict()`` method courtesy of the
:func:`simple_serialization` decorator. The produced dictionaries use
camelCase keys so that they can be passed to :func:`json.dumps` directly and
consumed by non-Python clients.
'''

import dataclasses
import datetime
from typing import Any, List, Dict, Callable


def camel_case(name: str) -> str:
    '''Convert a snake_case attribute name to its camelCase wire name.'''
    first, *rest = name.split('_')
    return first + ''.join(chunk.capitalize() for chunk in rest)


def simple_serialization(class_: type) -> type:
    '''A decorator to provide a simple to_dict() serialization method.

    The resulting method will serialize the object attributes named by the
    class's ``serialize_params`` attribute, if present, or by its dataclass
    fields otherwise. Keys are converted to camelCase.

    :param class_: The class to add the method to.
    '''
    if hasattr(class_, 'serialize_params'):
        param_names = list(class_.serialize_params)
    else:
        param_names = [field.name for field in dataclasses.fields(class_)]

    def to_dict(self) -> Dict[str, Any]:
        return {
            camel_case(attr): serialize_value(getattr(self, attr))
            for attr in param_names
        }

    class_.to_dict = to_dict
    return class_


def serialize_value(value: Any) -> Any:
    if hasattr(value, 'to_dict'):
        return value.to_dict()
    elif isinstance(value, tuple(ATOMIC_TYPES)):
        return value
    elif type(value) in CONVERTIBLE_TYPES:
        return CONVERTIBLE_TYPES[type(value)](value)
    elif hasattr(value, '__iter__'):
        if hasattr(value, 'items') and hasattr(value, 'keys'):
            return {
                str(key): serialize_value(val) for key, val in value.items()
            }
        else:
            return [serialize_value(val) for val in value]
    else:
        raise ValueError(f'cannot serialize {value!r} to dict format')


def to_dict(obj: Any) -> Dict[str, Any]:
    """Serialize a tally or any of its parts to a JSON-ready dictionary.

    :param obj: An object providing a `to_dict()` method (all the value types
        of Votetally have it, courtesy of the simple_serialization
        decorator).
    """
    if not hasattr(obj, 'to_dict'):
        raise ValueError(f'{obj!r} does not support dict serialization')
    return obj.to_dict()


def datetime_to_json(dt: datetime.datetime) -> str:
    return dt.isoformat()


ATOMIC_TYPES: List[type] = [
    str, int, float, bool, type(None),
]

CONVERTIBLE_TYPES: Dict[type, Callable] = {
    datetime.datetime: datetime_to_json,
    datetime.date: datetime_to_json,
}
