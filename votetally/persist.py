'''Conversion of votetally objects to and from JSON-ready dictionaries.

Ballots, candidates, evaluators and tally results all support this
conversion, so any of them can be written out with :func:`json.dumps`
and rebuilt later with :func:`from_dict`.

An object is written as a dictionary of its constructor arguments with
a ``class`` key holding the scoped name of its class. Tuples and frozensets
are written as ``{"type": ..., "value": [...]}`` and functions (such as
quota functions given to evaluators) as ``{"callable": ...}``.
'''

import inspect
import builtins
import importlib
from collections.abc import Iterable, Mapping
from typing import Any, List, Dict, Callable


def simple_serialization(class_: type) -> type:
    '''A decorator to provide a simple to_dict() serialization method.

    The generated method serializes every attribute named like one of the
    class's constructor parameters, so the decorated class must keep its
    constructor arguments under the same names (in any form the
    constructor accepts back).

    :param class_: The class to add the method to.
    '''
    param_names = constructor_params(class_)

    def to_dict(self) -> Dict[str, Any]:
        out_dict = {'class': scoped_class_name(self)}
        for name in param_names:
            out_dict[name] = serialize_value(getattr(self, name))
        return out_dict

    class_.to_dict = to_dict
    return class_


def constructor_params(class_: type) -> List[str]:
    '''Names of the attributes that rebuild an instance of the class.'''
    if class_.__init__ is object.__init__:
        return []
    return [
        name
        for name, param in inspect.signature(class_.__init__).parameters.items()
        if name != 'self' and param.kind not in (
            param.VAR_POSITIONAL, param.VAR_KEYWORD
        )
    ]


def serialize_value(value: Any) -> Any:
    if hasattr(value, 'to_dict'):
        return value.to_dict()
    if isinstance(value, ATOMIC_TYPES):
        return value
    encoder = ENCODERS.get(type(value))
    if encoder is not None:
        return encoder(value)
    if isinstance(value, Mapping):
        if all(isinstance(key, str) for key in value):
            return {key: serialize_value(val) for key, val in value.items()}
        return {
            'type': 'dict',
            'keys': [serialize_value(key) for key in value.keys()],
            'values': [serialize_value(val) for val in value.values()],
        }
    if isinstance(value, Iterable):
        return [serialize_value(item) for item in value]
    if callable(value):
        return {'callable': f'{value.__module__}.{value.__name__}'}
    raise ValueError(f'cannot serialize {value!r} to dict format')


def deserialize_value(value: Any) -> Any:
    if isinstance(value, list):
        return [deserialize_value(item) for item in value]
    if isinstance(value, dict):
        for marker, decoder in DECODERS.items():
            if is_scoped_identifier(value.get(marker)):
                return decoder(value)
        return {key: deserialize_value(val) for key, val in value.items()}
    if isinstance(value, ATOMIC_TYPES):
        return value
    raise ValueError(f'cannot deserialize {value!r}, type unknown')


def _decode_typed(typedef: Dict[str, Any]) -> Any:
    typeobj = get_object(typedef['type'])
    if typeobj is dict:
        return dict(zip(
            deserialize_value(typedef['keys']),
            deserialize_value(typedef['values']),
        ))
    if 'value' not in typedef:
        raise ValueError(f'invalid typed value contents: {typedef!r}')
    return typeobj(deserialize_value(typedef['value']))


def _decode_class(clsdef: Dict[str, Any]) -> Any:
    cls = get_object(clsdef['class'])
    return cls(**{
        key: deserialize_value(val)
        for key, val in clsdef.items() if key != 'class'
    })


def _decode_callable(funcdef: Dict[str, Any]) -> Callable:
    return get_object(funcdef['callable'])


def get_object(identifier: str) -> Any:
    '''Find an object by its scoped name; bare names are builtins.'''
    module_name, dot, name = identifier.rpartition('.')
    if not dot:
        return getattr(builtins, name)
    return getattr(importlib.import_module(module_name), name)


def from_dict(value: Dict[str, Any]) -> Any:
    """Rebuild a votetally object from a JSON-like dictionary.

    :param value: A dictionary created by :func:`to_dict`.
    :raises ValueError: If the dictionary does not describe an object.
    """
    if not isinstance(value, dict):
        raise ValueError(f'invalid object def: dict expected, got {value!r}')
    if 'class' not in value:
        raise ValueError('invalid object def: must have a class key')
    if not is_scoped_identifier(value['class']):
        raise ValueError(f'invalid class def: {value["class"]}')
    return deserialize_value(value)


def to_dict(obj: Any) -> Dict[str, Any]:
    """Serialize a votetally object to a JSON-ready dictionary.

    :param obj: A ballot, candidate, evaluator, tally result or similar.
        It should provide a `to_dict()` method, which all of them get from
        the :func:`simple_serialization` decorator.
    """
    return serialize_value(obj)


def is_scoped_identifier(value: Any) -> bool:
    return (
        isinstance(value, str)
        and all(chunk.isidentifier() for chunk in value.split('.'))
    )


def scoped_class_name(value: Any) -> str:
    return f'{type(value).__module__}.{type(value).__qualname__}'


def _tagged_sequence(value: Any, items: Iterable) -> Dict[str, Any]:
    return {
        'type': type(value).__name__,
        'value': [serialize_value(item) for item in items],
    }


ATOMIC_TYPES = (str, int, float, bool, type(None))

ENCODERS: Dict[type, Callable[[Any], Any]] = {
    tuple: lambda value: _tagged_sequence(value, value),
    # sets are written sorted
    frozenset: lambda value: _tagged_sequence(value, sorted(value, key=str)),
}

DECODERS: Dict[str, Callable[[Dict[str, Any]], Any]] = {
    'type': _decode_typed,
    'class': _decode_class,
    'callable': _decode_callable,
}
