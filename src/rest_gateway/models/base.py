"""Base helpers shared by entities, request bodies and bus requests."""
import typing
from dataclasses import field, fields
from enum import Enum
from typing import Any, Dict, List, Type, TypeVar

T = TypeVar('T', bound='JsonModel')


def json_field(name: str, **kwargs):
    """Dataclass field serialized under a different JSON key."""
    metadata = dict(kwargs.pop('metadata', None) or {})
    metadata['json'] = name
    return field(metadata=metadata, **kwargs)


def _json_name(f) -> str:
    return f.metadata.get('json', f.name)


def _encode(value: Any) -> Any:
    if isinstance(value, JsonModel):
        return value.to_dict()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (list, tuple)):
        return [_encode(item) for item in value]
    if isinstance(value, dict):
        return {key: _encode(item) for key, item in value.items()}
    return value


def _decode(hint: Any, value: Any) -> Any:
    if value is None:
        return None

    origin = typing.get_origin(hint)
    if origin is typing.Union:
        # Optional[X]
        args = [arg for arg in typing.get_args(hint) if arg is not type(None)]
        return _decode(args[0], value)
    if origin in (list, List):
        if not isinstance(value, list):
            raise ValueError(f"Expected a list, got {type(value).__name__}")
        item_hint = typing.get_args(hint)[0]
        return [_decode(item_hint, item) for item in value]

    if isinstance(hint, type):
        if issubclass(hint, JsonModel):
            return hint.from_dict(value)
        if issubclass(hint, Enum):
            return hint(value)
        if hint is bool and not isinstance(value, bool):
            raise ValueError(f"Expected a boolean, got {value!r}")
        if hint is int and (isinstance(value, bool) or not isinstance(value, int)):
            raise ValueError(f"Expected an integer, got {value!r}")
        if hint is str and not isinstance(value, str):
            raise ValueError(f"Expected a string, got {value!r}")
    return value


class JsonModel:
    """Mixin giving dataclasses a JSON object form.

    Field names are used as JSON keys unless the field was declared with
    ``json_field``. Nested models, enums and lists of either are handled.
    """

    def to_dict(self) -> Dict[str, Any]:
        return {_json_name(f): _encode(getattr(self, f.name)) for f in fields(self)}

    @classmethod
    def from_dict(cls: Type[T], data: Dict[str, Any]) -> T:
        if not isinstance(data, dict):
            raise ValueError(f"{cls.__name__} expects a JSON object, got {type(data).__name__}")

        hints = typing.get_type_hints(cls)
        kwargs = {}
        for f in fields(cls):
            key = _json_name(f)
            if key in data:
                kwargs[f.name] = _decode(hints[f.name], data[key])
            elif f.name in data:
                kwargs[f.name] = _decode(hints[f.name], data[f.name])

        try:
            return cls(**kwargs)
        except TypeError as e:
            raise ValueError(f"Invalid {cls.__name__}: {e}") from e
