import json
from enum import Enum

from ...models.base import JsonModel


class JSONEncoder(json.JSONEncoder):
    """JSON encoder for gateway models and enums"""
    def default(self, obj):
        if isinstance(obj, JsonModel):
            return obj.to_dict()
        if isinstance(obj, Enum):
            return obj.value
        try:
            iterable = iter(obj)
        except TypeError:
            pass
        else:
            return list(iterable)
        return super().default(obj)


def dumps(obj) -> str:
    return json.dumps(obj, cls=JSONEncoder)
