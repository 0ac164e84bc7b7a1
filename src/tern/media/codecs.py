"""Built-in encoders and decoders for the default media types.

Encoders take already-cast plain data (see ``cast``) and return a string.
Decoders take a string body and return plain data.
"""

import dataclasses
import json as json_module
from collections.abc import Mapping
from typing import Any
from urllib.parse import parse_qsl, quote_plus, urlencode


def cast(data: Any) -> Any:
    """Turn an object into plain data the encoders understand.

    ``to_dict()`` wins when present, then dataclasses, mappings, and
    finally the instance ``__dict__``. Scalars, strings and lists pass
    through untouched.
    """
    if data is None or isinstance(data, (str, bytes, int, float, bool, list, tuple)):
        return data
    to_dict = getattr(data, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    if dataclasses.is_dataclass(data) and not isinstance(data, type):
        return dataclasses.asdict(data)
    if isinstance(data, Mapping):
        return dict(data)
    if hasattr(data, "__dict__"):
        return {k: v for k, v in vars(data).items() if not k.startswith("_")}
    return data


def cast_all(data: Any) -> Any:
    """Cast *data*, then each of its items one level deep."""
    data = cast(data)
    if isinstance(data, dict):
        return {key: cast(value) for key, value in data.items()}
    if isinstance(data, (list, tuple)):
        return [cast(item) for item in data]
    return data


# -- JSON --


def encode_json(data: Any) -> str:
    return json_module.dumps(data, default=str)


def decode_json(data: str | bytes) -> Any:
    return json_module.loads(data)


# -- Text --


def encode_text(data: Any) -> str:
    """Plain text passes through; anything else is stringified."""
    if isinstance(data, bytes):
        return data.decode("utf-8")
    return data if isinstance(data, str) else str(data)


# -- Form (nested bracket syntax: movies[0][name]=...) --


def _flatten(prefix: str, value: Any) -> list[tuple[str, str]]:
    if isinstance(value, Mapping):
        items = list(value.items())
    elif isinstance(value, (list, tuple)):
        items = list(enumerate(value))
    else:
        if value is None:
            return [(prefix, "")]
        if isinstance(value, bool):
            return [(prefix, "1" if value else "0")]
        return [(prefix, str(value))]

    pairs: list[tuple[str, str]] = []
    for key, item in items:
        name = f"{prefix}[{key}]" if prefix else str(key)
        pairs.extend(_flatten(name, item))
    return pairs


def encode_form(data: Any) -> str:
    """Encode nested mappings/lists as an ``application/x-www-form-urlencoded`` body."""
    if not isinstance(data, (Mapping, list, tuple)):
        return quote_plus(encode_text(data)) if data is not None else ""
    return urlencode(_flatten("", data))


def _split_key(key: str) -> list[str]:
    head, bracket, rest = key.partition("[")
    if not bracket:
        return [key]
    parts = [head]
    for segment in ("[" + rest).split("["):
        if not segment:
            continue
        parts.append(segment[:-1] if segment.endswith("]") else segment)
    return parts


def _listify(node: Any) -> Any:
    if not isinstance(node, dict):
        return node
    node = {key: _listify(value) for key, value in node.items()}
    if node and all(key == str(index) for index, key in enumerate(node)):
        return list(node.values())
    return node


def decode_form(data: str | bytes) -> dict[str, Any]:
    """Decode a form body into nested dicts; ``0..n-1`` keyed dicts become lists.

    Values stay strings. Empty brackets (``tags[]=a&tags[]=b``) append.
    """
    if isinstance(data, bytes):
        data = data.decode("latin-1")
    result: dict[str, Any] = {}
    for key, value in parse_qsl(data, keep_blank_values=True):
        node = result
        parts = _split_key(key)
        for depth, part in enumerate(parts):
            last = depth == len(parts) - 1
            if part == "":
                part = str(len(node))
            if last:
                node[part] = value
            else:
                child = node.get(part)
                if not isinstance(child, dict):
                    child = {}
                    node[part] = child
                node = child
    return _listify(result)
