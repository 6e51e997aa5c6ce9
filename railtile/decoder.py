"""Decode tile codes into parts.

A code is a ``;`` separated list of segments, each ``type=key:value,...``.
Path endpoints written as ``_N`` refer back to the Nth city, town,
offboard, label, upgrade or junction decoded so far:

    city=revenue:30;path=a:0,b:_0;path=a:_0,b:3
"""

import logging
import re
from typing import Optional

from railtile.errors import DecodeError
from railtile.parts import (
    Border,
    City,
    Edge,
    Icon,
    Junction,
    Label,
    Offboard,
    Part,
    Path,
    Town,
    Upgrade,
)

logger = logging.getLogger(__name__)

BACK_REFERENCE = re.compile(r"^_(\d+)$")

FALSE_VALUES = {"0", "false", "no"}


def parse_params(params: str) -> dict[str, str]:
    """Split ``key:value,key`` parameters; a bare key is a flag with empty value."""
    result: dict[str, str] = {}
    for param in params.split(","):
        if not param:
            continue
        key, _, value = param.partition(":")
        result[key] = value
    return result


def _flag(value: Optional[str]) -> bool:
    if value is None:
        return False
    return value.lower() not in FALSE_VALUES


def _int(params: dict[str, str], key: str, default: Optional[int], segment: str) -> Optional[int]:
    value = params.get(key)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise DecodeError(f"'{key}' must be an integer, got '{value}'", segment) from None


def _split(value: Optional[str]) -> list[str]:
    return value.split("|") if value else []


def _endpoint(value: Optional[str], cache: list[Part], segment: str) -> Part:
    if value is None or value == "":
        raise DecodeError("Path is missing an endpoint", segment)

    match = BACK_REFERENCE.match(value)
    if match:
        position = int(match.group(1))
        if position >= len(cache):
            raise DecodeError(
                f"Back-reference _{position} out of range ({len(cache)} parts cached)",
                segment,
            )
        return cache[position]

    try:
        return Edge(value)
    except ValueError as e:
        raise DecodeError(f"Invalid path endpoint '{value}': {e}", segment) from None


def _revenue_center_kwargs(params: dict[str, str], segment: str) -> dict:
    return {
        "groups": _split(params.get("groups")),
        "hide": _flag(params.get("hide")),
        "visit_cost": _int(params, "visit_cost", 1, segment),
        "route": params.get("route") or "mandatory",
        "format": params.get("format"),
        "loc": params.get("loc"),
    }


def decode_part(type_: str, raw_params: str, cache: list[Part], segment: str) -> Optional[Part]:
    """Build a single part, appending it to ``cache`` when it can be referenced.

    Returns None for unknown part types.
    """
    params = parse_params(raw_params)

    try:
        if type_ == "path":
            return Path(
                _endpoint(params.get("a"), cache, segment),
                _endpoint(params.get("b"), cache, segment),
            )

        if type_ == "border":
            edge = _int(params, "edge", None, segment)
            if edge is None:
                raise DecodeError("Border is missing an edge", segment)
            return Border(edge, params.get("type") or None, _int(params, "cost", None, segment))

        if type_ == "icon":
            image = params.get("image")
            if not image:
                raise DecodeError("Icon is missing an image", segment)
            sticky = params.get("sticky")
            return Icon(
                image,
                params.get("name") or None,
                sticky=True if sticky is None else _flag(sticky),
                blocks_lay=_flag(params.get("blocks_lay")),
            )

        part: Part
        if type_ == "city":
            part = City(
                params.get("revenue"),
                slots=_int(params, "slots", 1, segment),
                **_revenue_center_kwargs(params, segment),
            )
        elif type_ == "town":
            part = Town(params.get("revenue"), **_revenue_center_kwargs(params, segment))
        elif type_ == "offboard":
            part = Offboard(params.get("revenue"), **_revenue_center_kwargs(params, segment))
        elif type_ == "label":
            part = Label(raw_params)
        elif type_ == "upgrade":
            part = Upgrade(_int(params, "cost", 0, segment), _split(params.get("terrain")))
        elif type_ == "junction":
            part = Junction()
        else:
            logger.warning(f"Ignoring unknown part type '{type_}' in segment '{segment}'")
            return None
    except ValueError as e:
        raise DecodeError(str(e), segment) from None

    cache.append(part)
    return part


def decode(code: str) -> list[Part]:
    """Decode a tile code into its parts, in code order."""
    cache: list[Part] = []
    parts: list[Part] = []

    for segment in code.split(";"):
        if not segment:
            continue
        type_, _, raw_params = segment.partition("=")
        part = decode_part(type_, raw_params, cache, segment)
        if part is not None:
            parts.append(part)

    logger.debug(f"Decoded {len(parts)} parts from '{code}'")
    return parts
