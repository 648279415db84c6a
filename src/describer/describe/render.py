"""Encoding of described routes.

A render function turns ``Routes`` into response bytes and raises on
failure. ``DescribeConfig`` pairs one with the content type it produces.
"""

import json as json_module
from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeAlias

from describer.describe.types import Routes

RenderFn: TypeAlias = Callable[[Routes], bytes]


def render_json(routes: Routes) -> bytes:
    """Encode routes as a JSON array of ``{"method", "uri", "description"?}``."""
    return json_module.dumps(routes.to_dicts(), ensure_ascii=False).encode("utf-8")


@dataclass(frozen=True, slots=True)
class DescribeConfig:
    """Route description middleware configuration.

    Defaults produce JSON. Override both fields together when switching
    encodings::

        DescribeConfig(content_type="application/x-ndjson", render=render_ndjson)
    """

    content_type: str = "application/json"
    render: RenderFn = render_json


DEFAULT_DESCRIBE_CONFIG = DescribeConfig()
