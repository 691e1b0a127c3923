"""Shared type aliases used across trill modules."""

from collections.abc import Callable, Mapping, Sequence
from datetime import datetime

# Values a data source may bind into a template
type Value = (
    str | int | float | bool | datetime | None | Mapping[str, Value] | Sequence[Value]
)

# A value map bound to one rendered page
type Data = Mapping[str, Value]

# Function entry: called per request with the request path
type DataFunc = Callable[[str], Data | None]
