"""Field coercion for rows returned by either record store backend."""

from datetime import datetime
from typing import Any

from pydantic import TypeAdapter

# PostgREST returns ISO-8601 strings where the SQL backend returns datetimes
_timestamp = TypeAdapter(datetime | None)


def parse_timestamp(value: Any) -> datetime | None:
    return _timestamp.validate_python(value)
