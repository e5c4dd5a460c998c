"""
Shared dictionary conversion for entity dataclasses.
"""

from dataclasses import asdict, fields
from datetime import date, datetime
from typing import Any, ClassVar, Dict, Tuple

from .dates import parse_datetime


def _jsonable(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_jsonable(v) for v in value]
    return value


class DictModel:
    """
    Mixin giving dataclasses a JSON-safe to_dict() and a from_dict().

    Subclasses list their datetime attributes in DATETIME_FIELDS so that
    from_dict() can parse them back from ISO 8601 strings.
    """

    DATETIME_FIELDS: ClassVar[Tuple[str, ...]] = ()

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to dictionary format.

        Returns:
            Dictionary with datetimes rendered as ISO 8601 strings
        """
        return _jsonable(asdict(self))

    @classmethod
    def from_dict(cls, d: Dict[str, Any]):
        accepted = {f.name for f in fields(cls) if f.init}
        data = {k: v for k, v in d.items() if k in accepted}
        for name in cls.DATETIME_FIELDS:
            if name in data:
                data[name] = parse_datetime(data[name])
        return cls(**data)
