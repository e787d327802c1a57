from __future__ import annotations

from typing import Optional

from ...core.exceptions import ValidationError
from .base import SessionDenominator
from .configured import ConfiguredSessionsDenominator
from .recorded import RecordedSessionsDenominator

_BY_NAME = {
    RecordedSessionsDenominator.name: RecordedSessionsDenominator,
    ConfiguredSessionsDenominator.name: ConfiguredSessionsDenominator,
}


def denominator_for(name: Optional[str]) -> SessionDenominator:
    key = (name or RecordedSessionsDenominator.name).strip().lower()
    try:
        return _BY_NAME[key]()
    except KeyError:
        raise ValidationError(f"denominator must be one of: {', '.join(sorted(_BY_NAME))}")
