"""
Base class for optimization objectives read from result documents.
"""
from __future__ import annotations

import json
from collections.abc import Mapping
from decimal import Decimal
from typing import Any, Optional, Tuple, Union

from ..config import OBJECTIVE_DEFAULT_SECTION
from .errors import InvalidArgumentError
from .field_locator import Segment, format_path, parse_path, select_token
from .numeric import parse_decimal, to_text

TargetValue = Union[Decimal, int, str, None]


def coerce_target_value(value: TargetValue) -> Optional[Decimal]:
    """Convert a configured target value to an exact ``Decimal``.

    Binary floats are refused because they cannot carry an exact threshold.
    """
    if value is None:
        return None
    if isinstance(value, bool) or isinstance(value, float):
        raise InvalidArgumentError(
            f"Target value {value!r} must be a Decimal, int or numeric text, not {type(value).__name__}"
        )
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise InvalidArgumentError(f"Target value {value!r} must be finite")
        return value
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, str):
        return parse_decimal(value)
    raise InvalidArgumentError(f"Unsupported target value type {type(value).__name__}")


def parse_document(document: Any) -> Mapping:
    """Return *document* as a non-empty mapping, decoding JSON text if needed.

    Raises
    ------
    InvalidArgumentError
        If the document is absent, empty, not valid JSON, or not an object.
    """
    if document is None:
        raise InvalidArgumentError("Result document is missing")
    if isinstance(document, (bytes, bytearray)):
        try:
            document = document.decode("utf-8")
        except UnicodeDecodeError as e:
            raise InvalidArgumentError(f"Result document is not valid UTF-8: {e}") from e
    if isinstance(document, str):
        if not document.strip():
            raise InvalidArgumentError("Result document is empty")
        try:
            document = json.loads(document, parse_float=Decimal)
        except json.JSONDecodeError as e:
            raise InvalidArgumentError(f"Result document is not valid JSON: {e}") from e
    if not isinstance(document, Mapping):
        raise InvalidArgumentError(
            f"Result document must be an object, got {type(document).__name__}"
        )
    if not document:
        raise InvalidArgumentError("Result document is empty")
    return document


class Objective:
    """A field path into result documents plus an optional target value.

    A bare statistic name such as ``"Sharpe Ratio"`` is looked up under the
    default result section, so it is equivalent to
    ``"['Statistics'].['Sharpe Ratio']"``.
    """

    def __init__(self, target: str, target_value: TargetValue = None):
        if not isinstance(target, str) or not target.strip():
            raise InvalidArgumentError("Objective target must be a non-empty field path")
        segments = parse_path(target)
        if len(segments) == 1 and isinstance(segments[0], str):
            segments = (OBJECTIVE_DEFAULT_SECTION,) + segments
        self._segments: Tuple[Segment, ...] = segments
        self._target = format_path(segments)
        self._target_value = coerce_target_value(target_value)

    @property
    def target(self) -> str:
        """Canonical field path of the tracked statistic."""
        return self._target

    @property
    def target_value(self) -> Optional[Decimal]:
        return self._target_value

    def extract(self, document: Any) -> Optional[Decimal]:
        """Locate and normalize the objective's field in *document*.

        Returns ``None`` when the field is absent; raises ``ParseError`` when it
        is present but not numeric.
        """
        token = select_token(parse_document(document), self._segments)
        if token is None:
            return None
        return parse_decimal(to_text(token))
