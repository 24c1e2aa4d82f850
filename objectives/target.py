"""
Optimization target: tracks the best value of one statistic across results.

Each evaluated candidate produces a result document.  ``Target.move_ahead``
pulls the configured statistic out of it and keeps the best value seen so far
in the configured direction; ``Target.check_compliance`` notifies listeners
whenever that best value satisfies the target value.

Usage::

    target = Target("Sharpe Ratio", Extremum.MAXIMIZE, Decimal("1.5"))
    target.subscribe(stop_search)
    for document in results:
        if target.move_ahead(document):
            target.check_compliance()

A ``Target`` is not synchronized.  Callers evaluating candidates concurrently
must serialize ``move_ahead`` calls on the same instance.
"""
from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Callable, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import InvalidArgumentError
from .extremum import Extremum
from .objective import Objective, TargetValue, coerce_target_value

logger = logging.getLogger(__name__)

Listener = Callable[[], None]


class TargetSchema(BaseModel):
    """Serialized form of a target: ``{"target", "extremum", "target-value"}``."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    target: str
    extremum: Extremum
    target_value: Optional[Decimal] = Field(default=None, alias="target-value")

    @field_validator("extremum", mode="before")
    @classmethod
    def _parse_extremum(cls, value: Any) -> Extremum:
        return Extremum.parse(value)

    @field_validator("target_value", mode="before")
    @classmethod
    def _parse_target_value(cls, value: Any) -> Optional[Decimal]:
        return coerce_target_value(value)


class Target(Objective):
    """The optimization statistical target.

    Parameters
    ----------
    target : str
        Field path of the statistic in result documents.
    extremum : Extremum or str
        Direction of optimization (``"max"``/``"min"`` accepted).
    target_value : Decimal, int or str, optional
        Threshold the best value must reach for the target to be complied.
        Without it the target only tracks the best value.
    """

    def __init__(
        self,
        target: str,
        extremum: Union[Extremum, str],
        target_value: TargetValue = None,
    ):
        super().__init__(target, target_value)
        self._extremum = Extremum.parse(extremum)
        self._current: Optional[Decimal] = None
        self._listeners: List[Listener] = []

    @property
    def extremum(self) -> Extremum:
        return self._extremum

    @property
    def current(self) -> Optional[Decimal]:
        """Best value seen so far, or ``None`` before the first resolved result."""
        return self._current

    # ── Result intake ────────────────────────────────────────────────

    def move_ahead(self, document: Any) -> bool:
        """Check a result document for a better value of the statistic.

        Parameters
        ----------
        document : Mapping or str
            Parsed result document or its JSON text.

        Returns
        -------
        bool
            ``True`` if the document held a better value (it becomes
            ``current``); ``False`` if the statistic is absent or not better.

        Raises
        ------
        InvalidArgumentError
            If the document is absent or empty.
        ParseError
            If the statistic is present but not a valid number.
        """
        computed = self.extract(document)
        if computed is None:
            return False

        if self._current is None or self._extremum.better(self._current, computed):
            previous = self._current
            self._current = computed
            logger.debug(
                "Target %s moved ahead",
                self.target,
                extra={"metrics": {
                    "previous": None if previous is None else str(previous),
                    "current": str(computed),
                    "extremum": self._extremum.value,
                }},
            )
            return True

        return False

    def reset(self) -> None:
        """Forget the best value so the target can track a new run."""
        self._current = None

    # ── Compliance ───────────────────────────────────────────────────

    @property
    def is_complied(self) -> bool:
        """Whether the best value reaches the target value in the configured direction."""
        if self._target_value is None or self._current is None:
            return False
        return (
            self._current == self._target_value
            or self._extremum.better(self._target_value, self._current)
        )

    def check_compliance(self) -> None:
        """Notify every listener if the target is complied.

        Fires on every call that observes compliance; repeated calls while
        complied notify again.
        """
        if not self.is_complied:
            return
        logger.info(
            "Target %s reached %s (target value %s)",
            self.target, self._current, self._target_value,
        )
        for listener in list(self._listeners):
            listener()

    def subscribe(self, listener: Listener) -> None:
        """Register a zero-argument callable fired when the target is reached."""
        if not callable(listener):
            raise InvalidArgumentError(f"Listener {listener!r} is not callable")
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        """Remove a previously registered listener; unknown listeners are ignored."""
        if listener in self._listeners:
            self._listeners.remove(listener)

    # ── Serialization ────────────────────────────────────────────────

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the target definition (the running best value is not included)."""
        schema = TargetSchema(
            target=self.target,
            extremum=self._extremum,
            target_value=self._target_value,
        )
        return schema.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Target":
        """Build a target from its serialized form."""
        try:
            schema = TargetSchema.model_validate(data)
        except ValidationError as e:
            raise InvalidArgumentError(f"Invalid target definition: {e}") from e
        return cls(schema.target, schema.extremum, schema.target_value)

    def __str__(self) -> str:
        if self._target_value is not None:
            return f"Target: {self.target} TargetValue: {self._target_value} at: {self._current}"
        return f"Target: {self.target} at: {self._current}"

    def __repr__(self) -> str:
        return (
            f"Target(target={self.target!r}, extremum={self._extremum.value!r}, "
            f"target_value={self._target_value!r}, current={self._current!r})"
        )
