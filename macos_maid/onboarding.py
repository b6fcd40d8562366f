from __future__ import annotations

import threading
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

from .gui_geometry import DEFAULT_SCROLL_TOLERANCE, is_scrolled_to_bottom


class OnboardingStage(str, Enum):
    WELCOME = "welcome"
    TERMS = "terms"
    MAIN = "main"


class TransitionDirection(str, Enum):
    FORWARD = "forward"


class OnboardingError(Exception):
    pass


class InvalidTransition(OnboardingError):
    pass


class GateNotSatisfied(InvalidTransition):
    pass


@dataclass(frozen=True)
class OnboardingUpdate:
    stage: OnboardingStage
    previous_stage: OnboardingStage
    direction: TransitionDirection | None
    has_reached_bottom: bool


Subscriber = Callable[[OnboardingUpdate], None]
Dispatcher = Callable[[Callable[[], None]], None]
EventSink = Callable[..., None]


class OnboardingController:
    """Welcome -> Terms -> Main gate.

    Stages only move forward. The terms stage is left only after the reader has
    scrolled to the end at least once; that latch never resets. All mutation
    happens on the thread that created the controller.
    """

    def __init__(
        self,
        *,
        tolerance: float = DEFAULT_SCROLL_TOLERANCE,
        dispatch: Dispatcher | None = None,
        on_event: EventSink | None = None,
    ):
        self.tolerance = tolerance
        self._dispatch = dispatch
        self._on_event = on_event
        self._owner_thread = threading.get_ident()
        self._stage = OnboardingStage.WELCOME
        self._has_reached_bottom = False
        self._subscribers: list[Subscriber] = []

    @property
    def stage(self) -> OnboardingStage:
        return self._stage

    @property
    def has_reached_bottom(self) -> bool:
        return self._has_reached_bottom

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def request_advance_from_welcome(self) -> bool:
        self._require_owner_thread("request_advance_from_welcome")
        if self._stage is not OnboardingStage.WELCOME:
            return False
        self._transition(OnboardingStage.TERMS)
        return True

    def report_scroll_position(self, marker_bottom_edge: float, viewport_bottom_edge: float) -> bool | None:
        if not self._on_owner_thread():
            if self._dispatch is None:
                raise OnboardingError("report_scroll_position called off the owner thread without a dispatcher")
            self._dispatch(lambda: self.report_scroll_position(marker_bottom_edge, viewport_bottom_edge))
            return None
        if self._stage is not OnboardingStage.TERMS or self._has_reached_bottom:
            return self._has_reached_bottom
        if is_scrolled_to_bottom(
            marker_bottom_edge=marker_bottom_edge,
            viewport_bottom_edge=viewport_bottom_edge,
            tolerance=self.tolerance,
        ):
            self._has_reached_bottom = True
            self._emit(
                "terms_scrolled_to_end",
                marker_bottom_edge=marker_bottom_edge,
                viewport_bottom_edge=viewport_bottom_edge,
            )
            self._notify(
                OnboardingUpdate(
                    stage=self._stage,
                    previous_stage=self._stage,
                    direction=None,
                    has_reached_bottom=True,
                )
            )
        return self._has_reached_bottom

    def request_advance_from_terms(self) -> bool:
        self._require_owner_thread("request_advance_from_terms")
        if self._stage is not OnboardingStage.TERMS:
            return False
        if not self._has_reached_bottom:
            self._emit("advance_rejected", stage=self._stage.value, reason="terms_not_scrolled_to_end")
            raise GateNotSatisfied("Terms must be scrolled to the end before continuing")
        self._transition(OnboardingStage.MAIN)
        return True

    def _transition(self, target: OnboardingStage) -> None:
        previous = self._stage
        self._stage = target
        self._emit("stage_changed", previous_stage=previous.value, stage=target.value)
        self._notify(
            OnboardingUpdate(
                stage=target,
                previous_stage=previous,
                direction=TransitionDirection.FORWARD,
                has_reached_bottom=self._has_reached_bottom,
            )
        )

    def _notify(self, update: OnboardingUpdate) -> None:
        for callback in list(self._subscribers):
            callback(update)

    def _emit(self, event: str, **fields: Any) -> None:
        if self._on_event is not None:
            self._on_event(event, **fields)

    def _on_owner_thread(self) -> bool:
        return threading.get_ident() == self._owner_thread

    def _require_owner_thread(self, operation: str) -> None:
        if not self._on_owner_thread():
            raise OnboardingError(f"{operation} must be called on the thread that owns the controller")
