"""Order tracking for customers who look up their latest order by mobile number."""

from dataclasses import dataclass


@dataclass(frozen=True)
class TrackingStep:
    status: str
    label: str
    reached: bool
    current: bool


def tracking_steps(order, lifecycle) -> list[TrackingStep]:
    """The lifecycle timeline with the order's progress marked.

    An order whose status is off the timeline (for example ``cancelled``)
    has no reached steps beyond the initial one.
    """
    timeline = lifecycle.timeline()
    position = timeline.index(order.status) if order.status in timeline else 0
    on_timeline = order.status in timeline

    return [
        TrackingStep(
            status=state,
            label=lifecycle.label(state),
            reached=index <= position,
            current=on_timeline and index == position,
        )
        for index, state in enumerate(timeline)
    ]


def is_cancelled(order, lifecycle) -> bool:
    """True when the order ended in a terminal state that the timeline does not show."""
    return lifecycle.is_terminal(order.status) and order.status not in lifecycle.timeline()
