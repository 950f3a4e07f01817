"""MQTT topic helpers.

Topic layout under a configurable namespace (default: `waitlist/v0`):

- `<ns>/queue/status`
    The window or console that owns the queue publishes a full snapshot
    here after every join/leave. Display boards subscribe to it.

Change the namespace to run several independent queues on one broker
(e.g. `--namespace shop/front-desk`).
"""

from __future__ import annotations

DEFAULT_NAMESPACE = "waitlist/v0"


def queue_status(namespace: str = DEFAULT_NAMESPACE) -> str:
    return f"{namespace}/queue/status"
