from __future__ import annotations

# Status broadcast.
#
# Mirrors the queue to an MQTT topic so a separate display board can show it.
# Publish-only: nothing read from the broker ever touches a store, so the
# store stays the single writer.

from typing import TYPE_CHECKING, Any, Callable, Protocol

from .mqtt_topics import DEFAULT_NAMESPACE, queue_status

if TYPE_CHECKING:
    from .store import QueueStore


class Publisher(Protocol):
    def publish(self, topic: str, message: dict[str, Any], *, retain: bool = False) -> None: ...


class QueueBroadcaster:
    """Publishes `store.snapshot()` after every join/leave."""

    def __init__(self, *, mqtt: Publisher, namespace: str = DEFAULT_NAMESPACE) -> None:
        self.mqtt = mqtt
        self.topic = queue_status(namespace)
        self.published = 0

    def attach(self, store: QueueStore) -> None:
        """Subscribe to `store` and publish its current state right away."""
        store.add_listener(self.publish)
        self.publish(store)

    def publish(self, store: QueueStore) -> None:
        # Retained, so a board that connects later gets the current list.
        self.mqtt.publish(self.topic, store.snapshot(), retain=True)
        self.published += 1


def format_snapshot(msg: dict[str, Any]) -> list[str]:
    """Render a received snapshot as printable lines."""
    members = msg.get("members")
    if not isinstance(members, list) or not members:
        return ["Queue is empty"]

    lines = [f"People in Queue ({msg.get('count', len(members))})"]
    for m in members:
        if not isinstance(m, dict):
            continue
        position, name, wait = ("?" if m.get(k) is None else str(m[k]) for k in ("position", "name", "wait"))
        lines.append(f"  {position:>3}  {name:<20} {wait}")
    return lines


class BroadcastClient(Publisher, Protocol):
    def start(self) -> None: ...

    def stop(self) -> None: ...


def start_broadcast(
    store: QueueStore,
    *,
    mqtt_host: str,
    mqtt_port: int,
    namespace: str = DEFAULT_NAMESPACE,
    tag: str = "broadcast",
    client_factory: Callable[..., BroadcastClient] | None = None,
) -> BroadcastClient | None:
    """Connect and mirror `store` to MQTT.

    Returns the started client (the caller stops it), or None when the broker
    cannot be reached; the queue keeps working without a broadcast.
    """
    if client_factory is None:
        # Import MQTT dependencies only when broadcasting.
        from .mqtt_client import MqttClient

        client_factory = MqttClient

    client = client_factory(client_id=f"waitlist-{tag}", host=mqtt_host, port=mqtt_port)
    try:
        client.start()
    except OSError as e:
        print(f"[{tag}] MQTT connection failed: {e}")
        return None

    try:
        QueueBroadcaster(mqtt=client, namespace=namespace).attach(store)
    except BaseException:
        client.stop()
        raise

    print(f"[{tag}] broadcasting to MQTT {mqtt_host}:{mqtt_port}, namespace={namespace}")
    return client
