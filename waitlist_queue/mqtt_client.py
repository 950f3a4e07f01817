"""Small MQTT helper built on top of paho-mqtt.

paho-mqtt is callback-based and works on raw bytes. `MqttClient` owns the
connection plus the background network loop, and speaks JSON dicts in both
directions. QoS is 0; a missed snapshot is replaced by the next one.
"""

from __future__ import annotations

import json
from typing import Any, Callable

import paho.mqtt.client as mqtt


MessageHandler = Callable[[str, dict[str, Any]], None]


class MqttClient:
    """Thin wrapper around paho-mqtt with JSON convenience APIs."""

    def __init__(
        self,
        *,
        client_id: str,
        host: str,
        port: int,
        keepalive: int = 30,
    ) -> None:
        self.client_id = client_id
        self.host = host
        self.port = port
        self.keepalive = keepalive

        self._client = mqtt.Client(
            mqtt.CallbackAPIVersion.VERSION2,
            client_id=client_id,
            clean_session=True,
        )
        self._client.on_message = self._on_message

        # Called with (topic, json_message).
        self._handlers: list[MessageHandler] = []
        self._started = False

    def start(self) -> None:
        """Connect and start the background network loop."""
        if self._started:
            return
        self._client.connect(self.host, self.port, keepalive=self.keepalive)
        self._client.loop_start()
        self._started = True

    def stop(self) -> None:
        if not self._started:
            return
        self._client.loop_stop()
        self._client.disconnect()
        self._started = False

    def add_handler(self, handler: MessageHandler) -> None:
        self._handlers.append(handler)

    def subscribe(self, topic: str) -> None:
        self._client.subscribe(topic, qos=0)

    def publish(self, topic: str, message: dict[str, Any], *, retain: bool = False) -> None:
        payload = json.dumps(message, separators=(",", ":")).encode("utf-8")
        self._client.publish(topic, payload=payload, qos=0, retain=retain)

    # -------------------- internal callbacks --------------------

    def _on_message(self, client: mqtt.Client, userdata: Any, msg: mqtt.MQTTMessage) -> None:
        # Non-JSON or non-object payloads are not ours; ignore them.
        try:
            raw = msg.payload
            payload = raw.decode("utf-8") if isinstance(raw, bytes) else str(raw)
            data = json.loads(payload)
        except (UnicodeDecodeError, ValueError):
            return
        if not isinstance(data, dict):
            return

        # One bad message must not kill paho's network thread.
        for h in list(self._handlers):
            try:
                h(msg.topic, data)
            except (KeyError, TypeError, ValueError) as e:
                print(f"[mqtt] handler failed on {msg.topic}: {e!r}")
