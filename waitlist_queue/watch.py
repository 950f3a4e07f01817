from __future__ import annotations

# Display-board observer.
#
# Subscribes to the queue status topic and prints every snapshot it receives.
# Read-only: it never publishes.

import argparse
import time
from typing import Any

from .broadcast import format_snapshot
from .mqtt_client import MqttClient
from .mqtt_topics import DEFAULT_NAMESPACE, queue_status


def _print_snapshot(topic: str, msg: dict[str, Any]) -> None:
    if msg.get("type") != "queue_status":
        return
    print(f"[watch] {time.strftime('%H:%M:%S')} update on {topic}")
    for line in format_snapshot(msg):
        print(line)


def watch(*, mqtt_host: str, mqtt_port: int, namespace: str = DEFAULT_NAMESPACE) -> None:
    mqtt = MqttClient(client_id=f"waitlist-watch-{int(time.time())}", host=mqtt_host, port=mqtt_port)
    mqtt.add_handler(_print_snapshot)
    mqtt.start()
    mqtt.subscribe(queue_status(namespace))

    print(f"[watch] connected to MQTT {mqtt_host}:{mqtt_port}, namespace={namespace}")
    try:
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        pass
    finally:
        mqtt.stop()


def main() -> None:
    parser = argparse.ArgumentParser(description="Queue display-board observer (MQTT)")
    parser.add_argument("--mqtt-host", default="127.0.0.1")
    parser.add_argument("--mqtt-port", type=int, default=1883)
    parser.add_argument("--namespace", default=DEFAULT_NAMESPACE)
    args = parser.parse_args()

    watch(mqtt_host=args.mqtt_host, mqtt_port=args.mqtt_port, namespace=args.namespace)


if __name__ == "__main__":
    main()
