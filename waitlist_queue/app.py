from __future__ import annotations

# Single-entrypoint runner.
#
#     python -m waitlist_queue.app gui       # Tkinter window
#     python -m waitlist_queue.app console   # same queue in the terminal
#     python -m waitlist_queue.app watch     # print snapshots broadcast over MQTT
#
# `gui` and `console` own their queue. Add `--broadcast` to mirror it to MQTT
# so `watch` (or any other subscriber) can follow along.

import argparse


def main() -> None:
    parser = argparse.ArgumentParser(description="Waitlist Queue - main entrypoint")
    sub = parser.add_subparsers(dest="cmd", required=True)

    def add_mqtt_args(p: argparse.ArgumentParser) -> None:
        p.add_argument("--mqtt-host", default="127.0.0.1")
        p.add_argument("--mqtt-port", type=int, default=1883)
        p.add_argument("--namespace", default="waitlist/v0")

    def add_queue_args(p: argparse.ArgumentParser) -> None:
        p.add_argument("--no-seed", action="store_true", help="start with an empty queue")
        p.add_argument("--broadcast", action="store_true", help="publish the queue over MQTT")
        add_mqtt_args(p)

    p_gui = sub.add_parser("gui", help="Open the queue window (Tkinter)")
    add_queue_args(p_gui)

    p_con = sub.add_parser("console", help="Run the queue in the terminal")
    add_queue_args(p_con)

    p_watch = sub.add_parser("watch", help="Print queue snapshots received over MQTT")
    add_mqtt_args(p_watch)

    args = parser.parse_args()

    if args.cmd in ("gui", "console"):
        if args.cmd == "gui":
            from .gui import run_gui as run
        else:
            from .console import run_console as run

        run(
            seed=not args.no_seed,
            broadcast=args.broadcast,
            mqtt_host=args.mqtt_host,
            mqtt_port=args.mqtt_port,
            namespace=args.namespace,
        )
        return

    if args.cmd == "watch":
        from .watch import watch

        watch(mqtt_host=args.mqtt_host, mqtt_port=args.mqtt_port, namespace=args.namespace)
        return


if __name__ == "__main__":
    main()
