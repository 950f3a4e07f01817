from __future__ import annotations

# Terminal view.
#
# A line-oriented front end over QueueSession, handy over SSH or when Tkinter
# is not available. Reads commands from stdin until `quit` or EOF.

import argparse
import sys
from typing import Callable, TextIO

from .broadcast import BroadcastClient, start_broadcast
from .session import QueueSession
from .store import QueueStore

HELP_TEXT = """commands:
  join <full name>   join the queue (e.g. join John Smith)
  leave              leave the queue
  list               show everyone in the queue
  me                 show your position and wait time
  help               show this text
  quit               exit"""


class QueueConsole:
    def __init__(self, session: QueueSession, *, out: TextIO | None = None) -> None:
        self.session = session
        self.out = out if out is not None else sys.stdout

    def _print(self, line: str = "") -> None:
        print(line, file=self.out)

    def render_list(self) -> None:
        rows = self.session.rows()
        self._print(f"People in Queue ({len(rows)})")
        if not rows:
            self._print("  Queue is empty")
            return
        for r in rows:
            marker = "  <- You" if r.is_me else ""
            self._print(f"  {r.position:>3}  {r.name:<20} {r.wait}{marker}")

    def render_me(self) -> None:
        key = self.session.my_key
        pos = self.session.my_position
        if key is None or pos is None:
            self._print("You are not in the queue")
            return
        self._print(f"Your Position: {key.display_name()}  #{pos}  (estimated wait {self.session.my_wait})")

    def handle(self, line: str) -> bool:
        """Run one command. Returns False when the console should exit."""
        cmd, _, arg = line.strip().partition(" ")
        cmd = cmd.lower()

        if not cmd:
            return True
        if cmd in ("quit", "exit"):
            return False
        if cmd == "help":
            self._print(HELP_TEXT)
        elif cmd == "list":
            self.render_list()
        elif cmd == "me":
            self.render_me()
        elif cmd == "join":
            if self.session.submit_name(arg):
                self.render_me()
            else:
                self._print(f"error: {self.session.form_error}")
        elif cmd == "leave":
            removed = self.session.leave()
            if removed is None:
                self._print("You are not in the queue")
            else:
                self._print(f"{removed.display_name} left the queue")
        else:
            self._print(f"unknown command: {cmd} (try 'help')")
        return True

    def run(self, stdin: TextIO | None = None) -> None:
        stream = stdin if stdin is not None else sys.stdin
        self.render_list()
        for line in stream:
            if not self.handle(line):
                break


def run_console(
    *,
    seed: bool = True,
    broadcast: bool = False,
    mqtt_host: str = "127.0.0.1",
    mqtt_port: int = 1883,
    namespace: str = "waitlist/v0",
    stdin: TextIO | None = None,
    client_factory: Callable[..., BroadcastClient] | None = None,
) -> None:
    store = QueueStore.with_demo_seed() if seed else QueueStore()
    mqtt_client = None
    try:
        if broadcast:
            # None when the broker is unreachable; the console still works.
            mqtt_client = start_broadcast(
                store,
                mqtt_host=mqtt_host,
                mqtt_port=mqtt_port,
                namespace=namespace,
                tag="console",
                client_factory=client_factory,
            )
        QueueConsole(QueueSession(store)).run(stdin)
    except KeyboardInterrupt:
        pass
    finally:
        if mqtt_client is not None:
            mqtt_client.stop()


def main() -> None:
    parser = argparse.ArgumentParser(description="Waitlist queue (terminal)")
    parser.add_argument("--no-seed", action="store_true", help="start with an empty queue")
    parser.add_argument("--broadcast", action="store_true", help="publish the queue over MQTT")
    parser.add_argument("--mqtt-host", default="127.0.0.1")
    parser.add_argument("--mqtt-port", type=int, default=1883)
    parser.add_argument("--namespace", default="waitlist/v0")
    args = parser.parse_args()

    run_console(
        seed=not args.no_seed,
        broadcast=args.broadcast,
        mqtt_host=args.mqtt_host,
        mqtt_port=args.mqtt_port,
        namespace=args.namespace,
    )


if __name__ == "__main__":
    main()
