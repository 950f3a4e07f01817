from __future__ import annotations

# Queue window (Tkinter).
#
# Layout, top to bottom:
# - header: title + subtitle
# - "Your Position" panel (only while the session is in the queue)
# - "People in Queue" table, the session's own row tagged "You"
# - "Join Queue" button (only while not in the queue)
#
# Joining happens in a modal dialog. All state lives in QueueSession; the
# window just re-renders from it after every action.

import argparse
import tkinter as tk
from tkinter import ttk
from typing import Any, cast

from .broadcast import start_broadcast
from .session import QueueSession
from .store import QueueStore

TITLE = "Chavitos Queue"


class QueueWindow:
    def __init__(self, session: QueueSession) -> None:
        self.session = session

        self.root = tk.Tk()
        self.root.title(TITLE)
        self.root.geometry("640x520")

        header = ttk.Frame(self.root)
        header.pack(fill=cast(Any, tk.X), padx=10, pady=(10, 5))
        ttk.Label(header, text=TITLE, font=("TkDefaultFont", 18, "bold")).pack(anchor=cast(Any, tk.W))
        ttk.Label(header, text="Current position and wait times").pack(anchor=cast(Any, tk.W))

        # Your position panel
        self.me_frame = ttk.LabelFrame(self.root, text="Your Position")
        self.me_name_var = tk.StringVar()
        self.me_pos_var = tk.StringVar()
        self.me_wait_var = tk.StringVar()
        ttk.Label(self.me_frame, textvariable=self.me_name_var, font=("TkDefaultFont", 14, "bold")).grid(
            row=0, column=0, columnspan=2, sticky="w", padx=8, pady=(4, 8)
        )
        ttk.Label(self.me_frame, text="Position").grid(row=1, column=0, sticky="w", padx=8)
        ttk.Label(self.me_frame, text="Estimated Wait Time").grid(row=1, column=1, sticky="w", padx=8)
        ttk.Label(self.me_frame, textvariable=self.me_pos_var, font=("TkDefaultFont", 14)).grid(
            row=2, column=0, sticky="w", padx=8
        )
        ttk.Label(self.me_frame, textvariable=self.me_wait_var, font=("TkDefaultFont", 14)).grid(
            row=2, column=1, sticky="w", padx=8
        )
        ttk.Button(self.me_frame, text="Leave Queue", command=self.on_leave).grid(
            row=3, column=0, columnspan=2, sticky="ew", padx=8, pady=8
        )

        # Queue table
        self.list_frame = ttk.Frame(self.root)
        self.count_var = tk.StringVar()
        ttk.Label(self.list_frame, textvariable=self.count_var, font=("TkDefaultFont", 12, "bold")).pack(
            anchor=cast(Any, tk.W)
        )
        cols = ("position", "name", "you", "wait")
        self.tree = ttk.Treeview(self.list_frame, columns=cols, show="headings", height=12)
        self.tree.heading("position", text="#")
        self.tree.heading("name", text="Name")
        self.tree.heading("you", text="")
        self.tree.heading("wait", text="Wait Time")
        self.tree.column("position", width=50, anchor=cast(Any, tk.E))
        self.tree.column("name", width=260, anchor=cast(Any, tk.W))
        self.tree.column("you", width=60, anchor=cast(Any, tk.W))
        self.tree.column("wait", width=120, anchor=cast(Any, tk.E))
        self.tree.tag_configure("me", background="#e8f0fe")
        self.tree.pack(fill=cast(Any, tk.BOTH), expand=True, pady=(5, 0))

        self.join_button = ttk.Button(self.root, text="Join Queue", command=self.on_open_form)

        self._dialog: tk.Toplevel | None = None
        self._error_var = tk.StringVar()
        self._name_var = tk.StringVar()

        self.session.store.add_listener(lambda _store: self.render())
        self.render()

    # -------------------- rendering --------------------

    def render(self) -> None:
        s = self.session

        self.me_frame.pack_forget()
        self.list_frame.pack_forget()
        self.join_button.pack_forget()

        if s.in_queue and s.my_key is not None:
            self.me_name_var.set(s.my_key.display_name())
            self.me_pos_var.set(f"#{s.my_position}")
            self.me_wait_var.set(s.my_wait or "")
            self.me_frame.pack(fill=cast(Any, tk.X), padx=10, pady=5)

        self.list_frame.pack(fill=cast(Any, tk.BOTH), expand=True, padx=10, pady=5)
        if not s.in_queue:
            self.join_button.pack(fill=cast(Any, tk.X), padx=10, pady=(5, 10))

        for item in self.tree.get_children():
            self.tree.delete(item)

        rows = s.rows()
        self.count_var.set(f"People in Queue ({len(rows)})")
        if not rows:
            # Explicit empty state so the table doesn't look broken.
            self.tree.insert("", cast(Any, tk.END), values=("", "Queue is empty", "", ""))
            return
        for r in rows:
            self.tree.insert(
                "",
                cast(Any, tk.END),
                values=(r.position, r.name, "You" if r.is_me else "", r.wait),
                tags=("me",) if r.is_me else (),
            )

    # -------------------- actions --------------------

    def on_open_form(self) -> None:
        if self._dialog is not None:
            return
        self.session.open_form()
        self._name_var.set("")
        self._error_var.set("")

        dlg = tk.Toplevel(self.root)
        dlg.title("Join the Queue")
        dlg.transient(self.root)
        dlg.protocol("WM_DELETE_WINDOW", self.on_cancel)
        self._dialog = dlg

        ttk.Label(dlg, text="Enter your name to join the queue").pack(anchor=cast(Any, tk.W), padx=10, pady=(10, 5))
        ttk.Label(dlg, text="Full Name").pack(anchor=cast(Any, tk.W), padx=10)
        entry = ttk.Entry(dlg, textvariable=self._name_var, width=36)
        entry.pack(fill=cast(Any, tk.X), padx=10)
        entry.bind("<Key>", lambda _e: self._on_edit())
        entry.bind("<Return>", lambda _e: self.on_submit())
        ttk.Label(dlg, textvariable=self._error_var, foreground="red").pack(anchor=cast(Any, tk.W), padx=10)

        buttons = ttk.Frame(dlg)
        buttons.pack(fill=cast(Any, tk.X), padx=10, pady=10)
        ttk.Button(buttons, text="Join", command=self.on_submit).pack(side=cast(Any, tk.LEFT), expand=True)
        ttk.Button(buttons, text="Cancel", command=self.on_cancel).pack(side=cast(Any, tk.LEFT), expand=True)

        entry.focus_set()
        dlg.grab_set()

    def _on_edit(self) -> None:
        self.session.edit_name()
        self._error_var.set("")

    def on_submit(self) -> None:
        if self.session.submit_name(self._name_var.get()):
            self._close_dialog()
        else:
            self._error_var.set(self.session.form_error)

    def on_cancel(self) -> None:
        self.session.cancel_form()
        self._close_dialog()

    def on_leave(self) -> None:
        self.session.leave()
        # Store listeners already re-rendered if a member was removed; the
        # session may have reset without touching the store.
        self.render()

    def _close_dialog(self) -> None:
        dlg = self._dialog
        self._dialog = None
        if dlg is not None:
            dlg.grab_release()
            dlg.destroy()
        self.render()

    def start(self) -> None:
        self.root.mainloop()


def run_gui(
    *,
    seed: bool = True,
    broadcast: bool = False,
    mqtt_host: str = "127.0.0.1",
    mqtt_port: int = 1883,
    namespace: str = "waitlist/v0",
) -> None:
    store = QueueStore.with_demo_seed() if seed else QueueStore()
    mqtt_client = None
    try:
        if broadcast:
            # None when the broker is unreachable; the window still works.
            mqtt_client = start_broadcast(
                store, mqtt_host=mqtt_host, mqtt_port=mqtt_port, namespace=namespace, tag="gui"
            )
        QueueWindow(QueueSession(store)).start()
    finally:
        if mqtt_client is not None:
            mqtt_client.stop()


def main() -> None:
    parser = argparse.ArgumentParser(description="Waitlist queue window (Tkinter)")
    parser.add_argument("--no-seed", action="store_true", help="start with an empty queue")
    parser.add_argument("--broadcast", action="store_true", help="publish the queue over MQTT")
    parser.add_argument("--mqtt-host", default="127.0.0.1")
    parser.add_argument("--mqtt-port", type=int, default=1883)
    parser.add_argument("--namespace", default="waitlist/v0")
    args = parser.parse_args()

    run_gui(
        seed=not args.no_seed,
        broadcast=args.broadcast,
        mqtt_host=args.mqtt_host,
        mqtt_port=args.mqtt_port,
        namespace=args.namespace,
    )


if __name__ == "__main__":
    main()
