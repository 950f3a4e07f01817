"""In-memory waitlist queue with position and wait-time display.

People join with their name, are appended to an ordered list and see their
position plus a fixed-rate wait estimate. The package contains:
- the queue store (pure logic, easy to unit test)
- a session object holding per-user presentation state
- a Tkinter window and a terminal console on top of the session
- an optional MQTT broadcaster so a separate display board can watch the list

See README for how to run.
"""
