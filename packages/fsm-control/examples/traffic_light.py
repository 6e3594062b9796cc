"""Traffic light -- async transition handlers and state hooks.

Demonstrates:
- A keyed on_transition handler with a "*" entry for every transition
- A coroutine handler that suspends while the light changes
- Persistent (on) and one-shot (once) hooks
- A step rejected because another one is still pending

Run: python examples/traffic_light.py
"""

import asyncio
import logging

from fsm_control import StateMachine


TRANSITIONS = [
    {"name": "go", "from": "red", "to": "green"},
    {"name": "slow", "from": "green", "to": "yellow"},
    {"name": "stop", "from": "yellow", "to": "red"},
    {"name": "panic", "from": "*", "to": "red"},
]


async def change_lamp(event):
    print(f"  lamp {event.before} -> {event.on} ({event.action})")
    await asyncio.sleep(0.05)


def log_green(event):
    print("  cars may drive")


async def main() -> None:
    logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    light = StateMachine(TRANSITIONS, "red", {"*": change_lamp, "green": log_green})
    light.on("red", lambda *args: print(f"  stopped, args={args}"))
    light.once("yellow", lambda: print("  first yellow of the day"))

    print(f"state={light.get_state()} actions={light.get_methods()}")

    for _ in range(2):
        await light.step("go")
        await light.step("slow")
        await light.step("stop", "end of cycle")

    # A second step while the first is still changing the lamp is dropped.
    first = asyncio.create_task(light.step("go"))
    await asyncio.sleep(0)
    print(f"  concurrent panic accepted: {await light.step('panic')}")
    await first

    print(f"state={light.get_state()} can slow: {light.can('slow')}")


if __name__ == "__main__":
    asyncio.run(main())
