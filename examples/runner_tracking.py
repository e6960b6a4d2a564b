"""Live runner tracking against the realtime store.

Set RACETIMING_RUNNER_STORE_URL (and RACETIMING_RUNNER_STORE_AUTH if the
database requires it) before running.
"""

import time

from racetiming import RunnerStoreClient
from racetiming.formatters import format_race_time


def main() -> None:
    with RunnerStoreClient() as store:
        print("=== Starting runners ===")
        runners = [store.create(name) for name in ("A12", "B7")]
        for r in runners:
            print(f"  {r.name} started (id={r.id})")

        time.sleep(2)

        # Finish the first runner, leave the second on course
        finished = store.update_end_time(runners[0].id)
        print(f"\n{finished.name} finished in {format_race_time(finished.duration)}")

        print("\n=== Still on course ===")
        for r in store.active().values():
            print(f"  {r.name}")

        # Oops, wrong runner: put them back on course
        store.undo_end_time(finished.id)
        print(f"\n{finished.name} back on course, {len(store.active())} active")

        for r in runners:
            store.delete(r.id)


if __name__ == "__main__":
    main()
