import argparse
import random
import time
from pathlib import Path

QUEUE_NAMES = ["incoming", "active", "maildrop", "deferred", "hold", "bounce"]
# Postfix spreads these over one-character hash subdirectories.
HASHED_QUEUES = {"deferred", "bounce"}


def queue_id() -> str:
    return "".join(random.choice("0123456789ABCDEF") for _ in range(10))


def add_message(root: Path, queue: str) -> Path:
    msg_id = queue_id()
    target = root / queue
    if queue in HASHED_QUEUES:
        target = target / msg_id[0]
    target.mkdir(parents=True, exist_ok=True)
    path = target / msg_id
    path.write_text(f"queued at {time.time()}\n")
    return path


def main():
    parser = argparse.ArgumentParser(description="Build a fake Postfix queue tree for local runs.")
    parser.add_argument("--root", default="./spool", help="Queue root to populate")
    parser.add_argument("--count", type=int, default=20, help="Messages to add per run")
    parser.add_argument("--interval", type=float, default=0, help="Repeat every N seconds (0 = once)")
    args = parser.parse_args()

    root = Path(args.root)
    for queue in QUEUE_NAMES:
        (root / queue).mkdir(parents=True, exist_ok=True)
    print(f"Seeding {root} with {args.count} messages per run")

    try:
        while True:
            for _ in range(args.count):
                path = add_message(root, random.choice(QUEUE_NAMES))
                print(f"Added: {path}")
            if not args.interval:
                break
            time.sleep(args.interval)
    except KeyboardInterrupt:
        print("Stopping seeder.")


if __name__ == "__main__":
    main()
