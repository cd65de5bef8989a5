from __future__ import annotations

import argparse

from darknet_task.config import EXECUTION_CONFIG_PATH
from darknet_task.runner import main as run_task


def main() -> int:
    parser = argparse.ArgumentParser(description="Run the Darknet single-image inference task once.")
    parser.add_argument(
        "--config",
        default=EXECUTION_CONFIG_PATH,
        help="Serialized execution configuration (JSON).",
    )
    parser.add_argument(
        "--root",
        default="/",
        help="Sandbox root; every path in the configuration is resolved below it.",
    )
    args = parser.parse_args()
    return run_task(args.config, args.root)


if __name__ == "__main__":
    raise SystemExit(main())
