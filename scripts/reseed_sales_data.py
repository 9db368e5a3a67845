from __future__ import annotations

import argparse
import json
import os
import sys

SCRIPT_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_ROOT = os.path.abspath(os.path.join(SCRIPT_DIR, ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)


def load_env_file(env_path: str) -> None:
    if not os.path.exists(env_path):
        return
    with open(env_path, "r", encoding="utf-8") as env_file:
        for line in env_file:
            line = line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            key, value = line.split("=", 1)
            os.environ.setdefault(key, value)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Wipe sales, commissions and withholding limits and regenerate demo data."
    )
    parser.add_argument(
        "--env-file",
        default=os.path.join(PROJECT_ROOT, ".env"),
        help="Path to .env file.",
    )
    parser.add_argument(
        "--password",
        default=None,
        help="Reseed secret. Defaults to RESEED_SECRET from the environment.",
    )
    parser.add_argument(
        "--reference-date",
        default=None,
        help="ISO timestamp used as 'now' for generation (overrides REPORTING_REFERENCE_DATE).",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    load_env_file(os.path.abspath(args.env_file))
    if args.reference_date:
        os.environ["REPORTING_REFERENCE_DATE"] = args.reference_date

    from salesboard.api.dependencies import get_reseed_service
    from salesboard.core.config import get_settings
    from salesboard.core.logging import configure_logging

    configure_logging(get_settings().log_level)
    service = get_reseed_service()
    result = service.reseed(args.password or os.environ.get("RESEED_SECRET"))
    print(json.dumps(result.model_dump(by_alias=True), indent=2, default=str))


if __name__ == "__main__":
    main()
