"""
prevhub.cli
===========

Command-line access to the compliance core.

Examples
--------
$ prevhub classify 2025-02-20 --kind verification --today 2025-01-01
$ prevhub summary export.json --today 2025-01-01 --by-owner
$ prevhub alerts export.json

``export.json`` holds rows as returned by the backend::

    {"verifications": [...], "prescriptions": [...], "commissions": [...]}
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import textwrap
from dataclasses import asdict, is_dataclass
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Any, List, Optional

from .adapters import obligations_from_payload
from .aggregator import summarize, summarize_by_owner
from .alerts import alert_stats, build_alerts
from .classifier import classify
from .clock import FixedClock, SystemClock
from .errors import InvalidDateError
from .models import ObligationKind
from .presentation import label_for
from .settings import LOG_LEVEL

logger = logging.getLogger(__name__)

INVALID_DATES_MSG = "données de date invalides"


def _jsonable(obj: Any) -> Any:
    if is_dataclass(obj):
        return {k: _jsonable(v) for k, v in asdict(obj).items()}
    if isinstance(obj, dict):
        return {("null" if k is None else str(k)): _jsonable(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_jsonable(v) for v in obj]
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, date):
        return obj.isoformat()
    return obj


def _load(path: str):
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    return obligations_from_payload(data)


def _today(args) -> date:
    clock = FixedClock(args.today) if args.today else SystemClock()
    return clock.today()


# ---------------------------------------------------------------------------
# Sub-commands
# ---------------------------------------------------------------------------
def cmd_classify(args) -> Any:
    c = classify(_today(args), args.due_date, ObligationKind(args.kind))
    out = _jsonable(c)
    out["presentation"] = _jsonable(label_for(c.tier))
    return out


def cmd_summary(args) -> Any:
    obligations = _load(args.file)
    today = _today(args)
    if args.by_owner:
        return _jsonable(summarize_by_owner(today, obligations))
    return _jsonable(summarize(today, obligations))


def cmd_alerts(args) -> Any:
    alerts = build_alerts(_today(args), _load(args.file))
    return {"alerts": _jsonable(alerts), "stats": alert_stats(alerts)}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="prevhub",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description=textwrap.dedent(
            """\
            prevhub compliance deadlines
            ----------------------------
            classify  Classify a single due date
            summary   Roll up an export of backend rows
            alerts    List the alerts an export would raise
            """
        ),
    )
    parser.add_argument("--log-level", default=LOG_LEVEL, help="logging level")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("classify", help="classify one due date")
    p.add_argument("due_date", help="ISO date, e.g. 2025-02-20")
    p.add_argument("--kind", default="verification", choices=[k.value for k in ObligationKind])
    p.add_argument("--today", help="reference day (defaults to the system date)")
    p.set_defaults(func=cmd_classify)

    for name, func, help_ in (
        ("summary", cmd_summary, "summarize an export"),
        ("alerts", cmd_alerts, "alerts raised by an export"),
    ):
        p = sub.add_parser(name, help=help_)
        p.add_argument("file", help="JSON export of backend rows")
        p.add_argument("--today", help="reference day (defaults to the system date)")
        if name == "summary":
            p.add_argument("--by-owner", action="store_true", help="one summary per owner")
        p.set_defaults(func=func)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")
    try:
        result = args.func(args)
    except InvalidDateError as exc:
        logger.error(f"{INVALID_DATES_MSG}: {exc}")
        print(f"{INVALID_DATES_MSG}: {exc.value!r}", file=sys.stderr)
        return 2
    print(json.dumps(result, ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
