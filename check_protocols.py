# check_protocols.py
"""
Print which IATF protocols need attention, from a JSON export of the
protocols API (a list of records with id, name, startDate and optionally
implantRemovalDate).

Usage:
  python check_protocols.py protocols.json
  python check_protocols.py protocols.json --now 2024-01-11 --window 3
"""
import argparse
import json
from datetime import datetime, timezone

from iatf.notifications import load_anchors, summarize
from iatf.proximity import PROXIMITY_WINDOW_DAYS, evaluate_milestones, window_delta
from iatf.timeline import as_instant, parse_instant


def run(path: str, now: datetime, window: float) -> int:
    with open(path, encoding="utf-8") as fh:
        records = json.load(fh)

    anchors, skipped = load_anchors(records)
    summary = summarize(anchors, now, window, skipped=skipped)

    print(f"[i] Evaluated at {now.isoformat(sep=' ')} (window {window} day(s))")
    print(f"[i] Protocols: {summary.total_protocols}, notifications on: {summary.notifications_enabled}")
    for protocol_id in summary.skipped:
        print(f"[!] Skipped protocol {protocol_id}: invalid record")

    for anchor in anchors:
        for result in evaluate_milestones(anchor, now, window):
            if result.is_near:
                print(f" - {anchor.name} [{anchor.protocol_id}]: {result.category.value} - {result.label}")

    if summary.has_any:
        print(f"[+] {summary.nearby_count} protocol(s) need attention")
    else:
        print("[*] Nothing due")
    return summary.nearby_count


def main(argv=None) -> int:
    p = argparse.ArgumentParser()
    p.add_argument("path", help="JSON file with a list of protocol records")
    p.add_argument("--now", "-n", default=None, help="ISO date/time to evaluate at (default: now)")
    p.add_argument("--window", "-w", type=float, default=PROXIMITY_WINDOW_DAYS, help="Lookahead window in days")
    args = p.parse_args(argv)
    if args.now:
        try:
            now = parse_instant(args.now)
        except ValueError:
            p.error(f"invalid --now: {args.now!r} (expected an ISO date or timestamp)")
    else:
        now = as_instant(datetime.now(timezone.utc))
    try:
        window_delta(args.window)
    except ValueError as e:
        p.error(f"invalid --window: {e}")
    return run(args.path, now, args.window)


if __name__ == "__main__":
    main()
