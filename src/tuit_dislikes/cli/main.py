from __future__ import annotations

import argparse
import dataclasses
import json
from typing import Any

from tuit_dislikes.errors import DislikeError, Unauthenticated
from tuit_dislikes.settings import DislikeSettings, settings


def _configure_logging(cfg: DislikeSettings) -> None:
    import logging

    level = (cfg.log_level or "INFO").upper()
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def _settings(args: argparse.Namespace) -> DislikeSettings:
    if args.db_path:
        return settings.model_copy(update={"db_path": args.db_path})
    return settings


def _service(args: argparse.Namespace):
    from tuit_dislikes.service import build_service

    cfg = _settings(args)
    _configure_logging(cfg)
    return build_service(cfg)


def _db(args: argparse.Namespace):
    from tuit_dislikes.storage_sqlite import SQLiteDislikeDB

    cfg = _settings(args)
    _configure_logging(cfg)
    db = SQLiteDislikeDB(path=cfg.db_path, timeout=cfg.sqlite_timeout)
    db.init()
    return db


def _emit(value: Any) -> None:
    if dataclasses.is_dataclass(value):
        value = dataclasses.asdict(value)
    elif isinstance(value, list):
        value = [dataclasses.asdict(v) for v in value]
    print(json.dumps(value, indent=2, sort_keys=True))


def cmd_version() -> int:
    from tuit_dislikes import __version__

    print(__version__)
    return 0


def cmd_init(args: argparse.Namespace) -> int:
    db = _db(args)
    print(db.path)
    return 0


def cmd_add_user(args: argparse.Namespace) -> int:
    db = _db(args)
    _emit(db.add_user(username=args.username, first_name=args.first_name, last_name=args.last_name))
    return 0


def cmd_add_tuit(args: argparse.Namespace) -> int:
    db = _db(args)
    _emit(db.add_tuit(posted_by=args.user_id, tuit=args.text))
    return 0


def cmd_toggle(args: argparse.Namespace) -> int:
    svc = _service(args)
    result = svc.toggle_dislike(args.user_ref, args.tuit_id, current_user=args.current_user)
    _emit(result.model_dump())
    return 0 if result.applied else 1


def cmd_status(args: argparse.Namespace) -> int:
    svc = _service(args)
    _emit(svc.check_dislike_status(args.user_ref, args.tuit_id, current_user=args.current_user))
    return 0


def cmd_dislikers(args: argparse.Namespace) -> int:
    svc = _service(args)
    _emit(svc.list_users_who_disliked(args.tuit_id))
    return 0


def cmd_disliked(args: argparse.Namespace) -> int:
    svc = _service(args)
    _emit(svc.list_tuits_disliked_by(args.user_ref, current_user=args.current_user))
    return 0


def cmd_reconcile(args: argparse.Namespace) -> int:
    svc = _service(args)
    fixed = svc.reconcile_counts()
    _emit({tid: {"cached": old, "actual": new} for tid, (old, new) in fixed.items()})
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="tuit-dislikes")
    p.add_argument("--db-path", default=None, help="SQLite file (default: TUIT_DISLIKES_DB_PATH)")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("version").set_defaults(func=lambda _a: cmd_version())
    sub.add_parser("init", help="Create the database schema").set_defaults(func=cmd_init)

    add_user = sub.add_parser("add-user")
    add_user.add_argument("username")
    add_user.add_argument("--first-name", default=None)
    add_user.add_argument("--last-name", default=None)
    add_user.set_defaults(func=cmd_add_user)

    add_tuit = sub.add_parser("add-tuit")
    add_tuit.add_argument("user_id")
    add_tuit.add_argument("text")
    add_tuit.set_defaults(func=cmd_add_tuit)

    toggle = sub.add_parser("toggle", help="Dislike a tuit, or undo an existing dislike")
    toggle.add_argument("user_ref", help="User id, or the self alias")
    toggle.add_argument("tuit_id")
    toggle.add_argument("--as", dest="current_user", default=None, help="Authenticated user id")
    toggle.set_defaults(func=cmd_toggle)

    status = sub.add_parser("status", help="Print the dislike record, or null")
    status.add_argument("user_ref")
    status.add_argument("tuit_id")
    status.add_argument("--as", dest="current_user", default=None)
    status.set_defaults(func=cmd_status)

    dislikers = sub.add_parser("dislikers", help="Users who disliked a tuit")
    dislikers.add_argument("tuit_id")
    dislikers.set_defaults(func=cmd_dislikers)

    disliked = sub.add_parser("disliked", help="Tuits disliked by a user")
    disliked.add_argument("user_ref")
    disliked.add_argument("--as", dest="current_user", default=None)
    disliked.set_defaults(func=cmd_disliked)

    sub.add_parser("reconcile", help="Recount every tuit's cached dislikes").set_defaults(
        func=cmd_reconcile
    )

    return p


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        return args.func(args)
    except Unauthenticated as e:
        print(json.dumps({"error": e.message}))
        return 2
    except DislikeError as e:
        print(json.dumps({"error": e.message}))
        return 1


def app() -> None:
    raise SystemExit(main())


if __name__ == "__main__":
    app()
