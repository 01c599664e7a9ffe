"""Command line interface for day-to-day approval work."""

from __future__ import annotations

import argparse
import asyncio
from collections.abc import Sequence

import structlog
from dotenv import load_dotenv

from reservation_admin.context import AdminContext
from reservation_admin.core.config import Settings
from reservation_admin.dto import ApprovalAction
from reservation_admin.logging import setup_logging
from reservation_admin.services import ApprovalQueue, BulkActionResult, notification_title

logger = structlog.get_logger(__name__)


async def _open_context(config: Settings) -> AdminContext:
    return await AdminContext.open(config)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="reservation-admin", description="Reservation system administration"
    )
    parser.add_argument("--base-url", default=None, help="Backend base URL")
    parser.add_argument("--log-file", default=None, help="Also write logs to this file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every API call")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("whoami", help="Show the signed-in user")

    for name, noun in (("events", "event"), ("reservations", "equipment reservation")):
        group = subparsers.add_parser(name, help=f"{noun.capitalize()} approvals")
        actions = group.add_subparsers(dest="action", required=True)
        actions.add_parser("pending", help=f"List {noun}s awaiting your decision")
        for verb in ("approve", "reject"):
            sub = actions.add_parser(verb, help=f"{verb.capitalize()} {noun}s")
            sub.add_argument("ids", nargs="+", help="Public IDs")
            sub.add_argument("--remarks", default="", help="Remarks applied to every target")
            sub.add_argument(
                "--batch",
                action="store_true",
                help="Send a single batch request instead of one request per ID",
            )

    notifications = subparsers.add_parser("notifications", help="List notifications")
    notifications.add_argument("--page", type=int, default=0)
    notifications.add_argument("--size", type=int, default=10)
    notifications.add_argument("--mark-all-read", action="store_true")
    return parser


def _print_pending(queue: ApprovalQueue) -> None:
    rows = queue.eligible_rows
    if not rows:
        print(f"No pending {queue.noun}s.")
        return
    for row in rows:
        name = getattr(row, "event_name", None)
        if name is None:
            equipment = getattr(row, "equipment", None)
            name = f"{equipment.name if equipment else '?'} x{row.quantity}"
        print(f"{row.public_id}\t{row.status}\t{name}")


def _report(result: BulkActionResult) -> int:
    print(result.message)
    for outcome in result.outcomes:
        if not outcome.ok:
            print(f"  {outcome.public_id}: {outcome.error}")
    return 0 if result.ok else 1


async def _whoami(ctx: AdminContext) -> int:
    user = await ctx.load_current_user()
    print(f"{user.full_name} <{user.email}>")
    print("Roles: " + ", ".join(user.roles))
    return 0


async def _events(ctx: AdminContext, args: argparse.Namespace) -> int:
    queue = await ctx.event_approval_queue()
    if args.action == "pending":
        _print_pending(queue)
        return 0
    if args.batch:
        action = ApprovalAction.APPROVE if args.action == "approve" else ApprovalAction.REJECT
        await ctx.events.batch_action(list(args.ids), action, args.remarks)
        print(f"{len(args.ids)} event(s) submitted.")
        return 0
    queue.select(*args.ids)
    if args.action == "approve":
        return _report(await queue.approve_selected(ctx.event_mutations.approve_event, args.remarks))
    return _report(await queue.reject_selected(ctx.event_mutations.reject_event, args.remarks))


async def _reservations(ctx: AdminContext, args: argparse.Namespace) -> int:
    queue = await ctx.reservation_approval_queue()
    if args.action == "pending":
        _print_pending(queue)
        return 0
    if args.batch:
        if args.action == "approve":
            await ctx.reservations.approve_many(list(args.ids), args.remarks)
        else:
            await ctx.reservations.reject_many(list(args.ids), args.remarks)
        print(f"{len(args.ids)} reservation(s) submitted.")
        return 0
    queue.select(*args.ids)
    mutations = ctx.reservation_mutations
    if args.action == "approve":
        return _report(await queue.approve_selected(mutations.approve, args.remarks))
    return _report(await queue.reject_selected(mutations.reject, args.remarks))


async def _notifications(ctx: AdminContext, args: argparse.Namespace) -> int:
    page = await ctx.notifications.list_notifications(args.page, args.size)
    for item in page.content:
        marker = " " if item.is_read else "*"
        print(f"{marker} {item.id}\t{notification_title(item)}\t{item.message.message or ''}")
    print(f"Page {page.number + 1} of {max(page.total_pages, 1)} ({page.total_elements} total)")
    if args.mark_all_read:
        await ctx.notifications.mark_all_read()
        print("All notifications marked as read.")
    return 0


async def _run(args: argparse.Namespace) -> int:
    config = Settings()
    if args.base_url:
        config = config.model_copy(update={"api_base_url": args.base_url})
    ctx = await _open_context(config)
    async with ctx:
        if args.command == "whoami":
            return await _whoami(ctx)
        if args.command == "events":
            return await _events(ctx, args)
        if args.command == "reservations":
            return await _reservations(ctx, args)
        if args.command == "notifications":
            return await _notifications(ctx, args)
    raise ValueError(f"Unknown command: {args.command}")


def _dispatch(args: argparse.Namespace) -> int:
    return asyncio.run(_run(args))


def main(argv: Sequence[str] | None = None) -> int:
    load_dotenv()
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_file, level="INFO" if args.verbose else None)
    try:
        return _dispatch(args)
    except Exception as exc:
        logger.exception("command_failed", command=args.command)
        print(f"Error: {exc}")
        return 1


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())
