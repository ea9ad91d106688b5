"""CLI to exercise a running Tartan Market API.

Usage:
  poetry run tartan-cli health
  poetry run tartan-cli search "tote bag" --type marketplace --max-price 40
  poetry run tartan-cli items get marketplace 3f2c...
  poetry run tartan-cli items latest commission --limit 5
  poetry run tartan-cli users items jdoe marketplace
  poetry run tartan-cli --token $SESSION users me
"""
import argparse
import json
import sys

import httpx


def print_json(data: object) -> None:
    print(json.dumps(data, indent=2, default=str))


def cmd_health(client: httpx.Client, _: argparse.Namespace) -> int:
    r = client.get("/")
    r.raise_for_status()
    print_json(r.json())
    return 0


def cmd_search(client: httpx.Client, args: argparse.Namespace) -> int:
    params: dict[str, object] = {"q": args.query, "limit": args.limit}
    for name, value in (
        ("type", args.type),
        ("category", args.category),
        ("condition", args.condition),
        ("minPrice", args.min_price),
        ("maxPrice", args.max_price),
        ("maxTurnaroundDays", args.max_turnaround_days),
    ):
        if value is not None:
            params[name] = value
    r = client.get("/search", params=params)
    r.raise_for_status()
    results = r.json()["results"]
    print(f"Found {len(results)} results for {args.query!r}")
    print_json(results)
    return 0


def cmd_items_get(client: httpx.Client, args: argparse.Namespace) -> int:
    r = client.get(f"/items/{args.type}/{args.item_id}")
    r.raise_for_status()
    print_json(r.json())
    return 0


def cmd_items_latest(client: httpx.Client, args: argparse.Namespace) -> int:
    r = client.get(f"/items/{args.type}/latest", params={"limit": args.limit})
    r.raise_for_status()
    data = r.json()
    print(f"Found {len(data)} {args.type} items")
    print_json(data)
    return 0


def cmd_users_items(client: httpx.Client, args: argparse.Namespace) -> int:
    r = client.get(f"/users/{args.andrew_id}/items/{args.type}")
    r.raise_for_status()
    data = r.json()
    print(f"{args.andrew_id} has {len(data)} {args.type} items")
    print_json(data)
    return 0


def cmd_users_me(client: httpx.Client, _: argparse.Namespace) -> int:
    r = client.post("/users/current")
    r.raise_for_status()
    print_json(r.json())
    return 0


def cmd_users_get(client: httpx.Client, args: argparse.Namespace) -> int:
    r = client.get(f"/users/{args.andrew_id}")
    r.raise_for_status()
    print_json(r.json())
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Exercise the Tartan Market API.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--base-url",
        default="http://localhost:8000",
        help="API base URL (default: http://localhost:8000)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=30.0,
        help="Request timeout in seconds (default: 30)",
    )
    parser.add_argument("--token", default=None, help="Session token for authenticated routes")
    subparsers = parser.add_subparsers(dest="command", required=True, help="Command")

    # health
    subparsers.add_parser("health", help="GET / health check")

    # search
    p = subparsers.add_parser("search", help="GET /search")
    p.add_argument("query", help="Search text (at least 2 characters)")
    p.add_argument("--type", choices=["marketplace", "commission"], default=None)
    p.add_argument("--category", default=None)
    p.add_argument("--condition", default=None)
    p.add_argument("--min-price", type=float, default=None)
    p.add_argument("--max-price", type=float, default=None)
    p.add_argument("--max-turnaround-days", type=int, default=None)
    p.add_argument("--limit", type=int, default=40, help="Max results per kind (default: 40)")

    # items
    items = subparsers.add_parser("items", help="Listing routes (/items)")
    items_sub = items.add_subparsers(dest="items_cmd", required=True)
    p = items_sub.add_parser("get", help="GET /items/{type}/{id}")
    p.add_argument("type", choices=["marketplace", "commission"])
    p.add_argument("item_id")
    p = items_sub.add_parser("latest", help="GET /items/{type}/latest")
    p.add_argument("type", choices=["marketplace", "commission"])
    p.add_argument("--limit", type=int, default=10, help="Max items (default: 10)")

    # users
    users = subparsers.add_parser("users", help="User routes (/users)")
    users_sub = users.add_subparsers(dest="users_cmd", required=True)
    p = users_sub.add_parser("items", help="GET /users/{andrewId}/items/{type}")
    p.add_argument("andrew_id")
    p.add_argument("type", choices=["marketplace", "commission"])
    p = users_sub.add_parser("get", help="GET /users/{andrewId} (needs --token)")
    p.add_argument("andrew_id")
    users_sub.add_parser("me", help="POST /users/current (needs --token)")
    return parser


HANDLERS = {
    "health": cmd_health,
    "search": cmd_search,
    "items": {
        "get": cmd_items_get,
        "latest": cmd_items_latest,
    },
    "users": {
        "items": cmd_users_items,
        "get": cmd_users_get,
        "me": cmd_users_me,
    },
}


def main(argv: list[str] | None = None, transport: httpx.BaseTransport | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    base_url = args.base_url.rstrip("/")

    handler = HANDLERS[args.command]
    if isinstance(handler, dict):
        handler = handler[getattr(args, f"{args.command}_cmd")]

    headers = {"Authorization": f"Bearer {args.token}"} if args.token else {}
    try:
        with httpx.Client(
            base_url=base_url, timeout=args.timeout, headers=headers, transport=transport
        ) as client:
            return handler(client, args)
    except httpx.HTTPStatusError as e:
        print(f"HTTP error: {e.response.status_code}", file=sys.stderr)
        if e.response.content:
            try:
                print(e.response.json(), file=sys.stderr)
            except ValueError:
                print(e.response.text, file=sys.stderr)
        return 1
    except httpx.RequestError as e:
        print(f"Request error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
