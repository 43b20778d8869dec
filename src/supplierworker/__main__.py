"""SupplierWorker - unified entry point.

Run one sync (incremental by default):
    python -m supplierworker sync
    python -m supplierworker sync --full --connection oraclesuppliers

Manage the Graph connection:
    python -m supplierworker connections create oraclesuppliers "Oracle Suppliers"
    python -m supplierworker schema register oraclesuppliers

Start Temporal worker / manage schedules:
    python -m supplierworker worker
    python -m supplierworker schedules create
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

import httpx
from dotenv import load_dotenv

from .exceptions import GraphError, SyncError

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_PARTIAL = 1
EXIT_ABORTED = 2


def setup_logging(level: str = "INFO"):
    """Setup logging configuration."""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="supplierworker",
        description="SupplierWorker - Oracle Fusion suppliers into Microsoft Graph",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (default: LOG_LEVEL env or INFO)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # sync
    sync = sub.add_parser("sync", help="Run one supplier sync")
    sync.add_argument(
        "--full",
        action="store_true",
        help="Sync every supplier instead of those modified since the last run",
    )
    sync.add_argument("--connection", default=None, help="Graph connection ID")

    # connections
    connections = sub.add_parser("connections", help="Manage Graph external connections")
    conn_sub = connections.add_subparsers(dest="action", required=True)
    create = conn_sub.add_parser("create", help="Create a connection")
    create.add_argument("connection_id")
    create.add_argument("name")
    create.add_argument("--description", default=None)
    conn_sub.add_parser("list", help="List connections")
    delete = conn_sub.add_parser("delete", help="Delete a connection")
    delete.add_argument("connection_id")

    # schema
    schema = sub.add_parser("schema", help="Manage the connection schema")
    schema_sub = schema.add_subparsers(dest="action", required=True)
    register = schema_sub.add_parser("register", help="Register the supplier schema")
    register.add_argument("connection_id")
    show = schema_sub.add_parser("show", help="Show the registered schema")
    show.add_argument("connection_id")

    # worker
    worker = sub.add_parser("worker", help="Start the Temporal worker")
    worker.add_argument(
        "--temporal-host",
        default=None,
        help="Temporal server address (default: TEMPORAL_HOST env or localhost:7233)",
    )

    # schedules
    schedules = sub.add_parser("schedules", help="Manage Temporal schedules")
    sched_sub = schedules.add_subparsers(dest="action", required=True)
    sched_sub.add_parser("create", help="Create the default schedules")
    sched_sub.add_parser("list", help="List schedules")
    sched_delete = sched_sub.add_parser("delete", help="Delete a schedule")
    sched_delete.add_argument("schedule_id")

    return parser


async def _sync(args) -> int:
    from .harvester import RunStatus, run_sync

    result = await run_sync(incremental_only=not args.full, connection_id=args.connection)
    status = result["status"]

    if status == RunStatus.SUCCESS.value:
        print(f"Supplier sync succeeded: {result['uploaded']} of {result['fetched']} uploaded")
        return EXIT_OK
    if status == RunStatus.UPLOAD_ERRORS.value:
        print(
            f"Supplier sync completed but uploads encountered errors "
            f"({len(result['failed'])} of {result['fetched']} failed): "
            f"{', '.join(result['failed'])}"
        )
        return EXIT_PARTIAL
    if status == RunStatus.INCOMPLETE.value:
        print(
            f"Supplier sync incomplete: the supplier listing stopped early, "
            f"{result['uploaded']} of {result['fetched']} uploaded, cutoff not advanced"
        )
        return EXIT_PARTIAL
    print(f"Supplier sync aborted: {result['error']}")
    return EXIT_ABORTED


async def _graph_command(args) -> int:
    from .config import get_config
    from .index import CONNECTION_DESCRIPTION, SUPPLIER_SCHEMA, GraphConnectorClient

    config = get_config()
    async with httpx.AsyncClient(timeout=config.http_timeout) as http:
        graph = GraphConnectorClient(http, config.graph)

        if args.command == "connections":
            if args.action == "create":
                await graph.create_connection(
                    args.connection_id,
                    args.name,
                    args.description or CONNECTION_DESCRIPTION,
                )
                print(f"Connection {args.connection_id} created")
            elif args.action == "list":
                for connection in await graph.list_connections():
                    print(
                        f"{connection.get('id')}\t{connection.get('name', '')}\t"
                        f"{connection.get('state', '')}"
                    )
            elif args.action == "delete":
                await graph.delete_connection(args.connection_id)
                print(f"Connection {args.connection_id} deleted")
        else:
            if args.action == "register":
                print(f"Registering schema for {args.connection_id}, this may take minutes...")
                await graph.register_schema(args.connection_id, SUPPLIER_SCHEMA)
                print("Schema registered")
            elif args.action == "show":
                print(json.dumps(await graph.get_schema(args.connection_id), indent=2))
    return EXIT_OK


async def _schedules_command(args) -> int:
    from .schedules import create_default_schedules, delete_schedule, list_schedules

    if args.action == "create":
        ids = await create_default_schedules()
        print(f"Created schedules: {ids}")
    elif args.action == "list":
        for schedule in await list_schedules():
            print(f"  {schedule['id']}: {schedule['workflow']}")
    elif args.action == "delete":
        if not await delete_schedule(args.schedule_id):
            return EXIT_ABORTED
        print(f"Deleted: {args.schedule_id}")
    return EXIT_OK


def main(argv=None) -> int:
    """CLI entry point."""
    load_dotenv()

    parser = build_parser()
    args = parser.parse_args(argv)

    if args.log_level is None:
        from .config import get_config

        args.log_level = get_config().log_level
    setup_logging(args.log_level)

    try:
        if args.command == "sync":
            return asyncio.run(_sync(args))
        if args.command in ("connections", "schema"):
            return asyncio.run(_graph_command(args))
        if args.command == "schedules":
            return asyncio.run(_schedules_command(args))
        if args.command == "worker":
            from .core.worker import run_worker

            asyncio.run(run_worker(temporal_host=args.temporal_host))
    except (GraphError, SyncError, httpx.HTTPError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ABORTED
    except KeyboardInterrupt:
        logger.info("Shutting down...")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
