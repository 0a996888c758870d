"""treecheck CLI - verify the directory structure of Redis-FS volumes."""

import sys
import click
import redis as redis_lib

from treecheck.checker import TreeChecker
from treecheck.node import walk
from treecheck.redis_source import RedisFSSource, Snapshot


def get_redis(ctx) -> redis_lib.Redis:
    """Get Redis client from context."""
    return ctx.obj["redis"]


def get_snapshot(ctx, key: str) -> Snapshot:
    """Load a snapshot of the volume."""
    return RedisFSSource(get_redis(ctx), key).load()


@click.group()
@click.option("--host", "-h", default="localhost", help="Redis host")
@click.option("--port", "-p", default=6379, type=int, help="Redis port")
@click.option("--db", "-n", default=0, type=int, help="Redis database number")
@click.option("--url", "-u", default=None, help="Redis URL (overrides host/port/db)")
@click.pass_context
def cli(ctx, host, port, db, url):
    """treecheck: consistency checks for Redis-FS directory trees.

    Each command reads a filesystem volume (KEY) stored in Redis.
    """
    ctx.ensure_object(dict)
    if "redis" in ctx.obj:
        return
    if url:
        ctx.obj["redis"] = redis_lib.from_url(url)
    else:
        ctx.obj["redis"] = redis_lib.Redis(host=host, port=port, db=db)


@cli.command()
@click.argument("key")
@click.pass_context
def check(ctx, key):
    """Verify the tree invariants of a volume."""
    snapshot = get_snapshot(ctx, key)
    if not snapshot.is_valid(TreeChecker()):
        sys.exit(1)
    click.echo(f"OK: {snapshot.count} nodes")


@cli.command()
@click.argument("key")
@click.pass_context
def tree(ctx, key):
    """Print the paths of a volume in pre-order."""
    snapshot = get_snapshot(ctx, key)
    if not snapshot.is_valid(TreeChecker()):
        sys.exit(1)
    for node in walk(snapshot.root):
        click.echo(node.path.pathname)


def main():
    """Entry point."""
    cli()


if __name__ == "__main__":
    main()
