#!/usr/bin/env python3
"""
Basic readdirp example: walk a tree lazily and summarize it.

This example demonstrates:
- Lazy async iteration over a directory tree
- Glob filters for files and directories
- Stat results attached to every entry
- Recovered errors reported through 'warn'
"""

import asyncio
import sys
from pathlib import Path

# Add parent directory to path for development
sys.path.insert(0, str(Path(__file__).parent.parent))

from readdirp import readdirp


async def main():
    """Summarize the Python files under a directory."""
    root_path = sys.argv[1] if len(sys.argv) > 1 else str(Path.cwd())

    print(f"Traversing: {root_path}")
    print("-" * 50)

    skipped = []
    stream = readdirp(
        root_path,
        file_filter=['*.py', '!test_*'],
        directory_filter=['!.git', '!__pycache__', '!node_modules'],
        always_stat=True,
        depth=3,
    ).on('warn', skipped.append)

    file_count = 0
    total_size = 0
    largest = []

    async for entry in stream:
        file_count += 1
        total_size += entry.stats.st_size
        largest.append((entry.stats.st_size, entry.path))

    print(f"\nTraversal Summary:")
    print(f"  Python files: {file_count:,}")
    print(f"  Total Size: {total_size / 1024:.1f} KB")
    print(f"  Skipped: {len(skipped)}")

    if largest:
        print(f"\nLargest files:")
        largest.sort(reverse=True)
        for size, path in largest[:5]:
            print(f"  {size / 1024:.1f} KB: {path}")


if __name__ == "__main__":
    print("readdirp - Basic Async Traversal Example")
    print("=" * 50)
    asyncio.run(main())
