"""
write_load.py: simple async load script to create users

Logs in once per simulated client identity, then fires concurrent creates.
After the run it checks that the directory grew by exactly the number of
successful creates (no lost writes under the store lock).

Usage:
  python write_load.py --base http://127.0.0.1:8000 --count 2000 --concurrency 100 --clients 10
"""
import argparse
import asyncio
import time
from datetime import datetime, timezone

import httpx

from user_directory.config import settings

TOKEN_HEADER = settings.TOKEN_HEADER


def _now_iso():
    return datetime.now(timezone.utc).isoformat()


async def _login(client: httpx.AsyncClient, base: str, username: str) -> str:
    r = await client.post(f"{base}/login", json={"username": username}, timeout=10)
    r.raise_for_status()
    return r.json()["token"]


async def _create_one(client: httpx.AsyncClient, base: str, token: str, idx: int):
    payload = {
        "username": f"load_user_{idx}",
        "real_name": f"Load User {idx}",
        "email": f"load_user_{idx}@example.com",
    }
    try:
        r = await client.post(f"{base}/users", json=payload, headers={TOKEN_HEADER: token}, timeout=10)
        r.raise_for_status()
        return True
    except httpx.HTTPError:
        return False


async def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--base", default="http://127.0.0.1:8000")
    parser.add_argument("--count", type=int, default=2000)
    parser.add_argument("--concurrency", type=int, default=100)
    parser.add_argument("--clients", type=int, default=10, help="distinct login identities")
    args = parser.parse_args()

    start_iso = _now_iso()
    success = 0

    limit = httpx.Limits(max_connections=args.concurrency, max_keepalive_connections=args.concurrency)
    async with httpx.AsyncClient(limits=limit) as client:
        tokens = [await _login(client, args.base, f"loader{i}") for i in range(args.clients)]
        before = len((await client.get(f"{args.base}/users")).json())

        sem = asyncio.Semaphore(args.concurrency)
        t0 = time.perf_counter()

        async def _task(i):
            nonlocal success
            async with sem:
                ok = await _create_one(client, args.base, tokens[i % len(tokens)], i)
                if ok:
                    success += 1

        await asyncio.gather(*(_task(i) for i in range(args.count)))
        dt = time.perf_counter() - t0

        after = len((await client.get(f"{args.base}/users")).json())

    end_iso = _now_iso()
    print(f"START: {start_iso}")
    print(f"END:   {end_iso}")
    print(f"TOTAL: {dt:.3f} s")
    print(f"OPS:   writes={args.count}, ok={success}, fail={args.count - success}")
    print(f"GROWTH: {after - before} users (expected {success})")
    if dt > 0:
        print(f"TPS:   {success/dt:.1f} req/s")


if __name__ == "__main__":
    asyncio.run(main())
