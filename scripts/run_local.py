#!/usr/bin/env python3
"""Local multi-instance runner.

Starts several backend instances on consecutive ports, each with its own
INSTANCE_ID, then checks that every instance answers for itself and keeps
an independent item store.
"""

import atexit
import os
import signal
import subprocess
import sys
import time

import httpx

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

BACKEND_MODULE = "backend.main"
BASE_PORT = int(os.getenv("BASE_PORT", "3000"))
INSTANCE_COUNT = int(os.getenv("INSTANCE_COUNT", "3"))
STARTUP_TIMEOUT = 30  # seconds to wait for each instance

INSTANCES = [
    {"name": f"local-{i + 1}", "port": BASE_PORT + i} for i in range(INSTANCE_COUNT)
]

# ---------------------------------------------------------------------------
# Process management
# ---------------------------------------------------------------------------

_processes: list[subprocess.Popen] = []


def _cleanup() -> None:
    """Kill all child processes."""
    for proc in _processes:
        try:
            proc.terminate()
        except OSError:
            pass
    time.sleep(1)
    for proc in _processes:
        try:
            proc.kill()
        except OSError:
            pass
    print("\n--- All processes cleaned up ---")


atexit.register(_cleanup)
signal.signal(signal.SIGINT, lambda *_: sys.exit(1))
signal.signal(signal.SIGTERM, lambda *_: sys.exit(1))


def start_instance(name: str, port: int) -> subprocess.Popen:
    """Start one backend process with its own port and instance id."""
    env = {**os.environ, "PORT": str(port), "INSTANCE_ID": name}
    proc = subprocess.Popen(
        [sys.executable, "-m", BACKEND_MODULE],
        env=env,
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
    )
    _processes.append(proc)
    print(f"  Started {name} on port {port} (PID {proc.pid})")
    return proc


def wait_for_health(port: int, name: str, timeout: int = STARTUP_TIMEOUT) -> bool:
    """Poll /health until it answers 200 or timeout is reached."""
    url = f"http://localhost:{port}/health"
    deadline = time.time() + timeout
    while time.time() < deadline:
        try:
            with httpx.Client(timeout=5) as client:
                resp = client.get(url)
                if resp.status_code == 200:
                    print(f"  {name} (port {port}) is ready")
                    return True
        except (httpx.ConnectError, httpx.ReadTimeout):
            pass
        time.sleep(0.5)
    print(f"  TIMEOUT: {name} (port {port}) did not start in {timeout}s")
    return False


# ---------------------------------------------------------------------------
# Checks
# ---------------------------------------------------------------------------


def check_instance(instance: dict, client: httpx.Client) -> bool:
    """Verify identity, seed item and store independence for one instance."""
    name = instance["name"]
    base = f"http://localhost:{instance['port']}"
    print(f"\n{'='*60}")
    print(f"Instance {name}")
    print(f"{'='*60}")

    try:
        hello = client.get(f"{base}/api/hello").json()
        items = client.get(f"{base}/api/items").json()
        created = client.post(
            f"{base}/api/items", json={"text": f"note for {name}"}
        )
        after = client.get(f"{base}/api/items").json()
    except Exception as e:
        print(f"ERROR: Request failed — {e}")
        print("RESULT: FAIL")
        return False

    passed = True
    print(f"Hello: {hello}")
    if hello.get("instance") != name:
        print(f"  WRONG instance: expected {name}, got {hello.get('instance')}")
        passed = False
    if len(items) != 1 or name not in items[0]["text"]:
        print(f"  UNEXPECTED seed items: {items}")
        passed = False
    if created.status_code != 201 or created.json()["id"] != 2:
        print(f"  UNEXPECTED create reply: {created.status_code} {created.text}")
        passed = False
    if len(after) != 2:
        print(f"  Store not independent: {len(after)} items after one add")
        passed = False

    print(f"RESULT: {'PASS' if passed else 'FAIL'}")
    return passed


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------


def main() -> int:
    print("=" * 60)
    print("Instance Items Demo — Local Multi-Instance Check")
    print("=" * 60)

    print("\n--- Starting instances ---")
    for inst in INSTANCES:
        start_instance(inst["name"], inst["port"])

    print("\n--- Waiting for instances ---")
    for inst in INSTANCES:
        if not wait_for_health(inst["port"], inst["name"]):
            print("FATAL: Instance failed to start. Aborting.")
            return 1

    with httpx.Client(timeout=10) as client:
        results = [check_instance(inst, client) for inst in INSTANCES]

    passed_count = sum(results)
    total = len(results)
    print(f"\n{'='*60}")
    print(f"SUMMARY: {passed_count}/{total} instances passed")
    print(f"{'='*60}")
    return 0 if passed_count == total else 1


if __name__ == "__main__":
    sys.exit(main())
