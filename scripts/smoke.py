# scripts/smoke.py
"""
Smoke Test Script for the blueprint console.

Drives the plugin against the in-process platform without a web server:
seeds the demo modules, prints the registry, destroys one module and checks
that it disappears.

Usage
-----
    $ python scripts/smoke.py
    $ python scripts/smoke.py --html artifacts/blueprint.html
"""

import argparse
import logging
import sys
import time
from pathlib import Path

from dotenv import load_dotenv

from blueprint_console.demo import seed_platform
from blueprint_console.engine import BlueprintEvent, EventKind
from blueprint_console.hosting import LocalPlatform
from blueprint_console.plugin import BlueprintConsolePlugin

env_path = Path(".env")
if env_path.exists():
    load_dotenv(env_path)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
log = logging.getLogger("smoke")


def main() -> None:
    """Execute the smoke test workflow."""
    parser = argparse.ArgumentParser(description="Run blueprint console smoke test")
    parser.add_argument("--html", type=Path, help="Write the rendered page to this path")
    args = parser.parse_args()

    platform = LocalPlatform()
    plugin = BlueprintConsolePlugin(platform)
    plugin.activate()
    try:
        modules = seed_platform(platform)
        for snap in plugin.snapshot_all():
            log.info(
                "%-22s %-12s recipes=%d unsatisfied=%d missing=%s",
                snap.module.symbolic_name,
                snap.event_type_name,
                len(snap.recipes),
                snap.unsatisfied_count,
                snap.missing_dependencies_string or "-",
            )

        victim = modules[0]
        platform.publish(
            BlueprintEvent(
                type=EventKind.DESTROYED,
                module=victim,
                timestamp=int(time.time() * 1000),
            )
        )
        remaining = {s.module_id for s in plugin.snapshot_all()}
        if victim.module_id in remaining:
            log.error("❌ %s still listed after Destroyed", victim.symbolic_name)
            sys.exit(1)
        log.info("✅ %s evicted; %d containers remain", victim.symbolic_name, len(remaining))

        if args.html:
            args.html.parent.mkdir(parents=True, exist_ok=True)
            args.html.write_text(plugin.render(), encoding="utf-8")
            log.info("Page written to %s", args.html)
    finally:
        plugin.deactivate()


if __name__ == "__main__":
    main()
