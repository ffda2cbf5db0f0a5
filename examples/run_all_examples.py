#!/usr/bin/env python3
"""
Run All Examples - Market Microstructure Analytics

Runs every example in sequence and prints a short pass/fail summary with
timings.

Run: python examples/run_all_examples.py
"""

import importlib.util
import sys
import time
import traceback
from pathlib import Path
from typing import Any, Dict

EXAMPLES = [
    ("Order Book Analysis", "orderbook_analysis.py"),
    ("Tape Reading", "tape_reading.py"),
    ("Pattern Detection", "pattern_detection.py"),
]


class ExampleRunner:
    """Manages execution of all example scripts."""

    def __init__(self):
        self.results = []
        self.examples_dir = Path(__file__).parent

    def run_example(self, example_name: str, module_path: Path) -> Dict[str, Any]:
        """Import an example module and call its main()."""
        print(f"\n{'='*60}")
        print(f"🚀 RUNNING: {example_name}")
        print(f"{'='*60}")

        start_time = time.time()
        try:
            spec = importlib.util.spec_from_file_location(module_path.stem, module_path)
            module = importlib.util.module_from_spec(spec)
            spec.loader.exec_module(module)
            module.main()
            status, error = "success", None
        except Exception as e:
            status, error = "failed", f"{type(e).__name__}: {e}"
            print(f"❌ ERROR in {example_name}: {error}")
            traceback.print_exc()

        return {
            "name": example_name,
            "status": status,
            "duration": time.time() - start_time,
            "error": error,
        }

    def run_all_examples(self) -> bool:
        """Run every example; returns True when all succeeded."""
        for name, filename in EXAMPLES:
            self.results.append(self.run_example(name, self.examples_dir / filename))

        print(f"\n{'='*60}")
        print("📊 EXAMPLE SUMMARY")
        print(f"{'='*60}")
        for result in self.results:
            icon = "✅" if result["status"] == "success" else "❌"
            print(f"  {icon} {result['name']} ({result['duration']:.2f}s)")
            if result["error"]:
                print(f"     Error: {result['error']}")

        return all(r["status"] == "success" for r in self.results)


def main():
    """Main function to run all examples."""
    sys.path.insert(0, str(Path(__file__).parent.parent))
    if not ExampleRunner().run_all_examples():
        sys.exit(1)


if __name__ == "__main__":
    main()
