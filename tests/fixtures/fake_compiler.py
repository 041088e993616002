"""
Stand-in compiler used by the tests.

Invoked as ``fake_compiler.py -p CONFIG --outDir OUT [--sourceMap] [--watch]``
from the workspace root, like the real compiler. It:

- exits with ``fakeCompiler.exitCode`` from the config when set
- fails when a ``compilerOptions.paths`` entry's first location does not exist
- writes ``<OUT>/<dir of each file in "files">/<name>.js`` and ``.d.ts``
- records the config it was given in ``<OUT>/.compiler-config.json``
- with ``--watch``, keeps running until terminated
  (or killed, when ``fakeCompiler.ignoreSigterm`` is set)
"""

import argparse
import json
import os
import signal
import sys
import time
from pathlib import Path


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("-p", dest="project", required=True)
    parser.add_argument("--outDir", dest="out_dir", required=True)
    parser.add_argument("--sourceMap", action="store_true")
    parser.add_argument("--watch", action="store_true")
    args = parser.parse_args()

    config_path = Path(args.project)
    config = json.loads(config_path.read_text())
    fake = config.get("fakeCompiler", {})

    if args.watch and fake.get("ignoreSigterm"):
        signal.signal(signal.SIGTERM, signal.SIG_IGN)

    exit_code = fake.get("exitCode", 0)
    if exit_code:
        print(f"error: simulated compiler failure ({exit_code})", file=sys.stderr)
        return exit_code

    for scope, locations in config.get("compilerOptions", {}).get("paths", {}).items():
        if locations and not Path(locations[0]).exists():
            print(f"error TS2307: Cannot find module '{scope}' at {locations[0]}", file=sys.stderr)
            return 2

    out_dir = Path(args.out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    config_dir = config_path.parent
    for source in config.get("files", []):
        relative = Path(source).with_suffix("")
        target = out_dir / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        target.with_suffix(".js").write_text(f"// compiled from {config_dir / source}\n")
        target.with_suffix(".d.ts").write_text("export {};\n")
        if args.sourceMap:
            target.with_suffix(".js.map").write_text("{}\n")

    (out_dir / ".compiler-config.json").write_text(json.dumps(
        {"config": config, "configPath": str(config_path), "cwd": os.getcwd()}, indent=2
    ))

    if args.watch:
        while True:
            time.sleep(0.1)

    return 0


if __name__ == "__main__":
    sys.exit(main())
