from pathlib import Path
import sys

# Ensure project root on sys.path for direct script execution
root = Path(__file__).resolve().parents[1]
if str(root) not in sys.path:
    sys.path.insert(0, str(root))

from timetabler.cli.main import run_pipeline


def main() -> None:
    seed = int(sys.argv[1]) if len(sys.argv) > 1 else None
    grid, validation, audit = run_pipeline(root, seed=seed)
    print(grid)
    print(validation)
    print(audit)


if __name__ == "__main__":
    # The typer app is available via `python -m timetabler.cli.main` too.
    main()
