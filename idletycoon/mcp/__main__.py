"""CLI entry point: python -m idletycoon.mcp <game_module> [save_file]"""

from __future__ import annotations

import sys


def main() -> None:
    if len(sys.argv) < 2:
        print("Usage: python -m idletycoon.mcp <game_module> [save_file]", file=sys.stderr)
        print("Example: python -m idletycoon.mcp idletycoon.games.burger_shop", file=sys.stderr)
        sys.exit(1)

    module_path = sys.argv[1]

    # Redirect stdout to stderr during module loading in case define_game() prints
    real_stdout = sys.stdout
    sys.stdout = sys.stderr
    try:
        from idletycoon.cli import DEFAULT_SAVE_FILE, load_game

        definition = load_game(module_path)
    finally:
        sys.stdout = real_stdout

    from idletycoon.mcp.server import create_server
    from idletycoon.storage import JsonFileStore

    save_file = sys.argv[2] if len(sys.argv) > 2 else DEFAULT_SAVE_FILE
    server = create_server(definition, JsonFileStore(save_file))
    server.run(transport="stdio")


if __name__ == "__main__":
    main()
