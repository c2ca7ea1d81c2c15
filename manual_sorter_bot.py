"""CLI shim -- delegates to manual_sorter.cli.main().

Usage:
    python manual_sorter_bot.py ./manuals
    python manual_sorter_bot.py --dry-run ./manuals ./sorted-manuals
"""

from manual_sorter.cli import main

if __name__ == "__main__":
    main()
