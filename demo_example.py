"""Demo shim -- delegates to manual_sorter.demo.main().

Usage:
    python demo_example.py
    python demo_example.py --check
"""

from manual_sorter.demo import main

if __name__ == "__main__":
    main()
