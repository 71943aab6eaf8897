"""Run with: python -m dicexpr"""

from dicexpr.cli import main

if __name__ == "__main__":
    main()
