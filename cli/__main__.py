"""
Entry point for running the CLI as a module: `python -m cli`

Examples:
  python -m cli ask "こんにちは"    # One message, one reply
  python -m cli chat                # Interactive conversation
  python -m cli --locale en context # Show the English persona
"""

from cli import main

if __name__ == "__main__":
    main()
