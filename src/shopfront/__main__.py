"""Entry point for 'python -m shopfront'."""

from shopfront.cli import main

if __name__ == "__main__":
    main()
