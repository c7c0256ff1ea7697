"""Module entrypoint for `python -m payload_validator.cli`.

Delegates to the payload-validate CLI implementation.
"""

from .run_validate import main


if __name__ == "__main__":
    main()
