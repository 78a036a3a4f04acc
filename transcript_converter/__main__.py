"""Package entry point for ``python -m transcript_converter``.

RULES:
- This file must exist for ``python -m transcript_converter`` to work
- All argument handling lives in cli.main()
"""

from transcript_converter.cli import main

if __name__ == "__main__":
    main()
