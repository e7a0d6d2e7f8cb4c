#!/usr/bin/env python3
"""
Entry point script for trust-injector CLI.
Can be used directly: python -m trust_injector
"""

if __name__ == "__main__":
    from trust_injector.cli.main import main
    import sys
    sys.exit(main())
