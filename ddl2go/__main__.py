#!/usr/bin/env python3
"""
Command line entry point for ddl2go.

Usage:
    python -m ddl2go [options] <sql_file>

Examples:
    python -m ddl2go schema.sql
    python -m ddl2go --database shop --output internal schema.sql
    python -m ddl2go --config ddl2go.yaml --no-format schema.sql
"""

from __future__ import annotations

import sys

from ddl2go.struct_codegen.main import main

if __name__ == "__main__":
    sys.exit(main())
