"""
Test utilities package for locsync tests.

## Available Modules

### test_helpers.py
Core test utilities for source trees, configuration and translation files:
- `write_tree()`: Write a mapping of relative paths to file contents
- `create_test_config_data()`: Raw configuration data with one source
- `create_temp_config_file()`: Context manager for temporary YAML config files
- `read_ini_entries()`: Read back the entries of a translation file
"""

from .test_helpers import (
    SourceTreeFactory,
    create_temp_config_file,
    create_test_config_data,
    read_ini_entries,
    write_tree,
)

__all__ = [
    "SourceTreeFactory",
    "write_tree",
    "create_test_config_data",
    "create_temp_config_file",
    "read_ini_entries",
]
