"""Library Catalog - Core Application Package

This package contains the core application modules including:
- Book record (book.py)
- Catalog operations (library.py)
- Flat file persistence (store.py)
- CLI interface (main.py)
"""
