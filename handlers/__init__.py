# handlers/__init__.py
