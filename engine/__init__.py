# engine/__init__.py
