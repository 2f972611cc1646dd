# sylburst/utils/__init__.py
