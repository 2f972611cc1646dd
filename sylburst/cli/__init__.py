# sylburst/cli/__init__.py
