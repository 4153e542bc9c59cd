# failscope/cli/__init__.py
