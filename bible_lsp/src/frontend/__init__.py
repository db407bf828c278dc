"""Outer surfaces over scripture.Engine: the Flask app (web.py) and the CLI (__main__.py)."""
