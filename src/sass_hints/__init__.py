"""Scope-aware completion engine for SCSS stylesheets.

Pipeline: strip comments -> extract declarations -> locate enclosing block
-> merge local, document and imported symbols -> rank against the typed token.
"""

__version__ = "0.3.0"
